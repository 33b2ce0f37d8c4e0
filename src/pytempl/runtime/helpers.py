import html


def escape_string(s: str) -> str:
    """Escape text for HTML element content and quoted attributes."""
    return html.escape(s, quote=True)


def bool_(value: bool) -> bool:
    """Boolean attribute value (rendered bare when True, omitted when False)."""
    return value
