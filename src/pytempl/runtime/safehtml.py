"""Sanitizers for values written into URL and style contexts.

None of these raise. Unsafe input degrades to a fixed innocuous value so a
bad string can only spoil the fragment it lands in, never the whole render.
"""
import re
from typing import Tuple


class SafeURL(str):
    """A URL that passed sanitization.

    Constructing one directly skips the checks; only trusted callers should.
    """

    __slots__ = ()


FAILED_SANITIZATION_URL = SafeURL("about:invalid#TemplFailedSanitizationURL")

SAFE_URL_SCHEMES = ("http", "https", "mailto")


def url(s: str) -> SafeURL:
    """Return ``s`` unless it names a scheme other than http, https or mailto."""
    i = s.find(":")
    if i >= 0 and "/" not in s[:i]:
        if s[:i].lower() not in SAFE_URL_SCHEMES:
            return FAILED_SANITIZATION_URL
    return SafeURL(s)


INNOCUOUS_PROPERTY_NAME = "zTemplUnsafeCSSPropertyName"
INNOCUOUS_PROPERTY_VALUE = "zTemplUnsafeCSSPropertyValue"

_property_name = re.compile(r"^-?[a-zA-Z][a-zA-Z0-9-]*$")

# Plain values: keywords, numbers with units, colours, lists and simple
# functions such as rgb(...) or calc(...).
_property_value = re.compile(r"^[-+\w\s.,#%!/()]*$")

_forbidden_functions = re.compile(r"(expression|javascript|vbscript|behavior|-moz-binding)", re.IGNORECASE)

# url(...) with an optionally quoted argument.
_url_function = re.compile(r"""url\(\s*(?P<quote>['"]?)(?P<url>[^'"()\s]*)(?P=quote)\s*\)""", re.IGNORECASE)


def _sanitize_url_functions(value: str) -> Tuple[str, bool]:
    """Run every url(...) argument through ``url``; report failures."""
    ok = True

    def replace(match: "re.Match[str]") -> str:
        nonlocal ok
        target = url(match.group("url"))
        if target == FAILED_SANITIZATION_URL:
            ok = False
        return f'url("{target}")'

    return _url_function.sub(replace, value), ok


def sanitize_css_property(property: str) -> str:
    prop = property.strip()
    if not _property_name.match(prop):
        return INNOCUOUS_PROPERTY_NAME
    return prop.lower()


def sanitize_css_value(value: str) -> str:
    val = value.strip()
    if _forbidden_functions.search(val):
        return INNOCUOUS_PROPERTY_VALUE
    val, ok = _sanitize_url_functions(val)
    if not ok:
        return INNOCUOUS_PROPERTY_VALUE
    remainder = _url_function.sub("", val)
    if not _property_value.match(remainder):
        return INNOCUOUS_PROPERTY_VALUE
    if remainder.count("(") != remainder.count(")"):
        return INNOCUOUS_PROPERTY_VALUE
    return val


def sanitize_css(property: str, value: str) -> Tuple[str, str]:
    """Sanitize one declaration, returning ``(property, value)``."""
    return sanitize_css_property(property), sanitize_css_value(value)
