import html
import traceback

from starlette.requests import Request
from starlette.responses import HTMLResponse


def render_error_page(error_title: str, error_detail: str) -> str:
    """HTML for a failed render; every interpolated value is escaped."""
    return f"""<!DOCTYPE html>
<html>
<head>
    <title>pytempl Error: {html.escape(error_title)}</title>
    <style>
        body {{
            font-family: system-ui, -apple-system, sans-serif;
            padding: 2rem;
            background: #fff0f0;
            color: #333;
        }}
        .error-container {{
            max-width: 900px;
            margin: 0 auto;
            background: white;
            padding: 2rem;
            border-radius: 8px;
            border-left: 6px solid #ff4444;
        }}
        h1 {{
            margin-top: 0;
            color: #cc0000;
        }}
        pre {{
            background: #f8f8f8;
            padding: 1rem;
            overflow-x: auto;
            font-size: 14px;
            white-space: pre-wrap;
        }}
    </style>
</head>
<body>
    <div class="error-container">
        <h1>{html.escape(error_title)}</h1>
        <pre>{html.escape(error_detail)}</pre>
    </div>
</body>
</html>
"""


def debug_error_handler(request: Request, exc: BaseException) -> HTMLResponse:
    """Error handler showing the exception and traceback. Development only."""
    title = f"{type(exc).__name__}: {exc}"
    detail = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
    return HTMLResponse(render_error_page(title, detail), status_code=500)
