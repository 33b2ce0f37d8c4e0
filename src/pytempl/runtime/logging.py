import contextvars
import sys
from typing import Callable, Optional

# Optional per-request listener for runtime log lines.
# Callback signature: def callback(message: str, level: str) -> None
log_callback_ctx: contextvars.ContextVar[Optional[Callable[[str, str], None]]] = contextvars.ContextVar(
    "log_callback_ctx", default=None
)

_PREFIXES = {
    "debug": "DEBUG: ",
    "info": "",
    "warning": "Warning: ",
    "error": "Error: ",
}


def log(message: str, level: str = "info") -> None:
    """
    Print a runtime message and forward it to the current request's listener.

    Warnings and below go to stdout, errors to stderr. A failing listener is
    ignored so logging can never break a render.
    """
    stream = sys.stderr if level == "error" else sys.stdout
    print(f"{_PREFIXES.get(level, '')}{message}", file=stream)

    callback = log_callback_ctx.get()
    if callback:
        try:
            callback(message, level)
        except Exception:
            pass


def warn(message: str) -> None:
    log(message, level="warning")


def error(message: str) -> None:
    log(message, level="error")
