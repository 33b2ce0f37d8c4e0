"""Starlette/ASGI adapters for serving components."""
from typing import Any, Callable, Dict, Iterable, Optional

from starlette.concurrency import run_in_threadpool
from starlette.requests import Request
from starlette.responses import PlainTextResponse, Response
from starlette.types import ASGIApp, Receive, Scope, Send

from pytempl.runtime.component import Renderable, ensure_renderable, render_to_string
from pytempl.runtime.context import RenderContext
from pytempl.runtime.css import ComponentCSSClass
from pytempl.runtime.error_page import debug_error_handler
from pytempl.runtime.ledger import StringSet
from pytempl.runtime.logging import error

COMPONENT_HANDLER_ERROR_MESSAGE = "templ: failed to render template"
DEFAULT_CONTENT_TYPE = "text/html"
DEFAULT_CSS_PATH = "/styles/templ.css"

# Key under request.state holding a ledger seeded by CSSMiddleware.
LEDGER_STATE_KEY = "templ_ledger"

ErrorHandler = Callable[[Request, BaseException], ASGIApp]


def context_for_request(request: Request) -> RenderContext:
    """Fresh render context for one request, reusing a seeded ledger if any."""
    ledger = getattr(request.state, LEDGER_STATE_KEY, None)
    if ledger is None:
        ledger = StringSet()
    return RenderContext(ledger=ledger).with_value("request", request)


class ComponentHandler:
    """ASGI app that renders a component as the response body.

    The page is rendered into memory before anything is sent, so status and
    headers can still change if rendering fails. A client that disconnects
    mid-render does not stop the render; the finished body is discarded.
    """

    def __init__(
        self,
        component: Renderable,
        status: int = 0,
        content_type: str = DEFAULT_CONTENT_TYPE,
        error_handler: Optional[ErrorHandler] = None,
    ):
        self.component = ensure_renderable(component, "ComponentHandler")
        self.status = status
        self.content_type = content_type
        self.error_handler = error_handler

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        request = Request(scope, receive)
        ctx = context_for_request(request)
        try:
            # Components render synchronously; keep them off the event loop.
            body = await run_in_threadpool(render_to_string, self.component, ctx)
        except Exception as exc:
            error(f"failed to render {request.url.path}: {type(exc).__name__}: {exc}")
            if self.error_handler is not None:
                response = self.error_handler(request, exc)
            else:
                response = PlainTextResponse(COMPONENT_HANDLER_ERROR_MESSAGE, status_code=500)
            await response(scope, receive, send)
            return

        response = Response(body, status_code=self.status or 200, media_type=self.content_type)
        await response(scope, receive, send)


HandlerOption = Callable[[ComponentHandler], None]


def handler(component: Renderable, *options: HandlerOption) -> ComponentHandler:
    """Create a ComponentHandler, applying options in order."""
    ch = ComponentHandler(component)
    for option in options:
        option(ch)
    return ch


def with_status(status: int) -> HandlerOption:
    def apply(ch: ComponentHandler) -> None:
        ch.status = status

    return apply


def with_content_type(content_type: str) -> HandlerOption:
    def apply(ch: ComponentHandler) -> None:
        ch.content_type = content_type

    return apply


def with_error_handler(error_handler: ErrorHandler) -> HandlerOption:
    def apply(ch: ComponentHandler) -> None:
        ch.error_handler = error_handler

    return apply


def with_config(config: Dict[str, Any]) -> HandlerOption:
    """Apply values loaded by ``pytempl.config.load_config``."""

    def apply(ch: ComponentHandler) -> None:
        if "status" in config:
            ch.status = int(config["status"])
        if "content_type" in config:
            ch.content_type = str(config["content_type"])
        if config.get("debug"):
            ch.error_handler = debug_error_handler

    return apply


class CSSHandler:
    """Serves the CSS of a fixed set of component classes as one stylesheet."""

    def __init__(self, *classes: ComponentCSSClass):
        self.classes = list(classes)

    def stylesheet(self) -> str:
        return "".join(c.class_ for c in self.classes)

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        response = Response(self.stylesheet(), media_type="text/css")
        await response(scope, receive, send)


class CSSMiddleware:
    """
    Serves a global stylesheet at ``path``. For every other request, marks the
    stylesheet's classes as already rendered so components skip emitting
    <style> elements for them.

    The path comes from ``path``, else from ``config["css_path"]`` (see
    ``pytempl.config.load_config``), else ``/styles/templ.css``.

    Works as Starlette middleware::

        Middleware(CSSMiddleware, classes=[button_class], config=load_config())
    """

    def __init__(
        self,
        app: ASGIApp,
        classes: Iterable[ComponentCSSClass] = (),
        path: Optional[str] = None,
        config: Optional[Dict[str, Any]] = None,
    ):
        if path is None:
            path = str((config or {}).get("css_path", DEFAULT_CSS_PATH))
        self.app = app
        self.path = path
        self.css_handler = CSSHandler(*classes)

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        if scope["path"] == self.path:
            await self.css_handler(scope, receive, send)
            return

        state = scope.setdefault("state", {})
        ledger = state.get(LEDGER_STATE_KEY)
        if ledger is None:
            ledger = StringSet()
            state[LEDGER_STATE_KEY] = ledger
        for c in self.css_handler.classes:
            ledger.add_class(c.class_name())

        await self.app(scope, receive, send)


def new_css_middleware(
    app: ASGIApp,
    *classes: ComponentCSSClass,
    path: Optional[str] = None,
    config: Optional[Dict[str, Any]] = None,
) -> CSSMiddleware:
    return CSSMiddleware(app, classes=classes, path=path, config=config)
