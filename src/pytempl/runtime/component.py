"""Component contract and children protocol.

Rendering is synchronous and streaming: a component writes its own output
and that of its descendants, in document order, straight into the sink
before ``render`` returns. If a write or a descendant fails, the exception
propagates unchanged and whatever was already written stays in the sink.
Sinks that need all-or-nothing output must buffer themselves.
"""
import io
from abc import ABC, abstractmethod
from typing import Any, Callable, Optional, Protocol, runtime_checkable

from pytempl.exceptions import InvalidComponentError
from pytempl.runtime.context import RenderContext, ensure_context, initialize_rendered_items


@runtime_checkable
class Writer(Protocol):
    """Anything with a text ``write`` method (``io.StringIO``, a file, ...)."""

    def write(self, s: str) -> Any: ...


@runtime_checkable
class Renderable(Protocol):
    """Structural type of everything that can render into a sink."""

    def render(self, ctx: Optional[RenderContext], w: Writer) -> None: ...


class Component(ABC):
    """Base class for compiled templates."""

    @abstractmethod
    def render(self, ctx: Optional[RenderContext], w: Writer) -> None:
        """Write this component into ``w``."""

    def __str__(self) -> str:
        return render_to_string(self)


RenderFunc = Callable[[Optional[RenderContext], Writer], Any]


class ComponentFunc(Component):
    """Adapts a plain ``fn(ctx, w)`` function into a component.

    Works as a decorator::

        @ComponentFunc
        def hello(ctx, w):
            w.write("<p>hello</p>")
    """

    def __init__(self, fn: RenderFunc):
        if not callable(fn):
            raise InvalidComponentError(fn, "ComponentFunc")
        self.fn = fn
        self.__name__ = getattr(fn, "__name__", type(self).__name__)
        self.__doc__ = getattr(fn, "__doc__", None)

    def render(self, ctx: Optional[RenderContext], w: Writer) -> None:
        self.fn(ctx, w)

    def __repr__(self) -> str:
        return f"ComponentFunc({self.__name__})"


def _nop(ctx: Optional[RenderContext], w: Writer) -> None:
    return None


NopComponent = ComponentFunc(_nop)
NopComponent.__name__ = "NopComponent"


def ensure_renderable(value: Any, where: str = "") -> Renderable:
    if not isinstance(value, Renderable):
        raise InvalidComponentError(value, where)
    return value


def with_children(ctx: Optional[RenderContext], children: Renderable) -> RenderContext:
    """Context for a child subtree that should render ``children``."""
    ensure_renderable(children, "with_children")
    return ensure_context(ctx).with_children(children)


def clear_children(ctx: Optional[RenderContext]) -> RenderContext:
    """Context for a subtree that must not see the current children."""
    return ensure_context(ctx).with_children(None)


def get_children(ctx: Optional[RenderContext]) -> Renderable:
    """Children attached by the parent, or ``NopComponent`` if none."""
    if ctx is None or not ctx.has_children:
        return NopComponent
    return ctx.children  # type: ignore[return-value]


def render_to_string(component: Renderable, ctx: Optional[RenderContext] = None) -> str:
    """Render a whole tree into a string with its own ledger."""
    ensure_renderable(component, "render_to_string")
    buf = io.StringIO()
    component.render(initialize_rendered_items(ctx), buf)
    return buf.getvalue()
