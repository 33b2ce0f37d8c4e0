import io
from typing import Any, List, Optional

import pytest

from pytempl.exceptions import InvalidComponentError
from pytempl.runtime.component import (
    Component,
    ComponentFunc,
    NopComponent,
    Renderable,
    clear_children,
    get_children,
    render_to_string,
    with_children,
)
from pytempl.runtime.context import UNSET, RenderContext


class Text(Component):
    def __init__(self, text: str):
        self.text = text

    def render(self, ctx: Optional[RenderContext], w: Any) -> None:
        w.write(self.text)


class Wrapper(Component):
    """Renders <div> around whatever its caller passed as children."""

    def render(self, ctx: Optional[RenderContext], w: Any) -> None:
        w.write("<div>")
        get_children(ctx).render(clear_children(ctx), w)
        w.write("</div>")


class FailingWriter:
    """Sink that accepts ``limit`` writes and then fails."""

    def __init__(self, limit: int):
        self.limit = limit
        self.parts: List[str] = []

    def write(self, s: str) -> None:
        if len(self.parts) >= self.limit:
            raise OSError("connection closed")
        self.parts.append(s)


def test_component_func_adapts_plain_function() -> None:
    @ComponentFunc
    def hello(ctx, w):
        w.write("<p>hello</p>")

    assert isinstance(hello, Renderable)
    assert render_to_string(hello) == "<p>hello</p>"
    assert hello.__name__ == "hello"


def test_component_func_rejects_non_callable() -> None:
    with pytest.raises(InvalidComponentError):
        ComponentFunc("not a function")  # type: ignore[arg-type]


def test_nop_component_writes_nothing() -> None:
    buf = io.StringIO()
    NopComponent.render(None, buf)
    assert buf.getvalue() == ""


def test_str_renders_component() -> None:
    assert str(Text("<b>x</b>")) == "<b>x</b>"


def test_get_children_unset_returns_nop() -> None:
    assert get_children(None) is NopComponent
    assert get_children(RenderContext()) is NopComponent
    assert RenderContext().children is UNSET


def test_get_children_cleared_returns_nop() -> None:
    ctx = with_children(None, Text("x"))
    cleared = clear_children(ctx)
    assert cleared.children is None
    assert get_children(cleared) is NopComponent
    # Clearing made a new context
    assert get_children(ctx).text == "x"  # type: ignore[attr-defined]


def test_children_rendered_where_requested() -> None:
    ctx = with_children(None, Text("inner"))
    assert render_to_string(Wrapper(), ctx) == "<div>inner</div>"


def test_wrapper_without_children_renders_empty() -> None:
    assert render_to_string(Wrapper()) == "<div></div>"


def test_children_do_not_leak_to_siblings() -> None:
    seen = []

    @ComponentFunc
    def peek(ctx, w):
        seen.append(get_children(ctx))

    @ComponentFunc
    def parent(ctx, w):
        peek.render(with_children(ctx, Text("for first")), w)
        peek.render(ctx, w)

    render_to_string(parent)
    assert seen[0].text == "for first"
    assert seen[1] is NopComponent


def test_children_not_visible_to_parent_continuation() -> None:
    @ComponentFunc
    def parent(ctx, w):
        child_ctx = with_children(ctx, Text("child"))
        Wrapper().render(child_ctx, w)
        get_children(ctx).render(ctx, w)

    assert render_to_string(parent, with_children(None, Text("outer"))) == "<div>child</div>outer"


def test_nested_slots_clear_before_descendants() -> None:
    @ComponentFunc
    def layout(ctx, w):
        w.write("<main>")
        children = get_children(ctx)
        children.render(clear_children(ctx), w)
        w.write("</main>")

    ctx = with_children(None, Wrapper())
    # The wrapper inside the layout sees no children, so it must not recurse.
    assert render_to_string(layout, ctx) == "<main><div></div></main>"


def test_with_children_rejects_non_renderable() -> None:
    with pytest.raises(InvalidComponentError):
        with_children(None, 42)  # type: ignore[arg-type]
    with pytest.raises(TypeError):
        with_children(None, "text")  # type: ignore[arg-type]


def test_render_to_string_rejects_non_renderable() -> None:
    with pytest.raises(InvalidComponentError):
        render_to_string(object())  # type: ignore[arg-type]


def test_sink_error_propagates_with_partial_output() -> None:
    @ComponentFunc
    def page(ctx, w):
        w.write("<html>")
        Text("<body>").render(ctx, w)
        w.write("</html>")

    sink = FailingWriter(limit=2)
    with pytest.raises(OSError, match="connection closed"):
        page.render(RenderContext(), sink)
    assert "".join(sink.parts) == "<html><body>"


def test_descendant_error_propagates_unchanged() -> None:
    boom = ValueError("boom")

    @ComponentFunc
    def bad(ctx, w):
        raise boom

    @ComponentFunc
    def page(ctx, w):
        w.write("<p>")
        bad.render(ctx, w)

    with pytest.raises(ValueError) as excinfo:
        render_to_string(page)
    assert excinfo.value is boom


def test_component_reusable_across_trees() -> None:
    shared = Text("same")
    assert render_to_string(shared) == render_to_string(shared) == "same"


def test_context_values() -> None:
    ctx = RenderContext().with_value("user", "ada")
    child_ctx = ctx.with_value("lang", "en")
    assert child_ctx.value("user") == "ada"
    assert child_ctx.value("lang") == "en"
    assert ctx.value("lang") is None
    assert ctx.value("lang", "fr") == "fr"
