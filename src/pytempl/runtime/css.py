"""CSS classes, class naming and <style> emission."""
import hashlib
import io
import re
from dataclasses import dataclass
from typing import Iterable, Optional, Tuple, Union

from pytempl.runtime.component import Writer
from pytempl.runtime.context import RenderContext, initialize_rendered_items
from pytempl.runtime.ledger import StringSet
from pytempl.runtime.safehtml import sanitize_css as _sanitize_declaration


class SafeCSS(str):
    """CSS that passed sanitization.

    Constructing one directly skips the checks; only trusted callers should.
    """

    __slots__ = ()


def sanitize_css(property: str, value: str) -> SafeCSS:
    """Sanitize a declaration and return it as ``property:value;``."""
    p, v = _sanitize_declaration(property, value)
    return SafeCSS(f"{p}:{v};")


@dataclass(frozen=True)
class ConstantCSSClass:
    """A class name with no CSS of its own."""

    name: str

    def class_name(self) -> str:
        return self.name


@dataclass(frozen=True)
class ComponentCSSClass:
    """A generated class: its id plus the rule body to emit once per render."""

    id: str
    class_: SafeCSS

    def class_name(self) -> str:
        return self.id


CSSClass = Union[ConstantCSSClass, ComponentCSSClass]


class CSSClasses(list):
    """A list of classes; ``str()`` gives the value of a class attribute."""

    def __str__(self) -> str:
        return " ".join(c.class_name() for c in self)


def classes(*cs: CSSClass) -> CSSClasses:
    return CSSClasses(cs)


_safe_class_name = re.compile(r"^-?[_a-zA-Z]+[-_a-zA-Z0-9]*$")

FALLBACK_CLASS_NAME = ConstantCSSClass("--templ-css-class-safe-name")


def class_(name: str) -> CSSClass:
    """Class from a caller-supplied name; invalid names become the fallback."""
    if not _safe_class_name.match(name):
        return FALLBACK_CLASS_NAME
    return safe_class(name)


def safe_class(name: str) -> CSSClass:
    """Class from a trusted name, skipping validation."""
    return ConstantCSSClass(name)


def css_id(name: str, css: str) -> str:
    """Derive a class id from a readable prefix and a hash of the rule body."""
    digest = hashlib.sha256(css.encode("utf-8")).hexdigest()
    return f"{name}_{digest[:4]}"


def component_css_class(name: str, css: str) -> ComponentCSSClass:
    """
    Build a generated class whose id follows its content.

    ``css`` is the declaration block (``color:red;``); the stored rule is
    ``.id{css}``. Identical declarations collapse onto one ledger entry
    wherever they are defined.
    """
    class_id = css_id(name, css)
    return ComponentCSSClass(id=class_id, class_=SafeCSS(f".{class_id}{{{css}}}"))


def _write_block(w: Writer, open_tag: str, body: str, close_tag: str) -> None:
    w.write(open_tag)
    w.write(body)
    w.write(close_tag)


def _collect_css(ledger: StringSet, classes: Iterable[CSSClass]) -> str:
    buf = io.StringIO()
    for c in classes:
        match c:
            case ComponentCSSClass(id=class_id, class_=body):
                if not ledger.contains_class(class_id):
                    buf.write(body)
                    ledger.add_class(class_id)
            case _:
                pass
    return buf.getvalue()


def render_css_items(ctx: Optional[RenderContext], w: Writer, *classes: CSSClass) -> None:
    """
    Write a single <style> element holding the CSS of every class not yet
    rendered in this traversal. Writes nothing when all were seen already.

    Without a ledger in ``ctx`` a throwaway one is used, so duplicates are
    only removed within this call.
    """
    if not classes:
        return
    ledger = ctx.ledger if ctx is not None and ctx.ledger is not None else StringSet()
    css = _collect_css(ledger, classes)
    if css:
        _write_block(w, '<style type="text/css">', css, "</style>")


def rendered_css_classes_from_context(ctx: Optional[RenderContext]) -> Tuple[RenderContext, StringSet]:
    """Deprecated: use ``initialize_rendered_items``.

    Returns the combined ledger, so callers see the same class entries as
    ``render_css_items``.
    """
    ctx = initialize_rendered_items(ctx)
    return ctx, ctx.ledger  # type: ignore[return-value]


def render_css(ctx: Optional[RenderContext], w: Writer, classes: Iterable[CSSClass]) -> None:
    """Deprecated: use ``render_css_items``."""
    render_css_items(ctx, w, *classes)
