"""Component scripts and <script> emission."""
import io
from dataclasses import dataclass
from typing import Any, Iterable, Optional, Tuple

from pytempl.runtime.component import Writer
from pytempl.runtime.context import RenderContext, initialize_rendered_items
from pytempl.runtime.helpers import escape_string
from pytempl.runtime.ledger import StringSet
from pytempl.runtime.logging import warn
from pytempl.runtime.pydantic_integration import encode_json


@dataclass(frozen=True)
class ComponentScript:
    """A compiled script template."""

    # Name of the script, e.g. print.
    name: str
    # JavaScript source defining the function.
    function: str
    # Call of the function in JavaScript syntax, e.g. print({"x":1}).
    call: str = ""


def safe_script(function_name: str, *params: Any) -> str:
    """
    Build ``function_name(p1,p2,...)`` with every parameter JSON-encoded and
    HTML-escaped, safe inside an inline <script> or an event attribute.

    A parameter that cannot be encoded contributes the encoder's error value
    (an empty string) and a warning is logged; the call itself never fails.
    """
    encoded = []
    for i, param in enumerate(params):
        enc, err = encode_json(param)
        if err is not None:
            warn(f"safe_script: could not encode parameter {i} of {function_name}(): {err}")
        encoded.append(escape_string(enc))
    return f"{function_name}({','.join(encoded)})"


def _collect_scripts(ledger: StringSet, scripts: Iterable[ComponentScript]) -> str:
    buf = io.StringIO()
    for s in scripts:
        if not ledger.contains_script(s.name):
            buf.write(s.function)
            ledger.add_script(s.name)
    return buf.getvalue()


def render_script_items(ctx: Optional[RenderContext], w: Writer, *scripts: ComponentScript) -> None:
    """
    Write a single <script> element holding every script function not yet
    rendered in this traversal. Writes nothing when all were seen already.
    """
    if not scripts:
        return
    ledger = ctx.ledger if ctx is not None and ctx.ledger is not None else StringSet()
    source = _collect_scripts(ledger, scripts)
    if source:
        w.write('<script type="text/javascript">')
        w.write(source)
        w.write("</script>")


def rendered_scripts_from_context(ctx: Optional[RenderContext]) -> Tuple[RenderContext, StringSet]:
    """Deprecated: use ``initialize_rendered_items``."""
    ctx = initialize_rendered_items(ctx)
    return ctx, ctx.ledger  # type: ignore[return-value]


def render_scripts(ctx: Optional[RenderContext], w: Writer, *scripts: ComponentScript) -> None:
    """Deprecated: use ``render_script_items``."""
    render_script_items(ctx, w, *scripts)
