"""Per-render context passed down the component tree."""
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Mapping, Optional, Union

from pytempl.runtime.ledger import StringSet

if TYPE_CHECKING:
    from pytempl.runtime.component import Renderable


class _Unset:
    """Marker for a context where no parent ever attached children."""

    _instance: Optional["_Unset"] = None

    def __new__(cls) -> "_Unset":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False


UNSET = _Unset()

_EMPTY_VALUES: Mapping[str, Any] = MappingProxyType({})


@dataclass(frozen=True)
class RenderContext:
    """
    Immutable carrier for injected children and the resource ledger.

    Every ``with_*`` method returns a new context for the subtree below the
    caller. The ledger is shared by reference, never copied.
    """

    children: Union["Renderable", None, _Unset] = UNSET
    ledger: Optional[StringSet] = None
    values: Mapping[str, Any] = field(default_factory=lambda: _EMPTY_VALUES)

    def with_children(self, children: Optional["Renderable"]) -> "RenderContext":
        return replace(self, children=children)

    def with_ledger(self, ledger: StringSet) -> "RenderContext":
        return replace(self, ledger=ledger)

    def with_value(self, key: str, value: Any) -> "RenderContext":
        values = dict(self.values)
        values[key] = value
        return replace(self, values=MappingProxyType(values))

    def value(self, key: str, default: Any = None) -> Any:
        return self.values.get(key, default)

    @property
    def has_children(self) -> bool:
        """True only when a parent attached a renderable (not unset or cleared)."""
        return self.children is not UNSET and self.children is not None


def ensure_context(ctx: Optional[RenderContext]) -> RenderContext:
    """Treat a missing context as an empty one."""
    if ctx is None:
        return RenderContext()
    return ctx


def initialize_rendered_items(ctx: Optional[RenderContext] = None) -> RenderContext:
    """Attach a fresh ledger unless the context already carries one."""
    ctx = ensure_context(ctx)
    if ctx.ledger is not None:
        return ctx
    return ctx.with_ledger(StringSet())
