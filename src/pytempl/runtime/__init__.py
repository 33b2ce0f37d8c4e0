"""Runtime components."""

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
from pytempl.runtime.context import RenderContext, initialize_rendered_items
from pytempl.runtime.css import (
    ComponentCSSClass,
    ConstantCSSClass,
    CSSClasses,
    SafeCSS,
    class_,
    classes,
    component_css_class,
    css_id,
    render_css_items,
    safe_class,
    sanitize_css,
)
from pytempl.runtime.handler import ComponentHandler, CSSHandler, CSSMiddleware, handler
from pytempl.runtime.ledger import StringSet
from pytempl.runtime.safehtml import FAILED_SANITIZATION_URL, SafeURL, url
from pytempl.runtime.scripts import ComponentScript, render_script_items, safe_script

__all__ = [
    "Component",
    "ComponentFunc",
    "NopComponent",
    "Renderable",
    "clear_children",
    "get_children",
    "render_to_string",
    "with_children",
    "RenderContext",
    "initialize_rendered_items",
    "ComponentCSSClass",
    "ConstantCSSClass",
    "CSSClasses",
    "SafeCSS",
    "class_",
    "classes",
    "component_css_class",
    "css_id",
    "render_css_items",
    "safe_class",
    "sanitize_css",
    "ComponentHandler",
    "CSSHandler",
    "CSSMiddleware",
    "handler",
    "StringSet",
    "FAILED_SANITIZATION_URL",
    "SafeURL",
    "url",
    "ComponentScript",
    "render_script_items",
    "safe_script",
]
