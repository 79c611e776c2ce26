"""Template rendering, caller attribution and artifact persistence."""

from vcd_acctest.render.artifacts import ARTIFACTS_DIR, ArtifactWriter
from vcd_acctest.render.caller import (
    Binding,
    attribution,
    current_attribution,
    current_binding,
    resolve_caller_name,
    short_caller_name,
)
from vcd_acctest.render.renderer import (
    FUNC_NAME_KEY,
    UNKNOWN_CALLER,
    TemplateRenderer,
    set_default_renderer,
    template_fill,
)
from vcd_acctest.render.template import Template, format_value, parse

__all__ = [
    "ARTIFACTS_DIR",
    "ArtifactWriter",
    "Binding",
    "FUNC_NAME_KEY",
    "Template",
    "TemplateRenderer",
    "UNKNOWN_CALLER",
    "attribution",
    "current_attribution",
    "current_binding",
    "format_value",
    "parse",
    "resolve_caller_name",
    "set_default_renderer",
    "short_caller_name",
    "template_fill",
]
