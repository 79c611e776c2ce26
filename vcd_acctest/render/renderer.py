"""Fill ``{{.Key}}`` templates and keep a copy of every result on disk.

Each test builds its Terraform configuration from a template and a
mapping of values::

    config_text = renderer.render(TEMPLATE, {"Org": "myorg", "Vdc": "vdc1"})

The rendered text is returned for the test to use and also written to
``test-artifacts/<attribution name>`` so a failed run can be replayed by
hand.  A template that does not parse or references a missing key renders
to ``""``; callers must treat an empty result as a failure.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

from vcd_acctest.errors import TemplateError
from vcd_acctest.render.artifacts import ArtifactWriter
from vcd_acctest.render.caller import (
    current_binding,
    resolve_caller_name,
    short_caller_name,
)
from vcd_acctest.render.template import parse

logger = logging.getLogger(__name__)

#: Reserved data key that overrides the attribution name.
FUNC_NAME_KEY = "FuncName"

#: Attribution name used when none can be determined.
UNKNOWN_CALLER = "unknown"


class TemplateRenderer:
    """Render templates and hand the results to an :class:`ArtifactWriter`."""

    def __init__(self, writer: Optional[ArtifactWriter] = None) -> None:
        self.writer = writer if writer is not None else ArtifactWriter()

    def attribution_name(
        self, data: Mapping[str, Any], name: Optional[str] = None
    ) -> str:
        """Pick the artifact name for a render.

        Precedence: *name* → ``data["FuncName"]`` → :func:`attribution`
        binding → calling function found on the stack.  A binding with an
        owner names helper renders ``<bound name>.<helper qualname>``.
        """
        if name:
            return name
        if FUNC_NAME_KEY in data:
            return str(data[FUNC_NAME_KEY])
        caller = resolve_caller_name()
        bound = current_binding()
        if bound is not None and bound.name:
            return bound.name_for(caller)
        resolved = short_caller_name(caller)
        if not resolved:
            logger.warning("Could not resolve template caller, using %r", UNKNOWN_CALLER)
            return UNKNOWN_CALLER
        return resolved

    def render(
        self,
        template: str,
        data: Mapping[str, Any],
        *,
        name: Optional[str] = None,
    ) -> str:
        """Return *template* filled with *data*, or ``""`` on failure.

        On success the result is also written as an artifact.  Artifact
        errors are not caught here: they halt the run.
        """
        caller = self.attribution_name(data, name)
        try:
            rendered = parse(template, name=caller).execute(data)
        except TemplateError as exc:
            logger.warning("Template rendering failed: %s", exc)
            return ""
        if not rendered:
            logger.warning("Template %r rendered to an empty string", caller)
            return ""
        self.writer.write(caller, rendered.encode("utf-8"))
        return rendered


_default_renderer: Optional[TemplateRenderer] = None


def _renderer() -> TemplateRenderer:
    global _default_renderer
    if _default_renderer is None:
        _default_renderer = TemplateRenderer()
    return _default_renderer


def template_fill(template: str, data: Mapping[str, Any]) -> str:
    """Render with a process-wide :class:`TemplateRenderer`.

    Convenience for helper modules that have no renderer injected; tests
    should prefer the ``template_renderer`` fixture.
    """
    return _renderer().render(template, data)


def set_default_renderer(renderer: Optional[TemplateRenderer]) -> None:
    """Replace the renderer used by :func:`template_fill`.

    ``None`` drops it; the next call builds a fresh one.
    """
    global _default_renderer
    _default_renderer = renderer
