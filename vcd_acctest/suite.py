"""Suite lifecycle: one configuration load per process, explicit teardown.

:func:`start_suite` runs before any test body:

1. short-test mode (``VCD_SHORT_TEST``) skips steps 2 to 4
2. load the configuration (sets ``TF_ACC``)
3. export provider credentials
4. attach the optional log file

It returns a :class:`SuiteContext` that owns the config and the renderer.
Configuration errors are raised, not handled; the caller (pytest plugin or
CLI) reports them with :func:`report_halt` and stops the run.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import MutableMapping, Optional

from vcd_acctest import ui
from vcd_acctest.config.loader import load, resolve_config_path
from vcd_acctest.config.models import VcdTestConfig
from vcd_acctest.environment import is_short_test, propagate, template_writing_enabled
from vcd_acctest.errors import ArtifactWriteError, ConfigError, SuiteHaltError
from vcd_acctest.logsetup import configure_logging, remove_logging
from vcd_acctest.render.artifacts import ArtifactWriter
from vcd_acctest.render.renderer import TemplateRenderer, set_default_renderer

logger = logging.getLogger(__name__)


@dataclass
class SuiteContext:
    """Process-wide state of a test run.

    Attributes:
        config: Loaded configuration, ``None`` in short-test mode.
        renderer: Renderer shared by every test.
        config_path: File the configuration came from.
        short: True when configuration loading was skipped.
    """

    config: Optional[VcdTestConfig]
    renderer: TemplateRenderer
    config_path: Optional[Path] = None
    short: bool = False
    closed: bool = False
    _log_handler: Optional[logging.Handler] = field(default=None, repr=False)

    def require_config(self) -> VcdTestConfig:
        """Return the config, or raise if the suite runs in short mode."""
        if self.config is None:
            raise RuntimeError("No test configuration loaded (short-test mode)")
        return self.config

    def close(self) -> None:
        """Release what :func:`start_suite` set up.  Safe to call twice.

        Environment variables exported at startup are left in place.
        """
        if self.closed:
            return
        logger.info("Suite finished, %d artifact(s) written", self.renderer.writer.written)
        set_default_renderer(None)
        remove_logging(self._log_handler)
        self._log_handler = None
        self.closed = True


def start_suite(
    environ: Optional[MutableMapping[str, str]] = None,
    *,
    default_dir: Optional[Path] = None,
    writer: Optional[ArtifactWriter] = None,
) -> SuiteContext:
    """Load and export the configuration, return the suite context.

    Raises :class:`~vcd_acctest.errors.ConfigError` when the configuration
    cannot be loaded.
    """
    if writer is None:
        writer = ArtifactWriter(enabled=template_writing_enabled(environ))
    renderer = TemplateRenderer(writer)

    if is_short_test(environ):
        logger.info("Short-test mode: configuration not loaded")
        set_default_renderer(renderer)
        return SuiteContext(config=None, renderer=renderer, short=True)

    path = resolve_config_path(environ, default_dir)
    cfg = load(environ, default_dir=default_dir)
    propagate(cfg, environ)
    handler = configure_logging(cfg.logging)
    set_default_renderer(renderer)
    return SuiteContext(
        config=cfg,
        renderer=renderer,
        config_path=path,
        _log_handler=handler,
    )


def report_halt(exc: SuiteHaltError) -> str:
    """Log and display *exc*; return the one-line message for the exit."""
    if isinstance(exc, ConfigError):
        title = "Configuration error"
    elif isinstance(exc, ArtifactWriteError):
        title = "Artifact write error"
    else:
        title = "Test suite halted"
    message = f"{title}: {exc}"
    logger.critical(message)
    ui.halt_panel(title, str(exc))
    return message
