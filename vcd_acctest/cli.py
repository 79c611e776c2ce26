"""``vcd-acctest`` command line.

Usage::

    vcd-acctest run -- -k test_org -x
    vcd-acctest show-config --config ~/vcd/vcd_test_config.json
    vcd-acctest render edge.tf.tmpl -d Org=myorg -d Vdc=vdc1

Environment variables:
  VCD_CONFIG                  Configuration file outside the tests directory.
  VCD_SHORT_TEST              Skip configuration loading.
  VCD_SKIP_TEMPLATE_WRITING   Do not write rendered templates to test-artifacts/.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional

import pytest
import typer

from vcd_acctest import ui
from vcd_acctest.config.loader import read_config, resolve_config_path
from vcd_acctest.errors import SuiteHaltError
from vcd_acctest.pytest_plugin import suite_key
from vcd_acctest.render.artifacts import ArtifactWriter
from vcd_acctest.render.renderer import TemplateRenderer
from vcd_acctest.suite import SuiteContext, report_halt, start_suite

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="vcd-acctest",
    help="Bootstrap and helpers for the vCloud Director provider acceptance tests.",
    no_args_is_help=True,
    add_completion=False,
)

_TESTS_DIR_HELP = "Directory holding the tests and the default vcd_test_config.json."


class _PreloadedSuite:
    """Hands an already started suite to the pytest plugin."""

    def __init__(self, suite: SuiteContext) -> None:
        self.suite = suite

    @pytest.hookimpl(tryfirst=True)
    def pytest_configure(self, config: pytest.Config) -> None:
        config.stash[suite_key] = self.suite


def _parse_pairs(pairs: List[str]) -> dict:
    data = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            raise typer.BadParameter(f"expected KEY=VALUE, got {pair!r}", param_hint="--data")
        data[key] = value
    return data


@app.callback()
def _root_callback(
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging."),
) -> None:
    """vCloud Director provider acceptance-test helpers."""
    if debug:
        logging.basicConfig(level=logging.DEBUG)


@app.command(context_settings={"allow_extra_args": True, "ignore_unknown_options": True})
def run(
    ctx: typer.Context,
    tests_dir: Optional[Path] = typer.Option(None, "--tests-dir", help=_TESTS_DIR_HELP),
) -> None:
    """Load the configuration, then run pytest with the remaining arguments.

    Exits with pytest's exit code.
    """
    default_dir = tests_dir if tests_dir is not None else Path.cwd()
    try:
        suite = start_suite(default_dir=default_dir)
    except SuiteHaltError as exc:
        report_halt(exc)
        raise typer.Exit(exc.exit_code)

    ui.phase("VCD ACCEPTANCE TESTS")
    if suite.short:
        ui.warn("Short-test mode: configuration not loaded")
    else:
        ui.ok(f"Configuration loaded from {suite.config_path}")
    if not suite.renderer.writer.enabled:
        ui.info("Template writing disabled")

    logger.info("Running pytest with arguments %s", ctx.args)
    try:
        exit_code = pytest.main(
            list(ctx.args), plugins=[_PreloadedSuite(suite), "vcd_acctest.pytest_plugin"]
        )
    finally:
        suite.close()
    raise typer.Exit(int(exit_code))


@app.command("show-config")
def show_config(
    config: Optional[Path] = typer.Option(None, "--config", help="Configuration file to show."),
    tests_dir: Optional[Path] = typer.Option(None, "--tests-dir", help=_TESTS_DIR_HELP),
) -> None:
    """Print the configuration with secrets masked.  Nothing is exported."""
    path = config if config is not None else resolve_config_path(default_dir=tests_dir)
    try:
        cfg = read_config(path)
    except SuiteHaltError as exc:
        report_halt(exc)
        raise typer.Exit(exc.exit_code)
    ui.phase("CONFIGURATION")
    ui.detail("file", str(path))
    ui.show_json(cfg.redacted())


@app.command()
def render(
    template_file: Path = typer.Argument(..., exists=True, dir_okay=False, readable=True),
    data: List[str] = typer.Option([], "--data", "-d", help="Template value as KEY=VALUE."),
    name: Optional[str] = typer.Option(
        None, "--name", help="Artifact name. Defaults to the template file name without suffix."
    ),
) -> None:
    """Render a template file, write it to test-artifacts/ and print it."""
    values = _parse_pairs(data)
    renderer = TemplateRenderer(ArtifactWriter())
    text = template_file.read_text(encoding="utf-8")
    try:
        rendered = renderer.render(text, values, name=name or template_file.stem)
    except SuiteHaltError as exc:
        report_halt(exc)
        raise typer.Exit(exc.exit_code)
    if not rendered:
        ui.warn(f"Template {template_file} did not render (see log for details)")
        raise typer.Exit(1)
    typer.echo(rendered, nl=not rendered.endswith("\n"))


def main() -> None:
    app()
