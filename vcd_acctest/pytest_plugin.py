"""pytest integration for provider acceptance suites.

Enable it from the suite's ``conftest.py``::

    pytest_plugins = ["vcd_acctest.pytest_plugin"]

The configuration is loaded and exported in ``pytest_configure``, before
collection, so every test body sees the provider environment.  A broken
configuration, or an artifact that cannot be written, stops the session
with the error's exit code.

Fixtures:

* ``vcd_suite``: the :class:`~vcd_acctest.suite.SuiteContext`
* ``vcd_config``: the loaded config; skips the test in short-test mode
* ``template_renderer``: the shared :class:`TemplateRenderer`

Every test body runs inside :func:`~vcd_acctest.render.attribution` bound
to ``<module leaf>.<qualname>`` of the test, so two modules with a
``test_basic`` each keep their own artifact.  Renders from a helper called
by the test are named ``<test>.<helper qualname>``.
"""

from __future__ import annotations

import os
from typing import Any, Callable, List, Optional

import pytest

from vcd_acctest.config.models import VcdTestConfig
from vcd_acctest.errors import SuiteHaltError
from vcd_acctest.render.caller import attribution
from vcd_acctest.render.renderer import TemplateRenderer
from vcd_acctest.suite import SuiteContext, report_halt, start_suite

suite_key = pytest.StashKey[SuiteContext]()


def _halt(exc: SuiteHaltError) -> None:
    pytest.exit(report_halt(exc), returncode=exc.exit_code)


def _test_function(item: pytest.Item) -> Optional[Callable[..., Any]]:
    if isinstance(item, pytest.Function):
        return getattr(item, "function", None)
    return None


def artifact_name_for(item: pytest.Item) -> str:
    """Artifact name of a test item.

    ``<module leaf>.<qualname>`` of the test function plus any parametrize
    id, e.g. ``test_org.TestOrg.test_create[edge]``.  Items that are not
    Python functions use their node id.  Path separators become ``_``.
    """
    func = _test_function(item)
    if func is None:
        name = item.nodeid.replace("::", ".")
    else:
        leaf = func.__module__.rsplit(".", 1)[-1]
        params = item.name[len(item.originalname) :]
        name = f"{leaf}.{func.__qualname__}{params}"
    name = name.replace("/", "_")
    if os.sep != "/":
        name = name.replace(os.sep, "_")
    return name


def attribution_owner_for(item: pytest.Item) -> str:
    """``module:qualname`` of the test function, or ``""`` for other items."""
    func = _test_function(item)
    if func is None:
        return ""
    return f"{func.__module__}:{func.__qualname__}"


def pytest_configure(config: pytest.Config) -> None:
    if suite_key in config.stash:
        return
    try:
        suite = start_suite(default_dir=config.rootpath)
    except SuiteHaltError as exc:
        _halt(exc)
        return
    config.stash[suite_key] = suite


def pytest_unconfigure(config: pytest.Config) -> None:
    suite = config.stash.get(suite_key, None)
    if suite is not None:
        suite.close()


def pytest_report_header(config: pytest.Config) -> List[str]:
    suite = config.stash.get(suite_key, None)
    if suite is None:
        return []
    if suite.short:
        source = "skipped (short-test mode)"
    else:
        source = str(suite.config_path)
    writer = suite.renderer.writer
    artifacts = str(writer.path) if writer.enabled else "disabled"
    return [f"vcd config: {source}", f"vcd artifacts: {artifacts}"]


@pytest.hookimpl(wrapper=True)
def pytest_runtest_call(item: pytest.Item):
    with attribution(artifact_name_for(item), owner=attribution_owner_for(item)):
        try:
            return (yield)
        except SuiteHaltError as exc:
            _halt(exc)


@pytest.fixture(scope="session")
def vcd_suite(pytestconfig: pytest.Config) -> SuiteContext:
    return pytestconfig.stash[suite_key]


@pytest.fixture(scope="session")
def vcd_config(vcd_suite: SuiteContext) -> VcdTestConfig:
    if vcd_suite.config is None:
        pytest.skip("VCD_SHORT_TEST is set, no test configuration loaded")
    return vcd_suite.config


@pytest.fixture
def template_renderer(vcd_suite: SuiteContext) -> TemplateRenderer:
    return vcd_suite.renderer
