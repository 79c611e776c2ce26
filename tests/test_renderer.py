"""Tests for vcd_acctest.render.renderer."""

from __future__ import annotations

from pathlib import Path

import pytest

from vcd_acctest.errors import ArtifactWriteError
from vcd_acctest.render.artifacts import ARTIFACTS_DIR, ArtifactWriter
from vcd_acctest.render.caller import attribution
from vcd_acctest.render.renderer import (
    FUNC_NAME_KEY,
    TemplateRenderer,
    set_default_renderer,
    template_fill,
)

ORG_TEMPLATE = "org = {{.Org}}"


@pytest.fixture
def renderer(tmp_path: Path) -> TemplateRenderer:
    return TemplateRenderer(ArtifactWriter(enabled=True, base_dir=tmp_path))


def _artifacts(tmp_path: Path) -> dict:
    out = tmp_path / ARTIFACTS_DIR
    if not out.exists():
        return {}
    return {p.name: p.read_text(encoding="utf-8") for p in out.iterdir()}


def _shared_helper(renderer: TemplateRenderer, org: str) -> str:
    return renderer.render(ORG_TEMPLATE, {"Org": org})


def _step1(renderer: TemplateRenderer) -> str:
    return renderer.render(ORG_TEMPLATE, {"Org": "step1"})


def _step2(renderer: TemplateRenderer) -> str:
    return renderer.render(ORG_TEMPLATE, {"Org": "step2"})


# ── rendering ────────────────────────────────────────────────────────


class TestRender:
    def test_returns_rendered_text(self, renderer):
        assert renderer.render(ORG_TEMPLATE, {"Org": "myorg"}) == "org = myorg"

    def test_artifact_matches_result(self, renderer, tmp_path: Path):
        result = renderer.render(ORG_TEMPLATE, {"Org": "myorg"})
        files = _artifacts(tmp_path)
        assert list(files.values()) == [result]

    def test_artifact_bytes_identical(self, renderer, tmp_path: Path):
        result = renderer.render("name = {{.Name}}\n", {"Name": "ünïcode"}, name="case")
        assert (tmp_path / ARTIFACTS_DIR / "case").read_bytes() == result.encode("utf-8")

    def test_unknown_marker_fails(self, renderer, tmp_path: Path):
        assert renderer.render("{{.Org}} {{.Vdc}}", {"Org": "o"}) == ""
        assert _artifacts(tmp_path) == {}

    def test_syntax_error_fails(self, renderer, tmp_path: Path):
        assert renderer.render("org = {{.Org", {"Org": "o"}) == ""
        assert _artifacts(tmp_path) == {}

    def test_empty_result_fails(self, renderer, tmp_path: Path):
        assert renderer.render("{{.Org}}", {"Org": ""}) == ""
        assert _artifacts(tmp_path) == {}

    def test_disabled_writer_still_renders(self, tmp_path: Path):
        renderer = TemplateRenderer(ArtifactWriter(enabled=False, base_dir=tmp_path))
        assert renderer.render(ORG_TEMPLATE, {"Org": "myorg"}) == "org = myorg"
        assert not (tmp_path / ARTIFACTS_DIR).exists()

    def test_write_errors_propagate(self, tmp_path: Path):
        (tmp_path / ARTIFACTS_DIR).write_text("in the way")
        renderer = TemplateRenderer(ArtifactWriter(enabled=True, base_dir=tmp_path))
        with pytest.raises(ArtifactWriteError):
            renderer.render(ORG_TEMPLATE, {"Org": "o"})


# ── attribution ──────────────────────────────────────────────────────


class TestAttributionName:
    def test_named_after_calling_test(self, renderer, tmp_path: Path):
        renderer.render(ORG_TEMPLATE, {"Org": "o"})
        assert list(_artifacts(tmp_path)) == [
            "test_renderer.TestAttributionName.test_named_after_calling_test"
        ]

    def test_func_name_override(self, renderer, tmp_path: Path):
        renderer.render(ORG_TEMPLATE, {"Org": "o", FUNC_NAME_KEY: "custom_case"})
        assert _artifacts(tmp_path) == {"custom_case": "org = o"}

    def test_explicit_name_beats_func_name(self, renderer, tmp_path: Path):
        renderer.render(ORG_TEMPLATE, {"Org": "o", FUNC_NAME_KEY: "ignored"}, name="explicit")
        assert list(_artifacts(tmp_path)) == ["explicit"]

    def test_bound_attribution_beats_stack(self, renderer, tmp_path: Path):
        with attribution("bound_case"):
            renderer.render(ORG_TEMPLATE, {"Org": "o"})
        assert list(_artifacts(tmp_path)) == ["bound_case"]

    def test_func_name_beats_bound_attribution(self, renderer, tmp_path: Path):
        with attribution("bound_case"):
            renderer.render(ORG_TEMPLATE, {"Org": "o", FUNC_NAME_KEY: "data_case"})
        assert list(_artifacts(tmp_path)) == ["data_case"]

    def test_helper_gets_the_name_without_binding(self, renderer, tmp_path: Path):
        _shared_helper(renderer, "o")
        assert list(_artifacts(tmp_path)) == ["test_renderer._shared_helper"]

    def test_binding_without_owner_names_helper_output(self, renderer, tmp_path: Path):
        with attribution("TestAccVcdOrg"):
            _shared_helper(renderer, "o")
        assert list(_artifacts(tmp_path)) == ["TestAccVcdOrg"]

    def test_owned_binding_names_direct_render(self, renderer, tmp_path: Path):
        owner = f"{__name__}:{type(self).test_owned_binding_names_direct_render.__qualname__}"
        with attribution("test_org.test_basic", owner=owner):
            renderer.render(ORG_TEMPLATE, {"Org": "o"})
        assert list(_artifacts(tmp_path)) == ["test_org.test_basic"]

    def test_owned_binding_appends_helper_name(self, renderer, tmp_path: Path):
        owner = f"{__name__}:{type(self).test_owned_binding_appends_helper_name.__qualname__}"
        with attribution("test_org.test_basic", owner=owner):
            _step1(renderer)
            _step2(renderer)
        assert _artifacts(tmp_path) == {
            "test_org.test_basic._step1": "org = step1",
            "test_org.test_basic._step2": "org = step2",
        }

    def test_func_name_value_stringified(self, renderer):
        assert renderer.attribution_name({FUNC_NAME_KEY: 42}) == "42"


# ── overwrite semantics ──────────────────────────────────────────────


class TestOverwrite:
    def test_same_name_keeps_last(self, renderer, tmp_path: Path):
        renderer.render(ORG_TEMPLATE, {"Org": "first", FUNC_NAME_KEY: "case"})
        renderer.render(ORG_TEMPLATE, {"Org": "second", FUNC_NAME_KEY: "case"})
        assert _artifacts(tmp_path) == {"case": "org = second"}

    def test_distinct_names_distinct_files(self, renderer, tmp_path: Path):
        renderer.render(ORG_TEMPLATE, {"Org": "a", FUNC_NAME_KEY: "case_a"})
        renderer.render(ORG_TEMPLATE, {"Org": "b", FUNC_NAME_KEY: "case_b"})
        assert _artifacts(tmp_path) == {"case_a": "org = a", "case_b": "org = b"}


# ── template_fill ────────────────────────────────────────────────────


class TestTemplateFill:
    def test_uses_default_renderer(self, renderer, tmp_path: Path):
        set_default_renderer(renderer)
        assert template_fill(ORG_TEMPLATE, {"Org": "myorg"}) == "org = myorg"
        assert list(_artifacts(tmp_path)) == [
            "test_renderer.TestTemplateFill.test_uses_default_renderer"
        ]

    def test_builds_renderer_when_unset(self, tmp_path: Path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        set_default_renderer(None)
        assert template_fill(ORG_TEMPLATE, {"Org": "o", FUNC_NAME_KEY: "lazy"}) == "org = o"
        assert (tmp_path / ARTIFACTS_DIR / "lazy").read_text() == "org = o"
