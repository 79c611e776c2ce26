"""Locate, read and parse the acceptance-test configuration file.

Resolution order for the file path:

1. ``VCD_CONFIG`` environment variable, when non-empty
2. ``vcd_test_config.json`` inside *default_dir* (the test sources)

The loader never exits the process.  Every failure is raised as a
:class:`~vcd_acctest.errors.ConfigError` subclass; the suite startup
routine decides to halt.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, MutableMapping, Optional

import yaml
from pydantic import ValidationError

from vcd_acctest.config.models import VcdTestConfig
from vcd_acctest.environment import config_path_override, enable_acceptance_tests
from vcd_acctest.errors import ConfigNotFoundError, ConfigParseError, ConfigReadError

logger = logging.getLogger(__name__)

#: File name looked up in the default directory.
DEFAULT_CONFIG_NAME = "vcd_test_config.json"

_YAML_SUFFIXES = frozenset({".yaml", ".yml"})


def resolve_config_path(
    environ: Optional[MutableMapping[str, str]] = None,
    default_dir: Optional[Path] = None,
) -> Path:
    """Return the configuration path, without checking that it exists."""
    override = config_path_override(environ)
    if override:
        return Path(override)
    base = Path(default_dir) if default_dir is not None else Path.cwd()
    return base / DEFAULT_CONFIG_NAME


def _parse(path: Path, text: str) -> Any:
    if path.suffix.lower() in _YAML_SUFFIXES:
        return yaml.safe_load(text)
    return json.loads(text)


def read_config(path: str | Path) -> VcdTestConfig:
    """Read and validate the configuration file at *path*.

    Raises
    ------
    ConfigNotFoundError
        Nothing exists at *path*.
    ConfigReadError
        *path* exists but cannot be read as UTF-8 text.
    ConfigParseError
        The content is not valid JSON/YAML, is not an object, or does not
        match :class:`VcdTestConfig`.
    """
    path = Path(path)
    if not path.exists():
        raise ConfigNotFoundError(str(path), "Configuration file not found")
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigReadError(str(path), f"Could not read config file ({exc})") from exc

    try:
        raw = _parse(path, text)
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        raise ConfigParseError(str(path), f"Could not parse config file ({exc})") from exc
    if not isinstance(raw, dict):
        raise ConfigParseError(
            str(path),
            f"Config file must contain an object, got {type(raw).__name__}",
        )

    try:
        return VcdTestConfig.model_validate(raw)
    except ValidationError as exc:
        raise ConfigParseError(
            str(path), f"Config file does not match the schema ({exc})"
        ) from exc


def load(
    environ: Optional[MutableMapping[str, str]] = None,
    *,
    default_dir: Optional[Path] = None,
) -> VcdTestConfig:
    """Resolve, read and parse the configuration, then set ``TF_ACC``.

    ``TF_ACC=1`` is exported when ``provider.tfAcceptanceTests`` is true.
    Provider credentials are exported separately by
    :func:`vcd_acctest.environment.propagate`.
    """
    path = resolve_config_path(environ, default_dir)
    cfg = read_config(path)
    logger.info("Loaded test configuration from %s", path)
    enable_acceptance_tests(cfg, environ)
    return cfg
