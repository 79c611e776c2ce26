"""Process environment: switches read by the suite, variables written for
the provider under test.

Every helper takes an optional *environ* mapping so tests can work on a
plain dict instead of :data:`os.environ`.
"""

from __future__ import annotations

import logging
import os
from typing import TYPE_CHECKING, MutableMapping, Optional

if TYPE_CHECKING:
    from vcd_acctest.config.models import VcdTestConfig

logger = logging.getLogger(__name__)

# ── consumed ─────────────────────────────────────────────────────────

#: Path to a configuration file outside the default location.
ENV_CONFIG = "VCD_CONFIG"

#: Any non-empty value skips configuration loading (short-test mode).
ENV_SHORT_TEST = "VCD_SHORT_TEST"

#: Any non-empty value disables artifact writing.
ENV_SKIP_TEMPLATE_WRITING = "VCD_SKIP_TEMPLATE_WRITING"

# ── produced ─────────────────────────────────────────────────────────

ENV_TF_ACC = "TF_ACC"
ENV_USER = "VCD_USER"
ENV_PASSWORD = "VCD_PASSWORD"
ENV_URL = "VCD_URL"
ENV_ORG = "VCD_ORG"
ENV_ALLOW_UNVERIFIED_SSL = "VCD_ALLOW_UNVERIFIED_SSL"


def _env(environ: Optional[MutableMapping[str, str]]) -> MutableMapping[str, str]:
    return os.environ if environ is None else environ


def config_path_override(environ: Optional[MutableMapping[str, str]] = None) -> str:
    """Return ``VCD_CONFIG`` or an empty string."""
    return _env(environ).get(ENV_CONFIG, "")


def is_short_test(environ: Optional[MutableMapping[str, str]] = None) -> bool:
    """True when ``VCD_SHORT_TEST`` is set to a non-empty value."""
    return _env(environ).get(ENV_SHORT_TEST, "") != ""


def template_writing_enabled(environ: Optional[MutableMapping[str, str]] = None) -> bool:
    """False when ``VCD_SKIP_TEMPLATE_WRITING`` is set to a non-empty value."""
    return _env(environ).get(ENV_SKIP_TEMPLATE_WRITING, "") == ""


def enable_acceptance_tests(
    cfg: VcdTestConfig, environ: Optional[MutableMapping[str, str]] = None
) -> None:
    """Set ``TF_ACC=1`` when the config asks for acceptance tests."""
    if cfg.provider.tf_acceptance_tests:
        _env(environ)[ENV_TF_ACC] = "1"
        logger.debug("%s=1 set from configuration", ENV_TF_ACC)


def propagate(cfg: VcdTestConfig, environ: Optional[MutableMapping[str, str]] = None) -> None:
    """Copy provider credentials from *cfg* into the environment.

    ``VCD_USER``, ``VCD_PASSWORD``, ``VCD_URL`` and ``VCD_ORG`` are always
    overwritten.  ``VCD_ALLOW_UNVERIFIED_SSL=1`` is set when
    ``allowInsecure`` is true and is never cleared: a later config without
    the flag leaves a previously set value in place.
    """
    env = _env(environ)
    provider = cfg.provider
    env[ENV_USER] = provider.user
    env[ENV_PASSWORD] = provider.password
    env[ENV_URL] = provider.url
    env[ENV_ORG] = provider.sys_org
    if provider.allow_insecure:
        env[ENV_ALLOW_UNVERIFIED_SSL] = "1"
    logger.info(
        "Provider environment set for user %r at %s (org %r, insecure=%s)",
        provider.user,
        provider.url,
        provider.sys_org,
        provider.allow_insecure,
    )
