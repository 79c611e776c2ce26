"""Exception hierarchy for the acceptance-test bootstrap.

Two tiers:

* :class:`SuiteHaltError`: fatal.  Continuing would produce misleading
  results or lose diagnostic data, so whoever observes one (the pytest
  plugin, the CLI) stops the whole run with :attr:`SuiteHaltError.exit_code`.
* :class:`TemplateError`: recoverable.  Swallowed by the renderer, which
  returns an empty string instead.
"""

from __future__ import annotations

# Both sit above pytest's own ExitCode values (0-5).

#: Exit code used when the configuration source is missing or broken.
EXIT_CONFIG_ERROR = 6

#: Exit code used when an artifact cannot be written.
EXIT_ARTIFACT_ERROR = 7


class SuiteHaltError(Exception):
    """Base class for errors that must stop the test run."""

    exit_code: int = 1


class ConfigError(SuiteHaltError):
    """The configuration source could not be turned into a config."""

    exit_code = EXIT_CONFIG_ERROR

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"{reason}: {path}")


class ConfigNotFoundError(ConfigError):
    """No file at the resolved configuration path."""


class ConfigReadError(ConfigError):
    """The file exists but could not be read."""


class ConfigParseError(ConfigError):
    """The file was read but does not match the configuration schema."""


class ArtifactWriteError(SuiteHaltError):
    """The artifact directory or file could not be created or written."""

    exit_code = EXIT_ARTIFACT_ERROR


class TemplateError(Exception):
    """Base class for template failures."""

    def __init__(self, name: str, message: str) -> None:
        self.name = name
        super().__init__(f"template {name!r}: {message}")


class TemplateSyntaxError(TemplateError):
    """The template text does not follow the marker grammar."""


class TemplateRenderError(TemplateError):
    """A marker referenced a key that is not in the data."""
