"""File logging driven by the ``logging`` section of the config."""

from __future__ import annotations

import logging
from typing import Optional

from vcd_acctest.config.models import LoggingConfig

#: Log file used when ``logging.enabled`` is set without ``logFileName``.
DEFAULT_LOG_FILE = "vcd-acctest.log"

_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

package_logger = logging.getLogger("vcd_acctest")


def configure_logging(cfg: LoggingConfig) -> Optional[logging.Handler]:
    """Attach a file handler to the ``vcd_acctest`` logger if enabled.

    Returns the handler so it can be passed to :func:`remove_logging`,
    or ``None`` when logging is disabled.
    """
    if not cfg.enabled:
        return None
    handler = logging.FileHandler(cfg.log_file_name or DEFAULT_LOG_FILE, encoding="utf-8")
    handler.setFormatter(logging.Formatter(_FORMAT))
    level = logging.DEBUG if cfg.verbose_cleanup else logging.INFO
    handler.setLevel(level)
    package_logger.addHandler(handler)
    if package_logger.level == logging.NOTSET or package_logger.level > level:
        package_logger.setLevel(level)
    package_logger.info(
        "File logging enabled (http request=%s, http response=%s)",
        cfg.log_http_request,
        cfg.log_http_response,
    )
    return handler


def remove_logging(handler: Optional[logging.Handler]) -> None:
    """Detach and close a handler returned by :func:`configure_logging`."""
    if handler is None:
        return
    package_logger.removeHandler(handler)
    handler.close()
