"""Persist rendered templates under ``test-artifacts/`` for troubleshooting.

Writing is on by default and is switched off by setting
``VCD_SKIP_TEMPLATE_WRITING`` to any non-empty value.  A failed write is
fatal: a truncated artifact would hide the evidence it exists to keep.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional

from vcd_acctest.environment import template_writing_enabled
from vcd_acctest.errors import ArtifactWriteError

logger = logging.getLogger(__name__)

#: Directory, relative to the working directory, that receives artifacts.
ARTIFACTS_DIR = "test-artifacts"


def _check_name(name: str) -> None:
    if not name or name in (".", "..") or "/" in name or os.sep in name:
        raise ArtifactWriteError(f"Invalid artifact name {name!r}")


class ArtifactWriter:
    """Write one file per attribution name into the artifacts directory.

    Args:
        enabled: Write switch.  ``None`` reads ``VCD_SKIP_TEMPLATE_WRITING``
            once, at construction.
        directory: Name of the artifacts directory.
        base_dir: Parent of *directory*.  ``None`` means the current working
            directory at the time of each write.
    """

    def __init__(
        self,
        enabled: Optional[bool] = None,
        directory: str = ARTIFACTS_DIR,
        base_dir: Optional[Path] = None,
    ) -> None:
        self.enabled = template_writing_enabled() if enabled is None else enabled
        self.directory = directory
        self.base_dir = base_dir
        self.written = 0

    @property
    def path(self) -> Path:
        base = self.base_dir if self.base_dir is not None else Path.cwd()
        return Path(base) / self.directory

    def _ensure_dir(self) -> Path:
        out_dir = self.path
        if not out_dir.is_dir():
            try:
                out_dir.mkdir(mode=0o755)
            except FileExistsError:
                if not out_dir.is_dir():
                    raise ArtifactWriteError(
                        f"Error creating directory {out_dir}: a file with that name exists"
                    ) from None
            except OSError as exc:
                raise ArtifactWriteError(f"Error creating directory {out_dir}: {exc}") from exc
        return out_dir

    def write(self, name: str, content: bytes) -> Optional[Path]:
        """Write *content* to ``<artifacts dir>/<name>``, replacing any old file.

        Returns the written path, or ``None`` when writing is disabled.

        Raises :class:`ArtifactWriteError` if the directory or file cannot be
        created or not every byte could be written.
        """
        if not self.enabled:
            return None
        _check_name(name)
        dest = self._ensure_dir() / name

        try:
            with open(dest, "wb") as fh:
                count = fh.write(content)
                fh.flush()
        except OSError as exc:
            raise ArtifactWriteError(f"Error writing to file {dest}: {exc}") from exc
        if count == 0 or count != len(content):
            raise ArtifactWriteError(
                f"Error writing to file {dest}. Reported {count} of {len(content)} bytes written."
            )

        self.written += 1
        logger.debug("Artifact written to %s (%d bytes)", dest, count)
        return dest
