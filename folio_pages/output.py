"""Manage the lifecycle of the generated output tree.

:class:`OutputWriter` owns every filesystem write made by a build: it wipes
the output directory, creates nested directories, writes rendered documents,
and copies static assets. Any ``OSError`` is re-raised as
:class:`~folio_pages.errors.OutputError` naming the offending path.
"""

from __future__ import annotations

import logging
import shutil
from pathlib import Path

from ._constants import STATIC_DIRNAME
from .errors import OutputError

logger = logging.getLogger("folio_pages.output")


class OutputWriter:
    """Write rendered documents and assets below ``output_path``."""

    def __init__(self, output_path: Path) -> None:
        self.output_path = output_path

    def clean(self) -> None:
        """Delete the whole output directory if it exists."""
        if not self.output_path.exists():
            return
        logger.debug("Removing %s", self.output_path)
        try:
            shutil.rmtree(self.output_path)
        except OSError as exc:
            msg = f"could not delete output directory: {exc}"
            raise OutputError(self.output_path, msg) from exc

    def create_directory(self, path: Path) -> Path:
        """Create ``path`` and its parents; existing directories are fine."""
        try:
            path.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise OutputError(path, f"could not create directory: {exc}") from exc
        return path

    def create_file(self, path: Path, content: str) -> Path:
        """Write ``content`` to ``path`` as UTF-8, replacing any existing file."""
        self.create_directory(path.parent)
        try:
            path.write_text(content, encoding="utf-8")
        except OSError as exc:
            raise OutputError(path, f"could not write file: {exc}") from exc
        logger.debug("wrote %s", path)
        return path

    def copy_file(self, source: Path, target: Path) -> Path:
        """Copy ``source`` byte-for-byte to ``target``, overwriting it."""
        self.create_directory(target.parent)
        try:
            shutil.copyfile(source, target)
        except OSError as exc:
            raise OutputError(target, f"could not copy '{source}': {exc}") from exc
        return target

    def copy_static(self, root: Path) -> list[Path]:
        """Copy ``root/static`` into the output tree.

        Files are overwritten and missing directories created. Files that
        exist only in the output tree are left untouched.

        Returns
        -------
        list[Path]
            Output paths of the copied files.
        """
        static_dir = root / STATIC_DIRNAME
        if not static_dir.is_dir():
            logger.debug("No static directory at %s", static_dir)
            return []

        copied: list[Path] = []
        self.create_directory(self.output_path)
        for source in sorted(static_dir.rglob("*")):
            target = self.output_path / source.relative_to(static_dir)
            if source.is_dir():
                self.create_directory(target)
            else:
                copied.append(self.copy_file(source, target))
        logger.info("Copied %d static file(s)", len(copied))
        return copied


__all__ = ["OutputWriter"]
