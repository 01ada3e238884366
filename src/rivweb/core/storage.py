"""Filesystem access for sources, resources and generated output."""

import logging
from datetime import datetime
from pathlib import Path

from rivweb.config import Settings
from rivweb.core.errors import FatalBuildError

logger = logging.getLogger(__name__)


class FileStorage:
    """File-based storage for a site.

    Sources live in ``source_dir`` as ``<id><source_ext>`` files, shared
    resources (stylesheet, templates, media) in ``resource_dir``, and
    generated files are written to ``output_dir``.
    """

    def __init__(self, settings: Settings):
        self.source_dir = settings.source_dir
        self.resource_dir = settings.resource_dir
        self.output_dir = settings.output_dir
        self.source_ext = settings.source_ext

    def _source_path(self, filename: str) -> Path:
        return self.source_dir / filename

    def scan(self) -> list[str]:
        """List source filenames, sorted. Directories are skipped."""
        try:
            entries = list(self.source_dir.iterdir())
        except OSError as e:
            raise FatalBuildError(
                f"unable to open required directory '{self.source_dir}': {e}",
                FatalBuildError.SOURCE_DIR,
            ) from e
        return sorted(
            path.name
            for path in entries
            if path.suffix == self.source_ext and not path.is_dir()
        )

    def read_source(self, filename: str) -> str:
        return self._source_path(filename).read_text(encoding="utf-8")

    def source_mtime(self, filename: str) -> datetime:
        """Last modification time of a source file, in local time."""
        stat = self._source_path(filename).stat()
        return datetime.fromtimestamp(stat.st_mtime).astimezone()

    def read_resource(self, filename: str, code: int) -> str:
        """Read a required resource. Raises FatalBuildError with ``code`` if missing."""
        path = self.resource_dir / filename
        try:
            return path.read_text(encoding="utf-8")
        except OSError as e:
            raise FatalBuildError(f"required resource '{path}' did not exist", code) from e

    def ensure_output_dir(self) -> None:
        try:
            self.output_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise FatalBuildError(
                f"unable to create output directory '{self.output_dir}': {e}",
                FatalBuildError.OUTPUT_DIR,
            ) from e

    def write_output(self, filename: str, content: str) -> Path:
        path = self.output_dir / filename
        path.write_text(content, encoding="utf-8")
        logger.debug("wrote %s", path)
        return path
