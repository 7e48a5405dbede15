"""
Lifecycle of the staging directory: wiped and recreated at the start of every
run, then filled one module at a time.
"""

import logging
import os
import shutil
import tempfile
from pathlib import Path

from registry_builder.errors import FilesystemError

logger = logging.getLogger(__name__)


def write_atomic(path: str | Path, content: str) -> Path:
    """
    Write content to path through a temporary file in the same directory and
    os.replace, so the destination is never left half-written.
    """
    path = Path(path)
    tmp_name = None
    try:
        with tempfile.NamedTemporaryFile(
            "wb", dir=path.parent, prefix=f".{path.name}.", suffix=".tmp", delete=False
        ) as tmp:
            tmp_name = tmp.name
            tmp.write(content.encode("utf-8"))
        os.replace(tmp_name, path)
    except OSError as e:
        if tmp_name is not None and os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise FilesystemError(path, f"Cannot write file ({e.strerror or e})") from e
    return path


class StagingDirectory:
    """
    The staging subdirectory of one registry run.
    reset() must be called once before any write(); there is no rollback across files.
    """

    def __init__(self, path: str | Path):
        self.path = Path(path)
        self._ready = False

    def reset(self) -> None:
        """Remove the directory (if present) and recreate it empty."""
        try:
            if self.path.is_dir() and not self.path.is_symlink():
                shutil.rmtree(self.path)
            elif self.path.exists() or self.path.is_symlink():
                self.path.unlink()
            self.path.mkdir()
        except OSError as e:
            raise FilesystemError(self.path, f"Cannot reset staging directory ({e.strerror or e})") from e
        self._ready = True
        logger.debug("Reset staging directory %s", self.path)

    def write(self, base_name: str, content: str) -> Path:
        """Create or overwrite base_name under the staging directory."""
        if not self._ready:
            raise RuntimeError("StagingDirectory.reset() must run before write()")
        target = write_atomic(self.path / base_name, content)
        logger.debug("Staged %s", target)
        return target

    def list_files(self) -> list[str]:
        """Names of files currently staged, sorted."""
        if not self.path.is_dir():
            return []
        return sorted(p.name for p in self.path.iterdir() if p.is_file())
