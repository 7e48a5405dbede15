"""
Lists the source modules in a registry root and loads their content.
Only the top level is scanned; the staging subdirectory and the index file are never inputs.
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from registry_builder.errors import FilesystemError, ParseError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SourceModule:
    path: Path
    content: str

    @property
    def name(self) -> str:
        """File base name, e.g. button.ts."""
        return self.path.name

    @property
    def stem(self) -> str:
        return self.path.stem


def scan_modules(
    root: str | Path,
    extension: str = ".ts",
    index_name: str = "index.ts",
    *,
    sort: bool = True,
) -> list[Path]:
    """
    Return the eligible module paths under root: regular files ending with
    extension, excluding index_name.

    With sort=False the order is whatever os.scandir yields, which is only as
    stable as the underlying filesystem.
    """
    root = Path(root).resolve()
    if not root.is_dir():
        raise FilesystemError(root, "Not a directory")
    out: list[Path] = []
    try:
        with os.scandir(root) as entries:
            for entry in entries:
                if not entry.name.endswith(extension) or entry.name == index_name:
                    continue
                if not entry.is_file():
                    continue
                out.append(root / entry.name)
    except OSError as e:
        raise FilesystemError(root, f"Cannot list directory ({e.strerror or e})") from e
    if sort:
        out.sort(key=lambda p: p.name)
    logger.debug("Scanned %s: %d module(s)", root, len(out))
    return out


def read_module(path: str | Path) -> SourceModule:
    """Load a module's raw text."""
    path = Path(path)
    try:
        content = path.read_bytes().decode("utf-8")
    except OSError as e:
        raise FilesystemError(path, f"Cannot read module ({e.strerror or e})") from e
    except UnicodeDecodeError as e:
        raise ParseError(path, 1, 1, f"not valid UTF-8 ({e.reason})") from e
    return SourceModule(path=path, content=content)
