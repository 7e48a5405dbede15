"""
Builds the barrel index: one re-export statement per staged module.
"""

import logging
from pathlib import Path

from .directory import write_atomic

logger = logging.getLogger(__name__)


def format_export(staging_dir: str, module_stem: str) -> str:
    """Re-export statement for one staged module, relative to the index's directory."""
    return f"export * from './{staging_dir}/{module_stem}';\n"


class IndexGenerator:
    """
    Accumulates staged module names in processing order and writes the index
    file in one piece on flush().
    """

    def __init__(self, index_path: str | Path, staging_dir: str):
        self.index_path = Path(index_path)
        self.staging_dir = staging_dir
        self._stems: list[str] = []

    @property
    def modules(self) -> list[str]:
        return list(self._stems)

    def record(self, module_name: str) -> None:
        """Record a staged module by base name (extension is dropped)."""
        self._stems.append(Path(module_name).stem)

    def render(self) -> str:
        return "".join(format_export(self.staging_dir, stem) for stem in self._stems)

    def flush(self) -> Path:
        """Overwrite the index file with every recorded statement (empty when none were recorded)."""
        write_atomic(self.index_path, self.render())
        logger.debug("Wrote index %s (%d statement(s))", self.index_path, len(self._stems))
        return self.index_path
