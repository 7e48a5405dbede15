"""
Output side of the registry: the staging directory and the barrel index.
"""

from .directory import StagingDirectory, write_atomic
from .index_builder import IndexGenerator, format_export

__all__ = ["StagingDirectory", "write_atomic", "IndexGenerator", "format_export"]
