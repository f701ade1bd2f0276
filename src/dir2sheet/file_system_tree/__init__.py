"""Directory walking that turns a filesystem tree into report rows.

This package provides the tree walker and the row and node types it produces.
"""

from .entry import Entry
from .file_system_node import FileSystemNode
from .file_system_tree import FileSystemTree

__all__ = ["Entry", "FileSystemNode", "FileSystemTree"]
