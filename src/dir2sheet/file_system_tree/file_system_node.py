"""Node representation for file system elements in the tree."""

from typing import Any, Optional

from anytree import Node

from dir2sheet.file_system_tree.entry import Entry
from dir2sheet.types import EntryKind


class FileSystemNode(Node):  # type: ignore
    """Node class representing an emitted directory or file.

    Extends anytree.Node so the walker's output can be navigated as a tree as well
    as read as a flat row list. Each non-root node carries the Entry it was emitted
    as; the root node represents the walk root itself and has no entry.

    Attributes:
        name (str): The name of the file or directory (just the basename).
        parent (Optional[FileSystemNode]): The parent node in the tree.
        entry (Optional[Entry]): The emitted row, None for the root node.

    Example:
        >>> root = FileSystemNode("project")
        >>> child = FileSystemNode.from_entry(Entry(0, EntryKind.FILE, "a.ts", "a.ts"), parent=root)
        >>> child.is_dir
        False
        >>> [node.name for node in root.children]
        ['a.ts']
    """

    def __init__(
        self,
        name: str,
        parent: Optional["FileSystemNode"] = None,
        entry: Optional[Entry] = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(name, parent, **kwargs)
        self.entry = entry

    @classmethod
    def from_entry(cls, entry: Entry, parent: Optional["FileSystemNode"] = None) -> "FileSystemNode":
        return cls(entry.name, parent=parent, entry=entry)

    @property
    def is_dir(self) -> bool:
        # The root node is always a directory
        return self.entry is None or self.entry.kind is EntryKind.DIRECTORY
