"""Depth-first walk of a directory producing the ordered rows of a report.

This module provides the FileSystemTree class, which decides for every path under a
root whether it appears in the report, at what depth, and under which path string.
"""

import logging
import os
from pathlib import Path
from typing import Iterator, List, Optional, Tuple

from dir2sheet.exceptions import ConfigurationError, TraversalError
from dir2sheet.exclusion_rules.base_rules import BaseExclusionRules
from dir2sheet.exclusion_rules.path_list_rules import PathListExclusionRules
from dir2sheet.extension_filter import ExtensionFilter
from dir2sheet.file_system_tree.entry import Entry
from dir2sheet.file_system_tree.file_system_node import FileSystemNode
from dir2sheet.types import EntryKind, PathType

logger = logging.getLogger(__name__)


class FileSystemTree:
    """Pre-order listing of a directory tree with exclusion and extension filtering.

    The walk emits one Entry per kept directory or file, parent before children.
    Siblings keep the order in which the filesystem lists them; nothing is sorted
    unless sort_children is set, and that order is not guaranteed to be stable
    across platforms or filesystems.

    For every child of a directory being walked:

    1. Excluded paths are skipped, with everything beneath them. Exclusion always
       wins over the extension filter.
    2. Files whose extension does not pass the filter are skipped.
    3. Directories that contain no file passing the filter are skipped (pruned), so
       no directory row appears with nothing under it.
    4. Everything else is emitted at the current level, and directories are walked
       at the next level.

    A subdirectory that cannot be listed is logged and recorded as a TraversalError;
    its own row stays, its contents are missing and the walk carries on with its
    siblings. Only an unusable root stops the walk.

    Attributes:
        root_path (Path): The directory being walked.
        exclusion_rules (Optional[BaseExclusionRules]): Rules for excluding paths. When
            None, the exclusion-list file found at the root is used.
        extension_filter (ExtensionFilter): Which files to include.
        sort_children (bool): Whether to sort siblings by name.

    Example:
        >>> tree = FileSystemTree("project", extension_filter=ExtensionFilter.from_string("ts"))  # doctest: +SKIP
        >>> for entry in tree.iterate_entries():  # doctest: +SKIP
        ...     print(entry.level, entry.kind.value, entry.relative_path)
        0 Directory src/
        1 File src/index.ts
        0 File main.ts
    """

    def __init__(
        self,
        root_path: PathType,
        exclusion_rules: Optional[BaseExclusionRules] = None,
        extension_filter: Optional[ExtensionFilter] = None,
        sort_children: bool = False,
    ) -> None:
        """Initialize a FileSystemTree.

        The tree is built lazily on first access.

        Args:
            root_path: Path to the root directory. Can be any path-like object.
            exclusion_rules: Rules for excluding files and directories. Defaults to the
                exclusion-list file found at the root.
            extension_filter: Extension allow-list. Defaults to accepting all files.
            sort_children: Sort siblings by name instead of keeping filesystem order.
        """
        self.root_path = Path(root_path)
        self.exclusion_rules = exclusion_rules
        self._rules_from_root = exclusion_rules is None
        self.extension_filter = extension_filter if extension_filter is not None else ExtensionFilter()
        self.sort_children = sort_children
        self._tree: Optional[FileSystemNode] = None
        self._entries: List[Entry] = []
        self._errors: List[TraversalError] = []

    def get_tree(self) -> FileSystemNode:
        """Get the root node of the emitted tree.

        Raises:
            ConfigurationError: If the root path is missing, not a directory, or
                cannot be listed.
        """
        if self._tree is None:
            self._build_tree()
        assert self._tree is not None
        return self._tree

    def get_entries(self) -> List[Entry]:
        """Get all emitted entries in emission order.

        Raises:
            ConfigurationError: If the root path is missing, not a directory, or
                cannot be listed.
        """
        if self._tree is None:
            self._build_tree()
        return list(self._entries)

    def iterate_entries(self) -> Iterator[Entry]:
        """Iterate over the emitted entries in emission order."""
        yield from self.get_entries()

    @property
    def errors(self) -> List[TraversalError]:
        """Directories that could not be listed during the last walk."""
        if self._tree is None:
            self._build_tree()
        return list(self._errors)

    def get_file_count(self) -> int:
        return sum(1 for entry in self.get_entries() if not entry.is_dir)

    def get_directory_count(self) -> int:
        """Number of emitted directories, not counting the root."""
        return sum(1 for entry in self.get_entries() if entry.is_dir)

    def get_error_count(self) -> int:
        return len(self.errors)

    def refresh(self) -> None:
        """Walk the filesystem again, discarding the previous result.

        When no exclusion rules were given, the exclusion-list file is read again too.
        """
        self._tree = None
        self._entries = []
        self._errors = []
        self._build_tree()

    def _build_tree(self) -> None:
        if not self.root_path.exists():
            raise ConfigurationError(self.root_path, "directory does not exist")
        if not self.root_path.is_dir():
            raise ConfigurationError(self.root_path, "not a directory")

        try:
            children = self._list_children(self.root_path)
        except OSError as e:
            raise ConfigurationError(self.root_path, f"cannot list directory ({e.strerror or e})") from e

        if self._rules_from_root:
            self.exclusion_rules = PathListExclusionRules.from_root(self.root_path)

        entries: List[Entry] = []
        errors: List[TraversalError] = []
        root = FileSystemNode(self.root_path.resolve().name or str(self.root_path))

        if self.extension_filter.directory_has_included_file(self.root_path):
            self._walk(children, root, entries, errors)
        else:
            logger.info("No files under %s match the extension filter", self.root_path)

        self._tree = root
        self._entries = entries
        self._errors = errors

    def _list_children(self, path: PathType) -> List[os.DirEntry]:
        with os.scandir(path) as it:
            children = list(it)
        if self.sort_children:
            children.sort(key=lambda child: child.name)
        return children

    def _walk(
        self,
        children: List[os.DirEntry],
        root: FileSystemNode,
        entries: List[Entry],
        errors: List[TraversalError],
    ) -> None:
        assert self.exclusion_rules is not None

        # One frame per open directory: remaining children, relative path, level, node
        stack: List[Tuple[Iterator[os.DirEntry], str, int, FileSystemNode]] = [(iter(children), "", 0, root)]

        while stack:
            remaining, parent_relative_path, level, parent = stack[-1]
            child = next(remaining, None)
            if child is None:
                stack.pop()
                continue

            try:
                is_dir = child.is_dir()
            except OSError as e:
                self._record_error(TraversalError(child.path, e.strerror or str(e), e), errors)
                continue

            # Relative paths always use forward slashes; directories end in one
            relative_path = parent_relative_path + child.name
            if is_dir:
                relative_path += "/"

            if self.exclusion_rules.exclude(relative_path):
                continue

            if not is_dir and not self.extension_filter.includes(child.name):
                continue

            if is_dir and not self.extension_filter.directory_has_included_file(child.path):
                continue

            entry = Entry(
                level=level,
                kind=EntryKind.DIRECTORY if is_dir else EntryKind.FILE,
                name=child.name,
                relative_path=relative_path,
            )
            entries.append(entry)
            node = FileSystemNode.from_entry(entry, parent=parent)

            if not is_dir:
                continue

            try:
                grandchildren = self._list_children(child.path)
            except OSError as e:
                self._record_error(TraversalError(child.path, e.strerror or str(e), e), errors)
                continue

            stack.append((iter(grandchildren), relative_path, level + 1, node))

    @staticmethod
    def _record_error(error: TraversalError, errors: List[TraversalError]) -> None:
        logger.warning("%s", error)
        errors.append(error)
