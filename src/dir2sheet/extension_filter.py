"""Extension-based inclusion of files in a directory report."""

import logging
import os
from typing import FrozenSet, Iterable, List, Optional

from dir2sheet.types import PathType

logger = logging.getLogger(__name__)


def parse_extensions(extensions: str) -> Optional[FrozenSet[str]]:
    """Parse a comma-separated list of file extensions.

    Items are trimmed and lower-cased; a leading dot is dropped and empty items are
    ignored.

    Args:
        extensions: Extensions such as "js,jsx,TS".

    Returns:
        The set of extensions, or None if the string names none (accept all files).

    Example:
        >>> sorted(parse_extensions("js, .JSX,,ts"))
        ['js', 'jsx', 'ts']
        >>> parse_extensions(" , ") is None
        True
    """
    parsed = frozenset(item.strip().lower().lstrip(".") for item in extensions.split(","))
    parsed = parsed - {""}
    return parsed or None


def file_extension(file_name: str) -> str:
    """Return the lower-cased extension of a file name, without the dot.

    Names without an extension, including dotfiles such as ".bashrc", return "".

    Example:
        >>> file_extension("Main.TS")
        'ts'
        >>> file_extension(".bashrc")
        ''
        >>> file_extension("archive.tar.gz")
        'gz'
    """
    return os.path.splitext(file_name)[1][1:].lower()


class ExtensionFilter:
    """Optional allow-list of file extensions.

    A filter without extensions accepts every file and every directory. A configured
    filter accepts files whose extension (case-insensitive) is listed, and
    directories whose subtree contains at least one such file.

    The directory check looks at the extension only; it does not know about
    exclusion rules. A directory can therefore be kept because of a file the walker
    later excludes.

    Attributes:
        extensions (Optional[FrozenSet[str]]): Accepted extensions, or None to accept all.

    Example:
        >>> ts_only = ExtensionFilter.from_string("ts")
        >>> ts_only.includes("app.TS")
        True
        >>> ts_only.includes("app.js")
        False
        >>> ExtensionFilter().includes("anything.bin")
        True
    """

    def __init__(self, extensions: Optional[Iterable[str]] = None) -> None:
        """Initialize the filter.

        Args:
            extensions: Extensions to accept, with or without leading dots. None or
                an empty iterable accepts all files.
        """
        if extensions is None:
            self._extensions: Optional[FrozenSet[str]] = None
        else:
            self._extensions = parse_extensions(",".join(extensions))

    @classmethod
    def from_string(cls, extensions: Optional[str]) -> "ExtensionFilter":
        """Create a filter from a comma-separated list such as "js,jsx,ts,tsx"."""
        if not extensions:
            return cls()
        parsed = parse_extensions(extensions)
        return cls(parsed)

    @property
    def extensions(self) -> Optional[FrozenSet[str]]:
        return self._extensions

    @property
    def accepts_all(self) -> bool:
        return self._extensions is None

    def includes(self, file_name: str) -> bool:
        """Check whether a file passes the filter.

        Args:
            file_name: Name (or path) of the file.

        Returns:
            True if no filter is configured or the file's extension is listed.
        """
        if self._extensions is None:
            return True
        return file_extension(file_name) in self._extensions

    def directory_has_included_file(self, dir_path: PathType) -> bool:
        """Check whether a directory subtree contains a file that passes the filter.

        Without a configured filter this is True for every directory, empty ones
        included, and no filesystem access happens. Otherwise the subtree is scanned
        depth-first and the scan stops at the first matching file. Subdirectories
        that cannot be listed are logged and treated as containing nothing.

        Args:
            dir_path: The directory to scan.

        Returns:
            True if the directory would have anything to show.
        """
        if self._extensions is None:
            return True
        return self._scan(dir_path)

    def _scan(self, dir_path: PathType) -> bool:
        pending: List[PathType] = [dir_path]
        while pending:
            current = pending.pop()
            try:
                with os.scandir(current) as it:
                    children = list(it)
            except OSError as e:
                logger.warning("Cannot scan directory %s: %s", current, e.strerror or e)
                continue

            subdirectories = []
            for child in children:
                try:
                    is_dir = child.is_dir()
                except OSError as e:
                    logger.warning("Cannot stat %s: %s", child.path, e.strerror or e)
                    continue

                if is_dir:
                    subdirectories.append(child.path)
                elif self.includes(child.name):
                    return True

            # Depth-first, in listing order
            pending.extend(reversed(subdirectories))

        return False

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ExtensionFilter):
            return NotImplemented
        return self._extensions == other._extensions

    def __hash__(self) -> int:
        return hash(self._extensions)

    def __repr__(self) -> str:
        if self._extensions is None:
            return "ExtensionFilter()"
        return f"ExtensionFilter({sorted(self._extensions)!r})"
