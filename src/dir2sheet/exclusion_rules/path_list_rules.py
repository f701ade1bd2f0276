"""Exclusion rules read from the plain exclusion-list file at the root of a walk.

The exclusion-list file holds one path per line, relative to the root. Blank lines
are ignored and lines are trimmed. A line ending in a path separator names a
directory and excludes it together with everything beneath it; any other line is
an exact-path exclusion. Either separator style is accepted on any platform.

The file always excludes itself.
"""

import logging
import re
from os import PathLike
from pathlib import Path
from typing import AbstractSet, FrozenSet, Iterable, Optional, Sequence, Set, Union

from dir2sheet.exceptions import ExclusionFileError
from dir2sheet.types import PathType

from .base_rules import BaseExclusionRules

logger = logging.getLogger(__name__)

EXCLUSION_FILE_NAME = "TO_EXCLUDE_TREE_TEMP.txt"

SEPARATOR = "/"

_SEPARATORS = re.compile(r"[/\\]")


def normalize_path(path: str) -> str:
    """Convert a path to its canonical form.

    Splits on both forward and backward slashes, drops empty segments and joins the
    rest with a forward slash. The result never starts or ends with a separator.

    Args:
        path: The path to normalize.

    Returns:
        The canonical form of the path.

    Example:
        >>> normalize_path("a\\\\b//c/")
        'a/b/c'
        >>> normalize_path("a/b\\\\c") == normalize_path("a\\\\b/c")
        True
    """
    return SEPARATOR.join(segment for segment in _SEPARATORS.split(path) if segment)


def parse_exclusion_line(line: str) -> Optional[str]:
    """Turn one line of an exclusion-list file into an exclusion entry.

    Directory entries keep a single trailing slash as their marker.

    Returns:
        The entry, or None for blank lines.

    Example:
        >>> parse_exclusion_line("  build\\\\ ")
        'build/'
        >>> parse_exclusion_line("docs/readme.md")
        'docs/readme.md'
        >>> parse_exclusion_line("   ") is None
        True
    """
    stripped = line.strip()
    if not stripped:
        return None

    normalized = normalize_path(stripped)
    if not normalized:
        # A line made only of separators names nothing
        return None

    if _SEPARATORS.match(stripped[-1]):
        return normalized + SEPARATOR
    return normalized


def read_exclusion_file(path: PathType) -> Set[str]:
    """Read every entry of an exclusion-list file.

    Args:
        path: The file to read.

    Returns:
        The parsed entries.

    Raises:
        ExclusionFileError: If the file cannot be read or is not valid UTF-8.
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            lines = f.read().splitlines()
    except UnicodeDecodeError as e:
        raise ExclusionFileError(path, f"not valid UTF-8 ({e.reason})") from e
    except OSError as e:
        raise ExclusionFileError(path, e.strerror or str(e)) from e

    entries = set()
    for line in lines:
        entry = parse_exclusion_line(line)
        if entry is not None:
            entries.add(entry)
    return entries


def load_exclusions(root_path: PathType) -> FrozenSet[str]:
    """Load the exclusion set for a walk rooted at root_path.

    Reads the exclusion-list file located directly under the root, if there is one.
    A file that exists but cannot be read is reported with a warning and the
    built-in default set is used instead; this never stops the run.

    Args:
        root_path: The root directory of the walk.

    Returns:
        The exclusion set. It always contains the exclusion-list file name.
    """
    defaults = frozenset([EXCLUSION_FILE_NAME])
    exclusion_file = Path(root_path) / EXCLUSION_FILE_NAME

    if not exclusion_file.exists():
        return defaults

    try:
        entries = read_exclusion_file(exclusion_file)
    except ExclusionFileError as e:
        logger.warning("%s; using default exclusions", e)
        return defaults

    logger.debug("Loaded %d exclusion(s) from %s", len(entries), exclusion_file)
    return defaults | entries


def is_excluded(relative_path: str, exclusions: AbstractSet[str]) -> bool:
    """Decide whether a path relative to the root is excluded.

    A path is excluded when its normalized form equals an entry, or when a directory
    entry (one with a trailing slash) is the path itself or one of its ancestors.
    Matching works on whole segments: "src/lib/" excludes "src/lib/a.py" but not
    "src/library".

    Args:
        relative_path: The path to check, with either separator style. A trailing
            separator is ignored.
        exclusions: The exclusion set, as returned by load_exclusions().

    Returns:
        True if the path is excluded.

    Example:
        >>> exclusions = {"build/", "notes.txt"}
        >>> is_excluded("build/output.txt", exclusions)
        True
        >>> is_excluded("builder/output.txt", exclusions)
        False
        >>> is_excluded("notes.txt", exclusions)
        True
    """
    normalized = normalize_path(relative_path)
    if not normalized:
        return False

    if normalized in exclusions:
        return True

    for entry in exclusions:
        if not entry.endswith(SEPARATOR):
            continue
        excluded_dir = entry[:-1]
        if normalized == excluded_dir or normalized.startswith(entry):
            return True

    return False


class PathListExclusionRules(BaseExclusionRules):
    """Exclusion rules backed by a set of literal paths.

    This is the rule type used for the exclusion-list file found at the root of
    every walk. Each rule is a path relative to the root; rules ending in a separator
    exclude a whole directory subtree, all others exclude one exact path. Unlike
    GitIgnoreExclusionRules there are no wildcards or negations.

    Attributes:
        exclusions (FrozenSet[str]): The current exclusion set.

    Example:
        >>> rules = PathListExclusionRules()
        >>> rules.exclude("TO_EXCLUDE_TREE_TEMP.txt")
        True
        >>> rules.add_rule("node_modules/")
        >>> rules.exclude("node_modules/react/index.js")
        True
        >>> rules.exclude("src/node_modules.txt")
        False
    """

    def __init__(
        self,
        rules_files: Optional[Union[PathType, Sequence[PathType]]] = None,
        rules: Iterable[str] = (),
    ) -> None:
        """Initialize the rules with the built-in default entry.

        Args:
            rules_files: Exclusion-list file(s) to load. Unlike load_exclusions(),
                read errors are raised.
            rules: Additional entries to add, in exclusion-list line syntax.

        Raises:
            FileNotFoundError: If any rules file does not exist.
            ExclusionFileError: If any rules file cannot be read.
        """
        self._exclusions: Set[str] = {EXCLUSION_FILE_NAME}

        if rules_files is not None:
            self.load_rules(rules_files)
        for rule in rules:
            self.add_rule(rule)

    @classmethod
    def from_root(cls, root_path: PathType) -> "PathListExclusionRules":
        """Create the rules for a walk rooted at root_path.

        Never fails because of the exclusion-list file; see load_exclusions().
        """
        instance = cls()
        instance._exclusions = set(load_exclusions(root_path))
        return instance

    @property
    def exclusions(self) -> FrozenSet[str]:
        return frozenset(self._exclusions)

    def exclude(self, path: str) -> bool:
        return is_excluded(path, self._exclusions)

    def load_rules(self, rules_files: Union[PathType, Sequence[PathType]]) -> None:
        """Add the entries of one or more exclusion-list files.

        Args:
            rules_files: Path(s) to exclusion-list file(s).

        Raises:
            FileNotFoundError: If any rules file does not exist.
            ExclusionFileError: If any rules file cannot be read.
        """
        if isinstance(rules_files, (str, PathLike)):
            rules_files = [rules_files]

        for rules_file in rules_files:
            path = Path(rules_file)
            if not path.exists():
                raise FileNotFoundError(f"Rules file not found: {path}")
            self._exclusions.update(read_exclusion_file(path))

    def add_rule(self, rule: str) -> None:
        entry = parse_exclusion_line(rule)
        if entry is not None:
            self._exclusions.add(entry)

    def has_rules(self) -> bool:
        return bool(self._exclusions)
