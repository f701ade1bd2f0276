"""Directory to spreadsheet conversion.

This module provides the Dir2Sheet class, which combines the exclusion-list file of a
root directory, optional extra exclusion rules and an extension filter, walks the
directory, and writes the resulting rows as a report.
"""

import logging
from pathlib import Path
from typing import Dict, FrozenSet, List, Optional, Type

from dir2sheet.exceptions import ConfigurationError, TraversalError
from dir2sheet.exclusion_rules.base_rules import BaseExclusionRules
from dir2sheet.exclusion_rules.composite_rules import CompositeExclusionRules
from dir2sheet.exclusion_rules.path_list_rules import PathListExclusionRules
from dir2sheet.extension_filter import ExtensionFilter
from dir2sheet.file_system_tree.entry import Entry
from dir2sheet.file_system_tree.file_system_tree import FileSystemTree
from dir2sheet.output_strategies.base_strategy import ReportStrategy
from dir2sheet.output_strategies.csv_strategy import CSVReportStrategy
from dir2sheet.output_strategies.xlsx_strategy import XLSXReportStrategy
from dir2sheet.types import PathType

logger = logging.getLogger(__name__)

DEFAULT_OUTPUT_STEM = "directory-tree"

OUTPUT_STRATEGIES: Dict[str, Type[ReportStrategy]] = {
    "xlsx": XLSXReportStrategy,
    "csv": CSVReportStrategy,
}


def get_strategy(output_format: str) -> ReportStrategy:
    """Create the report strategy for an output format name.

    Raises:
        ValueError: If the format is not supported.

    Example:
        >>> get_strategy("csv").get_file_extension()
        '.csv'
    """
    try:
        return OUTPUT_STRATEGIES[output_format.lower()]()
    except KeyError:
        raise ValueError(
            f"Unsupported output format: {output_format}. Must be one of: {', '.join(OUTPUT_STRATEGIES)}"
        ) from None


class Dir2Sheet:
    """Directory report generator.

    The directory is walked once, on first access to its entries, counts or errors.
    The walk runs entirely in memory; writing the report afterwards reads the
    finished entry list and can be repeated for several destinations or formats.

    The exclusion-list file at the root of the directory is always honored. Extra
    rules (e.g. .gitignore-style patterns) are combined with it: a path is excluded
    if either excludes it.

    Attributes:
        directory (Path): Directory being processed.
        extension_filter (ExtensionFilter): Which files are included.
        output_format (str): Default report format used by write().

    Example:
        >>> report = Dir2Sheet("my-project", extensions="js,jsx,ts,tsx")  # doctest: +SKIP
        >>> report.file_count  # doctest: +SKIP
        12
        >>> report.write()  # doctest: +SKIP
        PosixPath('/home/user/directory-tree.xlsx')

    Raises:
        ConfigurationError: If directory is missing or not a directory.
        ValueError: If output format is unsupported.
    """

    def __init__(
        self,
        directory: PathType,
        *,
        extensions: Optional[str] = None,
        exclusion_rules: Optional[BaseExclusionRules] = None,
        output_format: str = "xlsx",
        sort_children: bool = False,
    ):
        """Initialize the report generator.

        Args:
            directory: Root directory to process. Can be any path-like object.
            extensions: Comma-separated file extensions to include (e.g. "js,ts").
                None or an empty string includes all files.
            exclusion_rules: Rules applied in addition to the root's exclusion-list file.
            output_format: Report format, "xlsx" or "csv".
            sort_children: Sort siblings by name instead of keeping filesystem order.

        Raises:
            ConfigurationError: If directory is missing or not a directory.
            ValueError: If output format is unsupported.
        """
        self.directory = Path(directory)
        if not self.directory.exists():
            raise ConfigurationError(self.directory, "directory does not exist")
        if not self.directory.is_dir():
            raise ConfigurationError(self.directory, "not a directory")

        self._strategy = get_strategy(output_format)
        self.output_format = output_format.lower()

        self._path_rules = PathListExclusionRules.from_root(self.directory)
        rules: BaseExclusionRules = self._path_rules
        if exclusion_rules is not None:
            rules = CompositeExclusionRules([self._path_rules, exclusion_rules])

        self.extension_filter = ExtensionFilter.from_string(extensions)

        self._fs_tree = FileSystemTree(
            self.directory,
            rules,
            extension_filter=self.extension_filter,
            sort_children=sort_children,
        )

    @property
    def exclusions(self) -> FrozenSet[str]:
        """Entries loaded from the root's exclusion-list file, plus the file itself."""
        return self._path_rules.exclusions

    @property
    def entries(self) -> List[Entry]:
        """All report rows in emission order.

        Raises:
            ConfigurationError: If the directory cannot be listed.
        """
        return self._fs_tree.get_entries()

    @property
    def file_count(self) -> int:
        return self._fs_tree.get_file_count()

    @property
    def directory_count(self) -> int:
        return self._fs_tree.get_directory_count()

    @property
    def errors(self) -> List[TraversalError]:
        """Directories whose contents are missing from the report."""
        return self._fs_tree.errors

    @property
    def error_count(self) -> int:
        return self._fs_tree.get_error_count()

    def default_output_path(self, output_format: Optional[str] = None) -> Path:
        """The report path used when none is given: ./directory-tree.<ext> in the working directory."""
        strategy = get_strategy(output_format) if output_format else self._strategy
        return Path.cwd() / f"{DEFAULT_OUTPUT_STEM}{strategy.get_file_extension()}"

    def write(self, output_path: Optional[PathType] = None, output_format: Optional[str] = None) -> Path:
        """Write the report.

        Args:
            output_path: Destination file. Defaults to default_output_path().
            output_format: Overrides the format given at construction.

        Returns:
            The path of the written report.

        Raises:
            ConfigurationError: If the directory cannot be listed.
            ValueError: If output format is unsupported.
            OSError: If the report file cannot be written.
        """
        strategy = get_strategy(output_format) if output_format else self._strategy
        destination = Path(output_path) if output_path is not None else self.default_output_path(output_format)

        entries = self.entries
        strategy.write(entries, destination)
        logger.debug("Wrote %d row(s) to %s", len(entries), destination)
        return destination
