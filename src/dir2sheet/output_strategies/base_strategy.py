"""Report strategy base class defining the interface for writing report rows.

This module provides the abstract base class that defines how the rows produced by
the tree walker are written to a tabular document. Every strategy writes the same
header row followed by one data row per entry, in emission order.
"""

from abc import ABC, abstractmethod
from typing import Iterable, List, Sequence, Tuple, Union

from dir2sheet.file_system_tree.entry import Entry
from dir2sheet.types import PathType, Status

# Header text and column width (in characters) of every report column
COLUMNS: Sequence[Tuple[str, int]] = (
    ("Level", 10),
    ("Type", 10),
    ("Name", 50),
    ("Path", 100),
    ("Status", 15),
)

STATUS_VALUES: Sequence[str] = tuple(status.value for status in Status)


class ReportStrategy(ABC):
    """Abstract base class defining the interface for report output formats.

    This class implements the Strategy pattern for writing the report in different
    formats (e.g., XLSX, CSV). Strategies are stateless: write() may be called any
    number of times, with any entries and destinations.

    Example:
        >>> class TabSeparatedStrategy(ReportStrategy):
        ...     def write(self, entries, destination):
        ...         with open(destination, "w") as f:
        ...             for row in self.iter_rows(entries):
        ...                 f.write("\\t".join(str(value) for value in row) + "\\n")
        ...
        ...     def get_file_extension(self) -> str:
        ...         return ".tsv"
    """

    @abstractmethod
    def write(self, entries: Iterable[Entry], destination: PathType) -> None:
        """Write a complete report.

        Args:
            entries: The rows to write, in the order they must appear.
            destination: Path of the file to create or overwrite.
        """
        pass

    @abstractmethod
    def get_file_extension(self) -> str:
        """Get the appropriate file extension for this output format.

        Returns:
            The file extension including the leading dot (e.g., ".xlsx", ".csv").
        """
        pass

    def header(self) -> List[str]:
        return [title for title, _ in COLUMNS]

    def format_row(self, entry: Entry) -> List[Union[int, str]]:
        """Turn an entry into the values of one data row.

        Example:
            >>> from dir2sheet.types import EntryKind
            >>> from dir2sheet.output_strategies.csv_strategy import CSVReportStrategy
            >>> CSVReportStrategy().format_row(Entry(1, EntryKind.DIRECTORY, "lib", "src/lib/"))
            [1, 'Directory', '  lib', 'src/lib/', 'pending']
        """
        return [
            entry.level,
            entry.kind.value,
            entry.display_name,
            entry.relative_path,
            entry.status.value,
        ]

    def iter_rows(self, entries: Iterable[Entry]) -> Iterable[List[Union[int, str]]]:
        """Yield the header row followed by one row per entry."""
        yield self.header()
        for entry in entries:
            yield self.format_row(entry)
