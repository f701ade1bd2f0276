"""CSV report strategy.

CSV carries the same rows as the XLSX report but none of its styling, validation or
filtering.
"""

import csv
from typing import Iterable

from dir2sheet.file_system_tree.entry import Entry
from dir2sheet.types import PathType

from .base_strategy import ReportStrategy


class CSVReportStrategy(ReportStrategy):
    """Report strategy that writes comma-separated values.

    The file is UTF-8 encoded and starts with the header row.

    Example:
        >>> CSVReportStrategy().get_file_extension()
        '.csv'
    """

    def write(self, entries: Iterable[Entry], destination: PathType) -> None:
        with open(destination, "w", newline="", encoding="utf-8") as f:
            writer = csv.writer(f)
            writer.writerows(self.iter_rows(entries))

    def get_file_extension(self) -> str:
        return ".csv"
