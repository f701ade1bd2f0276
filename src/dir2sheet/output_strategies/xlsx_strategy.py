"""XLSX report strategy.

This module writes the report as an Excel workbook with a styled header row, bold
directory rows, a drop-down list on every status cell and an auto-filter covering
the header and all data rows.
"""

from typing import Iterable

from openpyxl import Workbook
from openpyxl.styles import Font, PatternFill
from openpyxl.utils import get_column_letter
from openpyxl.worksheet.datavalidation import DataValidation

from dir2sheet.file_system_tree.entry import Entry
from dir2sheet.types import PathType

from .base_strategy import COLUMNS, STATUS_VALUES, ReportStrategy

SHEET_TITLE = "Directory Tree"

HEADER_FILL = "FFE0E0E0"

ROW_FONT_SIZE = 11


class XLSXReportStrategy(ReportStrategy):
    """Report strategy that writes an Excel workbook using openpyxl.

    The workbook has a single sheet named "Directory Tree":

    - Row 1 holds the bold, grey-filled column headers.
    - Each following row describes one entry; directory rows are bold.
    - The Status column only accepts "pending", "processing" or "done".
    - An auto-filter spans the header row and every data row.

    Example:
        >>> strategy = XLSXReportStrategy()
        >>> strategy.get_file_extension()
        '.xlsx'
    """

    def write(self, entries: Iterable[Entry], destination: PathType) -> None:
        workbook = Workbook()
        worksheet = workbook.active
        worksheet.title = SHEET_TITLE

        worksheet.append(self.header())
        for index, (_, width) in enumerate(COLUMNS, start=1):
            worksheet.column_dimensions[get_column_letter(index)].width = width

        header_font = Font(bold=True)
        header_fill = PatternFill(fill_type="solid", fgColor=HEADER_FILL)
        for cell in worksheet[1]:
            cell.font = header_font
            cell.fill = header_fill

        directory_font = Font(size=ROW_FONT_SIZE, bold=True)
        file_font = Font(size=ROW_FONT_SIZE)

        last_row = 1
        for entry in entries:
            worksheet.append(self.format_row(entry))
            last_row += 1
            font = directory_font if entry.is_dir else file_font
            for cell in worksheet[last_row]:
                cell.font = font

        last_column = get_column_letter(len(COLUMNS))

        if last_row > 1:
            validation = DataValidation(
                type="list",
                formula1='"{}"'.format(",".join(STATUS_VALUES)),
                allow_blank=False,
            )
            validation.add(f"{last_column}2:{last_column}{last_row}")
            worksheet.add_data_validation(validation)

        worksheet.auto_filter.ref = f"A1:{last_column}{last_row}"

        workbook.save(destination)

    def get_file_extension(self) -> str:
        return ".xlsx"
