"""Codecs between spreadsheet files and the generic document model."""

from .csv_io import read_csv_sheet, write_csv_sheet
from .excel_io import read_workbook, write_workbook

__all__ = ["read_workbook", "write_workbook", "read_csv_sheet", "write_csv_sheet"]
