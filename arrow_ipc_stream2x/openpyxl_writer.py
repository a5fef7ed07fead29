#!/usr/bin/env python3
"""
OpenPyXL-based sheet backend for cross-platform environments without local Excel.
Provides the same API as XlwingsWorkbook using openpyxl.
Notes:
- The workbook is built in memory and written to disk only by save()
- Text cells are always stored as strings, even when they look like formulas
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional, Union

from openpyxl import Workbook
from openpyxl.utils.exceptions import IllegalCharacterError
from openpyxl.worksheet.worksheet import Worksheet

from .errors import DestinationWriteError
from .sheet import CellKind, SheetWriter, check_sheet_name


class OpenpyxlSheetWriter(SheetWriter):
	"""Write cells into an openpyxl worksheet."""

	def __init__(self, worksheet: Worksheet):
		self.worksheet = worksheet

	def _put(self, row: int, col: int, kind: CellKind, value: Any) -> None:
		try:
			cell = self.worksheet.cell(row=row + 1, column=col + 1, value=value)
		except IllegalCharacterError as e:
			raise DestinationWriteError(f"Cannot write text at row {row}, column {col}: {e}") from e
		if kind is CellKind.TEXT:
			# openpyxl would otherwise store "=..." as a formula and "#N/A" as an error
			cell.data_type = "s"


class OpenpyxlWorkbook:
	"""A new single-sheet workbook held by openpyxl."""

	def __init__(self, sheet_name: str):
		self.sheet_name = check_sheet_name(sheet_name)
		self.workbook: Optional[Workbook] = None
		self.sheet: Optional[OpenpyxlSheetWriter] = None

	def __enter__(self):
		self.open_workbook()
		return self

	def __exit__(self, exc_type, exc_val, exc_tb):
		self.close_workbook()

	def open_workbook(self) -> None:
		self.workbook = Workbook()
		worksheet = self.workbook.active
		worksheet.title = self.sheet_name
		self.sheet = OpenpyxlSheetWriter(worksheet)

	def close_workbook(self) -> None:
		if self.workbook:
			self.workbook.close()

	def save(self, output_file: Union[str, Path]) -> None:
		try:
			self.workbook.save(str(output_file))
		except OSError as e:
			raise DestinationWriteError(f"Could not save workbook to {output_file}: {e}") from e
