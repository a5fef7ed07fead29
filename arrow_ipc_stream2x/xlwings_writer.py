#!/usr/bin/env python3
"""
Sheet backend that drives a local Excel installation through xlwings.
Writes go cell by cell into a hidden Excel instance; the workbook is
saved with Excel itself.
"""

from pathlib import Path
from typing import Any, Union

import xlwings as xw

from .errors import DestinationWriteError
from .sheet import CellKind, SheetWriter, check_sheet_name


class XlwingsSheetWriter(SheetWriter):
	"""Write cells into an xlwings sheet"""

	def __init__(self, worksheet):
		"""
		Args:
			worksheet: xlwings Sheet object
		"""
		self.worksheet = worksheet

	def _put(self, row: int, col: int, kind: CellKind, value: Any) -> None:
		try:
			cell = self.worksheet.range((row + 1, col + 1))
			if kind is CellKind.TEXT:
				# Text format keeps Excel from parsing numbers, dates and formulas
				cell.number_format = "@"
			cell.value = value
		except Exception as e:
			raise DestinationWriteError(f"Excel rejected the write at row {row}, column {col}: {e}") from e


class XlwingsWorkbook:
	"""A new single-sheet workbook held by a hidden Excel instance"""

	def __init__(self, sheet_name: str):
		"""
		Initialize with the name the only worksheet will carry

		Args:
			sheet_name (str): Worksheet name
		"""
		self.sheet_name = check_sheet_name(sheet_name)
		self.app = None
		self.workbook = None
		self.sheet = None

	def __enter__(self):
		"""Context manager entry"""
		self.open_workbook()
		return self

	def __exit__(self, exc_type, exc_val, exc_tb):
		"""Context manager exit"""
		self.close_workbook()

	def open_workbook(self):
		"""Start Excel and add an empty workbook"""
		try:
			self.app = xw.App(visible=False, add_book=False)
			self.workbook = self.app.books.add()
			worksheet = self.workbook.sheets[0]
			worksheet.name = self.sheet_name
		except Exception as e:
			self.close_workbook()
			raise DestinationWriteError(f"Could not create Excel workbook: {e}") from e
		self.sheet = XlwingsSheetWriter(worksheet)

	def close_workbook(self):
		"""Close the workbook and Excel application"""
		if self.workbook:
			self.workbook.close()
			self.workbook = None
		if self.app:
			self.app.quit()
			self.app = None

	def save(self, output_file: Union[str, Path]) -> None:
		"""
		Save the workbook through Excel

		Args:
			output_file: Destination path, relative to the current directory
		"""
		try:
			self.workbook.save(str(Path(output_file).resolve()))
		except Exception as e:
			raise DestinationWriteError(f"Could not save workbook to {output_file}: {e}") from e
