#!/usr/bin/env python3
"""
Backend-neutral destination sheet.

Rows and columns are 0-based here; backends translate to whatever their
library expects. Every write is checked against the limits of the .xlsx
format before it reaches the backend.
"""

from __future__ import annotations

from datetime import date, datetime
from enum import Enum
from typing import Any, Union

from .errors import DestinationWriteError

EXCEL_MAX_ROWS = 1_048_576
EXCEL_MAX_COLUMNS = 16_384
EXCEL_MAX_STRING_LENGTH = 32_767
SHEET_NAME_MAX_LENGTH = 31
INVALID_SHEET_NAME_CHARS = frozenset('[]:*?/\\')


class CellKind(Enum):
	TEXT = "text"
	NUMBER = "number"
	BOOLEAN = "boolean"
	DATETIME = "datetime"


def check_sheet_name(name: str) -> str:
	"""Validate a worksheet name against Excel's naming rules."""
	if not name or not name.strip():
		raise DestinationWriteError("Sheet name must not be blank")
	if len(name) > SHEET_NAME_MAX_LENGTH:
		raise DestinationWriteError(
			f"Sheet name {name!r} is longer than {SHEET_NAME_MAX_LENGTH} characters"
		)
	bad = sorted(set(name) & INVALID_SHEET_NAME_CHARS)
	if bad:
		raise DestinationWriteError(f"Sheet name {name!r} contains invalid characters: {''.join(bad)}")
	if name.startswith("'") or name.endswith("'"):
		raise DestinationWriteError(f"Sheet name {name!r} must not start or end with an apostrophe")
	if name.lower() == "history":
		raise DestinationWriteError("'History' is a reserved sheet name")
	return name


class SheetWriter:
	"""Write-only view of a single worksheet."""

	def write_string(self, row: int, col: int, value: str) -> None:
		if len(value) > EXCEL_MAX_STRING_LENGTH:
			raise DestinationWriteError(
				f"String of {len(value)} characters at row {row}, column {col} "
				f"exceeds the limit of {EXCEL_MAX_STRING_LENGTH}"
			)
		self._write(row, col, CellKind.TEXT, value)

	def write_number(self, row: int, col: int, value: float) -> None:
		self._write(row, col, CellKind.NUMBER, value)

	def write_boolean(self, row: int, col: int, value: bool) -> None:
		self._write(row, col, CellKind.BOOLEAN, value)

	def write_datetime(self, row: int, col: int, value: Union[date, datetime]) -> None:
		self._write(row, col, CellKind.DATETIME, value)

	def write_cell(self, row: int, col: int, kind: CellKind, value: Any) -> None:
		if kind is CellKind.TEXT:
			self.write_string(row, col, value)
		elif kind is CellKind.NUMBER:
			self.write_number(row, col, value)
		elif kind is CellKind.BOOLEAN:
			self.write_boolean(row, col, value)
		else:
			self.write_datetime(row, col, value)

	def _write(self, row: int, col: int, kind: CellKind, value: Any) -> None:
		if not 0 <= row < EXCEL_MAX_ROWS:
			raise DestinationWriteError(f"Row {row} is outside the sheet (max {EXCEL_MAX_ROWS} rows)")
		if not 0 <= col < EXCEL_MAX_COLUMNS:
			raise DestinationWriteError(f"Column {col} is outside the sheet (max {EXCEL_MAX_COLUMNS} columns)")
		self._put(row, col, kind, value)

	def _put(self, row: int, col: int, kind: CellKind, value: Any) -> None:
		raise NotImplementedError
