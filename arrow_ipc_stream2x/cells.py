#!/usr/bin/env python3
"""
Typed cell conversion.

Every Arrow column is classified into one of a fixed set of logical types,
and each logical type has one rule turning a non-null value into a sheet
cell. Conversions never raise: a value the sheet cannot hold comes back as
UNREPRESENTABLE and is left blank by the caller.
"""

from __future__ import annotations

import math
from datetime import date, datetime, timedelta
from enum import Enum
from typing import Any, Callable, List, NamedTuple, Optional, Tuple

import pyarrow as pa

from .sheet import CellKind


class LogicalType(Enum):
	TEXT = "text"
	INTEGER = "integer"
	FLOAT = "float"
	BOOLEAN = "boolean"
	DATE = "date"
	TIME = "time"
	TIMESTAMP = "timestamp"
	OTHER = "other"


class _Unrepresentable:
	def __repr__(self) -> str:
		return "UNREPRESENTABLE"


UNREPRESENTABLE = _Unrepresentable()

EPOCH = datetime(1970, 1, 1)
MILLIS_PER_DAY = 86_400_000

# Calendar range of an Excel workbook using the 1900 date system
EXCEL_MIN_DATE = date(1900, 1, 1)
EXCEL_MAX_DATE = date(9999, 12, 31)

_EPOCH_ORDINAL = EPOCH.toordinal()
_MIN_ORDINAL = EXCEL_MIN_DATE.toordinal()
_MAX_ORDINAL = EXCEL_MAX_DATE.toordinal()

UNITS_PER_DAY = {
	"s": 86_400,
	"ms": 86_400_000,
	"us": 86_400_000_000,
	"ns": 86_400_000_000_000,
}


def logical_type(data_type: pa.DataType) -> LogicalType:
	"""Classify an Arrow data type."""
	if pa.types.is_string(data_type) or pa.types.is_large_string(data_type):
		return LogicalType.TEXT
	if pa.types.is_integer(data_type):
		return LogicalType.INTEGER
	if pa.types.is_floating(data_type):
		return LogicalType.FLOAT
	if pa.types.is_boolean(data_type):
		return LogicalType.BOOLEAN
	if pa.types.is_date(data_type):
		return LogicalType.DATE
	if pa.types.is_time(data_type):
		return LogicalType.TIME
	if pa.types.is_timestamp(data_type):
		return LogicalType.TIMESTAMP
	return LogicalType.OTHER


def text_value(value: str) -> str:
	return value


def number_value(value: Any) -> Any:
	"""Widen an integer or float to a double; NaN and infinities have no cell value."""
	number = float(value)
	if not math.isfinite(number):
		return UNREPRESENTABLE
	return number


def boolean_value(value: bool) -> bool:
	return bool(value)


def date_from_days(days: int) -> Any:
	"""Days since 1970-01-01 to a calendar date."""
	ordinal = _EPOCH_ORDINAL + days
	if not _MIN_ORDINAL <= ordinal <= _MAX_ORDINAL:
		return UNREPRESENTABLE
	return date.fromordinal(ordinal)


def datetime_from_millis(millis: int) -> Any:
	"""Milliseconds since 1970-01-01T00:00Z to a naive UTC datetime."""
	days = millis // MILLIS_PER_DAY
	if not _MIN_ORDINAL <= _EPOCH_ORDINAL + days <= _MAX_ORDINAL:
		return UNREPRESENTABLE
	return EPOCH + timedelta(milliseconds=millis)


def day_fraction(value: int, unit: str) -> float:
	"""Time of day as the fraction of a day Excel stores in time cells."""
	return value / UNITS_PER_DAY[unit]


def timestamp_text(value: int) -> str:
	return str(value)


def unsupported_text(data_type: pa.DataType) -> str:
	return f"unsupported data type: {data_type}"


class CellRule(NamedTuple):
	"""How one column's values become cells."""

	logical: LogicalType
	kind: CellKind
	convert: Callable[[Any], Any]
	# integer type the column is viewed as before conversion, for temporal columns
	storage: Optional[pa.DataType] = None


def _storage_type(data_type: pa.DataType) -> pa.DataType:
	return pa.int32() if data_type.bit_width == 32 else pa.int64()


def cell_rule(data_type: pa.DataType) -> CellRule:
	"""Pick the conversion rule for a column of the given Arrow type."""
	logical = logical_type(data_type)
	if logical is LogicalType.TEXT:
		return CellRule(logical, CellKind.TEXT, text_value)
	if logical in (LogicalType.INTEGER, LogicalType.FLOAT):
		return CellRule(logical, CellKind.NUMBER, number_value)
	if logical is LogicalType.BOOLEAN:
		return CellRule(logical, CellKind.BOOLEAN, boolean_value)
	if logical is LogicalType.DATE:
		if pa.types.is_date32(data_type):
			return CellRule(logical, CellKind.DATETIME, date_from_days, pa.int32())
		return CellRule(logical, CellKind.DATETIME, datetime_from_millis, pa.int64())
	if logical is LogicalType.TIME:
		unit = data_type.unit
		return CellRule(
			logical, CellKind.NUMBER, lambda value: day_fraction(value, unit), _storage_type(data_type)
		)
	if logical is LogicalType.TIMESTAMP:
		# timezone is ignored: the raw offset is already UTC
		return CellRule(logical, CellKind.TEXT, timestamp_text, pa.int64())
	placeholder = unsupported_text(data_type)
	return CellRule(logical, CellKind.TEXT, lambda value: placeholder)


def column_cells(column: pa.Array) -> Tuple[CellKind, List[Any]]:
	"""
	Convert one Arrow array into cell values.

	Returns the cell kind for the column and one entry per row: None for a
	null slot, UNREPRESENTABLE for a value the sheet cannot hold, otherwise
	the value to write.
	"""
	rule = cell_rule(column.type)
	if rule.storage is not None:
		values = column.view(rule.storage).to_pylist()
	elif rule.logical is LogicalType.OTHER:
		values = [True if valid else None for valid in column.is_valid().to_pylist()]
	else:
		values = column.to_pylist()
	return rule.kind, [None if value is None else rule.convert(value) for value in values]
