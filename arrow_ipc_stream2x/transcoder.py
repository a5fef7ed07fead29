#!/usr/bin/env python3
"""
Stream record batches into a single worksheet.

The first batch contributes the header row (its field names), then every
batch is written row by row below it. Only one batch is held at a time; the
row cursor is the only state carried from one batch to the next.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Iterator, Optional

import pyarrow as pa

from .cells import UNREPRESENTABLE, column_cells
from .errors import ConversionError, SourceDecodeError
from .sheet import SheetWriter


def write_header(sheet: SheetWriter, schema: pa.Schema, row_offset: int) -> int:
	"""Write the field names of schema on row_offset and return the next row."""
	for col, field in enumerate(schema):
		sheet.write_string(row_offset, col, field.name)
	return row_offset + 1


def write_rows(sheet: SheetWriter, batch: pa.RecordBatch, row_offset: int) -> Iterator[int]:
	"""
	Write every row of batch starting at row_offset, yielding the next row
	after each one is complete.

	Null values and values the sheet cannot represent issue no write, leaving
	the cell blank.
	"""
	columns = [column_cells(column) for column in batch.columns]
	for row in range(batch.num_rows):
		for col, (kind, cells) in enumerate(columns):
			value = cells[row]
			if value is None or value is UNREPRESENTABLE:
				continue
			sheet.write_cell(row_offset, col, kind, value)
		row_offset += 1
		yield row_offset


def write_batch(sheet: SheetWriter, batch: pa.RecordBatch, row_offset: int) -> int:
	"""Write every row of batch starting at row_offset and return the row after the last one."""
	for row_offset in write_rows(sheet, batch, row_offset):
		pass
	return row_offset


class BatchTranscoder:
	"""Pull batches from a source and append them to one sheet."""

	def __init__(self, sheet: SheetWriter):
		self.sheet = sheet
		self.row_offset = 0
		self.schema: Optional[pa.Schema] = None

	def run(self, batches: Iterable[Any]) -> int:
		"""
		Consume batches in order until the source is exhausted.

		An element of batches may be an exception instance standing for a
		decode failure. Returns the row cursor after the last batch.
		"""
		iterator = iter(batches)
		while True:
			try:
				batch = next(iterator)
			except StopIteration:
				break
			except (pa.ArrowException, OSError) as e:
				raise SourceDecodeError(f"Could not read record batch: {e}") from e
			self.add_batch(batch)
		return self.row_offset

	def add_batch(self, batch: Any) -> None:
		if isinstance(batch, ConversionError):
			raise batch
		if isinstance(batch, BaseException):
			raise SourceDecodeError(f"Could not read record batch: {batch}") from batch
		if self.schema is None:
			self.schema = batch.schema
			self.row_offset = write_header(self.sheet, self.schema, self.row_offset)
		elif not batch.schema.equals(self.schema):
			raise SourceDecodeError(
				f"Record batch schema does not match the stream schema: {batch.schema} != {self.schema}"
			)
		for row_offset in write_rows(self.sheet, batch, self.row_offset):
			self.row_offset = row_offset


@dataclass
class TranscodeResult:
	"""Outcome of transcode(): rows occupied on the sheet and the fatal error, if any."""

	row_count: int
	error: Optional[ConversionError] = None

	@property
	def ok(self) -> bool:
		return self.error is None


def transcode(batches: Iterable[Any], sheet: SheetWriter) -> TranscodeResult:
	"""
	Write a whole batch source into sheet.

	Stops at the first SourceDecodeError or DestinationWriteError and returns
	it in the result. Rows written before the failure stay on the sheet.
	"""
	transcoder = BatchTranscoder(sheet)
	try:
		transcoder.run(batches)
	except ConversionError as e:
		return TranscodeResult(transcoder.row_offset, e)
	return TranscodeResult(transcoder.row_offset)
