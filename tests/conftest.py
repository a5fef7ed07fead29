from __future__ import annotations

import io
from typing import Any, Dict, List, Tuple

import pyarrow as pa
import pytest
from openpyxl import Workbook

from arrow_ipc_stream2x.openpyxl_writer import OpenpyxlSheetWriter
from arrow_ipc_stream2x.sheet import CellKind, SheetWriter


class RecordingSheet(SheetWriter):
	"""Keeps every write, in order, instead of touching a workbook."""

	def __init__(self):
		self.writes: List[Tuple[int, int, CellKind, Any]] = []

	def _put(self, row, col, kind, value):
		self.writes.append((row, col, kind, value))

	@property
	def cells(self) -> Dict[Tuple[int, int], Any]:
		return {(row, col): value for row, col, _, value in self.writes}


def stream_bytes(schema: pa.Schema, batches: List[pa.RecordBatch]) -> bytes:
	sink = io.BytesIO()
	with pa.ipc.new_stream(sink, schema) as writer:
		for batch in batches:
			writer.write_batch(batch)
	return sink.getvalue()


@pytest.fixture
def recording_sheet():
	return RecordingSheet()


@pytest.fixture
def worksheet():
	wb = Workbook()
	ws = wb.active
	ws.title = "Sheet1"
	return ws


@pytest.fixture
def openpyxl_sheet(worksheet):
	return OpenpyxlSheetWriter(worksheet)
