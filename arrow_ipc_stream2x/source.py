#!/usr/bin/env python3
"""
Arrow IPC stream input: a file or standard input, decoded batch by batch.
"""

from __future__ import annotations

import sys
from contextlib import contextmanager
from typing import BinaryIO, Iterator, Optional

import pyarrow as pa
from pyarrow import ipc

from .errors import SourceDecodeError


@contextmanager
def open_input(input_path: Optional[str] = None) -> Iterator[BinaryIO]:
	"""Open input_path for binary reading, or standard input when it is None or '-'."""
	if input_path is None or input_path == "-":
		# stdin belongs to the process, leave it open
		yield sys.stdin.buffer
		return
	try:
		stream = open(input_path, "rb")
	except OSError as e:
		raise SourceDecodeError(f"Could not open input {input_path}: {e}") from e
	with stream:
		yield stream


def read_batches(stream: BinaryIO) -> Iterator[pa.RecordBatch]:
	"""Yield the record batches of an Arrow IPC stream in order."""
	try:
		reader = ipc.open_stream(stream)
	except (pa.ArrowException, OSError) as e:
		raise SourceDecodeError(f"Could not read Arrow IPC stream header: {e}") from e
	while True:
		try:
			batch = reader.read_next_batch()
		except StopIteration:
			return
		except (pa.ArrowException, OSError) as e:
			raise SourceDecodeError(f"Could not read record batch: {e}") from e
		yield batch
