#!/usr/bin/env python3
"""
Fatal errors raised while converting an Arrow IPC stream into a worksheet.
Value-level problems (dates outside the Excel calendar, unsupported types)
are not errors; they degrade to blank or placeholder cells instead.
"""


class ConversionError(Exception):
	"""Base class for errors that abort a conversion."""

	label = "Conversion error"


class SourceDecodeError(ConversionError):
	"""The batch source could not produce the next record batch."""

	label = "Source decode error"


class DestinationWriteError(ConversionError):
	"""The destination sheet or workbook rejected a write."""

	label = "Destination write error"
