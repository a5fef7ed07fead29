#!/usr/bin/env python3
"""
Command-line interface for the arrow_ipc_stream2x package.
Usage:
  producer | python -m arrow_ipc_stream2x --sheet Sheet1 --output out.xlsx
  python -m arrow_ipc_stream2x --input data.arrows --sheet Sheet1 --output out.xlsx
"""

import argparse
import platform
import sys
from typing import List, Optional

from . import __version__
from .errors import ConversionError
from .openpyxl_writer import OpenpyxlWorkbook
from .source import open_input, read_batches
from .transcoder import transcode


def build_parser() -> argparse.ArgumentParser:
	parser = argparse.ArgumentParser(description='Convert an Arrow IPC stream into an Excel worksheet')
	parser.add_argument('--input', '-i', help='Input Arrow IPC stream file (default: read from stdin)')
	parser.add_argument('--output', '-o', required=True, help='Output Excel file')
	parser.add_argument('--sheet', '-s', required=True, help='Sheet name')
	parser.add_argument('--engine', choices=['xlwings', 'openpyxl'], help='Backend engine to use')
	parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')
	return parser


def main(argv: Optional[List[str]] = None) -> int:
	args = build_parser().parse_args(argv)

	# Choose engine: default xlwings on Windows, openpyxl elsewhere
	default_engine = 'xlwings' if platform.system().lower().startswith('win') else 'openpyxl'
	engine = args.engine or default_engine

	try:
		if engine == 'xlwings':
			from .xlwings_writer import XlwingsWorkbook as WorkbookCls
		else:
			WorkbookCls = OpenpyxlWorkbook

		with WorkbookCls(args.sheet) as book, open_input(args.input) as stream:
			result = transcode(read_batches(stream), book.sheet)
			if not result.ok:
				raise result.error
			book.save(args.output)
	except ConversionError as e:
		print(f"{e.label}: {e}", file=sys.stderr)
		return 1

	print("\nConversion completed successfully!")
	print(f"Output file: {args.output}")
	print(f"Rows written: {result.row_count}")
	return 0


if __name__ == "__main__":
	sys.exit(main())
