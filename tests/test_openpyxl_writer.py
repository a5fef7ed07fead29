from datetime import date, datetime

import pyarrow as pa
import pytest
from openpyxl import load_workbook

from arrow_ipc_stream2x.errors import DestinationWriteError
from arrow_ipc_stream2x.openpyxl_writer import OpenpyxlWorkbook
from arrow_ipc_stream2x.sheet import EXCEL_MAX_COLUMNS, EXCEL_MAX_ROWS, check_sheet_name
from arrow_ipc_stream2x.transcoder import transcode


def test_zero_based_coordinates(openpyxl_sheet, worksheet):
	openpyxl_sheet.write_string(0, 0, "id")
	openpyxl_sheet.write_number(2, 3, 4.5)
	assert worksheet["A1"].value == "id"
	assert worksheet["D3"].value == 4.5


def test_cell_types(openpyxl_sheet, worksheet):
	openpyxl_sheet.write_boolean(0, 0, False)
	openpyxl_sheet.write_datetime(0, 1, date(1970, 1, 1))
	openpyxl_sheet.write_datetime(0, 2, datetime(2001, 2, 3, 4, 5, 6))
	assert worksheet["A1"].data_type == "b"
	assert worksheet["B1"].is_date
	assert worksheet["C1"].value == datetime(2001, 2, 3, 4, 5, 6)


@pytest.mark.parametrize("text", ["=SUM(A1:A2)", "#N/A", "007"])
def test_text_stays_text(openpyxl_sheet, worksheet, text):
	openpyxl_sheet.write_string(0, 0, text)
	assert worksheet["A1"].value == text
	assert worksheet["A1"].data_type == "s"


def test_illegal_character(openpyxl_sheet):
	with pytest.raises(DestinationWriteError):
		openpyxl_sheet.write_string(0, 0, "bell\x07")


def test_sheet_limits(openpyxl_sheet):
	with pytest.raises(DestinationWriteError):
		openpyxl_sheet.write_number(EXCEL_MAX_ROWS, 0, 1.0)
	with pytest.raises(DestinationWriteError):
		openpyxl_sheet.write_number(0, EXCEL_MAX_COLUMNS, 1.0)
	openpyxl_sheet.write_number(EXCEL_MAX_ROWS - 1, EXCEL_MAX_COLUMNS - 1, 1.0)


@pytest.mark.parametrize("name", ["", "   ", "x" * 32, "a/b", "[data]", "'quoted'", "History"])
def test_invalid_sheet_names(name):
	with pytest.raises(DestinationWriteError):
		check_sheet_name(name)


def test_valid_sheet_name():
	assert check_sheet_name("Sheet 1 (copy)") == "Sheet 1 (copy)"
	assert check_sheet_name("x" * 31) == "x" * 31


def test_workbook_round_trip(tmp_path):
	output = tmp_path / "out.xlsx"
	batch = pa.record_batch(
		[
			pa.array([1, 2], type=pa.int64()),
			pa.array(["Alice", None]),
			pa.array([0, 19_000], type=pa.date32()),
			pa.array([43_200, None], type=pa.time32("s")),
		],
		names=["id", "name", "joined", "lunch"],
	)

	with OpenpyxlWorkbook("People") as book:
		result = transcode([batch], book.sheet)
		book.save(output)

	assert result.ok
	wb = load_workbook(output)
	assert wb.sheetnames == ["People"]
	rows = list(wb["People"].iter_rows(values_only=True))
	assert rows[0] == ("id", "name", "joined", "lunch")
	assert rows[1] == (1, "Alice", datetime(1970, 1, 1), 0.5)
	assert rows[2] == (2, None, datetime(2022, 1, 8), None)


def test_save_failure(tmp_path):
	with OpenpyxlWorkbook("Sheet1") as book:
		with pytest.raises(DestinationWriteError):
			book.save(tmp_path / "missing" / "out.xlsx")
