"""Tests for the Excel export of decoded statements."""

from decimal import Decimal
from unittest.mock import patch

import pytest
from openpyxl import load_workbook

from mt942 import parse
from mt942.excel_generator.converter import LINE_COLUMNS, StatementConverter
from mt942.parser.models import Statement
from mt942.utils.exceptions import ExcelConversionError, ValidationError


@pytest.fixture
def converter():
    return StatementConverter()


@pytest.fixture
def full_statement(full_document):
    return parse(full_document)


class TestStatementConverter:
    """Test cases for StatementConverter class."""

    def test_generate_filename(self, converter):
        assert converter.generate_filename("mt942", suffix="REF", timestamp=False) == "mt942_REF.xlsx"

    def test_generate_filename_with_timestamp(self, converter):
        filename = converter.generate_filename("mt942")
        assert filename.startswith("mt942_")
        assert filename.endswith(".xlsx")

    def test_lines_to_dataframe(self, converter, full_statement):
        df = converter.lines_to_dataframe(full_statement)

        assert list(df.columns) == LINE_COLUMNS
        assert len(df) == 3
        assert df.iloc[0]["Amount"] == Decimal("25.50")
        assert df.iloc[0]["Information"] == "ELECTRICITY BILL\nJANUARY 2021\nSecond info line"
        assert df.iloc[2]["Indicator"] == "RC"

    def test_lines_to_dataframe_empty(self, converter):
        df = converter.lines_to_dataframe(Statement())
        assert df.empty
        assert list(df.columns) == LINE_COLUMNS

    def test_fields_to_rows(self, converter, full_statement):
        rows = dict(converter.fields_to_rows(full_statement))

        assert rows["Reference"] == "STMT20210101"
        assert rows["Account Number"] == "DE89370400440532013000"
        assert rows["Statement Number"] == "00001"
        assert rows["Credit Floor Limit"] == "EUR 100.00"
        assert rows["Debit Entries Sum"] == "EUR 25.50"
        assert rows["UTC Offset"] == "+0100"

    def test_convert_to_excel(self, converter, full_statement, temp_dir):
        path = converter.convert_to_excel(full_statement, output_path=str(temp_dir), filename="report")

        assert path.endswith("report.xlsx")
        workbook = load_workbook(path)
        assert workbook.sheetnames == ["Statement", "Lines"]

        lines = workbook["Lines"]
        assert [cell.value for cell in lines[1]] == LINE_COLUMNS
        assert lines.cell(row=2, column=1).value == 1
        assert lines.cell(row=2, column=6).value == pytest.approx(25.5)
        assert lines.cell(row=2, column=8).value == "REF001"
        assert lines.cell(row=4, column=4).value == "RC"

        header = workbook["Statement"]
        assert header.cell(row=1, column=1).value == "Field"
        assert header.cell(row=2, column=2).value == full_statement.block1

    def test_convert_empty_statement(self, converter, temp_dir):
        path = converter.convert_to_excel(Statement(), output_path=str(temp_dir), filename="empty.xlsx")

        workbook = load_workbook(path)
        assert workbook["Lines"].max_row == 1

    def test_default_filename_uses_reference(self, converter, full_statement, temp_dir):
        path = converter.convert_to_excel(full_statement, output_path=str(temp_dir))
        assert "mt942_STMT20210101_" in path

    def test_invalid_output_directory(self, converter, full_statement):
        with patch(
            "mt942.excel_generator.converter.validate_directory_path",
            side_effect=ValidationError("not writable")
        ):
            with pytest.raises(ExcelConversionError):
                converter.convert_to_excel(full_statement, output_path="/nowhere")
