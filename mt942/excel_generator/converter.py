"""Excel conversion utilities for decoded MT942 statements."""

import os
from datetime import datetime, date
from decimal import Decimal
from typing import Any, List, Optional, Tuple

import pandas as pd
from openpyxl import Workbook
from openpyxl.styles import Font, PatternFill, Alignment
from openpyxl.utils import get_column_letter
from openpyxl.utils.dataframe import dataframe_to_rows

from mt942.config.settings import REPORTS_DIR, EXCEL_OUTPUT_FORMAT
from mt942.parser.models import Statement
from mt942.utils.exceptions import ExcelConversionError, ValidationError
from mt942.utils.logger import get_logger
from mt942.utils.validators import validate_directory_path

LINE_COLUMNS = [
    "Sequence",
    "Value Date",
    "Entry Date",
    "Indicator",
    "Funds Code",
    "Amount",
    "Transaction Code",
    "Customer Ref",
    "Institution Ref",
    "Details",
    "Information",
]

AMOUNT_COLUMN = LINE_COLUMNS.index("Amount") + 1
DATE_COLUMNS = (LINE_COLUMNS.index("Value Date") + 1, LINE_COLUMNS.index("Entry Date") + 1)


class StatementConverter:
    """Handles conversion of decoded statements to Excel format."""

    def __init__(self, output_format: str = EXCEL_OUTPUT_FORMAT) -> None:
        """Initialize statement converter."""
        self.logger = get_logger(__name__)
        self.output_format = output_format

        # Define Excel styles
        self.header_font = Font(bold=True, color="FFFFFF")
        self.header_fill = PatternFill(start_color="366092", end_color="366092", fill_type="solid")
        self.header_alignment = Alignment(horizontal="center", vertical="center")

        self.amount_format = '#,##0.00'
        self.date_format = 'YYYY-MM-DD'

    def generate_filename(
        self,
        base_name: str,
        suffix: Optional[str] = None,
        timestamp: bool = True
    ) -> str:
        """Generate Excel filename with timestamp.

        Args:
            base_name: Base filename.
            suffix: Optional suffix to add.
            timestamp: Whether to include timestamp.

        Returns:
            Generated filename.
        """
        parts = [base_name]
        if suffix:
            parts.append(suffix)
        if timestamp:
            parts.append(datetime.now().strftime("%Y%m%d_%H%M%S"))

        return f"{'_'.join(parts)}.{self.output_format}"

    def lines_to_dataframe(self, statement: Statement) -> pd.DataFrame:
        """Convert statement lines to a pandas DataFrame, one row per line.

        Amounts stay Decimal so the sheet shows the exact message value.
        """
        data = []
        for line in statement.lines:
            data.append({
                "Sequence": line.sequence,
                "Value Date": line.value_date,
                "Entry Date": line.entry_date,
                "Indicator": line.indicator,
                "Funds Code": line.funds_code,
                "Amount": line.amount_decimal,
                "Transaction Code": line.transaction_code,
                "Customer Ref": line.customer_ref,
                "Institution Ref": line.institution_ref,
                "Details": line.details,
                "Information": "\n".join(line.information),
            })

        # object dtype keeps None, date and Decimal values as they are
        return pd.DataFrame(data, columns=LINE_COLUMNS, dtype=object)

    def fields_to_rows(self, statement: Statement) -> List[Tuple[str, Any]]:
        """Flatten the statement header fields into label/value rows."""
        fields = statement.fields
        rows: List[Tuple[str, Any]] = [
            ("Basic Header", statement.block1),
            ("Application Header", statement.block2),
            ("Reference", fields.get("reference")),
            ("Related Reference", fields.get("related_reference")),
            ("Account Number", fields.get("account_number")),
        ]

        sequence = fields.get("statement_sequence")
        if sequence is not None:
            rows.append(("Statement Number", sequence.statement_number))
            rows.append(("Sequence Number", sequence.sequence_number))

        date_time = fields.get("date_time")
        if date_time is not None:
            rows.append(("Date/Time", date_time.iso_date))
            rows.append(("UTC Offset", date_time.offset))

        for key, label in (("debit_floor", "Debit Floor Limit"), ("credit_floor", "Credit Floor Limit")):
            floor = fields.get(key)
            if floor is not None:
                rows.append((label, f"{floor.currency} {floor.amount}"))

        for key, label in (("debits", "Debit Entries"), ("credits", "Credit Entries")):
            summary = fields.get(key)
            if summary is not None:
                rows.append((f"{label} Count", summary.entries))
                rows.append((f"{label} Sum", f"{summary.currency} {summary.amount}"))

        for note in fields.get("notes", []):
            rows.append(("Note", note))

        return rows

    def create_statement_sheet(
        self,
        workbook: Workbook,
        statement: Statement,
        sheet_name: str = "Statement"
    ) -> None:
        """Create the header fields sheet in workbook."""
        worksheet = workbook.create_sheet(title=sheet_name)

        for col_num, header in enumerate(["Field", "Value"], 1):
            self._style_header(worksheet.cell(row=1, column=col_num, value=header))

        rows = self.fields_to_rows(statement)
        for row_num, (label, value) in enumerate(rows, 2):
            worksheet.cell(row=row_num, column=1, value=label)
            worksheet.cell(row=row_num, column=2, value=value)

        self._adjust_column_widths(worksheet)
        self.logger.info(f"Created statement sheet with {len(rows)} fields")

    def create_lines_sheet(
        self,
        workbook: Workbook,
        lines_df: pd.DataFrame,
        sheet_name: str = "Lines"
    ) -> None:
        """Create statement lines sheet in workbook.

        Args:
            workbook: Excel workbook object.
            lines_df: DataFrame with statement line data.
            sheet_name: Name for the sheet.
        """
        worksheet = workbook.create_sheet(title=sheet_name)

        for col_num, header in enumerate(lines_df.columns, 1):
            self._style_header(worksheet.cell(row=1, column=col_num, value=header))

        if lines_df.empty:
            self.logger.warning("No statement lines to write to Excel")
            return

        for row_num, row in enumerate(dataframe_to_rows(lines_df, index=False, header=False), 2):
            for col_num, value in enumerate(row, 1):
                cell = worksheet.cell(row=row_num, column=col_num, value=value)

                if col_num in DATE_COLUMNS and isinstance(value, date):
                    cell.number_format = self.date_format
                elif col_num == AMOUNT_COLUMN and isinstance(value, Decimal):
                    cell.number_format = self.amount_format

        self._adjust_column_widths(worksheet)
        self.logger.info(f"Created lines sheet with {len(lines_df)} rows")

    def convert_to_excel(
        self,
        statement: Statement,
        output_path: Optional[str] = None,
        filename: Optional[str] = None
    ) -> str:
        """Convert a statement to an Excel file.

        Args:
            statement: Decoded statement.
            output_path: Optional output directory path.
            filename: Optional filename for output file.

        Returns:
            Path to created Excel file.

        Raises:
            ExcelConversionError: If conversion fails.
        """
        try:
            if output_path is None:
                output_path = REPORTS_DIR

            validate_directory_path(output_path)

            if filename is None:
                reference = statement.fields.get("reference")
                filename = self.generate_filename("mt942", suffix=reference)

            if not filename.endswith(f".{self.output_format}"):
                filename = f"{filename}.{self.output_format}"

            full_path = os.path.join(output_path, filename)

            workbook = Workbook()

            # Remove default sheet
            if "Sheet" in workbook.sheetnames:
                workbook.remove(workbook["Sheet"])

            self.create_statement_sheet(workbook, statement)
            self.create_lines_sheet(workbook, self.lines_to_dataframe(statement))

            workbook.save(full_path)
            workbook.close()

            self.logger.info(f"Excel file created successfully: {full_path}")
            return full_path

        except ValidationError as e:
            raise ExcelConversionError(f"Validation error: {str(e)}")
        except OSError as e:
            raise ExcelConversionError(f"Failed to convert to Excel: {str(e)}")

    def _style_header(self, cell) -> None:
        cell.font = self.header_font
        cell.fill = self.header_fill
        cell.alignment = self.header_alignment

    def _adjust_column_widths(self, worksheet) -> None:
        for col_idx in range(1, worksheet.max_column + 1):
            max_length = 0
            for row_idx in range(1, worksheet.max_row + 1):
                value = worksheet.cell(row=row_idx, column=col_idx).value
                if value is not None:
                    longest = max(len(part) for part in str(value).split("\n"))
                    max_length = max(max_length, longest)

            worksheet.column_dimensions[get_column_letter(col_idx)].width = min(max_length + 2, 50)
