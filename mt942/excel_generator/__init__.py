"""Excel export of decoded statements."""

from mt942.excel_generator.converter import StatementConverter
