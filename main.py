#!/usr/bin/env python3
"""MT942 Interim Statement Parser.

This script decodes a SWIFT MT942 interim statement message and prints it
as JSON or writes it to an Excel report.

Usage:
    python main.py --file <path_to_message> [--format json|xlsx] [--output-dir <dir>]
"""

import argparse
import json
import sys
from typing import Any, Dict, Optional

from mt942.config.settings import REPORTS_DIR, Settings
from mt942.excel_generator.converter import StatementConverter
from mt942.parser.statement_parser import Parser
from mt942.utils.exceptions import ExcelConversionError, MT942Error, ValidationError
from mt942.utils.logger import get_logger, setup_logger
from mt942.utils.validators import validate_input_file


class StatementProcessor:
    """Reads MT942 files and turns them into JSON or Excel output."""

    def __init__(self, settings: Optional[Settings] = None) -> None:
        """Initialize the processor."""
        self.settings = settings or Settings.from_env()
        self.logger = get_logger(__name__)
        self.converter = StatementConverter(self.settings.excel_output_format)

    def read_message(self, file_path: str) -> str:
        """Validate and read a message file.

        Raises:
            ValidationError: If the file is missing, unreadable or too large.
        """
        validate_input_file(file_path, self.settings.max_file_size_mb)
        with open(file_path, 'r', encoding=self.settings.file_encoding) as f:
            return f.read()

    def process_to_dict(self, file_path: str) -> Optional[Dict[str, Any]]:
        """Parse a message file into its block1/block2/block4 record.

        Returns:
            The statement record or None if processing failed.
        """
        try:
            self.logger.info(f"Processing MT942 message: {file_path}")
            document = self.read_message(file_path)
            return Parser(document, self.settings).process_statement()

        except ValidationError as e:
            self.logger.error(f"Invalid input file {file_path}: {str(e)}")
            return None
        except MT942Error as e:
            self.logger.error(f"Parsing failed for {file_path}: {str(e)}")
            return None

    def process_to_excel(self, file_path: str, output_dir: Optional[str] = None) -> Optional[str]:
        """Parse a message file and write an Excel report.

        Returns:
            Path to generated Excel file or None if processing failed.
        """
        try:
            self.logger.info(f"Processing MT942 message: {file_path}")
            document = self.read_message(file_path)
            statement = Parser(document, self.settings).parse()

            self.logger.info(f"Decoded {len(statement.lines)} statement lines")

            output_path = self.converter.convert_to_excel(
                statement,
                output_path=output_dir or self.settings.reports_dir
            )
            self.logger.info(f"Excel report created: {output_path}")
            return output_path

        except ValidationError as e:
            self.logger.error(f"Invalid input file {file_path}: {str(e)}")
            return None
        except ExcelConversionError as e:
            self.logger.error(f"Excel conversion failed for {file_path}: {str(e)}")
            return None
        except MT942Error as e:
            self.logger.error(f"Parsing failed for {file_path}: {str(e)}")
            return None


def parse_arguments(argv: Optional[list] = None) -> argparse.Namespace:
    """Parse command line arguments.

    Returns:
        Parsed arguments namespace.
    """
    parser = argparse.ArgumentParser(
        description="Decode SWIFT MT942 interim statement messages",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    # Print the decoded statement as JSON
    python main.py --file statement.mt942

    # Write an Excel report
    python main.py --file statement.mt942 --format xlsx --output-dir ./reports
        """
    )

    parser.add_argument(
        '--file',
        type=str,
        required=True,
        help='Path to the MT942 message file'
    )
    parser.add_argument(
        '--format',
        choices=['json', 'xlsx'],
        default='json',
        help='Output format (default: json)'
    )
    parser.add_argument(
        '--output-dir',
        type=str,
        default=None,
        help=f'Output directory for Excel reports (default: {REPORTS_DIR})'
    )

    return parser.parse_args(argv)


def main(argv: Optional[list] = None) -> int:
    """Main entry point.

    Returns:
        Exit code (0 for success, 1 for error).
    """
    try:
        args = parse_arguments(argv)

        try:
            settings = Settings.from_env()
        except ValueError as e:
            print(f"Error: Invalid configuration: {str(e)}")
            return 1

        if not settings.validate():
            print("Error: Invalid configuration. Check environment variables.")
            return 1

        setup_logger(
            "mt942",
            level=settings.get_log_level(),
            logs_dir=settings.logs_dir,
            log_format=settings.log_format
        )
        processor = StatementProcessor(settings)

        if args.format == 'xlsx':
            output_path = processor.process_to_excel(args.file, args.output_dir)
            if output_path:
                print(f"Success! Report created: {output_path}")
                return 0
            print("Error: Processing failed. Check logs for details.")
            return 1

        record = processor.process_to_dict(args.file)
        if record is None:
            print("Error: Processing failed. Check logs for details.")
            return 1

        print(json.dumps(record, indent=2))
        return 0

    except KeyboardInterrupt:
        print("\nOperation cancelled by user")
        return 130


if __name__ == "__main__":
    sys.exit(main())
