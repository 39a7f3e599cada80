"""MT942 Interim Statement Parser.

Decodes SWIFT MT942 interim bank-statement messages into structured
records and exports them to Excel.
"""

from mt942.parser import Parser, parse

__version__ = "1.0.0"
__author__ = "MT942 Parser Team"

__all__ = ["Parser", "parse"]
