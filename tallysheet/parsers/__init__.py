"""Worksheet parsers for Tallysheet."""

from tallysheet.parsers.base import DocumentParser
from tallysheet.parsers.worksheet_parser import (
    WorksheetParser,
    parse_line,
    parse_subtotal_line,
)

__all__ = [
    "DocumentParser",
    "WorksheetParser",
    "parse_line",
    "parse_subtotal_line",
]
