"""Output formatters for Tallysheet."""

from tallysheet.output.base import OutputFormatter
from tallysheet.output.aligned_formatter import (
    AlignedFormatter,
    format_number,
    format_value,
    format_literal,
    format_expression,
)

__all__ = [
    "OutputFormatter",
    "AlignedFormatter",
    "format_number",
    "format_value",
    "format_expression",
    "format_literal",
]
