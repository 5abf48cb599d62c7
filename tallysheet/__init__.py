"""
Tallysheet: Worksheet Calculator and Formatter

Evaluate plain-text worksheets of numbers and intervals, fill in their
subtotals, and rewrite them with an aligned value column.
"""

from tallysheet.config import TallysheetConfig
from tallysheet.tallysheet import Tallysheet, TallysheetBuilder
from tallysheet.models import (
    Scalar,
    Interval,
    Operator,
    Entry,
    Separator,
    SubtotalBlock,
    Blank,
    RawLine,
    Document,
    TallysheetResult,
    OperatorKind,
    AccumulationMode,
    RenderMode,
)
from tallysheet.exceptions import (
    TallysheetError,
    TallysheetConfigError,
    TallysheetReadError,
    TallysheetWriteError,
    TallysheetPipelineError,
)

__version__ = "1.0.0"
__all__ = [
    # Main classes
    "Tallysheet",
    "TallysheetBuilder",
    "TallysheetConfig",
    # Models
    "Scalar",
    "Interval",
    "Operator",
    "Entry",
    "Separator",
    "SubtotalBlock",
    "Blank",
    "RawLine",
    "Document",
    "TallysheetResult",
    # Enums
    "OperatorKind",
    "AccumulationMode",
    "RenderMode",
    # Exceptions
    "TallysheetError",
    "TallysheetConfigError",
    "TallysheetReadError",
    "TallysheetWriteError",
    "TallysheetPipelineError",
]
