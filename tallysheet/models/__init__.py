"""Data models for Tallysheet."""

from tallysheet.models.enums import (
    OperatorKind,
    AccumulationMode,
    RenderMode,
    AccumulatorState,
)
from tallysheet.models.value import Scalar, Interval, Value
from tallysheet.models.document import (
    Operator,
    Entry,
    Separator,
    SubtotalBlock,
    Blank,
    RawLine,
    Node,
    Document,
)
from tallysheet.models.result import TallysheetResult

__all__ = [
    "OperatorKind",
    "AccumulationMode",
    "RenderMode",
    "AccumulatorState",
    "Scalar",
    "Interval",
    "Value",
    "Operator",
    "Entry",
    "Separator",
    "SubtotalBlock",
    "Blank",
    "RawLine",
    "Node",
    "Document",
    "TallysheetResult",
]
