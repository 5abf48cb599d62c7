"""Enumerations for Tallysheet models."""

from enum import Enum


class OperatorKind(str, Enum):
    """Arithmetic modifier written after an entry's value."""

    MULTIPLY = "*"
    DIVIDE = "/"


class AccumulationMode(str, Enum):
    """How entries are combined into subtotals."""

    SUM = "sum"
    REMAINDER = "remainder"


class RenderMode(str, Enum):
    """What the value column shows for an entry."""

    VALUE = "value"
    EXPRESSION = "expression"


class AccumulatorState(str, Enum):
    """State of a subtotal accumulator."""

    ACCUMULATING = "accumulating"
    JUST_CLOSED = "just_closed"
