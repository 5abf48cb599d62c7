"""Document models for Tallysheet."""

from dataclasses import dataclass, field
from typing import List, Optional, Union

from tallysheet.models.enums import OperatorKind
from tallysheet.models.value import Value


@dataclass(frozen=True)
class Operator:
    """One ``*k`` or ``/k`` modifier of an entry."""

    kind: OperatorKind
    operand: float

    def apply(self, value: Value) -> Value:
        """Apply this modifier to a value.

        Raises:
            ZeroDivisionError: If dividing by zero
        """
        if self.kind == OperatorKind.MULTIPLY:
            return value.mul(self.operand)
        return value.div(self.operand)


@dataclass
class Entry:
    """A worksheet line carrying a value, its modifiers and a description."""

    base_value: Value
    ops: List[Operator] = field(default_factory=list)
    description: Optional[str] = None
    result: Optional[Value] = None  # Set by the evaluator
    line_number: int = 0


@dataclass
class Separator:
    """A dashed rule asking for a subtotal.

    ``description`` comes from the line right after the rule, and
    ``printed_value`` is the value an earlier run left on that line.
    ``closed`` is False when that section is not followed by a blank line.
    """

    description: Optional[str] = None
    printed_value: Optional[Value] = None
    closed: bool = True
    line_number: int = 0


@dataclass
class SubtotalBlock:
    """A computed subtotal, standing where its separator was."""

    sum: Value
    description: Optional[str] = None
    closed: bool = True
    rule_length: Optional[int] = None  # Set by the formatter's layout pass
    line_number: int = 0


@dataclass
class Blank:
    """An empty or whitespace-only line."""

    text: str = ""
    line_number: int = 0


@dataclass
class RawLine:
    """A line that is not a worksheet directive, kept as is."""

    text: str
    line_number: int = 0


Node = Union[Entry, Separator, SubtotalBlock, Blank, RawLine]


@dataclass
class Document:
    """A parsed or evaluated worksheet."""

    nodes: List[Node] = field(default_factory=list)
    filename: str = ""
    warnings: List[str] = field(default_factory=list)

    @property
    def entries(self) -> List[Entry]:
        """Get all entries in document order."""
        return [n for n in self.nodes if isinstance(n, Entry)]

    @property
    def subtotals(self) -> List[SubtotalBlock]:
        """Get all subtotal blocks in document order."""
        return [n for n in self.nodes if isinstance(n, SubtotalBlock)]

    @property
    def separators(self) -> List[Separator]:
        return [n for n in self.nodes if isinstance(n, Separator)]

    @property
    def is_evaluated(self) -> bool:
        """Check whether every separator was replaced and every entry computed."""
        return not self.separators and all(e.result is not None for e in self.entries)

    def __len__(self) -> int:
        return len(self.nodes)
