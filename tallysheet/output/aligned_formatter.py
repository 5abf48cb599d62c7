"""Column-aligned worksheet formatter."""

import math
from dataclasses import replace
from decimal import Decimal
from typing import List, Optional

from tallysheet.models import (
    Blank,
    Document,
    Entry,
    Interval,
    Node,
    RawLine,
    RenderMode,
    Scalar,
    Separator,
    SubtotalBlock,
    Value,
)
from tallysheet.output.base import OutputFormatter

NAN_MARKER = "NaN"


def format_number(x: float, precision: int = 2) -> str:
    """Render a number for the value column.

    Whole numbers have no decimal point, anything else gets exactly
    ``precision`` fractional digits.
    """
    if math.isnan(x):
        return NAN_MARKER
    if math.isinf(x):
        return "inf" if x > 0 else "-inf"

    text = f"{x:.{precision}f}"
    if float(text) == 0:
        text = f"{0.0:.{precision}f}"  # no "-0"
    if "." in text and text.rstrip("0").endswith("."):
        text = text.split(".")[0]
    return text


def format_literal(x: float, precision: int = 2) -> str:
    """Render a number written by the user without losing digits."""
    if math.isnan(x) or math.isinf(x) or round(x, precision) == x:
        return format_number(x, precision)
    # Plain positional digits; repr() may use an exponent the parser rejects
    return format(Decimal(repr(x)), "f")


def format_value(value: Value, precision: int = 2) -> str:
    """Render a scalar or an interval."""
    if isinstance(value, Scalar):
        return format_number(value.value, precision)
    if isinstance(value, Interval):
        low = format_number(value.low, precision)
        high = format_number(value.high, precision)
        return f"[{low}, {high}]"
    raise TypeError(f"Unsupported value: {value!r}")


def format_expression(entry: Entry, precision: int = 2) -> str:
    """Render an entry's value and modifiers as written, e.g. ``100 / 12``."""
    base = entry.base_value
    if isinstance(base, Interval):
        parts = [f"[{format_literal(base.low, precision)}, {format_literal(base.high, precision)}]"]
    else:
        parts = [format_literal(base.value, precision)]

    for op in entry.ops:
        parts.append(op.kind.value)
        parts.append(format_literal(op.operand, precision))

    return " ".join(parts)


class AlignedFormatter(OutputFormatter):
    """Right-aligns every value to the widest one in the document."""

    def __init__(
        self,
        precision: int = 2,
        render_mode: RenderMode = RenderMode.VALUE,
        encoding: str = "utf-8",
    ) -> None:
        """Initialize the formatter.

        Args:
            precision: Fractional digits for numbers that are not whole
            render_mode: Show computed values or the written expressions
            encoding: Encoding used by ``format``
        """
        super().__init__(encoding=encoding)
        self._precision = precision
        self._render_mode = render_mode

    def value_text(self, node: Node) -> Optional[str]:
        """Get the value-column text of a node, if it has one."""
        if isinstance(node, Entry):
            if self._render_mode == RenderMode.EXPRESSION or node.result is None:
                return format_expression(node, self._precision)
            return format_value(node.result, self._precision)
        if isinstance(node, SubtotalBlock):
            return format_value(node.sum, self._precision)
        return None

    def column_width(self, document: Document) -> int:
        """Get the width of the value column."""
        widths = [len(text) for text in map(self.value_text, document.nodes) if text is not None]
        return max(widths, default=0)

    def layout(self, document: Document) -> List[Node]:
        """Get the document's nodes with subtotal rules sized to the column."""
        width = self.column_width(document)
        return [
            replace(node, rule_length=width) if isinstance(node, SubtotalBlock) else node
            for node in document.nodes
        ]

    def render(self, document: Document) -> List[str]:
        width = self.column_width(document)
        lines: List[str] = []

        for node in self.layout(document):
            lines.extend(self.format_node(node, width))

        return lines

    def format_node(self, node: Node, width: int) -> List[str]:
        """Render one node to its output lines."""
        if isinstance(node, Entry):
            return [_aligned(self.value_text(node), node.description, width)]

        if isinstance(node, SubtotalBlock):
            rule_length = node.rule_length if node.rule_length is not None else width
            return [
                "-" * rule_length,
                _aligned(self.value_text(node), node.description, width),
                "",
            ]

        if isinstance(node, Separator):
            # Not evaluated; keep the rule and its description
            lines = ["-" * width]
            if node.description:
                lines.append(_aligned("", node.description, width))
            return lines + [""]

        if isinstance(node, (Blank, RawLine)):
            return [node.text]

        raise TypeError(f"Unsupported node: {node!r}")


def _aligned(value_text: str, description: Optional[str], width: int) -> str:
    line = value_text.rjust(width)
    if description:
        line = f"{line} {description}"
    return line
