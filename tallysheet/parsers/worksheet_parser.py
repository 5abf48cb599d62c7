"""Line parser for worksheets.

Each line is one of: a dashed rule (subtotal separator), a blank line, an
entry (a scalar or ``[low, high]`` interval, optional ``*k``/``/k`` modifiers
and an optional description), or anything else, which is kept verbatim.
"""

import logging
import re
from typing import List, Optional, Sequence, Tuple

from tallysheet.models import (
    Blank,
    Document,
    Entry,
    Interval,
    Node,
    Operator,
    OperatorKind,
    RawLine,
    Scalar,
    Separator,
    Value,
)
from tallysheet.parsers.base import DocumentParser

logger = logging.getLogger(__name__)

NUMBER = r"[-+]?(?:\d+(?:\.\d+)?|NaN|inf)"

# A token must end at whitespace, an operator, or the end of the line.
_TOKEN_END = r"(?=[\s*/]|$)"

VALUE_PATTERN = re.compile(
    rf"\s*(?:\[\s*(?P<low>{NUMBER})\s*,\s*(?P<high>{NUMBER})\s*\]|(?P<scalar>{NUMBER})){_TOKEN_END}"
)
OPERATOR_PATTERN = re.compile(rf"\s*(?P<op>[*/])\s*(?P<operand>{NUMBER}){_TOKEN_END}")
SEPARATOR_PATTERN = re.compile(r"^\s*-+\s*$")


def is_separator(text: str) -> bool:
    """Check whether a line is a dashed subtotal rule."""
    return SEPARATOR_PATTERN.match(text) is not None


def is_blank(text: str) -> bool:
    return not text.strip()


def match_value(text: str, pos: int = 0) -> Optional[Tuple[Value, int]]:
    """Match a value token at ``pos``.

    Returns:
        The value and the position right after it, or None
    """
    match = VALUE_PATTERN.match(text, pos)
    if match is None:
        return None

    if match.group("scalar") is not None:
        return Scalar(float(match.group("scalar"))), match.end()

    # Bounds are kept as written, even when reversed.
    low, high = float(match.group("low")), float(match.group("high"))
    return Interval(low, high), match.end()


def _trailing_description(text: str, pos: int) -> Tuple[bool, Optional[str]]:
    """Split off the description after a value.

    Returns:
        (ok, description); ok is False when text is glued to the value
    """
    rest = text[pos:]
    if not rest.strip():
        return True, None
    if not rest[0].isspace():
        return False, None
    return True, rest.lstrip()


def parse_line(text: str, line_number: int = 0) -> Node:
    """Classify a single worksheet line.

    Args:
        text: Raw line without its terminator
        line_number: 1-based line number, for diagnostics

    Returns:
        Separator, Blank, Entry or RawLine
    """
    if is_blank(text):
        return Blank(text=text, line_number=line_number)

    if is_separator(text):
        return Separator(line_number=line_number)

    matched = match_value(text)
    if matched is None:
        logger.debug(f"Line {line_number}: no value, keeping as text")
        return RawLine(text=text, line_number=line_number)

    base_value, pos = matched
    ops: List[Operator] = []

    while True:
        op_match = OPERATOR_PATTERN.match(text, pos)
        if op_match is None:
            break
        ops.append(
            Operator(
                kind=OperatorKind(op_match.group("op")),
                operand=float(op_match.group("operand")),
            )
        )
        pos = op_match.end()

    ok, description = _trailing_description(text, pos)
    if not ok:
        logger.debug(f"Line {line_number}: text glued to value, keeping as text")
        return RawLine(text=text, line_number=line_number)

    return Entry(
        base_value=base_value,
        ops=ops,
        description=description,
        line_number=line_number,
    )


def parse_subtotal_line(text: str) -> Tuple[Optional[Value], Optional[str]]:
    """Split the line following a subtotal rule.

    A value printed there by an earlier run is returned separately so the
    evaluator can replace it with the fresh subtotal.

    Returns:
        (printed value or None, description or None)
    """
    matched = match_value(text)
    if matched is not None:
        ok, description = _trailing_description(text, matched[1])
        if ok:
            return matched[0], description

    return None, text.strip() or None


class WorksheetParser(DocumentParser):
    """Parser for plain-text worksheets."""

    def parse_lines(self, lines: Sequence[str], filename: str = "") -> Document:
        """Parse worksheet lines into a Document model.

        The line after a separator is read as the subtotal's description, and
        the blank line closing the section is folded into the separator.

        Args:
            lines: Lines without their line terminators
            filename: Name recorded on the document

        Returns:
            Parsed Document model
        """
        nodes: List[Node] = []
        i = 0

        while i < len(lines):
            node = parse_line(lines[i], line_number=i + 1)
            i += 1

            if isinstance(node, Separator):
                if i < len(lines) and not is_blank(lines[i]) and not is_separator(lines[i]):
                    node.printed_value, node.description = parse_subtotal_line(lines[i])
                    i += 1

                if i < len(lines):
                    if is_blank(lines[i]):
                        i += 1
                    else:
                        node.closed = False

            nodes.append(node)

        logger.debug(f"Parsed {len(nodes)} nodes from {filename or '<text>'}")
        return Document(nodes=nodes, filename=filename)
