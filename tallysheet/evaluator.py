"""Evaluator - resolves entry modifiers and computes subtotals."""

import logging
import math
from abc import ABC, abstractmethod
from dataclasses import astuple, replace
from typing import List, Optional

from tallysheet.models import (
    AccumulationMode,
    AccumulatorState,
    Document,
    Entry,
    Node,
    Scalar,
    Separator,
    SubtotalBlock,
    Value,
)

logger = logging.getLogger(__name__)

ZERO = Scalar(0.0)


class Accumulator(ABC):
    """Two-state machine feeding subtotals.

    It starts in ``JUST_CLOSED`` with nothing accumulated, moves to
    ``ACCUMULATING`` on the first value and back on ``close``.
    """

    def __init__(self) -> None:
        self._state = AccumulatorState.JUST_CLOSED

    @property
    def state(self) -> AccumulatorState:
        return self._state

    @abstractmethod
    def add(self, value: Value) -> None:
        """Feed one entry's value."""
        pass

    @abstractmethod
    def close(self) -> Value:
        """Return the subtotal for the current section and move to JUST_CLOSED."""
        pass


class SubtotalAccumulator(Accumulator):
    """Sums the entries of each section; every subtotal starts from zero."""

    def __init__(self) -> None:
        super().__init__()
        self._current: Value = ZERO

    @property
    def current(self) -> Optional[Value]:
        if self._state == AccumulatorState.JUST_CLOSED:
            return None
        return self._current

    def add(self, value: Value) -> None:
        if self._state == AccumulatorState.JUST_CLOSED:
            self._current = value
        else:
            self._current = self._current.add(value)
        self._state = AccumulatorState.ACCUMULATING

    def close(self) -> Value:
        # A section with no entries never left JUST_CLOSED
        total = self._current if self._state == AccumulatorState.ACCUMULATING else ZERO
        self._state = AccumulatorState.JUST_CLOSED
        return total


class RemainderAccumulator(Accumulator):
    """Running balance: the first entry minus every later one.

    Subtotals report the balance so far without resetting it.
    """

    def __init__(self) -> None:
        super().__init__()
        self._balance: Optional[Value] = None

    @property
    def current(self) -> Optional[Value]:
        return self._balance

    def add(self, value: Value) -> None:
        self._balance = value if self._balance is None else self._balance.sub(value)
        self._state = AccumulatorState.ACCUMULATING

    def close(self) -> Value:
        self._state = AccumulatorState.JUST_CLOSED
        return self._balance if self._balance is not None else ZERO


def create_accumulator(mode: AccumulationMode) -> Accumulator:
    """Create the accumulator for an accumulation mode."""
    if mode == AccumulationMode.REMAINDER:
        return RemainderAccumulator()
    return SubtotalAccumulator()


def same_value(a: Value, b: Value) -> bool:
    """Compare two values of the same shape, treating NaN as equal to NaN."""
    if type(a) is not type(b):
        return False
    return all(
        (math.isnan(x) and math.isnan(y)) or math.isclose(x, y, abs_tol=1e-9)
        for x, y in zip(astuple(a), astuple(b))
    )


class Evaluator:
    """Computes entry results and replaces separators with subtotals."""

    def __init__(
        self,
        mode: AccumulationMode = AccumulationMode.SUM,
        precision: Optional[int] = None,
        display_precision: int = 2,
    ) -> None:
        """Initialize the evaluator.

        Args:
            mode: How entries combine into subtotals
            precision: If set, entries are rounded to this many digits
                before they are accumulated, so subtotals match the
                printed values
            display_precision: Digits subtotals are printed with, used to
                compare them with values left by an earlier run
        """
        self._mode = mode
        self._precision = precision
        self._display_precision = display_precision

    def resolve(self, entry: Entry, warnings: Optional[List[str]] = None) -> Value:
        """Apply an entry's modifiers left to right.

        Division by zero turns the value into NaN; the remaining modifiers
        still run on it.

        Args:
            entry: Entry to resolve
            warnings: List collecting diagnostics

        Returns:
            The resolved value
        """
        value = entry.base_value

        for op in entry.ops:
            try:
                value = op.apply(value)
            except ZeroDivisionError:
                message = f"Line {entry.line_number}: division by zero"
                logger.warning(message)
                if warnings is not None:
                    warnings.append(message)
                value = value.nan_like()

        return value

    def subtotal(
        self, node: Separator, accumulator: Accumulator, warnings: List[str]
    ) -> SubtotalBlock:
        """Close the accumulator's section and build its subtotal block."""
        if not node.closed:
            message = f"Line {node.line_number}: subtotal section is not closed by a blank line"
            logger.warning(message)
            warnings.append(message)

        if accumulator.state == AccumulatorState.JUST_CLOSED:
            logger.debug(f"Line {node.line_number}: no entries since the last subtotal")

        total = accumulator.close()

        # Whatever an earlier run printed after the rule gets overwritten
        if node.printed_value is not None:
            shown = total.rounded(self._display_precision)
            if not same_value(node.printed_value, shown):
                message = (
                    f"Line {node.line_number + 1}: replaced {node.printed_value} "
                    f"with subtotal {shown}"
                )
                logger.warning(message)
                warnings.append(message)

        return SubtotalBlock(
            sum=total,
            description=node.description,
            closed=node.closed,
            line_number=node.line_number,
        )

    def evaluate(self, document: Document) -> Document:
        """Evaluate a parsed document.

        Args:
            document: Parsed document

        Returns:
            A new document with entry results filled in and separators
            replaced by subtotal blocks
        """
        accumulator = create_accumulator(self._mode)
        warnings = list(document.warnings)
        nodes: List[Node] = []

        for node in document.nodes:
            if isinstance(node, Entry):
                result = self.resolve(node, warnings)
                contribution = result
                if self._precision is not None:
                    contribution = result.rounded(self._precision)
                accumulator.add(contribution)
                nodes.append(replace(node, result=result))

            elif isinstance(node, Separator):
                nodes.append(self.subtotal(node, accumulator, warnings))

            else:
                nodes.append(node)

        logger.debug(
            f"Evaluated {len(document.entries)} entries, "
            f"{len(document.separators)} subtotals ({self._mode.value} mode)"
        )

        return Document(nodes=nodes, filename=document.filename, warnings=warnings)
