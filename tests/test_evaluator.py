from __future__ import annotations

import math

import pytest

from tallysheet.evaluator import (
    Evaluator,
    RemainderAccumulator,
    SubtotalAccumulator,
    create_accumulator,
)
from tallysheet.models import (
    AccumulationMode,
    AccumulatorState,
    Blank,
    Document,
    Entry,
    Interval,
    Operator,
    OperatorKind,
    RawLine,
    Scalar,
    Separator,
    SubtotalBlock,
)
from tallysheet.parsers import WorksheetParser


def _evaluate(text: str, **kwargs) -> Document:
    document = WorksheetParser().parse_text(text)
    return Evaluator(**kwargs).evaluate(document)


def test_accumulator_state_machine() -> None:
    acc = SubtotalAccumulator()
    assert acc.state == AccumulatorState.JUST_CLOSED
    assert acc.current is None

    acc.add(Scalar(1.0))
    acc.add(Interval(2.0, 3.0))
    assert acc.state == AccumulatorState.ACCUMULATING
    assert acc.close() == Interval(3.0, 4.0)

    assert acc.state == AccumulatorState.JUST_CLOSED
    assert acc.current is None
    assert acc.close() == Scalar(0.0)


def test_remainder_accumulator_keeps_balance() -> None:
    acc = RemainderAccumulator()
    acc.add(Scalar(100.0))
    acc.add(Scalar(30.0))
    assert acc.close() == Scalar(70.0)
    acc.add(Scalar(20.0))
    assert acc.close() == Scalar(50.0)


def test_create_accumulator() -> None:
    assert isinstance(create_accumulator(AccumulationMode.SUM), SubtotalAccumulator)
    assert isinstance(create_accumulator(AccumulationMode.REMAINDER), RemainderAccumulator)


def test_resolve_applies_ops_left_to_right() -> None:
    entry = Entry(
        base_value=Scalar(10.0),
        ops=[Operator(OperatorKind.MULTIPLY, 3.0), Operator(OperatorKind.DIVIDE, 4.0)],
    )
    assert Evaluator().resolve(entry) == Scalar(7.5)


@pytest.mark.parametrize("chain", ["* -2", "/ -4", "* -1 * 3", "/ -0.5 * -2 * -1"])
def test_interval_results_are_ordered(chain: str) -> None:
    document = _evaluate(f"[10, 50] {chain}\n")
    result = document.entries[0].result
    assert isinstance(result, Interval)
    assert result.low <= result.high


def test_literal_interval_without_ops_is_untouched() -> None:
    document = _evaluate("[50, 10]\n")
    assert document.entries[0].result == Interval(50.0, 10.0)


def test_subtotal_of_mixed_entries() -> None:
    document = _evaluate("1000\n[10, 50]\n100/12\n-----\nTotal\n\n")
    (subtotal,) = document.subtotals
    assert isinstance(subtotal.sum, Interval)
    assert round(subtotal.sum.low, 2) == 1018.33
    assert round(subtotal.sum.high, 2) == 1058.33
    assert subtotal.description == "Total"


def test_subtotals_reset_between_sections() -> None:
    document = _evaluate("1\n2\n---\nA\n\n10\n---\nB\n\n---\nC\n\n")
    assert [s.sum for s in document.subtotals] == [Scalar(3.0), Scalar(10.0), Scalar(0.0)]


def test_separator_before_any_entry_sums_to_zero() -> None:
    document = _evaluate("---\n\n5\n")
    assert document.subtotals[0].sum == Scalar(0.0)


def test_remainder_mode_reproduces_budget_example() -> None:
    document = _evaluate(
        "1000 Salary\n[10, 50] Groceries\n100/12 Streaming\n-----\nLeft over\n\n",
        mode=AccumulationMode.REMAINDER,
    )
    total = document.subtotals[0].sum
    assert round(total.low, 2) == 941.67
    assert round(total.high, 2) == 981.67


def test_division_by_zero_is_contained() -> None:
    document = _evaluate("10 / 0 broken\n5\n---\nA\n\n7\n2\n---\nB\n\n")

    broken = document.entries[0].result
    assert math.isnan(broken.value)
    first, second = document.subtotals
    assert math.isnan(first.sum.value)
    assert second.sum == Scalar(9.0)
    assert document.warnings == ["Line 1: division by zero"]


def test_division_by_zero_in_interval_chain_keeps_shape() -> None:
    document = _evaluate("[1, 2] / 0 * 3\n")
    result = document.entries[0].result
    assert isinstance(result, Interval)
    assert result.is_nan


def test_unclosed_section_warns_but_still_sums() -> None:
    document = _evaluate("4\n---\nTotal\n5\n")
    assert document.subtotals[0].sum == Scalar(4.0)
    assert document.subtotals[0].closed is False
    assert document.warnings == ["Line 2: subtotal section is not closed by a blank line"]


def test_blank_and_raw_lines_pass_through() -> None:
    document = _evaluate("Header\n\n3\n---\n\n")
    kinds = [type(n) for n in document.nodes]
    assert kinds == [RawLine, Blank, Entry, SubtotalBlock]
    assert document.subtotals[0].sum == Scalar(3.0)


def test_precision_accumulates_printed_values() -> None:
    text = "100/12\n100/12\n---\n\n"
    exact = _evaluate(text).subtotals[0].sum.value
    printed = _evaluate(text, precision=2).subtotals[0].sum.value
    assert round(exact, 2) == 16.67
    assert printed == pytest.approx(16.66)


def test_evaluate_does_not_mutate_input() -> None:
    parsed = WorksheetParser().parse_text("2 * 3\n---\n\n")
    evaluated = Evaluator().evaluate(parsed)

    assert parsed.entries[0].result is None
    assert isinstance(parsed.nodes[1], Separator)
    assert evaluated.entries[0].result == Scalar(6.0)
    assert evaluated.is_evaluated
    assert not parsed.is_evaluated


def test_closing_starts_the_next_section_from_its_first_entry() -> None:
    acc = SubtotalAccumulator()
    acc.add(Interval(1.0, 2.0))
    acc.close()

    acc.add(Scalar(5.0))
    assert acc.current == Scalar(5.0)
    assert acc.close() == Scalar(5.0)


def test_empty_section_is_logged(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level("DEBUG", logger="tallysheet.evaluator"):
        _evaluate("1\n---\n\n---\n\n")
    assert "Line 4: no entries since the last subtotal" in caplog.text


def test_changed_value_after_rule_warns(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level("WARNING", logger="tallysheet.evaluator"):
        document = _evaluate("10\n---\n20\n\n30\n---\n\n")

    assert [s.sum for s in document.subtotals] == [Scalar(10.0), Scalar(30.0)]
    assert document.warnings == ["Line 3: replaced 20.0 with subtotal 10.0"]
    assert "replaced 20.0 with subtotal 10.0" in caplog.text


def test_matching_printed_subtotal_is_silent() -> None:
    document = _evaluate(
        "100/12\n[10, 50]\n---\n[18.33, 58.33] Total\n\n", display_precision=2
    )
    assert document.warnings == []

    document = _evaluate("10 / 0\n---\nNaN\n\n")
    assert document.warnings == ["Line 1: division by zero"]


def test_printed_value_of_another_shape_warns() -> None:
    document = _evaluate("[1, 2]\n---\n3\n\n")
    assert document.warnings == ["Line 3: replaced 3.0 with subtotal [1.0, 2.0]"]
