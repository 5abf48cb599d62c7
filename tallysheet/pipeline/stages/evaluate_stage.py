"""Evaluate stage - computes entry results and subtotals."""

from tallysheet.evaluator import Evaluator
from tallysheet.pipeline.base import PipelineStage
from tallysheet.pipeline.context import PipelineContext


class EvaluateStage(PipelineStage):
    """Stage that evaluates the parsed worksheet."""

    requires = "document"

    def __init__(self, evaluator: Evaluator) -> None:
        """Initialize the evaluate stage.

        Args:
            evaluator: Evaluator to use
        """
        self._evaluator = evaluator

    @property
    def name(self) -> str:
        return "evaluate"

    def process(self, context: PipelineContext) -> PipelineContext:
        context.evaluated = self._evaluator.evaluate(context.document)
        for warning in context.evaluated.warnings:
            context.add_warning(warning)

        context.add_metric("subtotal_count", len(context.evaluated.subtotals))
        return context
