"""Format stage - renders the evaluated worksheet."""

from tallysheet.output import AlignedFormatter, OutputFormatter
from tallysheet.pipeline.base import PipelineStage
from tallysheet.pipeline.context import PipelineContext


class FormatStage(PipelineStage):
    """Stage that renders the evaluated document to text."""

    requires = "evaluated"

    def __init__(self, formatter: OutputFormatter) -> None:
        self._formatter = formatter

    @property
    def name(self) -> str:
        return "format"

    def process(self, context: PipelineContext) -> PipelineContext:
        context.rendered = self._formatter.format_to_string(context.evaluated)

        if isinstance(self._formatter, AlignedFormatter):
            context.add_metric("column_width", self._formatter.column_width(context.evaluated))

        return context
