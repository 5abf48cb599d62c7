"""Output stage - delivers the formatted worksheet."""

from typing import TYPE_CHECKING

from tallysheet.exceptions import TallysheetWriteError
from tallysheet.pipeline.base import PipelineStage
from tallysheet.pipeline.context import PipelineContext

if TYPE_CHECKING:
    from tallysheet.output.base import OutputFormatter


class OutputStage(PipelineStage):
    """Stage that writes the formatted worksheet to a file or a stream.

    A file target wins over a stream. With neither, the run ends at the
    rendered text and the caller reads ``context.rendered``.
    """

    requires = "rendered"

    def __init__(self, formatter: "OutputFormatter") -> None:
        """Initialize the output stage.

        Args:
            formatter: Output formatter used for file targets
        """
        self._formatter = formatter

    @property
    def name(self) -> str:
        return "output"

    def should_skip(self, context: PipelineContext) -> bool:
        return context.output_path is None and context.stream is None

    def process(self, context: PipelineContext) -> PipelineContext:
        """Write the formatted worksheet.

        Args:
            context: Pipeline context

        Returns:
            Updated context; ``written_path`` is set for file targets

        Raises:
            TallysheetWriteError: If the stream cannot be written
        """
        if context.output_path is not None:
            context.written_path = self._formatter.format(
                document=context.evaluated,
                output_path=context.output_path,
            )
            context.add_metric("output_target", context.written_path)
            return context

        target = getattr(context.stream, "name", "<stream>")
        try:
            context.stream.write(context.rendered)
            context.stream.flush()
        except OSError as e:
            raise TallysheetWriteError(f"Failed to write to {target}: {e}") from e

        context.add_metric("output_target", target)
        return context
