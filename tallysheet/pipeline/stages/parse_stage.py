"""Parse stage - reads and parses the worksheet."""

from pathlib import Path

from tallysheet.pipeline.base import PipelineStage
from tallysheet.pipeline.context import PipelineContext
from tallysheet.parsers import DocumentParser
from tallysheet.exceptions import TallysheetReadError


class ParseStage(PipelineStage):
    """Stage that parses the input worksheet."""

    def __init__(self, parser: DocumentParser) -> None:
        """Initialize the parse stage.

        Args:
            parser: Worksheet parser to use
        """
        self._parser = parser

    @property
    def name(self) -> str:
        return "parse"

    def process(self, context: PipelineContext) -> PipelineContext:
        """Parse the input worksheet.

        Args:
            context: Pipeline context

        Returns:
            Updated context with parsed document
        """
        if context.source_text is not None:
            context.document = self._parser.parse_text(
                context.source_text,
                filename=Path(context.input_path).name,
            )
        else:
            input_path = Path(context.input_path)

            if not input_path.is_file():
                raise TallysheetReadError(
                    f"Input file not found: {context.input_path}",
                    file_path=context.input_path,
                )

            context.document = self._parser.parse(input_path)

        context.add_metric("node_count", len(context.document))
        context.add_metric("entry_count", len(context.document.entries))

        return context
