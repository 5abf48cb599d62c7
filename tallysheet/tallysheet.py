"""Main Tallysheet class - entry point for the library."""

import logging
from typing import Callable, Optional, TextIO

from tallysheet.config import TallysheetConfig
from tallysheet.evaluator import Evaluator
from tallysheet.exceptions import TallysheetConfigError, TallysheetError
from tallysheet.models import AccumulationMode, RenderMode, TallysheetResult
from tallysheet.output.base import OutputFormatter
from tallysheet.output.aligned_formatter import AlignedFormatter
from tallysheet.parsers.base import DocumentParser
from tallysheet.parsers.worksheet_parser import WorksheetParser
from tallysheet.pipeline.orchestrator import PipelineOrchestrator
from tallysheet.pipeline.stages import (
    ParseStage,
    EvaluateStage,
    FormatStage,
    OutputStage,
)

logger = logging.getLogger(__name__)


class Tallysheet:
    """Main Tallysheet class for formatting worksheets."""

    def __init__(
        self,
        config: Optional[TallysheetConfig] = None,
        parser: Optional[DocumentParser] = None,
        output_formatter: Optional[OutputFormatter] = None,
    ) -> None:
        """Initialize Tallysheet.

        Args:
            config: Configuration object
            parser: Custom worksheet parser
            output_formatter: Custom output formatter
        """
        self._config = config or TallysheetConfig()

        self._parser = parser or WorksheetParser(encoding=self._config.encoding)

        self._output_formatter = output_formatter or AlignedFormatter(
            precision=self._config.precision,
            render_mode=self._config.rendering,
            encoding=self._config.encoding,
        )

        # Subtotals add up what is printed when computed values are shown.
        precision = None
        if self._config.rendering == RenderMode.VALUE:
            precision = self._config.precision

        self._evaluator = Evaluator(
            mode=self._config.accumulation,
            precision=precision,
            display_precision=self._config.precision,
        )

    @classmethod
    def builder(cls) -> "TallysheetBuilder":
        """Create a builder for fluent configuration.

        Returns:
            TallysheetBuilder instance
        """
        return TallysheetBuilder()

    def _orchestrator(
        self,
        progress_callback: Optional[Callable[[str, float], None]] = None,
    ) -> PipelineOrchestrator:
        stages = [
            ParseStage(parser=self._parser),
            EvaluateStage(evaluator=self._evaluator),
            FormatStage(formatter=self._output_formatter),
            OutputStage(formatter=self._output_formatter),
        ]
        return PipelineOrchestrator(
            stages=stages,
            config=self._config,
            progress_callback=progress_callback,
        )

    def process(
        self,
        input_file: str,
        output_path: Optional[str] = None,
        in_place: bool = False,
        stream: Optional[TextIO] = None,
        progress_callback: Optional[Callable[[str, float], None]] = None,
    ) -> TallysheetResult:
        """Format a worksheet file.

        Args:
            input_file: Path to the worksheet
            output_path: File to write the result to
            in_place: Rewrite input_file with the result
            stream: Text stream to write the result to when there is no
                file target, such as stdout
            progress_callback: Optional callback for progress updates

        Returns:
            TallysheetResult with the formatted text

        Raises:
            TallysheetConfigError: If both output_path and in_place are given
        """
        if in_place and output_path is not None:
            raise TallysheetConfigError("output_path and in_place are mutually exclusive")

        target = input_file if in_place else output_path

        context = self._orchestrator(progress_callback).execute(
            input_path=input_file,
            output_path=target,
            stream=stream,
        )

        if context.has_errors:
            logger.error(f"Failed to format {input_file}: {'; '.join(context.errors)}")

        return TallysheetResult(
            success=not context.has_errors,
            output_path=context.written_path,
            text=context.rendered,
            document=context.evaluated,
            metrics=context.metrics,
            stage_times=context.stage_times,
            warnings=context.warnings,
            errors=context.errors,
        )

    def format_text(self, text: str, filename: str = "<text>") -> str:
        """Format worksheet text directly.

        Args:
            text: Worksheet content
            filename: Virtual filename for the content

        Returns:
            Formatted worksheet text

        Raises:
            TallysheetError: If a stage fails
        """
        context = self._orchestrator().execute(input_path=filename, source_text=text)

        if context.has_errors:
            raise TallysheetError("; ".join(context.errors))

        return context.rendered

    @property
    def config(self) -> TallysheetConfig:
        """Get the configuration."""
        return self._config


class TallysheetBuilder:
    """Builder for fluent Tallysheet configuration."""

    def __init__(self) -> None:
        """Initialize the builder."""
        self._config: Optional[TallysheetConfig] = None
        self._parser: Optional[DocumentParser] = None
        self._output_formatter: Optional[OutputFormatter] = None
        self._overrides: dict = {}

    def with_config(self, config: TallysheetConfig) -> "TallysheetBuilder":
        """Set configuration.

        Args:
            config: TallysheetConfig instance

        Returns:
            Self for chaining
        """
        self._config = config
        return self

    def with_parser(self, parser: DocumentParser) -> "TallysheetBuilder":
        """Set worksheet parser.

        Args:
            parser: DocumentParser instance

        Returns:
            Self for chaining
        """
        self._parser = parser
        return self

    def with_output_formatter(self, formatter: OutputFormatter) -> "TallysheetBuilder":
        """Set output formatter.

        Args:
            formatter: OutputFormatter instance

        Returns:
            Self for chaining
        """
        self._output_formatter = formatter
        return self

    def with_accumulation_mode(self, mode: AccumulationMode) -> "TallysheetBuilder":
        self._overrides["accumulation_mode"] = AccumulationMode(mode).value
        return self

    def with_render_mode(self, mode: RenderMode) -> "TallysheetBuilder":
        self._overrides["render_mode"] = RenderMode(mode).value
        return self

    def build(self) -> Tallysheet:
        """Build the Tallysheet instance.

        Returns:
            Configured Tallysheet instance
        """
        config = self._config
        if self._overrides:
            base = config.to_dict() if config else {}
            config = TallysheetConfig(**{**base, **self._overrides})

        return Tallysheet(
            config=config,
            parser=self._parser,
            output_formatter=self._output_formatter,
        )
