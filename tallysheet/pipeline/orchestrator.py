"""Pipeline orchestrator - runs a worksheet through its stages."""

import logging
import time
from typing import Callable, List, Optional, TextIO

from tallysheet.config import TallysheetConfig
from tallysheet.exceptions import TallysheetError
from tallysheet.pipeline.base import PipelineStage
from tallysheet.pipeline.context import PipelineContext

logger = logging.getLogger(__name__)


class PipelineOrchestrator:
    """Runs the stages in order and times each one under its name.

    A stage failing with a ``TallysheetError`` is recorded on the context
    and stops the run, unless ``continue_on_error`` is set. Any other
    exception propagates.
    """

    def __init__(
        self,
        stages: List[PipelineStage],
        config: TallysheetConfig,
        progress_callback: Optional[Callable[[str, float], None]] = None,
    ) -> None:
        """Initialize the pipeline orchestrator.

        Args:
            stages: Stages to run, in order
            config: Tallysheet configuration
            progress_callback: Called with a label and the fraction done
                after each stage
        """
        self._stages = stages
        self._config = config
        self._progress_callback = progress_callback

    def execute(
        self,
        input_path: str,
        output_path: Optional[str] = None,
        source_text: Optional[str] = None,
        stream: Optional[TextIO] = None,
    ) -> PipelineContext:
        """Run the pipeline on one worksheet.

        Args:
            input_path: Path to the worksheet
            output_path: File to write the result to
            source_text: Worksheet text to use instead of reading input_path
            stream: Text stream to write the result to, such as stdout

        Returns:
            Pipeline context with results
        """
        context = PipelineContext(
            input_path=input_path,
            config=self._config,
            source_text=source_text,
            output_path=output_path,
            stream=stream,
        )

        for done, stage in enumerate(self._stages, start=1):
            if context.should_stop:
                logger.warning(f"Pipeline stopped before stage: {stage.name}")
                break

            if stage.should_skip(context):
                logger.debug(f"Skipping stage: {stage.name}")
                self._report(f"Skipped: {stage.name}", done)
                continue

            context = self._run_stage(stage, context)
            self._report(stage.name, done)

        return context

    def _run_stage(self, stage: PipelineStage, context: PipelineContext) -> PipelineContext:
        logger.debug(f"Executing stage: {stage.name}")
        started = time.perf_counter()

        try:
            stage.check_ready(context)
            context = stage.process(context)
        except TallysheetError as e:
            logger.error(f"Error in stage {stage.name}: {e}")
            context.add_error(f"{stage.name}: {e}")
            if not self._config.continue_on_error:
                context.should_stop = True
        finally:
            context.record_stage_time(stage.name, time.perf_counter() - started)

        if self._config.verbose:
            logger.info(f"Stage {stage.name} took {context.stage_times[stage.name]:.4f}s")

        return context

    def _report(self, label: str, done: int) -> None:
        if self._progress_callback:
            self._progress_callback(label, done / len(self._stages))
