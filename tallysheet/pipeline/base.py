"""Base class for the steps that turn worksheet text into output."""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Optional

from tallysheet.exceptions import TallysheetPipelineError

if TYPE_CHECKING:
    from tallysheet.pipeline.context import PipelineContext


class PipelineStage(ABC):
    """One step of a worksheet run.

    A stage reads what earlier stages left on the context and stores its own
    product there. ``requires`` names the context field it cannot run
    without; the orchestrator checks it before calling ``process``.
    """

    requires: Optional[str] = None

    @property
    @abstractmethod
    def name(self) -> str:
        """Stage name, used as the key of its timing and in error messages."""
        pass

    @abstractmethod
    def process(self, context: "PipelineContext") -> "PipelineContext":
        """Run the stage and return the updated context."""
        pass

    def should_skip(self, context: "PipelineContext") -> bool:
        """Whether there is nothing for this stage to do in this run."""
        return False

    def check_ready(self, context: "PipelineContext") -> None:
        """Raise if the field this stage consumes was never produced.

        Raises:
            TallysheetPipelineError: If ``requires`` is unset on the context
        """
        if self.requires is not None and getattr(context, self.requires) is None:
            raise TallysheetPipelineError(
                f"No {self.requires.replace('_', ' ')} from an earlier stage",
                stage_name=self.name,
            )
