"""Pipeline context for carrying state through stages."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, TextIO

from tallysheet.models import Document
from tallysheet.config import TallysheetConfig


@dataclass
class PipelineContext:
    """Carries one worksheet through the pipeline stages."""

    # Input
    input_path: str
    config: TallysheetConfig
    source_text: Optional[str] = None  # Used instead of reading input_path

    # Output targets; with neither set the text stays in memory
    output_path: Optional[str] = None
    stream: Optional[TextIO] = None

    # Stage outputs (populated as pipeline progresses)
    document: Optional[Document] = None
    evaluated: Optional[Document] = None
    rendered: Optional[str] = None
    written_path: Optional[str] = None

    # Control flow
    should_stop: bool = False

    # Counts reported by stages, and seconds spent per stage name
    metrics: Dict[str, Any] = field(default_factory=dict)
    stage_times: Dict[str, float] = field(default_factory=dict)

    # Error tracking
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    def add_error(self, error: str) -> None:
        """Add an error message."""
        self.errors.append(error)

    def add_warning(self, warning: str) -> None:
        """Add a warning message."""
        self.warnings.append(warning)

    def add_metric(self, key: str, value: Any) -> None:
        """Add or update a metric."""
        self.metrics[key] = value

    def record_stage_time(self, stage_name: str, seconds: float) -> None:
        self.stage_times[stage_name] = seconds

    @property
    def has_errors(self) -> bool:
        """Check if there are any errors."""
        return len(self.errors) > 0
