"""Result models for Tallysheet."""

from dataclasses import dataclass, field
from typing import List, Dict, Any, Optional

from tallysheet.models.document import Document


@dataclass
class TallysheetResult:
    """Result of formatting a worksheet."""

    success: bool
    output_path: Optional[str]
    text: Optional[str]
    document: Optional[Document] = None
    metrics: Dict[str, Any] = field(default_factory=dict)
    stage_times: Dict[str, float] = field(default_factory=dict)
    warnings: List[str] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)

    @property
    def entry_count(self) -> int:
        """Get the number of entries."""
        return len(self.document.entries) if self.document else 0

    @property
    def subtotal_count(self) -> int:
        """Get the number of subtotals."""
        return len(self.document.subtotals) if self.document else 0

    @property
    def total_time(self) -> float:
        """Get the seconds spent across all stages."""
        return sum(self.stage_times.values())

    @property
    def has_warnings(self) -> bool:
        """Check if there are any warnings."""
        return len(self.warnings) > 0

    @property
    def has_errors(self) -> bool:
        """Check if there are any errors."""
        return len(self.errors) > 0

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "success": self.success,
            "output_path": self.output_path,
            "entry_count": self.entry_count,
            "subtotal_count": self.subtotal_count,
            "metrics": self.metrics,
            "stage_times": self.stage_times,
            "warnings": self.warnings,
            "errors": self.errors,
        }
