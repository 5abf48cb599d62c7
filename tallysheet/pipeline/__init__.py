"""Pipeline components for Tallysheet."""

from tallysheet.pipeline.base import PipelineStage
from tallysheet.pipeline.context import PipelineContext
from tallysheet.pipeline.orchestrator import PipelineOrchestrator

__all__ = [
    "PipelineStage",
    "PipelineContext",
    "PipelineOrchestrator",
]
