"""Pipeline stages for Tallysheet."""

from tallysheet.pipeline.stages.parse_stage import ParseStage
from tallysheet.pipeline.stages.evaluate_stage import EvaluateStage
from tallysheet.pipeline.stages.format_stage import FormatStage
from tallysheet.pipeline.stages.output_stage import OutputStage

__all__ = [
    "ParseStage",
    "EvaluateStage",
    "FormatStage",
    "OutputStage",
]
