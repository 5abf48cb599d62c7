"""Configuration for Tallysheet."""

import codecs
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Any
import os

import yaml

from tallysheet.exceptions import TallysheetConfigError
from tallysheet.models import AccumulationMode, RenderMode


@dataclass
class TallysheetConfig:
    """Configuration for worksheet processing."""

    # Evaluation
    accumulation_mode: str = AccumulationMode.SUM.value
    """How entries combine into subtotals: "sum" or "remainder"."""

    # Rendering
    render_mode: str = RenderMode.VALUE.value
    """What the value column shows for entries: "value" or "expression"."""

    precision: int = 2
    """Fractional digits for numbers that are not whole."""

    # I/O
    encoding: str = "utf-8"
    """Encoding used to read and write worksheets."""

    # Pipeline behavior
    continue_on_error: bool = False
    """Continue pipeline execution on stage errors."""

    # Logging
    verbose: bool = False
    """Enable verbose logging output."""

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        self._validate()

    def _validate(self) -> None:
        """Validate configuration values."""
        modes = [m.value for m in AccumulationMode]
        if self.accumulation_mode not in modes:
            raise TallysheetConfigError(
                f"accumulation_mode must be one of {modes}, got {self.accumulation_mode!r}",
                "accumulation_mode",
            )

        renders = [m.value for m in RenderMode]
        if self.render_mode not in renders:
            raise TallysheetConfigError(
                f"render_mode must be one of {renders}, got {self.render_mode!r}",
                "render_mode",
            )

        if isinstance(self.precision, bool) or not isinstance(self.precision, int):
            raise TallysheetConfigError(
                f"precision must be an integer, got {self.precision!r}",
                "precision",
            )

        if not 0 <= self.precision <= 10:
            raise TallysheetConfigError(
                f"precision must be between 0 and 10, got {self.precision}",
                "precision",
            )

        try:
            codecs.lookup(self.encoding)
        except LookupError:
            raise TallysheetConfigError(
                f"Unknown encoding: {self.encoding}",
                "encoding",
            )

    @property
    def accumulation(self) -> AccumulationMode:
        return AccumulationMode(self.accumulation_mode)

    @property
    def rendering(self) -> RenderMode:
        return RenderMode(self.render_mode)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TallysheetConfig":
        """Create configuration from dictionary."""
        # Handle nested structure from YAML
        flat_data = {}

        if "evaluation" in data:
            evaluation = data["evaluation"] or {}
            flat_data["accumulation_mode"] = evaluation.get("mode", "sum")

        if "format" in data:
            fmt = data["format"] or {}
            flat_data["render_mode"] = fmt.get("render", "value")
            flat_data["precision"] = fmt.get("precision", 2)

        if "behavior" in data:
            behavior = data["behavior"] or {}
            flat_data["encoding"] = behavior.get("encoding", "utf-8")
            flat_data["continue_on_error"] = behavior.get("continue_on_error", False)
            flat_data["verbose"] = behavior.get("verbose", False)

        # Also accept flat keys
        for key in [
            "accumulation_mode",
            "render_mode",
            "precision",
            "encoding",
            "continue_on_error",
            "verbose",
        ]:
            if key in data and key not in flat_data:
                flat_data[key] = data[key]

        return cls(**flat_data)

    @classmethod
    def from_yaml(cls, path: str) -> "TallysheetConfig":
        """Load configuration from YAML file."""
        file_path = Path(path)
        if not file_path.exists():
            raise TallysheetConfigError(f"Config file not found: {path}")

        try:
            with open(file_path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise TallysheetConfigError(f"Invalid YAML in config file: {e}")

        if data is None:
            data = {}

        if not isinstance(data, dict):
            raise TallysheetConfigError(
                f"Config file must contain a mapping, got {type(data).__name__}"
            )

        # Handle environment variable substitution
        data = cls._substitute_env_vars(data)

        return cls.from_dict(data)

    @classmethod
    def _substitute_env_vars(cls, data: Any) -> Any:
        """Recursively substitute environment variables in config."""
        if isinstance(data, dict):
            return {k: cls._substitute_env_vars(v) for k, v in data.items()}
        elif isinstance(data, list):
            return [cls._substitute_env_vars(item) for item in data]
        elif isinstance(data, str) and data.startswith("${") and data.endswith("}"):
            env_var = data[2:-1]
            return os.environ.get(env_var, "")
        return data

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        return {
            "accumulation_mode": self.accumulation_mode,
            "render_mode": self.render_mode,
            "precision": self.precision,
            "encoding": self.encoding,
            "continue_on_error": self.continue_on_error,
            "verbose": self.verbose,
        }
