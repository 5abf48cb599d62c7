"""Custom exceptions for Tallysheet."""

from typing import Optional


class TallysheetError(Exception):
    """Base exception for all Tallysheet errors."""

    pass


class TallysheetConfigError(TallysheetError):
    """Raised when configuration is invalid."""

    def __init__(self, message: str, config_key: Optional[str] = None):
        super().__init__(message)
        self.config_key = config_key


class TallysheetReadError(TallysheetError):
    """Raised when a worksheet cannot be read."""

    def __init__(self, message: str, file_path: Optional[str] = None):
        super().__init__(message)
        self.file_path = file_path


class TallysheetWriteError(TallysheetError):
    """Raised when the formatted worksheet cannot be written."""

    def __init__(self, message: str, file_path: Optional[str] = None):
        super().__init__(message)
        self.file_path = file_path


class TallysheetPipelineError(TallysheetError):
    """Raised when pipeline execution fails."""

    def __init__(self, message: str, stage_name: Optional[str] = None):
        super().__init__(message)
        self.stage_name = stage_name
