"""Abstract base class for worksheet parsers."""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import List, Sequence

from tallysheet.models import Document
from tallysheet.exceptions import TallysheetReadError


class DocumentParser(ABC):
    """Abstract base class for worksheet parsers."""

    def __init__(self, encoding: str = "utf-8") -> None:
        """Initialize the parser.

        Args:
            encoding: Encoding used when reading files
        """
        self._encoding = encoding

    @abstractmethod
    def parse_lines(self, lines: Sequence[str], filename: str = "") -> Document:
        """Parse a sequence of raw lines into a Document model.

        Args:
            lines: Lines without their line terminators
            filename: Name recorded on the document

        Returns:
            Parsed Document model
        """
        pass

    def parse_text(self, text: str, filename: str = "") -> Document:
        """Parse worksheet text into a Document model."""
        return self.parse_lines(self.split_lines(text), filename=filename)

    def parse(self, file_path: Path) -> Document:
        """Read and parse a worksheet file.

        Args:
            file_path: Path to the worksheet

        Returns:
            Parsed Document model

        Raises:
            TallysheetReadError: If the file cannot be read
        """
        file_path = Path(file_path)

        try:
            content = file_path.read_text(encoding=self._encoding)
        except UnicodeDecodeError as e:
            raise TallysheetReadError(
                f"Failed to decode {file_path} as {self._encoding}: {e}",
                file_path=str(file_path),
            )
        except OSError as e:
            raise TallysheetReadError(
                f"Failed to read worksheet: {e}",
                file_path=str(file_path),
            )

        return self.parse_text(content, filename=file_path.name)

    @staticmethod
    def split_lines(text: str) -> List[str]:
        """Split text on line feeds only, dropping terminators.

        Form feeds and other characters that str.splitlines() treats as
        breaks stay inside their line.
        """
        lines = text.split("\n")
        if lines[-1] == "":
            lines.pop()
        return [line[:-1] if line.endswith("\r") else line for line in lines]
