"""Abstract base class for output formatters."""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import List

from tallysheet.models import Document
from tallysheet.exceptions import TallysheetWriteError


class OutputFormatter(ABC):
    """Abstract base class for output formatters."""

    def __init__(self, encoding: str = "utf-8") -> None:
        self._encoding = encoding

    @abstractmethod
    def render(self, document: Document) -> List[str]:
        """Render an evaluated document.

        Args:
            document: Evaluated document

        Returns:
            Output lines without terminators
        """
        pass

    def format_to_string(self, document: Document) -> str:
        """Format a document to a string without writing to file.

        Args:
            document: Evaluated document

        Returns:
            Formatted text, newline-terminated unless empty
        """
        lines = self.render(document)
        if not lines:
            return ""
        return "\n".join(lines) + "\n"

    def format(self, document: Document, output_path: str) -> str:
        """Format a document and write it to a file.

        Args:
            document: Evaluated document
            output_path: Path to write output to

        Returns:
            Path to the written output file

        Raises:
            TallysheetWriteError: If the file cannot be written
        """
        content = self.format_to_string(document)

        path = Path(output_path)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding=self._encoding)
        except OSError as e:
            raise TallysheetWriteError(
                f"Failed to write worksheet: {e}",
                file_path=str(path),
            )

        return str(path)
