"""Source parser port (interface)."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path

    from callslice.domain.model.syntax_tree import SyntaxTree


class SourceParserPort(ABC):
    """Port for parsing one source file.

    Infrastructure layer must provide implementation.
    """

    @abstractmethod
    def parse_file(self, path: Path) -> SyntaxTree:
        """Parse single Python file and resolve its names.

        Args:
            path: Canonical path to .py file

        Returns:
            Parsed SyntaxTree

        Raises:
            ParsingError: If file cannot be read or parsed
        """
        ...
