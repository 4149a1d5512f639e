"""Syntax tree provider port (interface)."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path

    from callslice.domain.model.syntax_tree import SyntaxTree


class SyntaxTreeProviderPort(ABC):
    """Port for obtaining parsed, name-resolved trees.

    Infrastructure layer must provide implementation.
    """

    @abstractmethod
    def get(self, path: Path) -> SyntaxTree | None:
        """Parsed tree for file.

        Never raises: unreadable or unparseable files yield None.

        Args:
            path: Path to .py file (any on-disk form)

        Returns:
            SyntaxTree or None
        """
        ...
