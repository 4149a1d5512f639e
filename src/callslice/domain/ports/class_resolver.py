"""Class resolver port (interface)."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path


class ClassResolverPort(ABC):
    """Port for mapping fully-qualified names to source files.

    Infrastructure layer must provide implementation.
    """

    @abstractmethod
    def resolve(self, fqn: str) -> Path | None:
        """Resolve FQN of a class, function or module to its source file.

        Args:
            fqn: Dotted fully-qualified name (e.g. "app.models.User")

        Returns:
            Canonical absolute path (symlinks and '..' resolved),
            None if not found
        """
        ...

    def exists(self, fqn: str) -> bool:
        """Check if FQN resolves to a file."""
        return self.resolve(fqn) is not None
