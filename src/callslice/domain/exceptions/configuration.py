"""Project configuration exceptions."""

from __future__ import annotations

from typing import TYPE_CHECKING

from callslice.domain.exceptions.base import CallSliceError

if TYPE_CHECKING:
    from pathlib import Path


class ConfigurationError(CallSliceError):
    """Structurally invalid project configuration.

    The only fatal condition: reported before any traversal begins.

    Attributes:
        path: Configuration file (e.g. pyproject.toml)
        reason: What is wrong with it
    """

    def __init__(self, path: Path, reason: str) -> None:
        if path is None:
            raise TypeError("path must not be None")
        if not reason:
            raise ValueError("reason must be non-empty string")

        self.path = path
        self.reason = reason
        super().__init__(f"Invalid configuration {path}: {reason}")
