"""Parsing exceptions."""

from __future__ import annotations

from typing import TYPE_CHECKING

from callslice.domain.exceptions.base import CallSliceError

if TYPE_CHECKING:
    from pathlib import Path


class ParsingError(CallSliceError):
    """Error during source code parsing.

    Raised by the parser adapter. The caching provider converts it into
    an absent tree, so traversal degrades instead of aborting.

    Attributes:
        path: File that failed to parse
        reason: Why parsing failed
    """

    def __init__(self, path: Path, reason: str) -> None:
        # FAIL-FIRST: validate required parameters
        if path is None:
            raise TypeError("path must not be None")
        if not reason:
            raise ValueError("reason must be non-empty string")

        self.path = path
        self.reason = reason
        super().__init__(f"Failed to parse {path}: {reason}")
