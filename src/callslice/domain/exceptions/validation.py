"""Entry point validation exceptions."""

from callslice.domain.exceptions.base import CallSliceError


class InvalidEntryPointError(CallSliceError):
    """Entry point text cannot be split into class and method.

    Attributes:
        text: Entry point as given by the user (must not be empty)
        reason: Why it is invalid (must not be empty)
    """

    def __init__(self, text: str, reason: str) -> None:
        # FAIL-FIRST validation
        if not text:
            raise ValueError("text must not be empty")
        if not reason:
            raise ValueError("reason must not be empty")

        self.text = text
        self.reason = reason
        super().__init__(f"Invalid entry point '{text}': {reason}")
