"""Domain exceptions."""

from callslice.domain.exceptions.base import CallSliceError
from callslice.domain.exceptions.configuration import ConfigurationError
from callslice.domain.exceptions.parsing import ParsingError
from callslice.domain.exceptions.validation import InvalidEntryPointError

__all__ = [
    "CallSliceError",
    "ConfigurationError",
    "InvalidEntryPointError",
    "ParsingError",
]
