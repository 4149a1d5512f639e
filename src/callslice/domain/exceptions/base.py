"""Base exceptions for callslice domain."""


class CallSliceError(Exception):
    """Root exception for all callslice errors.

    All domain exceptions inherit from this.
    Allows catching all callslice-specific errors.
    """
