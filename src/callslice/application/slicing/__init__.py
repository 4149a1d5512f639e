"""Code slicing: helper closure, member filter, metadata cleaner."""

from callslice.application.slicing.cleaner import strip_metadata
from callslice.application.slicing.closure import expand_members
from callslice.application.slicing.member_filter import filter_members
from callslice.application.slicing.slicer import CodeSlicer

__all__ = [
    "CodeSlicer",
    "expand_members",
    "filter_members",
    "strip_metadata",
]
