"""Code slicer: per-file filtered copies for assembly."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from callslice.application.slicing.cleaner import strip_metadata
from callslice.application.slicing.closure import expand_members
from callslice.application.slicing.member_filter import filter_members
from callslice.domain.model.code_slice import Slice
from callslice.infrastructure.analyzers.base import CONSTRUCTOR_NAMES, iter_classes, iter_methods

if TYPE_CHECKING:
    from collections.abc import Iterable
    from pathlib import Path

    from callslice.domain.model.reference_collection import ReferenceCollection
    from callslice.domain.ports.syntax_tree_provider import SyntaxTreeProviderPort

logger = logging.getLogger(__name__)


class CodeSlicer:
    """Slices files down to the members a traversal reached.

    Works on deep copies: cached trees are never modified.
    """

    def __init__(self, provider: SyntaxTreeProviderPort) -> None:
        if provider is None:
            raise TypeError("provider must not be None")
        self._provider = provider

    def slice_file(self, path: Path, members: Iterable[str]) -> Slice | None:
        """Slice one file.

        Constructors are kept unconditionally, so their helpers join
        the closure too.

        Args:
            path: File to slice
            members: Member names referenced in the file

        Returns:
            Slice, None when the file cannot be parsed
        """
        tree = self._provider.get(path)
        if tree is None:
            logger.debug("cannot slice %s", path)
            return None

        constructors = {
            method.name
            for class_node in iter_classes(tree.root)
            for method in iter_methods(class_node)
            if method.name in CONSTRUCTOR_NAMES
        }
        closed = expand_members(tree.root, {*members, *constructors})
        sliced = strip_metadata(filter_members(tree.root, closed))

        return Slice(
            path=tree.path,
            module_name=tree.module_name,
            tree=sliced,
            members=closed,
        )

    def slice_collection(self, collection: ReferenceCollection) -> tuple[Slice, ...]:
        """Slice every file of collection, in first-seen order."""
        members = collection.members_per_file()
        slices: list[Slice] = []
        for path in collection.unique_file_paths():
            sliced = self.slice_file(path, members.get(path, frozenset()))
            if sliced is not None:
                slices.append(sliced)
        return tuple(slices)
