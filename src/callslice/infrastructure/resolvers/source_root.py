"""Resolver over declared source roots."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

from callslice.domain.ports.class_resolver import ClassResolverPort


def module_candidates(parts: Sequence[str]) -> list[tuple[str, ...]]:
    """Module prefixes of a dotted name, longest first."""
    return [tuple(parts[:i]) for i in range(len(parts), 0, -1)]


class SourceRootResolver(ClassResolverPort):
    """Maps FQNs to files under declared source roots.

    The longest module prefix of the FQN that exists as ``module.py``
    or ``module/__init__.py`` under some root wins; roots are tried in
    declaration order for each prefix.
    """

    def __init__(self, source_roots: Sequence[Path]) -> None:
        if source_roots is None:
            raise TypeError("source_roots must not be None")
        self._roots = tuple(root.resolve() for root in source_roots)

    @property
    def roots(self) -> tuple[Path, ...]:
        return self._roots

    def resolve(self, fqn: str) -> Path | None:
        if not fqn:
            raise ValueError("fqn must not be empty")

        parts = fqn.split(".")
        if not all(part.isidentifier() for part in parts):
            return None

        for prefix in module_candidates(parts):
            for root in self._roots:
                module_file = root.joinpath(*prefix).with_suffix(".py")
                if module_file.is_file():
                    return module_file.resolve()
                package_init = root.joinpath(*prefix, "__init__.py")
                if package_init.is_file():
                    return package_init.resolve()
        return None
