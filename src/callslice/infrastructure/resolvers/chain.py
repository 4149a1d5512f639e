"""Resolver chaining several resolvers."""

from __future__ import annotations

from typing import TYPE_CHECKING

from callslice.domain.ports.class_resolver import ClassResolverPort

if TYPE_CHECKING:
    from pathlib import Path


class ChainResolver(ClassResolverPort):
    """First resolver that finds the FQN wins."""

    def __init__(self, *resolvers: ClassResolverPort) -> None:
        if not resolvers:
            raise ValueError("at least one resolver required")
        self._resolvers = resolvers

    def resolve(self, fqn: str) -> Path | None:
        for resolver in self._resolvers:
            path = resolver.resolve(fqn)
            if path is not None:
                return path
        return None
