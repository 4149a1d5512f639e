"""Symbol table for name resolution."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from callslice.domain.model.import_ import Import


@dataclass(slots=True)
class SymbolTable:
    """Tracks module-level names for resolution.

    Mutable - filled during the name-resolution pass.

    Handles:
    - import X / import X.Y (binds X)
    - import X as Y
    - from X import Y
    - from X import Y as Z
    - own top-level classes and functions
    - from X import * is skipped: names it might bind resolve to None

    Attributes:
        _direct: Local name → fully qualified name mapping
    """

    _direct: dict[str, str] = field(default_factory=dict)

    def add_import(self, imp: Import) -> None:
        """Register import in symbol table."""
        if imp.is_star:
            return
        self._direct[imp.bound_name] = imp.qualified_name

    def add_definition(self, name: str, fqn: str) -> None:
        """Register a module-level definition (class or function).

        Raises:
            ValueError: If name or fqn is empty
        """
        if not name:
            raise ValueError("name must not be empty")
        if not fqn:
            raise ValueError("fqn must not be empty")
        self._direct[name] = fqn

    def resolve(self, name: str) -> str | None:
        """Resolve local name to fully qualified name.

        Args:
            name: Local name to resolve (may include dots for attr access)

        Returns:
            Fully qualified name if found, None otherwise
        """
        # FAIL-FIRST: empty name
        if not name:
            raise ValueError("name must not be empty")

        # 1. Direct match
        if name in self._direct:
            return self._direct[name]

        # 2. Attribute chain: resolve first part, append rest
        # e.g., "os.path.join" → resolve("os") + ".path.join"
        if "." in name:
            first, rest = name.split(".", 1)
            if first in self._direct:
                return f"{self._direct[first]}.{rest}"

        return None

    def as_dict(self) -> dict[str, str]:
        """Snapshot of direct bindings."""
        return dict(self._direct)

    @property
    def size(self) -> int:
        """Total number of direct bindings."""
        return len(self._direct)
