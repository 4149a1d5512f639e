"""Per-member type environment for receiver resolution."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType


@dataclass(frozen=True, slots=True)
class ClassTypes:
    """Property types of one class, collected once per class.

    Attributes:
        class_name: Class FQN
        property_types: Property name → declared class FQN
        element_types: Property name → element class FQN for collections
    """

    class_name: str
    property_types: Mapping[str, str] = field(default_factory=dict)
    element_types: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not self.class_name:
            raise ValueError("class_name must not be empty")
        object.__setattr__(self, "property_types", MappingProxyType(dict(self.property_types)))
        object.__setattr__(self, "element_types", MappingProxyType(dict(self.element_types)))

    def property_type(self, name: str) -> str | None:
        return self.property_types.get(name)

    def element_type(self, name: str) -> str | None:
        """Element type of a collection property, falling back to its declared type."""
        return self.element_types.get(name) or self.property_types.get(name)


@dataclass(slots=True)
class TypeEnvironment:
    """Local name → inferred class FQN for one member body.

    Mutable, scoped to one member traversal; discarded on exit.

    Attributes:
        class_types: Property types of the enclosing class (None for functions)
        _locals: Local name → class FQN
    """

    class_types: ClassTypes | None = None
    _locals: dict[str, str] = field(default_factory=dict)

    def bind(self, name: str, class_name: str) -> None:
        """Record inferred type of local name (later bindings win)."""
        if not name:
            raise ValueError("name must not be empty")
        if not class_name:
            raise ValueError("class_name must not be empty")
        self._locals[name] = class_name

    def lookup(self, name: str) -> str | None:
        return self._locals.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self._locals

    @property
    def enclosing_class(self) -> str | None:
        return self.class_types.class_name if self.class_types is not None else None

    def property_type(self, name: str) -> str | None:
        if self.class_types is None:
            return None
        return self.class_types.property_type(name)

    def element_type(self, name: str) -> str | None:
        if self.class_types is None:
            return None
        return self.class_types.element_type(name)
