"""Traversal entry point value object."""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class EntryPoint:
    """Starting (class, method) pair for traversal.

    Attributes:
        class_name: Fully qualified class name (e.g. "app.web.UserController")
        method_name: Method name (e.g. "create")
    """

    class_name: str
    method_name: str

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not self.class_name:
            raise ValueError("class_name must not be empty")
        if not self.method_name:
            raise ValueError("method_name must not be empty")
        if not self.method_name.isidentifier():
            raise ValueError(f"method_name must be identifier, got '{self.method_name}'")

    @property
    def fully_qualified_name(self) -> str:
        """Dotted name: class.method."""
        return f"{self.class_name}.{self.method_name}"

    @property
    def key(self) -> str:
        """Visited-set key: class::method."""
        return f"{self.class_name}::{self.method_name}"

    def __str__(self) -> str:
        return self.fully_qualified_name
