"""Import statement entity."""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Import:
    """One imported alias of a Python import statement.

    Represents:
    - import X              (name=None)
    - import X.Y as Z       (name=None, alias=Z)
    - from X import Y       (name=Y)
    - from ..X import Y     (name=Y, module resolved to absolute, level=2)

    Attributes:
        module: Full module path (resolved to absolute for relative imports)
        name: Imported name (None for 'import X')
        alias: Alias (for 'as Z')
        level: Relative import level (0=absolute, 1=from ., 2=from ..)
    """

    module: str
    name: str | None = None
    alias: str | None = None
    level: int = 0

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not self.module:
            raise ValueError("import module must not be empty")
        if self.level < 0:
            raise ValueError(f"level must be >= 0, got {self.level}")
        if self.alias is not None and self.alias == "":
            raise ValueError("alias must be non-empty string or None")
        if self.name is not None and self.name == "":
            raise ValueError("name must be non-empty string or None")

    @property
    def is_star(self) -> bool:
        return self.name == "*"

    @property
    def bound_name(self) -> str:
        """Name bound in the importing scope.

        'import a.b' binds 'a'; 'import a.b as c' binds 'c';
        'from a import b' binds 'b'.
        """
        if self.alias is not None:
            return self.alias
        if self.name is not None:
            return self.name
        return self.module.partition(".")[0]

    @property
    def qualified_name(self) -> str:
        """FQN the bound name refers to."""
        if self.name is not None:
            return f"{self.module}.{self.name}"
        if self.alias is not None:
            return self.module
        return self.module.partition(".")[0]

    @property
    def sort_key(self) -> str:
        """Deterministic dedup/sort key: FQN plus optional alias."""
        base = self.qualified_name if self.name is not None else self.module
        return f"{base} as {self.alias}" if self.alias is not None else base
