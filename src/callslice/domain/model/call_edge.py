"""Call edge produced by the call extractor."""

from dataclasses import dataclass

from callslice.domain.model.call_kind import CallKind


@dataclass(frozen=True, slots=True)
class CallEdge:
    """One call/construction/parameter-type relationship in a member body.

    Immutable value object with FAIL-FIRST validation.
    Ephemeral: produced per analyzed member, consumed by the traverser.

    Attributes:
        kind: Relationship kind
        target_class: Resolved class FQN, None when the receiver is unknown
        target_member: Member name; for function calls the function FQN
            (or bare name when unresolvable); None for parameter types
        line: Source line (1-based)
        receiver: Receiver text as written in source, for diagnostics
    """

    kind: CallKind
    target_class: str | None
    target_member: str | None
    line: int
    receiver: str | None = None

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not isinstance(self.kind, CallKind):
            raise TypeError(f"kind must be CallKind, got {type(self.kind).__name__}")
        if self.line < 1:
            raise ValueError(f"line must be >= 1, got {self.line}")
        if self.target_class is not None and not self.target_class:
            raise ValueError("target_class must be non-empty string or None")

        match self.kind:
            case CallKind.PARAMETER_TYPE:
                if self.target_class is None:
                    raise ValueError("parameter type edge requires target_class")
                if self.target_member is not None:
                    raise ValueError("parameter type edge must not carry a member")
            case CallKind.FUNCTION_CALL:
                if self.target_class is not None:
                    raise ValueError("function call edge must not carry a class")
                if not self.target_member:
                    raise ValueError("function call edge requires target_member")
            case _:
                if not self.target_member:
                    raise ValueError(f"{self.kind.name} edge requires target_member")

    @property
    def is_typed(self) -> bool:
        """Whether the edge names a concrete target (class or function)."""
        if self.kind is CallKind.FUNCTION_CALL:
            return True
        return self.target_class is not None

    def __str__(self) -> str:
        """Format as target:line (kind)."""
        owner = self.target_class or "?"
        if self.kind is CallKind.FUNCTION_CALL:
            target = self.target_member
        elif self.target_member is None:
            target = owner
        else:
            target = f"{owner}.{self.target_member}"
        return f"{target}:{self.line} ({self.kind.value})"
