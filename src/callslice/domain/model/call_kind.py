"""Call kind enum for static analysis."""

from enum import Enum


class CallKind(Enum):
    """Kind of relationship found in a member body.

    Values are stable strings: they appear in JSON reports.
    """

    METHOD_CALL = "method_call"  # obj.method()
    STATIC_CALL = "static_call"  # SomeClass.method()
    FUNCTION_CALL = "function_call"  # func() or module.func()
    CONSTRUCTION = "construction"  # SomeClass()
    INVOKABLE_CALL = "invokable_call"  # handler() where handler is a typed local
    PARAMETER_TYPE = "parameter_type"  # def handle(self, dto: Dto)

    @property
    def is_recursable(self) -> bool:
        """Whether the traverser may expand a reference of this kind."""
        return self is not CallKind.PARAMETER_TYPE
