"""Metadata stripping: docstrings and non-structural decorators."""

from __future__ import annotations

import ast

from callslice.infrastructure.analyzers.base import decorator_name, strip_docstring

# Decorators that change what a definition is (last dotted segment)
STRUCTURAL_DECORATORS = frozenset(
    {
        "staticmethod",
        "classmethod",
        "property",
        "cached_property",
        "setter",
        "getter",
        "deleter",
        "abstractmethod",
        "dataclass",
        "overload",
        # removed by the minimizer
        "final",
    }
)


def is_structural(decorator: ast.expr) -> bool:
    """Whether decorator must survive slicing."""
    return decorator_name(decorator).rpartition(".")[2] in STRUCTURAL_DECORATORS


def strip_metadata(module: ast.Module) -> ast.Module:
    """Remove docstrings and non-structural decorators in place.

    Bodies emptied by docstring removal get ``pass``.

    Args:
        module: Module copy to clean (mutated)

    Returns:
        The same module
    """
    module.body = strip_docstring(module.body)

    for node in ast.walk(module):
        if isinstance(node, ast.ClassDef | ast.FunctionDef | ast.AsyncFunctionDef):
            node.body = strip_docstring(node.body) or [ast.Pass()]
            node.decorator_list = [dec for dec in node.decorator_list if is_structural(dec)]
    return module
