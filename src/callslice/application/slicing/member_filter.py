"""Member filtering of a module copy."""

from __future__ import annotations

import ast
import copy

from callslice.infrastructure.analyzers.base import CONSTRUCTOR_NAMES


def filter_members(root: ast.Module, keep: frozenset[str]) -> ast.Module:
    """Deep copy of root with only the kept members.

    - every class (nested ones included): constructors and methods in
      keep survive, other methods are dropped, other statements stay
    - module-level functions survive only when named in keep
    - other module statements stay
    - a class left without statements gets ``pass``

    Args:
        root: Module to filter (not modified; FQN stamps survive the copy)
        keep: Closed member set

    Returns:
        Filtered copy
    """
    module = copy.deepcopy(root)
    module.body = [
        stmt
        for stmt in module.body
        if not isinstance(stmt, ast.FunctionDef | ast.AsyncFunctionDef) or stmt.name in keep
    ]

    stack = [stmt for stmt in module.body if isinstance(stmt, ast.ClassDef)]
    while stack:
        class_node = stack.pop()
        class_node.body = [stmt for stmt in class_node.body if _survives(stmt, keep)]
        if not class_node.body:
            class_node.body = [ast.Pass()]
        stack.extend(stmt for stmt in class_node.body if isinstance(stmt, ast.ClassDef))

    return module


def _survives(stmt: ast.stmt, keep: frozenset[str]) -> bool:
    match stmt:
        case ast.FunctionDef(name=name) | ast.AsyncFunctionDef(name=name):
            return name in CONSTRUCTOR_NAMES or name in keep
    return True
