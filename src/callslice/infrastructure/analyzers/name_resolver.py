"""Name-resolution pass: stamps fully-qualified names on AST nodes."""

from __future__ import annotations

import ast

from callslice.domain.model.symbol_table import SymbolTable
from callslice.domain.model.syntax_tree import FQN_ATTR
from callslice.infrastructure.analyzers.import_analyzer import ImportAnalyzer


def dotted_name(node: ast.expr) -> str | None:
    """Dotted text of a Name/Attribute chain ("a.b.c"), None for other shapes."""
    parts: list[str] = []
    current = node
    while isinstance(current, ast.Attribute):
        parts.append(current.attr)
        current = current.value
    if not isinstance(current, ast.Name):
        return None
    parts.append(current.id)
    return ".".join(reversed(parts))


class NameResolver:
    """Builds the module symbol table and stamps FQNs in place.

    After resolve():
    - ast.Name bound by an import or own definition has ``fqn``
    - ast.Attribute chain whose base name resolves has ``fqn``
      (base FQN + "." + attributes)
    - ClassDef/FunctionDef/AsyncFunctionDef have their qualified ``fqn``
      (module.Outer.Inner, module.Class.method, module.function)

    Local shadowing of imported names is not tracked.
    """

    def __init__(self) -> None:
        self._imports = ImportAnalyzer()

    def resolve(
        self,
        tree: ast.Module,
        module_name: str,
        *,
        is_package: bool = False,
    ) -> SymbolTable:
        """Run the pass on tree (mutates nodes).

        Args:
            tree: Freshly parsed module
            module_name: Fully qualified module name
            is_package: Module is a package __init__

        Returns:
            Filled symbol table
        """
        if not module_name:
            raise ValueError("module_name must be non-empty string")

        table = SymbolTable()
        for imp in self._imports.analyze(tree, module_name, is_package=is_package):
            table.add_import(imp)

        for stmt in tree.body:
            if isinstance(stmt, ast.ClassDef | ast.FunctionDef | ast.AsyncFunctionDef):
                table.add_definition(stmt.name, f"{module_name}.{stmt.name}")

        self._stamp_definitions(tree, module_name)
        self._stamp_references(tree, table)
        return table

    @staticmethod
    def _stamp_definitions(tree: ast.Module, module_name: str) -> None:
        stack: list[tuple[ast.AST, str]] = [(tree, module_name)]
        while stack:
            node, scope = stack.pop()
            for child in ast.iter_child_nodes(node):
                match child:
                    case ast.ClassDef(name=name) | ast.FunctionDef(name=name) | ast.AsyncFunctionDef(
                        name=name
                    ):
                        qualified = f"{scope}.{name}"
                        setattr(child, FQN_ATTR, qualified)
                        stack.append((child, qualified))
                    case _:
                        stack.append((child, scope))

    @staticmethod
    def _stamp_references(tree: ast.Module, table: SymbolTable) -> None:
        for node in ast.walk(tree):
            match node:
                case ast.Name(id=name):
                    fqn = table.resolve(name)
                    if fqn is not None:
                        setattr(node, FQN_ATTR, fqn)
                case ast.Attribute():
                    dotted = dotted_name(node)
                    if dotted is None:
                        continue
                    fqn = table.resolve(dotted)
                    if fqn is not None:
                        setattr(node, FQN_ATTR, fqn)
