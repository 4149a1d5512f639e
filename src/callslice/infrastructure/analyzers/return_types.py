"""Return type and definition kind lookup across files."""

from __future__ import annotations

import ast
from typing import TYPE_CHECKING

from callslice.domain.model.syntax_tree import fqn_of
from callslice.infrastructure.analyzers.base import find_method
from callslice.infrastructure.analyzers.type_hints import TypeHintResolver

if TYPE_CHECKING:
    from callslice.domain.model.syntax_tree import SyntaxTree
    from callslice.infrastructure.resolvers.definition import DefinitionLocator


def _returns_self(annotation: ast.expr | None) -> bool:
    match annotation:
        case ast.Name(id="Self") | ast.Attribute(attr="Self"):
            return True
        case ast.Constant(value="Self"):
            return True
    return False


class ReturnTypeResolver:
    """Reads declared return types of methods and functions.

    Single level: the return annotation is resolved, the returned
    object is never analyzed further. Definitions in the current tree
    are found directly; others are loaded through the locator (when
    configured). Every failure yields None.
    """

    def __init__(self, locator: DefinitionLocator | None = None) -> None:
        self._locator = locator

    def method_return(self, tree: SyntaxTree, class_name: str, method_name: str) -> str | None:
        """Class FQN returned by class_name.method_name, None if unknown.

        Args:
            tree: Tree the call appears in
            class_name: Receiver class FQN
            method_name: Called method
        """
        located = self._class(tree, class_name)
        if located is None:
            return None
        owner, class_node = located

        method = find_method(class_node, method_name)
        if method is None:
            return None
        if _returns_self(method.returns):
            return fqn_of(class_node) or class_name
        return TypeHintResolver(owner).resolve(method.returns).class_name

    def is_class(self, tree: SyntaxTree, fqn: str) -> bool | None:
        """Whether fqn names a class, from its definition.

        Same-module definitions are checked first, then the locator.

        Returns:
            True for a class, False for a function, None when no
            definition is found
        """
        if tree.find_class(fqn) is not None:
            return True
        if tree.find_function(fqn) is not None:
            return False
        if self._locator is None:
            return None
        definition = self._locator.locate(fqn)
        if definition is None:
            return None
        return definition.is_class

    def function_return(self, tree: SyntaxTree, function_name: str) -> str | None:
        """Class FQN returned by module-level function, None if unknown."""
        node = tree.find_function(function_name)
        owner = tree
        if node is None and self._locator is not None:
            definition = self._locator.locate(function_name)
            if definition is not None and not definition.is_class:
                node, owner = definition.node, definition.tree
        if not isinstance(node, ast.FunctionDef | ast.AsyncFunctionDef):
            return None
        return TypeHintResolver(owner).resolve(node.returns).class_name

    def _class(self, tree: SyntaxTree, class_name: str) -> tuple[SyntaxTree, ast.ClassDef] | None:
        node = tree.find_class(class_name)
        if node is not None:
            return tree, node
        if self._locator is None:
            return None
        definition = self._locator.locate(class_name)
        if definition is None or not isinstance(definition.node, ast.ClassDef):
            return None
        return definition.tree, definition.node
