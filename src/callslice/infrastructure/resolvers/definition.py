"""Locating class and function definitions across files."""

from __future__ import annotations

import ast
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from callslice.domain.model.syntax_tree import SyntaxTree, fqn_of

if TYPE_CHECKING:
    from callslice.domain.ports.class_resolver import ClassResolverPort
    from callslice.domain.ports.syntax_tree_provider import SyntaxTreeProviderPort

logger = logging.getLogger(__name__)

# Maximum number of re-export hops followed (package __init__ re-exports)
MAX_REEXPORT_HOPS = 3

DefinitionNode = ast.ClassDef | ast.FunctionDef | ast.AsyncFunctionDef


@dataclass(frozen=True, slots=True)
class Definition:
    """Located class or module-level function.

    Attributes:
        fqn: FQN as stamped in the defining tree (after re-export hops)
        tree: Tree of the defining file
        node: Definition node inside tree
    """

    fqn: str
    tree: SyntaxTree
    node: DefinitionNode

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not self.fqn:
            raise ValueError("fqn must not be empty")

    @property
    def is_class(self) -> bool:
        return isinstance(self.node, ast.ClassDef)


class DefinitionLocator:
    """Resolves FQN → defining file → definition node.

    When the resolved module does not define the name but imports it
    (``from .models import User`` in a package __init__), the import
    target is located instead, up to MAX_REEXPORT_HOPS times.
    """

    def __init__(
        self,
        class_resolver: ClassResolverPort,
        provider: SyntaxTreeProviderPort,
    ) -> None:
        if class_resolver is None:
            raise TypeError("class_resolver must not be None")
        if provider is None:
            raise TypeError("provider must not be None")
        self._class_resolver = class_resolver
        self._provider = provider

    def locate(self, fqn: str) -> Definition | None:
        """Locate definition of FQN.

        Args:
            fqn: Class or module-level function FQN

        Returns:
            Definition, None when unresolved, unparseable or not found
        """
        if not fqn:
            raise ValueError("fqn must not be empty")

        current = fqn
        for _ in range(MAX_REEXPORT_HOPS + 1):
            path = self._class_resolver.resolve(current)
            if path is None:
                logger.debug("no file for %s", current)
                return None

            tree = self._provider.get(path)
            if tree is None:
                return None

            node = find_definition(tree, current)
            if node is not None:
                return Definition(fqn=fqn_of(node) or current, tree=tree, node=node)

            target = reexport_target(tree, current)
            if target is None or target == current:
                logger.debug("%s not defined in %s", current, path)
                return None
            logger.debug("following re-export %s → %s", current, target)
            current = target

        logger.debug("too many re-export hops for %s", fqn)
        return None


def find_definition(tree: SyntaxTree, fqn: str) -> DefinitionNode | None:
    """Class (possibly nested) or module-level function of tree named by FQN.

    Falls back to matching the last segment against top-level
    definitions when the tree's module name differs from the FQN's
    module part (file found outside the configured source roots).
    """
    found = tree.find_class(fqn) or tree.find_function(fqn)
    if found is not None:
        return found
    if fqn.startswith(f"{tree.module_name}."):
        return None

    name = fqn.rpartition(".")[2]
    for stmt in tree.root.body:
        if isinstance(stmt, ast.ClassDef | ast.FunctionDef | ast.AsyncFunctionDef) and stmt.name == name:
            return stmt
    return None


def reexport_target(tree: SyntaxTree, fqn: str) -> str | None:
    """FQN the module re-exports under fqn, None if not an import."""
    prefix = f"{tree.module_name}."
    if not fqn.startswith(prefix):
        return None
    local = fqn[len(prefix) :]
    return tree.resolve(local)
