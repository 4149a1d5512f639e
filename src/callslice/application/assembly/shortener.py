"""Name shortening: qualified references to imported or local names."""

from __future__ import annotations

import ast
from typing import TYPE_CHECKING

from callslice.domain.model.syntax_tree import FQN_ATTR, fqn_of

if TYPE_CHECKING:
    from callslice.application.assembly.blocks import ModuleBlock


class NameShortener(ast.NodeTransformer):
    """Rewrites qualified attribute chains to short names.

    "models.User" (FQN app.models.User) becomes:
    - the bound alias when the block has a from-import of that FQN
    - the bare name when the FQN is defined in the block's own module

    Relies on FQNs stamped by the name resolver.
    """

    def __init__(self, block: ModuleBlock) -> None:
        self._module_name = block.module_name
        self._aliases = {
            imp.qualified_name: imp.bound_name for imp in block.imports if imp.name is not None
        }

    def visit_Attribute(self, node: ast.Attribute) -> ast.AST:
        fqn = fqn_of(node)
        if fqn is not None:
            short = self._short_name(fqn)
            if short is not None:
                replacement = ast.copy_location(ast.Name(id=short, ctx=node.ctx), node)
                setattr(replacement, FQN_ATTR, fqn)
                return replacement
        self.generic_visit(node)
        return node

    def _short_name(self, fqn: str) -> str | None:
        if fqn in self._aliases:
            return self._aliases[fqn]
        module, _, name = fqn.rpartition(".")
        if module == self._module_name:
            return name
        return None


def shorten_names(block: ModuleBlock) -> ModuleBlock:
    """Apply NameShortener to block body in place."""
    shortener = NameShortener(block)
    block.body = [shortener.visit(stmt) for stmt in block.body]
    return block
