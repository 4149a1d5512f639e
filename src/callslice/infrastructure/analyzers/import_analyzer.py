"""Import statement analyzer."""

from __future__ import annotations

import ast
import logging

from callslice.domain.model.import_ import Import
from callslice.infrastructure.analyzers.base import resolve_relative_import

logger = logging.getLogger(__name__)

ImportNode = ast.Import | ast.ImportFrom


class ImportAnalyzer:
    """Extracts imports from Python AST.

    Collects every import of the module: top-level, inside
    ``if TYPE_CHECKING:`` blocks and function-local ones. Relative
    imports are resolved to absolute module paths; imports escaping the
    package are skipped.

    Stateless analyzer - no state between analyze() calls.
    """

    def analyze(
        self,
        tree: ast.Module,
        module_name: str,
        *,
        is_package: bool = False,
    ) -> tuple[Import, ...]:
        """Extract all imports from module.

        Args:
            tree: Parsed AST module
            module_name: Fully qualified module name
            is_package: Module is a package __init__

        Returns:
            Tuple of Import objects in source order
        """
        if not module_name:
            raise ValueError("module_name must be non-empty string")

        nodes = sorted(
            (node for node in ast.walk(tree) if isinstance(node, ast.Import | ast.ImportFrom)),
            key=lambda node: (node.lineno, node.col_offset),
        )
        imports: list[Import] = []
        for node in nodes:
            imports.extend(convert_import(node, module_name, is_package=is_package))
        return tuple(imports)


def convert_import(
    node: ImportNode,
    module_name: str,
    *,
    is_package: bool = False,
) -> tuple[Import, ...]:
    """Convert one import statement to Import objects (one per alias).

    Returns empty tuple for relative imports escaping the package.
    """
    match node:
        case ast.Import(names=names):
            return tuple(Import(module=alias.name, alias=alias.asname) for alias in names)
        case ast.ImportFrom(module=module, names=names, level=level):
            try:
                resolved = resolve_relative_import(module, level, module_name, is_package=is_package)
            except ValueError as e:
                logger.debug("skipping import in %s: %s", module_name, e)
                return ()
            return tuple(
                Import(module=resolved, name=alias.name, alias=alias.asname, level=level)
                for alias in names
            )
    raise TypeError(f"expected import statement, got {type(node).__name__}")


def is_type_checking_block(node: ast.If) -> bool:
    """Check if node is 'if TYPE_CHECKING:' block."""
    match node.test:
        case ast.Name(id="TYPE_CHECKING"):
            return True
        case ast.Attribute(value=ast.Name(id="typing"), attr="TYPE_CHECKING"):
            return True
    return False
