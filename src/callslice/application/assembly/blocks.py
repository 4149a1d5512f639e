"""Module blocks: the unit of assembly."""

from __future__ import annotations

import ast
import copy
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

from callslice.domain.model.import_ import Import
from callslice.infrastructure.analyzers.base import is_package_init
from callslice.infrastructure.analyzers.import_analyzer import convert_import, is_type_checking_block

if TYPE_CHECKING:
    from callslice.domain.model.code_slice import Slice


@dataclass(slots=True)
class ModuleBlock:
    """One module's contribution to the artifact.

    Mutable - rewritten in place by the assembly passes.

    Attributes:
        module_name: Dotted module name of the source file
        path: Source path as shown in the provenance line
        imports: Module-level imports, one alias each
        body: Remaining top-level statements
    """

    module_name: str
    path: str
    imports: list[Import] = field(default_factory=list)
    body: list[ast.stmt] = field(default_factory=list)

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not self.module_name:
            raise ValueError("module_name must not be empty")
        if not self.path:
            raise ValueError("path must not be empty")

    @property
    def classes(self) -> list[ast.ClassDef]:
        return [stmt for stmt in self.body if isinstance(stmt, ast.ClassDef)]

    def copy_with_body(self, body: list[ast.stmt]) -> ModuleBlock:
        """New block sharing name and path, with a copy of the import list."""
        return ModuleBlock(
            module_name=self.module_name,
            path=self.path,
            imports=list(self.imports),
            body=body,
        )


def display_path(path: Path, project_root: Path) -> str:
    """Path relative to project root (POSIX form), absolute when outside."""
    try:
        return path.relative_to(project_root).as_posix()
    except ValueError:
        return path.as_posix()


def block_from_slice(code_slice: Slice, project_root: Path) -> ModuleBlock:
    """Split slice tree into import list and body.

    Imports inside ``if TYPE_CHECKING:`` blocks join the import list;
    an emptied TYPE_CHECKING block is dropped. Relative imports become
    absolute. Statements are deep copies of the slice tree.
    """
    is_package = is_package_init(code_slice.path)
    block = ModuleBlock(
        module_name=code_slice.module_name,
        path=display_path(code_slice.path, project_root.resolve()),
    )

    for stmt in copy.deepcopy(code_slice.tree).body:
        match stmt:
            case ast.Import() | ast.ImportFrom():
                block.imports.extend(convert_import(stmt, code_slice.module_name, is_package=is_package))
            case ast.If() if is_type_checking_block(stmt):
                rest: list[ast.stmt] = []
                for inner in stmt.body:
                    if isinstance(inner, ast.Import | ast.ImportFrom):
                        block.imports.extend(
                            convert_import(inner, code_slice.module_name, is_package=is_package)
                        )
                    else:
                        rest.append(inner)
                if rest:
                    stmt.body = rest
                    block.body.append(stmt)
            case _:
                block.body.append(stmt)
    return block


def import_statement(imp: Import) -> ast.stmt:
    """Single-alias import statement for Import."""
    alias = ast.alias(name=imp.name or imp.module, asname=imp.alias)
    if imp.name is None:
        return ast.Import(names=[alias])
    return ast.ImportFrom(module=imp.module, names=[alias], level=0)
