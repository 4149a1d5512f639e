"""AST-based source parser adapter.

Implements SourceParserPort using Python AST.
Produces name-resolved SyntaxTree objects.
"""

from __future__ import annotations

import ast
from collections.abc import Sequence
from pathlib import Path

from callslice.domain.exceptions.parsing import ParsingError
from callslice.domain.model.syntax_tree import SyntaxTree
from callslice.domain.ports.source_parser import SourceParserPort
from callslice.infrastructure.analyzers.base import compute_module_name, is_package_init
from callslice.infrastructure.analyzers.name_resolver import NameResolver


class ASTSourceParser(SourceParserPort):
    """Parser using Python AST plus the name-resolution pass.

    Stateless between parse_file() calls.

    FAIL-FIRST: raises ParsingError on any parsing issue.
    """

    def __init__(self, source_roots: Sequence[Path]) -> None:
        """Initialize parser with source roots.

        Args:
            source_roots: Directories module names are computed against
                (first root containing the file wins)

        Raises:
            TypeError: If source_roots is None
        """
        if source_roots is None:
            raise TypeError("source_roots must not be None")

        self._source_roots = tuple(root.resolve() for root in source_roots)
        self._name_resolver = NameResolver()

    @property
    def source_roots(self) -> tuple[Path, ...]:
        return self._source_roots

    def parse_file(self, path: Path) -> SyntaxTree:
        """Parse single Python file.

        FAIL-FIRST: raises ParsingError on file errors, syntax errors.

        Args:
            path: Path to .py file

        Returns:
            Name-resolved SyntaxTree

        Raises:
            ParsingError: If file cannot be read or parsed
        """
        # Read file - FAIL-FIRST on file errors
        try:
            source = path.read_text(encoding="utf-8")
        except FileNotFoundError as e:
            raise ParsingError(path, "file not found") from e
        except PermissionError as e:
            raise ParsingError(path, "permission denied") from e
        except UnicodeDecodeError as e:
            raise ParsingError(path, f"encoding error: {e}") from e
        except OSError as e:
            raise ParsingError(path, f"read error: {e}") from e

        # Parse AST - FAIL-FIRST on syntax errors
        try:
            tree = ast.parse(source, filename=str(path), type_comments=True)
        except SyntaxError as e:
            raise ParsingError(path, f"syntax error: {e}") from e
        except ValueError as e:
            # null bytes in source
            raise ParsingError(path, f"invalid source: {e}") from e

        module_name = self.module_name_for(path)
        symbols = self._name_resolver.resolve(
            tree, module_name, is_package=is_package_init(path)
        )

        return SyntaxTree(
            path=path,
            module_name=module_name,
            root=tree,
            symbols=symbols.as_dict(),
        )

    def module_name_for(self, path: Path) -> str:
        """Module name of file: first source root containing it, else file stem."""
        for root in self._source_roots:
            name = compute_module_name(path, root)
            if name is not None:
                return name
        return path.stem if path.name != "__init__.py" else path.parent.name
