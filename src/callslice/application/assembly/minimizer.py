"""Text minimizer for assembled source.

Idempotent: minimize(minimize(text)) == minimize(text). The output
always starts with the opening line and parses with ast.parse.

Steps per provenance segment:
1. drop ``from __future__`` pragmas (one opening line is re-added)
2. strip @final decorators and Final[...] wrappers
3. strip annotations from plain field declarations
4. prune unused imports (twice)
5. re-print, collapse whitespace around ',' and ':' outside strings,
   drop blank lines, indent one space per level
"""

from __future__ import annotations

import ast
import io
import keyword
import tokenize
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from callslice.application.assembly.imports import FUTURE_MODULE, prune_module
from callslice.infrastructure.analyzers.base import decorator_name

OPENING = "from __future__ import annotations"

# Provenance line: "# File: <path>" before minimization, "# <path>" after
PROVENANCE_MARKER = "# File: "

# Passes over one name before abbreviations are considered cyclic
MAX_ABBREVIATION_PASSES = 16

# Base classes whose annotations are the class's fields
_ANNOTATION_DRIVEN_BASES = frozenset(
    {"NamedTuple", "TypedDict", "BaseModel", "BaseSettings", "Struct", "Protocol", "Enum"}
)


@dataclass(frozen=True, slots=True)
class MinimizerConfig:
    """Configurable shortenings.

    Attributes:
        path_prefixes: Prefixes removed from provenance paths (first match)
        abbreviations: Identifier substring → replacement (applied to names)
    """

    path_prefixes: tuple[str, ...] = ("src/",)
    abbreviations: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if isinstance(self.path_prefixes, str):
            raise TypeError("path_prefixes must be a tuple of strings, not a string")
        for long, short in self.abbreviations.items():
            if not long:
                raise ValueError("abbreviation source must not be empty")
            for source in self.abbreviations:
                if source in short:
                    raise ValueError(f"abbreviation {long!r} → {short!r} would re-apply {source!r}")
            if short and not short.isidentifier() and not short.isalnum():
                raise ValueError(f"abbreviation replacement must be identifier-like, got {short!r}")
        object.__setattr__(self, "path_prefixes", tuple(self.path_prefixes))
        object.__setattr__(self, "abbreviations", MappingProxyType(dict(self.abbreviations)))


DEFAULT_CONFIG = MinimizerConfig()


def minimize(text: str, config: MinimizerConfig = DEFAULT_CONFIG) -> str:
    """Minimize assembled source.

    Args:
        text: Valid Python source, optionally with provenance lines
        config: Shortenings to apply

    Returns:
        Minimized source ending with a newline

    Raises:
        SyntaxError: If text (or a segment of it) is not valid Python
        ValueError: If abbreviations keep rewriting a name
    """
    parts = [OPENING]
    for header, source in split_segments(text):
        if header is not None:
            parts.append(shorten_header(header, config.path_prefixes))
        code = _minimize_segment(source, config)
        if code:
            parts.append(code)
    return "\n".join(parts) + "\n"


def split_segments(text: str) -> list[tuple[str | None, str]]:
    """Split text at column-0 comments into (comment, code) pairs.

    The code before the first comment has header None. Comments are
    found with tokenize, so '#' inside strings never splits.
    """
    lines = text.splitlines(keepends=True)
    header_rows: list[int] = []
    try:
        for token in tokenize.generate_tokens(io.StringIO(text).readline):
            if token.type == tokenize.COMMENT and token.start[1] == 0:
                header_rows.append(token.start[0])
    except tokenize.TokenError as e:
        raise SyntaxError(f"cannot tokenize assembled source: {e}") from e

    segments: list[tuple[str | None, str]] = []
    start = 1
    header: str | None = None
    for row in header_rows:
        segments.append((header, "".join(lines[start - 1 : row - 1])))
        header = lines[row - 1].strip()
        start = row + 1
    segments.append((header, "".join(lines[start - 1 :])))
    return segments


def shorten_header(header: str, prefixes: tuple[str, ...]) -> str:
    """Provenance line with marker dropped and the first matching prefix removed."""
    if not header.startswith(PROVENANCE_MARKER):
        return header
    path = header[len(PROVENANCE_MARKER) :]
    for prefix in prefixes:
        if prefix and path.startswith(prefix):
            path = path[len(prefix) :]
            break
    return f"# {path}"


def _minimize_segment(source: str, config: MinimizerConfig) -> str:
    module = ast.parse(source)
    module.body = [stmt for stmt in module.body if not _is_future_import(stmt)]
    _FinalStripper().visit(module)
    _strip_field_annotations(module)
    for _ in range(2):
        prune_module(module)
    ast.fix_missing_locations(module)
    return compact(ast.unparse(module), config.abbreviations)


def _is_future_import(stmt: ast.stmt) -> bool:
    return isinstance(stmt, ast.ImportFrom) and stmt.module == FUTURE_MODULE


# =============================================================================
# AST REWRITES
# =============================================================================


def _is_final(node: ast.expr) -> bool:
    return decorator_name(node).rpartition(".")[2] == "final"


class _FinalStripper(ast.NodeTransformer):
    """Removes @final decorators and Final[...] annotation wrappers."""

    def visit_ClassDef(self, node: ast.ClassDef) -> ast.AST:
        node.decorator_list = [dec for dec in node.decorator_list if not _is_final(dec)]
        self.generic_visit(node)
        return node

    def visit_FunctionDef(self, node: ast.FunctionDef) -> ast.AST:
        node.decorator_list = [dec for dec in node.decorator_list if not _is_final(dec)]
        self.generic_visit(node)
        return node

    def visit_AsyncFunctionDef(self, node: ast.AsyncFunctionDef) -> ast.AST:
        node.decorator_list = [dec for dec in node.decorator_list if not _is_final(dec)]
        self.generic_visit(node)
        return node

    def visit_AnnAssign(self, node: ast.AnnAssign) -> ast.AST:
        match node.annotation:
            case ast.Subscript(value=ast.Name(id="Final") | ast.Attribute(attr="Final"), slice=inner):
                node.annotation = inner
            case ast.Name(id="Final") | ast.Attribute(attr="Final"):
                if node.value is None:
                    return node
                # bare Final carries no type
                return ast.copy_location(ast.Assign(targets=[node.target], value=node.value), node)
        self.generic_visit(node)
        return node


def _plain_assignment(node: ast.AnnAssign) -> ast.Assign:
    return ast.copy_location(ast.Assign(targets=[node.target], value=node.value), node)


def _has_plain_fields(node: ast.ClassDef) -> bool:
    if node.decorator_list:
        return False
    for base in node.bases:
        name = decorator_name(base).rpartition(".")[2]
        if name in _ANNOTATION_DRIVEN_BASES:
            return False
    return True


def _strip_field_annotations(module: ast.Module) -> None:
    """x: T = v in undecorated classes and self.x: T = v become assignments."""
    for node in ast.walk(module):
        match node:
            case ast.ClassDef() if _has_plain_fields(node):
                node.body = [
                    _plain_assignment(stmt)
                    if isinstance(stmt, ast.AnnAssign) and stmt.value is not None and stmt.simple
                    else stmt
                    for stmt in node.body
                ]
            case ast.FunctionDef() | ast.AsyncFunctionDef():
                for inner in ast.walk(node):
                    for name in ("body", "orelse", "finalbody"):
                        statements = getattr(inner, name, None)
                        if isinstance(statements, list):
                            setattr(inner, name, [_strip_self_annotation(s) for s in statements])


def _strip_self_annotation(stmt: ast.AST) -> ast.AST:
    match stmt:
        case ast.AnnAssign(target=ast.Attribute(value=ast.Name(id="self")), value=value) if (
            value is not None
        ):
            return _plain_assignment(stmt)
    return stmt


# =============================================================================
# TOKEN PASS
# =============================================================================


def compact(source: str, abbreviations: Mapping[str, str] | None = None) -> str:
    """Whitespace compaction of valid source.

    - no spaces around ',' and ':' (outside string and f-string literals)
    - blank lines dropped
    - one space of indentation per block level
    - abbreviations applied to identifiers until stable (keywords untouched)

    Lines continuing a multi-line string token are kept verbatim.
    """
    lines = source.splitlines()
    edits: dict[int, list[tuple[int, int, str]]] = {}
    indents: dict[int, int] = {}
    verbatim: set[int] = set()

    depth = 0
    fstring_depth = 0
    tokens = list(tokenize.generate_tokens(io.StringIO(source).readline))
    for index, token in enumerate(tokens):
        row, col = token.start
        match token.type:
            case tokenize.INDENT:
                depth += 1
                continue
            case tokenize.DEDENT:
                depth -= 1
                continue
            case tokenize.NL | tokenize.NEWLINE | tokenize.ENDMARKER:
                continue
            case tokenize.FSTRING_START:
                fstring_depth += 1
            case tokenize.FSTRING_END:
                fstring_depth -= 1

        indents.setdefault(row, depth)
        verbatim.update(range(row + 1, token.end[0] + 1))

        if token.type == tokenize.OP and token.string in {",", ":"} and fstring_depth == 0:
            previous = tokens[index - 1]
            if previous.end[0] == row and previous.end[1] < col:
                edits.setdefault(row, []).append((previous.end[1], col, ""))
            following = tokens[index + 1]
            if following.start[0] == token.end[0] and following.start[1] > token.end[1]:
                if following.type not in (tokenize.COMMENT, tokenize.NEWLINE, tokenize.NL):
                    edits.setdefault(row, []).append((token.end[1], following.start[1], ""))

        if abbreviations and token.type == tokenize.NAME and not keyword.iskeyword(token.string):
            renamed = _abbreviate(token.string, abbreviations)
            if renamed != token.string:
                edits.setdefault(row, []).append((col, token.end[1], renamed))

    output: list[str] = []
    for row, line in enumerate(lines, start=1):
        if row in verbatim:
            output.append(_apply(line, edits.get(row, [])))
            continue
        if not line.strip():
            continue
        text = _apply(line, edits.get(row, [])).strip()
        output.append(" " * indents.get(row, 0) + text)
    return "\n".join(output)


def _abbreviate(name: str, abbreviations: Mapping[str, str]) -> str:
    """Apply abbreviations until name is stable, so a second pass is a no-op."""
    for _ in range(MAX_ABBREVIATION_PASSES):
        renamed = name
        for long, short in abbreviations.items():
            renamed = renamed.replace(long, short)
        if renamed == name:
            return name
        name = renamed
    raise ValueError(f"abbreviations do not settle on {name!r}")


def _apply(line: str, edits: list[tuple[int, int, str]]) -> str:
    # right to left so earlier columns stay valid
    for start, end, replacement in sorted(set(edits), reverse=True):
        line = line[:start] + replacement + line[end:]
    return line
