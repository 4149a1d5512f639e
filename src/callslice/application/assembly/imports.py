"""Import passes: pragma removal, unused-import pruning, dedup and sort."""

from __future__ import annotations

import ast
from collections.abc import Iterable, Iterator

from callslice.domain.model.import_ import Import
from callslice.infrastructure.analyzers.import_analyzer import is_type_checking_block

FUTURE_MODULE = "__future__"


def is_pragma(imp: Import) -> bool:
    """Whether import is a ``from __future__`` pragma."""
    return imp.module == FUTURE_MODULE


def remove_pragmas(imports: Iterable[Import]) -> list[Import]:
    return [imp for imp in imports if not is_pragma(imp)]


def used_names(nodes: Iterable[ast.AST]) -> frozenset[str]:
    """Short names referenced by nodes.

    Includes Name nodes (attribute chain roots are Names), names inside
    string annotations and type comments, and strings listed in
    ``__all__``.
    """
    found: set[str] = set()
    texts: list[str] = []

    for root in nodes:
        for node in ast.walk(root):
            match node:
                case ast.Name(id=name):
                    found.add(name)
                case ast.arg(annotation=annotation) | ast.AnnAssign(annotation=annotation):
                    texts.extend(_string_constants(annotation))
                case ast.FunctionDef(returns=returns) | ast.AsyncFunctionDef(returns=returns):
                    texts.extend(_string_constants(returns))
                case ast.Assign(
                    targets=[ast.Name(id="__all__")],
                    value=ast.List(elts=elts) | ast.Tuple(elts=elts),
                ):
                    found.update(
                        e.value for e in elts if isinstance(e, ast.Constant) and isinstance(e.value, str)
                    )

            comment = getattr(node, "type_comment", None)
            if comment:
                texts.append(comment)

    for text in texts:
        found.update(_names_in_text(text))
    return frozenset(found)


def _string_constants(annotation: ast.expr | None) -> list[str]:
    if annotation is None:
        return []
    return [
        node.value
        for node in ast.walk(annotation)
        if isinstance(node, ast.Constant) and isinstance(node.value, str)
    ]


def _names_in_text(text: str) -> set[str]:
    try:
        expression = ast.parse(text.strip(), mode="eval")
    except SyntaxError:
        # function type comments: "(int, str) -> Foo"
        try:
            expression = ast.parse(text.strip(), mode="func_type")
        except SyntaxError:
            return set()
    names: set[str] = set()
    for node in ast.walk(expression):
        if isinstance(node, ast.Name):
            names.add(node.id)
        elif isinstance(node, ast.Constant) and isinstance(node.value, str):
            names.update(_names_in_text(node.value))
    return names


def prune_unused(imports: Iterable[Import], body: Iterable[ast.stmt]) -> list[Import]:
    """Drop imports whose bound name is never referenced in body.

    Star imports are kept: their names are unknown.
    """
    used = used_names(body)
    return [imp for imp in imports if imp.is_star or imp.bound_name in used]


def dedup_and_sort(imports: Iterable[Import]) -> list[Import]:
    """Collapse repeated imports and sort by Import.sort_key."""
    unique: dict[tuple[str, str | None, str | None], Import] = {}
    for imp in imports:
        unique.setdefault((imp.module, imp.name, imp.alias), imp)
    return sorted(unique.values(), key=lambda imp: (imp.sort_key, imp.name is not None))


def prune_module(module: ast.Module) -> ast.Module:
    """Drop unused aliases of module-level imports in place.

    Covers top-level imports and those inside ``if TYPE_CHECKING:``;
    statements left without aliases are removed.
    """
    import_nodes = [stmt for stmt in module.body if isinstance(stmt, ast.Import | ast.ImportFrom)]
    others = [stmt for stmt in module.body if not isinstance(stmt, ast.Import | ast.ImportFrom)]
    used = used_names(_usage_roots(others))

    def keep(stmt: ast.Import | ast.ImportFrom) -> bool:
        if isinstance(stmt, ast.ImportFrom) and stmt.module == FUTURE_MODULE:
            return True
        stmt.names = [
            alias
            for alias in stmt.names
            if alias.name == "*" or _bound(alias, stmt) in used
        ]
        return bool(stmt.names)

    kept_imports = {id(stmt) for stmt in import_nodes if keep(stmt)}
    body: list[ast.stmt] = []
    for stmt in module.body:
        match stmt:
            case ast.Import() | ast.ImportFrom():
                if id(stmt) in kept_imports:
                    body.append(stmt)
            case ast.If() if is_type_checking_block(stmt):
                stmt.body = [
                    inner
                    for inner in stmt.body
                    if not isinstance(inner, ast.Import | ast.ImportFrom) or keep(inner)
                ]
                if stmt.body:
                    body.append(stmt)
            case _:
                body.append(stmt)
    module.body = body
    return module


def _usage_roots(statements: Iterable[ast.stmt]) -> Iterator[ast.AST]:
    """Statements whose names count as uses; imports of TYPE_CHECKING blocks do not."""
    for stmt in statements:
        if isinstance(stmt, ast.If) and is_type_checking_block(stmt):
            # an emptied block is dropped, its guard import goes in the next pass
            yield stmt.test
            yield from (inner for inner in stmt.body if not isinstance(inner, ast.Import | ast.ImportFrom))
        else:
            yield stmt


def _bound(alias: ast.alias, stmt: ast.Import | ast.ImportFrom) -> str:
    if alias.asname is not None:
        return alias.asname
    if isinstance(stmt, ast.Import):
        return alias.name.partition(".")[0]
    return alias.name
