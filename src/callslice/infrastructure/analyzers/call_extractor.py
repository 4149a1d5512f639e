"""Call extraction with heuristic type flow.

Walks one member body with a per-member type environment and emits
kind-tagged call edges in source order, followed by one edge per
class-typed parameter.

Receiver typing, first match wins:
1. self.<prop>  → property type of the enclosing class
2. tracked local → parameter hint, loop element, construction,
   declared return type of a called method/function (single level)
3. unknown (None)
"""

from __future__ import annotations

import ast
import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from callslice.domain.model.call_edge import CallEdge
from callslice.domain.model.call_kind import CallKind
from callslice.domain.model.reference import member_key
from callslice.domain.model.syntax_tree import fqn_of
from callslice.domain.model.type_environment import TypeEnvironment
from callslice.infrastructure.analyzers.base import (
    FunctionNode,
    find_method,
    has_decorator,
    iter_classes,
    iter_methods,
    shallow_walk,
)
from callslice.infrastructure.analyzers.return_types import ReturnTypeResolver
from callslice.infrastructure.analyzers.type_hints import (
    PRIMITIVE_NAMES,
    ResolvedHint,
    TypeHintResolver,
    all_parameters,
    collect_class_types,
    is_camel_case,
)
from callslice.infrastructure.resolvers.definition import find_definition

if TYPE_CHECKING:
    from callslice.domain.model.syntax_tree import SyntaxTree

logger = logging.getLogger(__name__)


class CallExtractor:
    """Extracts call edges of one member.

    Stateless between extract() calls: the type environment lives only
    while one member body is scanned.
    """

    def __init__(self, return_types: ReturnTypeResolver | None = None) -> None:
        """Initialize extractor.

        Args:
            return_types: Cross-file return type lookup; default only
                sees definitions of the scanned tree
        """
        self._return_types = return_types if return_types is not None else ReturnTypeResolver()

    def extract(
        self,
        tree: SyntaxTree,
        class_name: str | None,
        member_name: str,
    ) -> tuple[CallEdge, ...]:
        """Edges of one method or module-level function.

        Args:
            tree: Name-resolved tree containing the member
            class_name: Class FQN, None for a module-level function
            member_name: Method name, or function FQN/name when class_name is None

        Returns:
            Edges in source order, then parameter-type edges.
            Empty when the member is not defined in tree.
        """
        if not member_name:
            raise ValueError("member_name must not be empty")

        if class_name is None:
            fqn = member_name if "." in member_name else f"{tree.module_name}.{member_name}"
            node = find_definition(tree, fqn)
            if not isinstance(node, ast.FunctionDef | ast.AsyncFunctionDef):
                logger.debug("function %s not found in %s", fqn, tree.path)
                return ()
            return _MemberScan(tree, None, node, self._return_types).run()

        class_node = find_definition(tree, class_name)
        if not isinstance(class_node, ast.ClassDef):
            logger.debug("class %s not found in %s", class_name, tree.path)
            return ()
        method = find_method(class_node, member_name)
        if method is None:
            logger.debug("method %s.%s not found in %s", class_name, member_name, tree.path)
            return ()
        return _MemberScan(tree, class_node, method, self._return_types).run()

    def extract_all(self, tree: SyntaxTree) -> dict[str, tuple[CallEdge, ...]]:
        """Edges of every method and module-level function of tree.

        Returns:
            Member key (class::method, or function FQN) → edges
        """
        result: dict[str, tuple[CallEdge, ...]] = {}
        for class_node in iter_classes(tree.root):
            class_fqn = fqn_of(class_node)
            if class_fqn is None:
                continue
            for method in iter_methods(class_node):
                scan = _MemberScan(tree, class_node, method, self._return_types)
                result[member_key(class_fqn, method.name)] = scan.run()

        for stmt in tree.root.body:
            if isinstance(stmt, ast.FunctionDef | ast.AsyncFunctionDef):
                function_fqn = fqn_of(stmt) or f"{tree.module_name}.{stmt.name}"
                result[function_fqn] = _MemberScan(tree, None, stmt, self._return_types).run()
        return result


# =============================================================================
# MEMBER SCAN
# =============================================================================


@dataclass(frozen=True, slots=True)
class _EmitCall:
    """Deferred edge emission: receiver subtree is walked first."""

    node: ast.Call


@dataclass(frozen=True, slots=True)
class _Bind:
    """Deferred binding: value is walked before the name is bound."""

    node: ast.Assign | ast.AnnAssign | ast.For | ast.AsyncFor | ast.With | ast.AsyncWith


@dataclass(slots=True)
class _MemberScan:
    """Single-use scan of one member body."""

    tree: SyntaxTree
    class_node: ast.ClassDef | None
    function: FunctionNode
    return_types: ReturnTypeResolver
    env: TypeEnvironment = field(init=False)
    hints: TypeHintResolver = field(init=False)
    edges: list[CallEdge] = field(default_factory=list)
    locals: frozenset[str] = field(default_factory=frozenset)
    local_elements: dict[str, str] = field(default_factory=dict)
    parameter_hints: list[tuple[ast.arg, ResolvedHint]] = field(default_factory=list)

    def __post_init__(self) -> None:
        class_types = (
            collect_class_types(self.tree, self.class_node, self._is_class)
            if self.class_node is not None
            else None
        )
        self.env = TypeEnvironment(class_types=class_types)
        self.hints = TypeHintResolver(self.tree)
        self.locals = local_names(self.function)

    @property
    def class_fqn(self) -> str | None:
        return self.env.enclosing_class

    def run(self) -> tuple[CallEdge, ...]:
        self._bind_parameters()
        self._walk()
        self._emit_parameter_types()
        return tuple(self.edges)

    # -------------------------------------------------------------------------
    # Parameters
    # -------------------------------------------------------------------------

    def _bind_parameters(self) -> None:
        args = self.function.args
        has_receiver = (
            self.class_fqn is not None
            and bool(args.posonlyargs or args.args)
            and not has_decorator(self.function.decorator_list, "staticmethod")
        )

        for index, arg in enumerate(all_parameters(args)):
            if index == 0 and has_receiver:
                # self / cls
                self.env.bind(arg.arg, self.class_fqn)
                continue

            if arg.annotation is not None:
                hint = self.hints.resolve(arg.annotation)
            elif arg.type_comment:
                hint = self.hints.resolve_text(arg.type_comment)
            else:
                continue

            if hint.class_name is not None:
                self.env.bind(arg.arg, hint.class_name)
            if hint.element_type is not None:
                self.local_elements[arg.arg] = hint.element_type
            self.parameter_hints.append((arg, hint))

    def _emit_parameter_types(self) -> None:
        seen: set[str] = set()
        for arg, hint in self.parameter_hints:
            target = hint.target
            if target is None or target in seen:
                continue
            seen.add(target)
            self.edges.append(
                CallEdge(
                    kind=CallKind.PARAMETER_TYPE,
                    target_class=target,
                    target_member=None,
                    line=arg.lineno,
                    receiver=arg.arg,
                )
            )

    # -------------------------------------------------------------------------
    # Body walk
    # -------------------------------------------------------------------------

    def _walk(self) -> None:
        stack: list[ast.AST | _EmitCall | _Bind] = list(reversed(self.function.body))

        while stack:
            item = stack.pop()
            match item:
                case _EmitCall(node=call):
                    self._on_call(call)
                    continue
                case _Bind(node=node):
                    self._bind(node)
                    continue
                # Scope boundaries: nested definitions have own bodies
                case ast.FunctionDef() | ast.AsyncFunctionDef() | ast.ClassDef() | ast.Lambda():
                    continue

            stack.extend(reversed(_ordered_children(item)))

    def _add(
        self,
        kind: CallKind,
        target_class: str | None,
        target_member: str,
        line: int,
        receiver: str | None = None,
    ) -> None:
        self.edges.append(
            CallEdge(
                kind=kind,
                target_class=target_class,
                target_member=target_member,
                line=line,
                receiver=receiver,
            )
        )

    def _on_call(self, call: ast.Call) -> None:
        match call.func:
            case ast.Name(id=name) as func:
                self._on_name_call(name, func, call.lineno)
            case ast.Attribute(value=receiver, attr=method) as func:
                self._on_attribute_call(receiver, method, func, call.lineno)
            # Subscript and chained calls carry no resolvable target

    def _on_name_call(self, name: str, func: ast.Name, line: int) -> None:
        local_type = self.env.lookup(name)
        if local_type is not None:
            self._add(CallKind.INVOKABLE_CALL, local_type, "__call__", line, receiver=name)
            return
        if name in self.locals:
            self._add(CallKind.INVOKABLE_CALL, None, "__call__", line, receiver=name)
            return

        fqn = fqn_of(func)
        if fqn is None:
            if name not in PRIMITIVE_NAMES:
                self._add(CallKind.FUNCTION_CALL, None, name, line)
            return

        if self._is_class(fqn):
            self._add(CallKind.CONSTRUCTION, fqn, "__init__", line, receiver=name)
        else:
            self._add(CallKind.FUNCTION_CALL, None, fqn, line)

    def _on_attribute_call(
        self,
        receiver: ast.expr,
        method: str,
        func: ast.Attribute,
        line: int,
    ) -> None:
        text = ast.unparse(receiver)

        if isinstance(receiver, ast.Call) and isinstance(receiver.func, ast.Name):
            if receiver.func.id == "super" and self.class_node is not None:
                self._add(CallKind.METHOD_CALL, self._first_base(), method, line, receiver=text)
                return

        receiver_fqn = fqn_of(receiver)
        if receiver_fqn is not None:
            func_fqn = fqn_of(func) or f"{receiver_fqn}.{method}"
            if self._is_class(func_fqn):
                # module.Class() or Outer.Inner()
                self._add(CallKind.CONSTRUCTION, func_fqn, "__init__", line, receiver=text)
            elif self._is_class(receiver_fqn):
                self._add(CallKind.STATIC_CALL, receiver_fqn, method, line, receiver=text)
            else:
                self._add(CallKind.FUNCTION_CALL, None, func_fqn, line)
            return

        self._add(CallKind.METHOD_CALL, self._receiver_type(receiver), method, line, receiver=text)

    # -------------------------------------------------------------------------
    # Type flow
    # -------------------------------------------------------------------------

    def _receiver_type(self, receiver: ast.expr) -> str | None:
        match receiver:
            case ast.Name(id=name):
                return self.env.lookup(name)
            case ast.Attribute(value=ast.Name(id="self" | "cls"), attr=prop):
                return self.env.property_type(prop)
            case ast.Call():
                return self._call_result_type(receiver)
        return None

    def _call_result_type(self, call: ast.Call) -> str | None:
        func = call.func
        fqn = fqn_of(func)
        if fqn is not None:
            if self._is_class(fqn):
                return fqn
            return self.return_types.function_return(self.tree, fqn)

        if isinstance(func, ast.Attribute):
            owner = self._receiver_type(func.value)
            if owner is not None:
                return self.return_types.method_return(self.tree, owner, func.attr)
        return None

    def _expression_type(self, value: ast.expr | None) -> str | None:
        match value:
            case ast.Call():
                return self._call_result_type(value)
            case ast.Name() | ast.Attribute(value=ast.Name(id="self" | "cls")):
                return self._receiver_type(value)
        return None

    def _element_type(self, iterable: ast.expr) -> str | None:
        match iterable:
            case ast.Attribute(value=ast.Name(id="self" | "cls"), attr=prop):
                return self.env.element_type(prop)
            case ast.Name(id=name):
                return self.local_elements.get(name)
        return None

    def _bind(self, node: ast.AST) -> None:
        match node:
            case ast.Assign(targets=[ast.Name(id=name)], value=value):
                inferred = self._expression_type(value)
                if inferred is None and node.type_comment:
                    inferred = self.hints.resolve_text(node.type_comment).class_name
                self._bind_local(name, inferred)

            case ast.AnnAssign(target=ast.Name(id=name), annotation=annotation, value=value):
                hint = self.hints.resolve(annotation)
                if hint.element_type is not None:
                    self.local_elements[name] = hint.element_type
                self._bind_local(name, hint.class_name or self._expression_type(value))

            case ast.For(target=ast.Name(id=name), iter=iterable) | ast.AsyncFor(
                target=ast.Name(id=name), iter=iterable
            ):
                self._bind_local(name, self._element_type(iterable))

            case ast.With(items=items) | ast.AsyncWith(items=items):
                for item in items:
                    if isinstance(item.optional_vars, ast.Name):
                        self._bind_local(item.optional_vars.id, self._expression_type(item.context_expr))

    def _bind_local(self, name: str, class_name: str | None) -> None:
        if class_name is not None:
            self.env.bind(name, class_name)

    def _is_class(self, fqn: str) -> bool:
        """Class per located definition; CamelCase only when nothing is found."""
        known = self.return_types.is_class(self.tree, fqn)
        if known is not None:
            return known
        return is_camel_case(fqn.rpartition(".")[2])

    def _first_base(self) -> str | None:
        if self.class_node is None:
            return None
        for base in self.class_node.bases:
            fqn = fqn_of(base)
            if fqn is not None:
                return fqn
        return None


def _ordered_children(node: ast.AST) -> list[ast.AST | _EmitCall | _Bind]:
    """Children in evaluation order, with deferred emissions and bindings."""
    match node:
        case ast.Call(func=func, args=args, keywords=keywords):
            return [func, _EmitCall(node), *args, *keywords]
        case ast.Assign(targets=targets, value=value):
            return [value, *targets, _Bind(node)]
        case ast.AnnAssign(value=value):
            return [value, _Bind(node)] if value is not None else [_Bind(node)]
        case ast.For(iter=iterable, body=body, orelse=orelse) | ast.AsyncFor(
            iter=iterable, body=body, orelse=orelse
        ):
            return [iterable, _Bind(node), *body, *orelse]
        case ast.With(items=items, body=body) | ast.AsyncWith(items=items, body=body):
            return [*(item.context_expr for item in items), _Bind(node), *body]
    return list(ast.iter_child_nodes(node))


def local_names(function: FunctionNode) -> frozenset[str]:
    """Names bound in function scope: parameters, assignments, loop/with targets.

    Does not enter nested functions/classes.
    """
    args = function.args
    bound = {arg.arg for arg in all_parameters(args)}
    if args.vararg is not None:
        bound.add(args.vararg.arg)
    if args.kwarg is not None:
        bound.add(args.kwarg.arg)

    for node in shallow_walk(function.body):
        match node:
            case ast.Name(id=name, ctx=ast.Store()):
                bound.add(name)
            case ast.FunctionDef(name=name) | ast.AsyncFunctionDef(name=name) | ast.ClassDef(name=name):
                bound.add(name)
            case ast.ExceptHandler(name=str(name)):
                bound.add(name)
    return frozenset(bound)
