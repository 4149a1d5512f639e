"""Type hint resolution for receiver typing."""

from __future__ import annotations

import ast
import builtins
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from callslice.domain.model.syntax_tree import fqn_of
from callslice.domain.model.type_environment import ClassTypes
from callslice.infrastructure.analyzers.base import CONSTRUCTOR_NAMES, iter_methods
from callslice.infrastructure.analyzers.name_resolver import dotted_name

if TYPE_CHECKING:
    from collections.abc import Callable

    from callslice.domain.model.syntax_tree import SyntaxTree

logger = logging.getLogger(__name__)

# =============================================================================
# PRIMITIVES - Discovered via dir(builtins), NOT hardcoded
# =============================================================================

_PYTHON_BUILTINS = frozenset(dir(builtins))

# Type hints NOT in builtins - typing exports used as bare names in annotations
_TYPE_HINT_NAMES = frozenset(
    {
        "Any",
        "Callable",
        "Optional",
        "Union",
        "List",
        "Dict",
        "Set",
        "FrozenSet",
        "Tuple",
        "Type",
        "Generic",
        "Protocol",
        "Final",
        "Literal",
        "TypeVar",
        "Self",
        "Never",
        "NoReturn",
        "TypeAlias",
        "ClassVar",
        "Annotated",
        "TypedDict",
        "Sequence",
        "Mapping",
        "Iterable",
        "Iterator",
        "Collection",
        "MutableSequence",
        "MutableMapping",
        "MutableSet",
        "Awaitable",
        "Coroutine",
        "AsyncIterator",
        "AsyncIterable",
        "Generator",
        "AsyncGenerator",
        "TypeVarTuple",
        "ParamSpec",
        "Concatenate",
        "Unpack",
    }
)

# Names never treated as classes worth following
PRIMITIVE_NAMES = _PYTHON_BUILTINS | _TYPE_HINT_NAMES | frozenset({"self", "cls"})

# Modules whose exports are typing machinery or stdlib containers
_TYPING_MODULES = frozenset(
    {"builtins", "typing", "typing_extensions", "collections", "abc", "types"}
)

# Wrappers whose first argument is the interesting type
_UNWRAP = frozenset({"Optional", "Annotated", "ClassVar", "Final", "Type", "type", "Required"})

# Generic containers: element type is the LAST type argument
_MAPPINGS = frozenset(
    {"dict", "Dict", "Mapping", "MutableMapping", "defaultdict", "OrderedDict", "ChainMap"}
)

# Generic containers: element type is the FIRST type argument
_SEQUENCES = frozenset(
    {
        "list",
        "List",
        "set",
        "Set",
        "frozenset",
        "FrozenSet",
        "tuple",
        "Tuple",
        "Sequence",
        "MutableSequence",
        "Iterable",
        "Iterator",
        "Collection",
        "AbstractSet",
        "MutableSet",
        "Generator",
        "AsyncIterator",
        "AsyncIterable",
        "AsyncGenerator",
        "deque",
        "Deque",
    }
)


@dataclass(frozen=True, slots=True)
class ResolvedHint:
    """Outcome of resolving one annotation.

    Attributes:
        class_name: Declared class FQN (None for primitives and containers)
        element_type: Element class FQN for generic collections
    """

    class_name: str | None = None
    element_type: str | None = None

    @property
    def target(self) -> str | None:
        """Class worth following: declared class, else element class."""
        return self.class_name or self.element_type


_UNKNOWN = ResolvedHint()


def is_camel_case(name: str) -> bool:
    """Check if name is CamelCase (likely a class).

    Args:
        name: Name to check

    Returns:
        True if CamelCase pattern
    """
    # Must start with uppercase
    if not name or not name[0].isupper():
        return False

    # Must have at least one lowercase (to distinguish from CONSTANTS)
    return any(c.islower() for c in name) and not name.isupper()


def _camel_case_name(fqn: str) -> bool:
    return is_camel_case(fqn.rpartition(".")[2])


def is_primitive(fqn: str) -> bool:
    """Whether FQN names a builtin, typing placeholder or stdlib container."""
    module, _, name = fqn.rpartition(".")
    if not module:
        return name in PRIMITIVE_NAMES
    return module.partition(".")[0] in _TYPING_MODULES


class TypeHintResolver:
    """Resolves annotations of one syntax tree to class FQNs.

    Handles Name/Attribute annotations, string (forward reference)
    annotations, PEP 484 type comments, Optional[T] / T | None,
    Union (first class member wins) and generic collections.
    """

    def __init__(self, tree: SyntaxTree) -> None:
        if tree is None:
            raise TypeError("tree must not be None")
        self._tree = tree

    def resolve(self, annotation: ast.expr | None) -> ResolvedHint:
        """Resolve annotation node.

        Args:
            annotation: Annotation expression (None when absent)

        Returns:
            ResolvedHint, empty when unknown or primitive
        """
        if annotation is None:
            return _UNKNOWN

        match annotation:
            case ast.Constant(value=str(text)):
                return self.resolve_text(text)

            case ast.Constant(value=None):
                return _UNKNOWN

            case ast.Name() | ast.Attribute():
                fqn = self._class_fqn(annotation)
                return ResolvedHint(class_name=fqn) if fqn is not None else _UNKNOWN

            case ast.BinOp(op=ast.BitOr(), left=left, right=right):
                return self._first_known((left, right))

            case ast.Subscript(value=base, slice=arguments):
                return self._resolve_generic(base, arguments)

        return _UNKNOWN

    def resolve_text(self, text: str) -> ResolvedHint:
        """Resolve annotation written as text (string annotation or type comment)."""
        try:
            expression = ast.parse(text.strip(), mode="eval").body
        except SyntaxError:
            logger.debug("unparseable annotation %r in %s", text, self._tree.path)
            return _UNKNOWN
        if isinstance(expression, ast.Constant) and isinstance(expression.value, str):
            # nested quotes resolve once
            return _UNKNOWN
        return self.resolve(expression)

    def _resolve_generic(self, base: ast.expr, arguments: ast.expr) -> ResolvedHint:
        name = dotted_name(base)
        if name is None:
            return _UNKNOWN
        short = name.rpartition(".")[2]
        args = list(arguments.elts) if isinstance(arguments, ast.Tuple) else [arguments]

        if short in _UNWRAP:
            return self.resolve(args[0])
        if short == "Union":
            return self._first_known(args)
        if short in _MAPPINGS:
            return ResolvedHint(element_type=self.resolve(args[-1]).class_name)
        if short in _SEQUENCES:
            return ResolvedHint(element_type=self.resolve(args[0]).class_name)

        # user-defined generic: Repository[User] is a Repository
        fqn = self._class_fqn(base)
        return ResolvedHint(class_name=fqn) if fqn is not None else _UNKNOWN

    def _first_known(self, members: list[ast.expr] | tuple[ast.expr, ...]) -> ResolvedHint:
        for member in members:
            hint = self.resolve(member)
            if hint.target is not None:
                return hint
        return _UNKNOWN

    def _class_fqn(self, node: ast.expr) -> str | None:
        fqn = fqn_of(node)
        if fqn is None:
            # nodes parsed from text carry no stamp
            name = dotted_name(node)
            if name is None:
                return None
            fqn = self._tree.resolve(name)
        if fqn is None or is_primitive(fqn):
            return None
        return fqn


def collect_class_types(
    tree: SyntaxTree,
    class_node: ast.ClassDef,
    is_class: Callable[[str], bool] | None = None,
) -> ClassTypes:
    """Property types of class, collected once per class.

    Sources, earlier wins:
    1. Class-level annotated attributes (dataclass-style fields)
    2. Constructor parameters with hints assigned to self.<name>
    3. Annotated self.x: T assignments and '# type:' comments on self.x = ...
    4. self.x = Cls(...) constructions in the constructor

    Args:
        tree: Tree the class belongs to
        class_node: Class definition (name-resolved)
        is_class: Whether an FQN names a class (default: CamelCase last segment)

    Returns:
        ClassTypes with property and element type maps
    """
    class_fqn = fqn_of(class_node)
    if class_fqn is None:
        raise ValueError(f"class {class_node.name} has no resolved name")

    class_check = is_class if is_class is not None else _camel_case_name
    hints = TypeHintResolver(tree)
    property_types: dict[str, str] = {}
    element_types: dict[str, str] = {}

    def record(name: str, hint: ResolvedHint) -> None:
        if hint.class_name is not None:
            property_types.setdefault(name, hint.class_name)
        if hint.element_type is not None:
            element_types.setdefault(name, hint.element_type)

    # 1. Class-level annotated attributes
    for stmt in class_node.body:
        match stmt:
            case ast.AnnAssign(target=ast.Name(id=name), annotation=annotation):
                record(name, hints.resolve(annotation))

    for method in iter_methods(class_node):
        is_constructor = method.name in CONSTRUCTOR_NAMES
        parameter_hints = (
            {arg.arg: hints.resolve(arg.annotation) for arg in all_parameters(method.args)}
            if is_constructor
            else {}
        )

        for node in ast.walk(method):
            match node:
                # 2. Promotion: self.repo = repo
                case ast.Assign(
                    targets=[ast.Attribute(value=ast.Name(id="self"), attr=attr)],
                    value=ast.Name(id=param),
                ) if param in parameter_hints:
                    record(attr, parameter_hints[param])
                    if node.type_comment:
                        record(attr, hints.resolve_text(node.type_comment))

                # 3. self.items: list[Item] = []
                case ast.AnnAssign(
                    target=ast.Attribute(value=ast.Name(id="self"), attr=attr),
                    annotation=annotation,
                ):
                    record(attr, hints.resolve(annotation))

                # 3. self.items = []  # type: list[Item]
                case ast.Assign(
                    targets=[ast.Attribute(value=ast.Name(id="self"), attr=attr)],
                    type_comment=str(comment),
                ):
                    record(attr, hints.resolve_text(comment))

                # 4. self.repo = Repository()
                case ast.Assign(
                    targets=[ast.Attribute(value=ast.Name(id="self"), attr=attr)],
                    value=ast.Call(func=ast.Name() | ast.Attribute() as func),
                ) if is_constructor:
                    fqn = fqn_of(func)
                    if fqn is not None and class_check(fqn):
                        record(attr, ResolvedHint(class_name=fqn))

    return ClassTypes(
        class_name=class_fqn,
        property_types=property_types,
        element_types=element_types,
    )


def all_parameters(args: ast.arguments) -> list[ast.arg]:
    """Positional-only, regular and keyword-only parameters in order."""
    return [*args.posonlyargs, *args.args, *args.kwonlyargs]
