"""Graph traverser: expands call edges into a reference tree.

Explicit LIFO work stack (no recursion), reproducing depth-first
pre-order. Cycle guard by visited keys, optional depth bound,
path exclusion of every target file.
"""

from __future__ import annotations

import ast
import logging
from typing import TYPE_CHECKING

from callslice.domain.model.call_edge import CallEdge
from callslice.domain.model.call_kind import CallKind
from callslice.domain.model.reference import Reference
from callslice.domain.model.reference_collection import ReferenceCollection
from callslice.domain.model.traversal_config import RevisitPolicy
from callslice.infrastructure.analyzers.base import find_method
from callslice.infrastructure.analyzers.call_extractor import CallExtractor
from callslice.infrastructure.analyzers.return_types import ReturnTypeResolver
from callslice.infrastructure.filters.path import exclusion_filter
from callslice.infrastructure.resolvers.definition import Definition, DefinitionLocator

if TYPE_CHECKING:
    from callslice.domain.model.traversal_config import TraversalConfig
    from callslice.domain.ports.class_resolver import ClassResolverPort
    from callslice.domain.ports.syntax_tree_provider import SyntaxTreeProviderPort
    from callslice.infrastructure.filters.types import PathFilter

logger = logging.getLogger(__name__)


class GraphTraverser:
    """Builds the reference tree reachable from one entry point.

    Nothing inside traversal aborts the run: unresolved targets,
    unparseable files and excluded paths drop the affected edge.

    Example:
        provider = CachedSyntaxTreeProvider(ASTSourceParser([root / "src"]))
        traverser = GraphTraverser(SourceRootResolver([root / "src"]), provider)
        collection = traverser.traverse(TraversalConfig(EntryPoint("app.Api", "run")))
    """

    def __init__(
        self,
        class_resolver: ClassResolverPort,
        provider: SyntaxTreeProviderPort,
        extractor: CallExtractor | None = None,
    ) -> None:
        """Initialize traverser with dependencies.

        Args:
            class_resolver: FQN → file mapping
            provider: Parsed tree cache
            extractor: Call extractor (default: one with cross-file return types)
        """
        if class_resolver is None:
            raise TypeError("class_resolver must not be None")
        if provider is None:
            raise TypeError("provider must not be None")

        self._provider = provider
        self._locator = DefinitionLocator(class_resolver, provider)
        self._extractor = (
            extractor if extractor is not None else CallExtractor(ReturnTypeResolver(self._locator))
        )

    def traverse(self, config: TraversalConfig) -> ReferenceCollection:
        """Traverse from config.entry_point.

        Args:
            config: Entry point, exclusions, depth bound, revisit policy

        Returns:
            Collection with one root, empty when the entry point is
            unresolved or excluded
        """
        collection = ReferenceCollection()
        excluded = exclusion_filter(
            config.project_root.resolve(),
            config.excluded_paths,
            config.excluded_patterns,
        )

        root = self._resolve_entry(config, excluded)
        if root is None:
            return collection
        collection.add(root)

        visited: set[str] = set()
        # Children are created when popped, so the visited check sees
        # every earlier sibling's subtree
        stack: list[tuple[Reference, CallEdge]] = []
        self._expand(root, config, visited, stack)

        while stack:
            parent, edge = stack.pop()
            child = self._child(parent, edge, excluded)
            if child is None:
                continue
            # function references are keyed by FQN, so recursion stops here too
            if child.key in visited:
                if config.revisit_policy is RevisitPolicy.LEAF:
                    parent.add_child(child)
                continue
            parent.add_child(child)
            if child.kind.is_recursable:
                self._expand(child, config, visited, stack)

        logger.info(
            "traversed %s: %d references in %d files",
            config.entry_point,
            collection.size,
            len(collection.unique_file_paths()),
        )
        return collection

    def _expand(
        self,
        reference: Reference,
        config: TraversalConfig,
        visited: set[str],
        stack: list[tuple[Reference, CallEdge]],
    ) -> None:
        """Mark reference visited and push its edges, first edge on top."""
        # Depth bound: recorded, never expanded, not marked visited
        if config.is_depth_limited and reference.depth >= config.max_depth:
            return
        visited.add(reference.key)

        tree = self._provider.get(reference.file_path)
        if tree is None:
            return

        member = (
            reference.member_name
            if reference.class_name is not None
            else reference.fully_qualified_name
        )
        edges = self._extractor.extract(tree, reference.class_name, member)
        logger.debug("expanding %s: %d edges", reference.key, len(edges))
        stack.extend((reference, edge) for edge in reversed(edges))

    def _resolve_entry(self, config: TraversalConfig, excluded: PathFilter) -> Reference | None:
        entry = config.entry_point
        definition = self._locator.locate(entry.class_name)
        if definition is None or not isinstance(definition.node, ast.ClassDef):
            logger.info("entry point class %s not found", entry.class_name)
            return None
        if excluded(definition.tree.path):
            logger.info("entry point %s is excluded", entry)
            return None
        if find_method(definition.node, entry.method_name) is None:
            logger.info("entry point method %s not found", entry)
            return None

        return Reference(
            fully_qualified_name=f"{definition.fqn}.{entry.method_name}",
            kind=CallKind.METHOD_CALL,
            file_path=definition.tree.path,
            class_name=definition.fqn,
            member_name=entry.method_name,
        )

    def _child(self, parent: Reference, edge: CallEdge, excluded: PathFilter) -> Reference | None:
        """Reference for edge, None when unresolved or excluded."""
        match edge.kind:
            case CallKind.FUNCTION_CALL:
                name = edge.target_member
                if name is None or "." not in name:
                    logger.debug("unresolved function %s at line %d", name, edge.line)
                    return None
                definition = self._locator.locate(name)
                if definition is not None and definition.is_class:
                    # the callee is a class: a construction
                    edge = CallEdge(
                        kind=CallKind.CONSTRUCTION,
                        target_class=definition.fqn,
                        target_member="__init__",
                        line=edge.line,
                        receiver=edge.receiver,
                    )
                elif definition is None:
                    logger.debug("unresolved %s (%s, line %d)", name, edge.kind.value, edge.line)
            case _:
                if edge.target_class is None:
                    logger.debug("untyped receiver %s at line %d", edge.receiver, edge.line)
                    return None
                definition = self._locate(edge.target_class, edge, want_class=True)

        if definition is None:
            return None
        if excluded(definition.tree.path):
            logger.debug("excluded %s (%s)", definition.fqn, definition.tree.path)
            return None

        common = {
            "kind": edge.kind,
            "file_path": definition.tree.path,
            "depth": parent.depth + 1,
            "parent": parent.key,
        }
        match edge.kind:
            case CallKind.FUNCTION_CALL:
                return Reference(
                    fully_qualified_name=definition.fqn,
                    member_name=definition.node.name,
                    **common,
                )
            case CallKind.PARAMETER_TYPE:
                return Reference(
                    fully_qualified_name=definition.fqn,
                    class_name=definition.fqn,
                    **common,
                )
        return Reference(
            fully_qualified_name=f"{definition.fqn}.{edge.target_member}",
            class_name=definition.fqn,
            member_name=edge.target_member,
            **common,
        )

    def _locate(self, fqn: str, edge: CallEdge, *, want_class: bool) -> Definition | None:
        definition = self._locator.locate(fqn)
        if definition is None:
            logger.debug("unresolved %s (%s, line %d)", fqn, edge.kind.value, edge.line)
            return None
        if definition.is_class is not want_class:
            logger.debug("%s is not a %s", fqn, "class" if want_class else "function")
            return None
        return definition
