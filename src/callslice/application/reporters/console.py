"""Console reporter: SliceResult → rich formatted string."""

from __future__ import annotations

from dataclasses import dataclass
from io import StringIO
from typing import TYPE_CHECKING

from rich.console import Console
from rich.markup import escape
from rich.tree import Tree

from callslice.domain.model.call_kind import CallKind

if TYPE_CHECKING:
    from callslice.domain.model.artifact import ArtifactStats
    from callslice.domain.model.reference import Reference
    from callslice.domain.model.slice_result import SliceResult

# Kind → rich style
_KIND_STYLES = {
    CallKind.METHOD_CALL: "cyan",
    CallKind.STATIC_CALL: "magenta",
    CallKind.FUNCTION_CALL: "green",
    CallKind.CONSTRUCTION: "yellow",
    CallKind.INVOKABLE_CALL: "blue",
    CallKind.PARAMETER_TYPE: "dim",
}


@dataclass(frozen=True, slots=True)
class ConsoleConfig:
    """Configuration for console reporter.

    All fields have defaults. Immutable (frozen dataclass).

    Attributes:
        show_tree: Render the reference tree.
        show_source: Print the artifact source after the summary.
        show_paths: Show file path next to each reference.
        width: Console width in characters.
    """

    show_tree: bool = True
    show_source: bool = False
    show_paths: bool = False
    width: int = 120


class ConsoleReporter:
    """Console reporter: outputs rich formatted text.

    Output is str, not print(). Caller decides destination.
    """

    def __init__(self, config: ConsoleConfig | None = None) -> None:
        """Initialize reporter.

        Args:
            config: Reporter configuration. Uses defaults if None.
        """
        self._config = config or ConsoleConfig()

    def report(self, result: SliceResult) -> str:
        """Format slice result as rich formatted string.

        Args:
            result: Slice result to format.

        Returns:
            Formatted string with colors and tree.
        """
        output = StringIO()
        console = Console(file=output, force_terminal=True, width=self._config.width)

        console.print()
        console.rule(f"[bold]CALL SLICE[/bold] {escape(str(result.entry_point))}")
        console.print()

        if not result.resolved:
            console.print(f"[bold red]Entry point not found:[/bold red] {escape(result.entry_point.key)}")
            console.print()
            return output.getvalue()

        references = result.references
        console.print(
            f"[bold]References:[/bold] {references.size}  "
            f"[bold]Files:[/bold] {len(references.unique_file_paths())}  "
            f"[bold]Max depth:[/bold] {references.max_depth}  "
            f"[bold]Time:[/bold] {result.elapsed_s:.3f}s"
        )
        if result.artifact is not None:
            console.print(self._format_stats(result.artifact.stats))
        console.print()

        if self._config.show_tree:
            for root in references.roots:
                console.print(self._build_tree(root))
            console.print()

        if self._config.show_source and result.artifact is not None:
            console.rule("[bold]SOURCE[/bold]")
            console.print(result.artifact.source, markup=False, highlight=False)

        return output.getvalue()

    @staticmethod
    def _format_stats(stats: ArtifactStats) -> str:
        return (
            f"[bold]Artifact:[/bold] {stats.file_count} files, "
            f"{stats.line_count} lines, {stats.byte_count} bytes "
            f"[dim](parsed {stats.cached_tree_count} files)[/dim]"
        )

    def _label(self, reference: Reference) -> str:
        style = _KIND_STYLES[reference.kind]
        name = escape(reference.fully_qualified_name)
        label = f"[{style}]{name}[/{style}] [dim]{reference.kind.value}[/dim]"
        if self._config.show_paths:
            label += f" [dim]{escape(str(reference.file_path))}[/dim]"
        return label

    def _build_tree(self, root: Reference) -> Tree:
        """Rich tree of root, built with an explicit stack."""
        tree = Tree(self._label(root))
        stack: list[tuple[Reference, Tree]] = [(root, tree)]
        while stack:
            reference, node = stack.pop()
            branches = [(child, node.add(self._label(child))) for child in reference.children]
            stack.extend(reversed(branches))
        return tree
