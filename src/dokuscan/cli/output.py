"""Utility functions for cli output."""

#  Copyright (c) 2025 Tom Villani, Ph.D.

# src/dokuscan/cli/output.py
import argparse
import sys
from typing import TextIO

from dokuscan.exceptions import DependencyError
from dokuscan.references import ResourceReference
from dokuscan.sinks import EventTree, describe_event


def check_rich_available() -> bool:
    """Check if Rich library is available.

    Returns
    -------
    bool
        True if Rich is available, False otherwise

    """
    try:
        import rich  # noqa: F401

        return True
    except ImportError:
        return False


def should_use_rich_output(args: argparse.Namespace, raise_on_missing: bool = False) -> bool:
    """Determine if Rich output should be used.

    Parameters
    ----------
    args : argparse.Namespace
        Parsed command line arguments
    raise_on_missing : bool, default False
        Raise DependencyError if rich is not installed

    Returns
    -------
    bool
        True if ``--rich`` was given, no output file was requested, and Rich
        is available

    """
    if not args.rich or args.out:
        return False

    if not check_rich_available():
        if raise_on_missing:
            raise DependencyError(
                feature_name="rich-output",
                missing_packages=[("rich", "")],
                message="Rich output requires the 'rich' package. Install with: pip install rich",
            )
        return False
    return True


def format_references(references: list[tuple[str, ResourceReference]]) -> str:
    """Format collected references as tab-separated lines.

    Each line holds the role (``link`` or ``image``), the reference kind,
    ``typed``/``untyped`` and the reference itself.
    """
    lines = [
        f"{role}\t{reference.kind.value}\t{'typed' if reference.typed else 'untyped'}\t{reference}"
        for role, reference in references
    ]
    return "\n".join(lines) + ("\n" if lines else "")


def print_rich_tree(root: EventTree, title: str, stream: TextIO | None = None) -> None:
    """Print the event nesting as a Rich tree.

    Parameters
    ----------
    root : EventTree
        Tree built from the event stream
    title : str
        Label of the tree's root
    stream : TextIO, optional
        Destination, defaults to ``sys.stdout``

    """
    from rich.console import Console
    from rich.markup import escape
    from rich.tree import Tree

    def add_children(branch: Tree, node: EventTree) -> None:
        for child in node.children:
            style = "bold cyan" if child.event.is_begin else "green"
            label = escape(describe_event(child.event))
            add_children(branch.add(f"[{style}]{label}[/{style}]"), child)

    tree = Tree(f"[bold]{escape(title)}[/bold]")
    add_children(tree.add(escape(describe_event(root.event))), root)
    Console(file=stream or sys.stdout).print(tree)
