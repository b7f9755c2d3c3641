#!/usr/bin/env python3

from __future__ import annotations
from pathlib import PurePath
from typing import Mapping, Sequence

from rich.console import Console
from rich.tree import Tree
import rich


def build_match_tree(result: Mapping[str, Sequence[PurePath]], title: str = "Matches") -> Tree:
    """One branch per searched name, nearest match first."""
    tree = Tree(title)
    for name, paths in result.items():
        branch = tree.add(f"[bold]{name}[/] ({len(paths)})")
        if not paths:
            branch.add("[dim]no matches[/]")
        for path in paths:
            branch.add(str(path))
    return tree


def show_matches(
    result: Mapping[str, Sequence[PurePath]],
    title: str = "Matches",
    console: Console | None = None,
) -> None:
    tree = build_match_tree(result, title)
    if console is None:
        rich.print(tree)
    else:
        console.print(tree)
