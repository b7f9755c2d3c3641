from __future__ import annotations

import io
from pathlib import Path

from rich.console import Console

from findup import build_match_tree, show_matches


RESULT = {
    "package.json": [Path("fixtures/a/b/package.json"), Path("fixtures/a/package.json")],
    ".node-version": [],
}


def test_build_match_tree_has_a_branch_per_name():
    tree = build_match_tree(RESULT, title="Search")

    assert tree.label == "Search"
    assert [child.label for child in tree.children] == [
        "[bold]package.json[/] (2)",
        "[bold].node-version[/] (0)",
    ]
    assert [leaf.label for leaf in tree.children[0].children] == [
        str(Path("fixtures/a/b/package.json")),
        str(Path("fixtures/a/package.json")),
    ]
    assert [leaf.label for leaf in tree.children[1].children] == ["[dim]no matches[/]"]


def test_show_matches_prints_paths():
    out = io.StringIO()
    show_matches(RESULT, console=Console(file=out, width=120, color_system=None))

    text = out.getvalue()
    assert "Matches" in text
    assert "package.json (2)" in text
    assert str(Path("fixtures/a/package.json")) in text
    assert "no matches" in text
