#!/usr/bin/env python3

from .finder import (
    FindUpOptions,
    MatchKind,
    Matched,
    Signal,
    UpFinder,
    find_nearest,
    find_up,
    find_up_many,
)
from .utils import FileSystem, FindUpError, InvalidNameError, LocalFileSystem
from .config import FinderSettings
from .display import build_match_tree, show_matches

__version__ = "0.1.0"
__all__ = [
    "FileSystem",
    "FindUpError",
    "FindUpOptions",
    "FinderSettings",
    "InvalidNameError",
    "LocalFileSystem",
    "MatchKind",
    "Matched",
    "Signal",
    "UpFinder",
    "build_match_tree",
    "find_nearest",
    "find_up",
    "find_up_many",
    "show_matches",
]
