#!/usr/bin/env python3

from __future__ import annotations
import logging
import os
from pathlib import Path, PurePath
from typing import Iterator, Protocol

logger = logging.getLogger(__name__)

# Upper bound on parent steps, whatever max_depth says.
MAX_ASCENT = 4096


class FindUpError(Exception):
    """Base class for findup errors."""


class InvalidNameError(FindUpError, ValueError):
    """A target name that can't be joined onto a directory as a single entry."""


class FileSystem(Protocol):
    def exists(self, path: PurePath) -> bool: ...

    def is_file(self, path: PurePath) -> bool: ...

    def is_dir(self, path: PurePath) -> bool: ...

    def parent_of(self, path: PurePath) -> PurePath | None: ...

    def join(self, directory: PurePath, name: str) -> PurePath: ...


class LocalFileSystem:
    """The host filesystem, via pathlib."""

    def exists(self, path: PurePath) -> bool:
        return Path(path).exists()

    def is_file(self, path: PurePath) -> bool:
        return Path(path).is_file()

    def is_dir(self, path: PurePath) -> bool:
        return Path(path).is_dir()

    def parent_of(self, path: PurePath) -> PurePath | None:
        parent = path.parent
        if parent == path:
            return None  # Root (or "." for relative paths) is its own parent
        return parent

    def join(self, directory: PurePath, name: str) -> PurePath:
        return directory / name


def deep_merge(dict1: dict, dict2: dict) -> dict:
    """
    Merge two dicts
    """
    result = dict1.copy()
    for key, value in dict2.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def check_name(name: str) -> str:
    """
    Reject names that aren't a single directory entry.

    Separators, NUL bytes, "." and ".." would make the candidate path point
    somewhere other than `<directory>/<name>`, so they are refused up front.
    """
    if not isinstance(name, str) or not name:
        raise InvalidNameError(f"Expected a non-empty file name, got {name!r}")
    if name in (".", ".."):
        raise InvalidNameError(f"{name!r} is not a valid file name")
    if "\0" in name:
        raise InvalidNameError(f"File name {name!r} contains a NUL byte")
    for sep in {"/", os.sep, os.altsep}:
        if sep and sep in name:
            raise InvalidNameError(
                f"File name {name!r} contains a path separator ({sep!r}). "
                "Only bare names are searched for."
            )
    return name


def iter_ancestors(
    start: PurePath, fs: FileSystem, max_depth: int | None = None
) -> Iterator[PurePath]:
    """
    Yield `start` and then each lexical parent up to the root.

    `max_depth` caps how many parents are visited above `start` (0 means only `start`).
    """
    cur = start
    depth = 0

    # Keep going up until we hit the root
    while True:
        yield cur

        parent = fs.parent_of(cur)
        if parent is None:
            return

        depth += 1
        if max_depth is not None and depth > max_depth:
            return
        if depth > MAX_ASCENT:
            logger.warning("Gave up ascending from %s after %d parents", start, MAX_ASCENT)
            return

        cur = parent
