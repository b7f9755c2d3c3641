#!/usr/bin/env python3

from __future__ import annotations
from enum import Enum
import logging
from pathlib import Path, PurePath
from typing import TYPE_CHECKING, Any, Callable, Iterable, NamedTuple, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .utils import FileSystem, InvalidNameError, LocalFileSystem, check_name, iter_ancestors

if TYPE_CHECKING:
    from .config import FinderSettings

logger = logging.getLogger(__name__)


# ------------------------------------------------------------------------------
# Options
# ------------------------------------------------------------------------------


class MatchKind(str, Enum):
    FILE = "file"
    DIRECTORY = "directory"


class FindUpOptions(BaseModel):
    """Where to start searching, and what kind of entry counts as a match."""

    model_config = ConfigDict(frozen=True)

    cwd: Path
    kind: MatchKind = MatchKind.FILE
    max_depth: int | None = Field(default=None, ge=0)

    @field_validator("cwd", mode="before")
    @classmethod
    def _check_cwd(cls, value: Any) -> Any:
        if isinstance(value, (str, PurePath)):
            raw = str(value) if isinstance(value, PurePath) else value
            if not raw:
                raise ValueError("cwd must not be empty")
            if "\0" in raw:
                raise ValueError("cwd must not contain NUL bytes")
        return value


# ------------------------------------------------------------------------------
# Match Outcomes
# ------------------------------------------------------------------------------


class Matched(NamedTuple):
    path: PurePath
    stop: bool = False  # Record this path, then don't look for the name any higher


class Signal(Enum):
    CONTINUE = "continue"  # Not a match here; keep looking further up
    STOP = "stop"  # Don't look for this name in any higher directory


MatchOutcome = Union[Matched, Signal]
Matcher = Callable[[PurePath], MatchOutcome]


def _nearest_only(path: PurePath) -> MatchOutcome:
    return Matched(path, stop=True)


def _as_names(names: Iterable[str]) -> tuple[str, ...]:
    if isinstance(names, (str, bytes)):
        raise InvalidNameError(f"Expected a collection of names, got the single value {names!r}")
    return tuple(check_name(name) for name in names)


# ------------------------------------------------------------------------------
# Up Finder
# ------------------------------------------------------------------------------


class UpFinder:
    """
    Searches a directory and each of its parents for entries with the given names.

    >>> finder = UpFinder(cwd="fixtures/a/b/c/d", kind=MatchKind.FILE)
    >>> finder.find_up("package.json")
    """

    def __init__(
        self,
        options: FindUpOptions | None = None,
        *,
        fs: FileSystem | None = None,
        names: Iterable[str] = (),
        **fields: Any,
    ):
        if options is not None and fields:
            raise TypeError("Pass either a FindUpOptions instance or option keywords, not both")
        self.options = options if options is not None else FindUpOptions(**fields)
        self.fs = fs or LocalFileSystem()
        self.names = _as_names(names)

    @classmethod
    def from_settings(
        cls,
        cwd: str | PurePath,
        settings: FinderSettings | None = None,
        *,
        fs: FileSystem | None = None,
    ) -> UpFinder:
        """
        Build a finder whose kind, depth limit and default names come from `FinderSettings`.

        When `settings` is omitted they are loaded with the config file searched for from `cwd`.
        """
        if settings is None:
            from .config import FinderSettings

            settings = FinderSettings.load(start=Path(cwd))
        options = FindUpOptions(cwd=cwd, kind=settings.kind, max_depth=settings.max_depth)
        return cls(options, fs=fs, names=settings.names)

    def find_up(self, name: str) -> list[PurePath]:
        """Every `name` of the configured kind from `cwd` up to the root, nearest first."""
        return self.find_up_many([name]).get(name, [])

    def find_up_many(self, names: Iterable[str] | None = None) -> dict[str, list[PurePath]]:
        """Search for `names`, or for the finder's default names when omitted."""
        return self.find_up_with(self.names if names is None else names, Matched)

    def find_nearest(self, name: str) -> PurePath | None:
        found = self.find_up_with([name], _nearest_only).get(name, [])
        return found[0] if found else None

    def find_up_with(self, names: Iterable[str], matcher: Matcher) -> dict[str, list[PurePath]]:
        """
        Walk from `cwd` to the root, feeding each qualifying candidate to `matcher`.

        Every name is a key of the result, even with no matches. A name is only
        retired early when `matcher` returns `Signal.STOP` or `Matched(..., stop=True)`
        for it; the others keep being tested in every directory.
        """
        found: dict[str, list[PurePath]] = {name: [] for name in _as_names(names)}
        active = list(found)

        for directory in iter_ancestors(self.options.cwd, self.fs, self.options.max_depth):
            if not active:
                break

            for name in list(active):
                candidate = self.fs.join(directory, name)
                if not self._qualifies(candidate):
                    continue

                outcome = matcher(candidate)
                if outcome is Signal.STOP:
                    active.remove(name)
                elif isinstance(outcome, Matched):
                    logger.debug("Found %s at %s", name, outcome.path)
                    found[name].append(outcome.path)
                    if outcome.stop:
                        active.remove(name)

        return found

    def _qualifies(self, candidate: PurePath) -> bool:
        try:
            if not self.fs.exists(candidate):
                return False
            if self.options.kind is MatchKind.FILE:
                return self.fs.is_file(candidate)
            return self.fs.is_dir(candidate)
        except OSError as e:
            # An unreadable ancestor is just a miss for this name.
            logger.debug("Skipping %s: %s", candidate, e)
            return False


# ------------------------------------------------------------------------------
# Module Level Helpers
# ------------------------------------------------------------------------------


def find_up(
    name: str,
    options: FindUpOptions | None = None,
    *,
    fs: FileSystem | None = None,
    **fields: Any,
) -> list[PurePath]:
    return UpFinder(options, fs=fs, **fields).find_up(name)


def find_up_many(
    names: Iterable[str],
    options: FindUpOptions | None = None,
    *,
    fs: FileSystem | None = None,
    **fields: Any,
) -> dict[str, list[PurePath]]:
    return UpFinder(options, fs=fs, **fields).find_up_many(names)


def find_nearest(
    name: str,
    options: FindUpOptions | None = None,
    *,
    fs: FileSystem | None = None,
    **fields: Any,
) -> PurePath | None:
    """Closest `name` of the configured kind, or None if there isn't one on the way up."""
    return UpFinder(options, fs=fs, **fields).find_nearest(name)
