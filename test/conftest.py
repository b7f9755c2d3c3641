from __future__ import annotations

from pathlib import Path, PurePath, PurePosixPath

import pytest


@pytest.fixture
def fixtures(tmp_path: Path) -> Path:
    """
    fixtures/a/b/c/d with a package.json at every level of a..d,
    and a .node-version only in a.
    """
    root = tmp_path / "fixtures"
    deepest = root / "a" / "b" / "c" / "d"
    deepest.mkdir(parents=True)

    for directory in (root / "a", root / "a" / "b", root / "a" / "b" / "c", deepest):
        (directory / "package.json").write_text("{}\n", encoding="utf-8")
    (root / "a" / ".node-version").write_text("20\n", encoding="utf-8")
    return root


@pytest.fixture(autouse=True)
def _clean_findup_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in ("FINDUP_KIND", "FINDUP_MAX_DEPTH", "FINDUP_NAMES"):
        monkeypatch.delenv(key, raising=False)


class FakeFileSystem:
    """In-memory POSIX tree: maps absolute paths to "file" or "dir"."""

    def __init__(self, entries: dict[str, str], broken: set[str] | None = None):
        self.entries = {PurePosixPath(path): kind for path, kind in entries.items()}
        self.broken = {PurePosixPath(path) for path in broken or ()}
        self.joined: list[PurePosixPath] = []

    def _lookup(self, path: PurePath) -> str | None:
        path = PurePosixPath(path)
        if path in self.broken:
            raise PermissionError(13, "Permission denied", str(path))
        return self.entries.get(path)

    def exists(self, path: PurePath) -> bool:
        return self._lookup(path) is not None

    def is_file(self, path: PurePath) -> bool:
        return self._lookup(path) == "file"

    def is_dir(self, path: PurePath) -> bool:
        return self._lookup(path) == "dir"

    def parent_of(self, path: PurePath) -> PurePath | None:
        path = PurePosixPath(path)
        return None if path.parent == path else path.parent

    def join(self, directory: PurePath, name: str) -> PurePath:
        joined = PurePosixPath(directory) / name
        self.joined.append(joined)
        return joined


@pytest.fixture
def make_fs():
    return FakeFileSystem
