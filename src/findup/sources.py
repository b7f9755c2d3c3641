#!/usr/bin/env python3

from __future__ import annotations
import logging
import os
from pathlib import Path
from typing import Any

from pydantic_settings.sources import DEFAULT_PATH, PathType
from pydantic.fields import FieldInfo
from pydantic_settings import BaseSettings
from pydantic_settings.sources import (
    PydanticBaseSettingsSource,
    TomlConfigSettingsSource,
)
import yaml

from . import utils
from .finder import FindUpOptions, MatchKind, find_nearest

logger = logging.getLogger(__name__)


# ------------------------------------------------------------------------------
# Config Source Mixins
# ------------------------------------------------------------------------------


class AncestorConfigMixin:
    """Mixin for finding config files in the working directory or its ancestors."""

    def __init__(self, *args, start: Path | None = None, **kwargs):
        self._start = start
        super().__init__(*args, **kwargs)

    def _locate(self, file_path: Path) -> Path | None:
        if file_path.is_absolute() or len(file_path.parts) != 1:
            # Only bare names get searched for upwards.
            return file_path if file_path.is_file() else None

        options = FindUpOptions(cwd=self._start or Path.cwd(), kind=MatchKind.FILE)
        found = find_nearest(file_path.name, options)
        return Path(found) if found is not None else None

    def _read_files(self, files: PathType | None, deep_merge: bool = False) -> dict[str, Any]:
        """
        Read the nearest copy of each config file, later files overriding earlier ones.

        With `deep_merge`, nested tables are merged key by key instead of replaced whole.
        """
        if files is None:
            return {}
        if isinstance(files, (str, os.PathLike)):
            files = [files]

        vars: dict[str, Any] = {}
        for file in files:
            found_path = self._locate(Path(file).expanduser())
            if found_path:
                logger.debug("Reading settings from %s", found_path)
                data = self._read_file(found_path)
                vars = utils.deep_merge(vars, data) if deep_merge else {**vars, **data}
        return vars


# ------------------------------------------------------------------------------
# Ancestor TOML Config Settings Source
# ------------------------------------------------------------------------------


class AncestorTomlConfigSettingsSource(AncestorConfigMixin, TomlConfigSettingsSource):
    """
    Read settings from the nearest matching toml file in this or a containing folder.
    """

    def __init__(
        self,
        settings_cls: type[BaseSettings],
        toml_file: PathType | None = DEFAULT_PATH,
        *,
        start: Path | None = None,
    ):
        # Call mixin init which will call super().__init__
        super().__init__(start=start, settings_cls=settings_cls, toml_file=toml_file)


# ------------------------------------------------------------------------------
# Ancestor YAML Config Settings Source
# ------------------------------------------------------------------------------


class AncestorYamlConfigSettingsSource(AncestorConfigMixin, PydanticBaseSettingsSource):
    """
    Read settings from the nearest matching YAML file in this or a containing folder.
    """

    def __init__(
        self,
        settings_cls: type[BaseSettings],
        yaml_file: str | Path | None = None,
        *,
        start: Path | None = None,
    ):
        self._yaml_file = yaml_file
        super().__init__(start=start, settings_cls=settings_cls)

    def get_field_value(self, field: FieldInfo, field_name: str) -> tuple[Any, str, bool]:
        # Not used since we override __call__ directly
        return None, "", False

    def _read_file(self, file_path: Path) -> dict[str, Any]:
        with open(file_path) as f:
            return yaml.safe_load(f) or {}

    def __call__(self) -> dict[str, Any]:
        return self._read_files(self._yaml_file)
