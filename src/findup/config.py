#!/usr/bin/env python3

from __future__ import annotations
from contextvars import ContextVar
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict

from .finder import MatchKind
from .sources import AncestorTomlConfigSettingsSource, AncestorYamlConfigSettingsSource

# Directory the ancestor config file is searched for from, while `load` runs.
_search_start: ContextVar[Path | None] = ContextVar("findup_search_start", default=None)


class FinderSettings(BaseSettings):
    """
    Defaults for `UpFinder`, read from kwargs, FINDUP_* env vars, or the nearest findup.toml.

    Subclasses can point `toml_file` or `yaml_file` at a different config file, but not both.
    """

    model_config = SettingsConfigDict(
        env_prefix="findup_",
        env_nested_delimiter="__",
        toml_file="findup.toml",
        yaml_file=None,
        extra="ignore",
    )

    kind: MatchKind = MatchKind.FILE
    max_depth: int | None = Field(default=None, ge=0)
    names: list[str] = Field(default_factory=list)

    @classmethod
    def load(cls, *args, start: Path | None = None, **kwargs):
        """
        Build the settings, looking for the config file from `start` (default: the working directory).
        """
        token = _search_start.set(start)
        try:
            return cls(*args, **kwargs)
        finally:
            _search_start.reset(token)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        sources = [init_settings, env_settings, dotenv_settings]
        start = _search_start.get()

        yaml_file = settings_cls.model_config.get("yaml_file")
        toml_file = settings_cls.model_config.get("toml_file")

        if yaml_file and toml_file:
            raise ValueError(
                "Cannot specify both 'yaml_file' and 'toml_file' in model_config. "
                "Please use only one config file format."
            )

        if yaml_file:
            sources.append(AncestorYamlConfigSettingsSource(settings_cls, yaml_file, start=start))
        elif toml_file:
            sources.append(AncestorTomlConfigSettingsSource(settings_cls, start=start))

        sources.append(file_secret_settings)

        return tuple(sources)
