"""Unified settings — keyword overrides, env vars, and TOML config in one object.

Priority chain (highest to lowest):
  1. Init kwargs  — overrides passed by the host
  2. Env vars     — ``SLSIMPORT_*`` prefix
  3. TOML file    — ``slsimport.toml`` discovered via walk-up
  4. Code defaults — baked into the section models

Uses Pydantic Settings v2 with a custom :class:`TomlSettingsSource` that
reuses the ``find_config`` walk-up discovery from
:mod:`slsimport.config.discovery`.
"""

from __future__ import annotations

import threading
import tomllib
from pathlib import Path
from typing import Any, Literal

from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from slsimport.config.discovery import find_config
from slsimport.config.models import FragmentsConfig, PluginsConfig


class SettingsError(ValueError):
    """The settings file exists but cannot be parsed."""


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Read settings from a ``slsimport.toml`` file discovered via walk-up."""

    def __init__(self, settings_cls: type[BaseSettings], toml_path: Path | None) -> None:
        super().__init__(settings_cls)
        self._data: dict[str, Any] = {}
        if toml_path and toml_path.is_file():
            raw = toml_path.read_text(encoding="utf-8")
            try:
                self._data = tomllib.loads(raw)
            except tomllib.TOMLDecodeError as exc:
                msg = f"Invalid TOML in {toml_path}: {exc}"
                raise SettingsError(msg) from exc

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        """Return ``(value, field_name, value_is_complex)``."""
        val = self._data.get(field_name)
        return val, field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        """Return the full TOML data dict for Pydantic to merge."""
        return self._data


# Thread-local storage for TOML path during construction.
_tls = threading.local()


def _real_cwd() -> Path:
    return Path.cwd().resolve()


class ImportSettings(BaseSettings):
    """Settings for one import activation.

    Attributes:
        project_root: Directory literal imports, directory imports, and
            rewritten paths are relative to. Defaults to the real CWD.
        config_path: The ``slsimport.toml`` in use, or None.
        merge_order: ``declaration`` merges siblings in declaration
            order; ``completion`` merges them as they finish.
        detect_cycles: Fail on circular imports instead of recursing.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "SLSIMPORT_",
        "env_nested_delimiter": "__",
    }

    project_root: Path = Field(default_factory=_real_cwd)
    config_path: Path | None = None

    verbose: bool = False
    log_json: bool = False

    merge_order: Literal["declaration", "completion"] = "declaration"
    detect_cycles: bool = True

    plugins: PluginsConfig = Field(default_factory=PluginsConfig)
    fragments: FragmentsConfig = Field(default_factory=FragmentsConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Insert TOML source between env vars and defaults."""
        toml_path = getattr(_tls, "toml_path", None)
        return (
            init_settings,
            env_settings,
            TomlSettingsSource(settings_cls, toml_path),
        )

    @classmethod
    def load(
        cls,
        *,
        config_path: str | Path | None = None,
        project_root: Path | None = None,
        **overrides: Any,
    ) -> ImportSettings:
        """Construct settings for a project.

        Discovers ``slsimport.toml`` via walk-up from *project_root* (or
        uses the explicit *config_path*) and applies *overrides* as
        highest-priority values.
        """
        toml_path: Path | None = None
        if config_path:
            p = Path(config_path)
            if p.is_file():
                toml_path = p
        else:
            toml_path = find_config(project_root)

        if project_root is not None:
            overrides["project_root"] = project_root.resolve()

        _tls.toml_path = toml_path
        try:
            return cls(config_path=toml_path, **overrides)
        finally:
            _tls.toml_path = None
