"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, slsimport.toml only contains overrides.
"""

from __future__ import annotations

from pydantic import BaseModel


class PluginsConfig(BaseModel):
    """[plugins] section."""

    model_config = {"frozen": True}

    entry_point_group: str = "slsimport.plugins"
    local_dir: str = ".serverless_plugins"


class FragmentsConfig(BaseModel):
    """[fragments] section."""

    model_config = {"frozen": True}

    factory_name: str = "configure"
