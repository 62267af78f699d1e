from __future__ import annotations

from .load import load_config
from .schema import AppConfig, EmbedProviderConfig, EnvOverrides

__all__ = ["AppConfig", "EmbedProviderConfig", "EnvOverrides", "load_config"]
