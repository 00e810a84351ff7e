"""
Configuration module - scopes, resolution and loading

Provides:
- Directive, ScopedConfig, ScopePair, Location, ConfigStore
- ConfigResolver, EffectiveConfig
- load_config / build_config
"""

from .scoped_config import (
    Directive,
    ScopeLevel,
    ScopedConfig,
    ScopePair,
    Location,
    ConfigStore,
)
from .resolver import ConfigResolver, EffectiveConfig
from .loader import LoadedConfig, build_config, load_config

__all__ = [
    "Directive",
    "ScopeLevel",
    "ScopedConfig",
    "ScopePair",
    "Location",
    "ConfigStore",
    "ConfigResolver",
    "EffectiveConfig",
    "LoadedConfig",
    "build_config",
    "load_config",
]
