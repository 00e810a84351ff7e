"""
Config Loader - JSON configuration document to frozen scopes

Module: config.loader
Date: 2026-10-18
Version: 0.1.0

CHANGELOG:
[2026-10-18 v0.1.0] Initial implementation
  - "server" block -> server scope
  - "locations" list -> directory scopes (+ handler, auth type, realm)
  - "providers" block -> ProviderRegistry
  - Directive validation (numeric delays, Provider placement, names)
  - Signature secret from the environment as a server-scope fallback

ARCHITECTURE:
Loading is the configuration phase: everything is validated here and the
scopes are frozen before the first request. A bad document fails the
load with ConfigurationError instead of failing requests later.
"""

import logging
import os
import re
from dataclasses import dataclass
from typing import Any, Dict, Optional

from ..core.constants import (
    DEFAULT_HTTP_HOST,
    DEFAULT_HTTP_PORT,
    DIRECTIVE_PROVIDER,
    ENV_SIGNATURE_SECRET,
    LOCATION_AUTH_NAME,
    LOCATION_AUTH_TYPE,
    LOCATION_HANDLER,
    LOCATION_PATH,
)
from ..persistence.json_store import JSONStore, JSONStoreError
from ..security.errors import ConfigurationError
from ..security.providers.registry import ProviderRegistry
from .scoped_config import ConfigStore, Directive, Location, ScopedConfig

logger = logging.getLogger("config.loader")

_NUMERIC = re.compile(r"^-?[0-9]+$")
_DIRECTIVES_BY_NAME = {d.value: d for d in Directive}
_LOCATION_OPTIONS = (LOCATION_PATH, LOCATION_HANDLER, LOCATION_AUTH_TYPE, LOCATION_AUTH_NAME)


@dataclass
class LoadedConfig:
    """Result of the configuration phase"""
    store: ConfigStore
    registry: ProviderRegistry
    host: str = DEFAULT_HTTP_HOST
    port: int = DEFAULT_HTTP_PORT


def parse_integer(directive: Directive, value: Any) -> int:
    """
    Signed integer directive value

    Accepts JSON integers and strings of digits with an optional minus.

    Raises:
        ConfigurationError: Anything else
    """
    if isinstance(value, bool):
        raise ConfigurationError(f"{directive.value}: argument must be numeric")
    if isinstance(value, int):
        return value
    if isinstance(value, str) and _NUMERIC.match(value.strip()):
        return int(value.strip())
    raise ConfigurationError(f"{directive.value}: argument must be numeric")


def apply_directive(scope: ScopedConfig, name: str, value: Any) -> None:
    """
    Apply one "Name": value pair to a scope

    Raises:
        ConfigurationError: Unknown directive or invalid value
    """
    directive = _DIRECTIVES_BY_NAME.get(name)
    if directive is None:
        raise ConfigurationError(f"Invalid command '{name}'")

    if directive.is_integer:
        scope.set(directive, parse_integer(directive, value))
    else:
        if not isinstance(value, str) or not value:
            raise ConfigurationError(f"{name}: argument must be a non-empty string")
        scope.set(directive, value)


def _build_server_scope(block: Dict[str, Any]) -> ScopedConfig:
    scope = ScopedConfig.server()
    for name, value in block.items():
        if name == DIRECTIVE_PROVIDER:
            raise ConfigurationError(
                "Provider is not allowed in the server scope, set it on a location"
            )
        apply_directive(scope, name, value)

    if not scope.is_set(Directive.SIGNATURE_SECRET):
        env_secret = os.environ.get(ENV_SIGNATURE_SECRET)
        if env_secret:
            scope.set(Directive.SIGNATURE_SECRET, env_secret)
            logger.info(f"Server signature secret taken from {ENV_SIGNATURE_SECRET}")
    return scope


def _build_location(block: Dict[str, Any], registry: ProviderRegistry) -> Location:
    if not isinstance(block, dict):
        raise ConfigurationError("Each location must be an object")

    path = block.get(LOCATION_PATH)
    if not isinstance(path, str) or not path.startswith("/"):
        raise ConfigurationError(f"Location path must start with '/': {path!r}")

    options = {}
    for key in (LOCATION_HANDLER, LOCATION_AUTH_TYPE, LOCATION_AUTH_NAME):
        value = block.get(key)
        if value is not None and not isinstance(value, str):
            raise ConfigurationError(f"{path}: {key} must be a string")
        options[key] = value

    scope = ScopedConfig.directory(path)
    for name, value in block.items():
        if name in _LOCATION_OPTIONS:
            continue
        if name == DIRECTIVE_PROVIDER:
            names = [value] if isinstance(value, str) else value
            if not isinstance(names, list) or not all(isinstance(n, str) for n in names):
                raise ConfigurationError(f"{path}: Provider must be a name or a list of names")
            for provider_name in names:
                registry.lookup(provider_name)
                scope.add_provider(provider_name)
            continue
        try:
            apply_directive(scope, name, value)
        except ConfigurationError as e:
            raise ConfigurationError(f"{path}: {e}")

    return Location(
        path=path,
        scope=scope,
        handler=options[LOCATION_HANDLER],
        auth_type=options[LOCATION_AUTH_TYPE],
        auth_name=options[LOCATION_AUTH_NAME],
    )


def build_config(document: Dict[str, Any], registry: Optional[ProviderRegistry] = None) -> LoadedConfig:
    """
    Build frozen configuration from a parsed document

    Args:
        document: Parsed configuration document
        registry: Registry to use (providers declared in the document
            are added to it)

    Raises:
        ConfigurationError: Invalid document
    """
    if not isinstance(document, dict):
        raise ConfigurationError("Configuration must be a JSON object")

    registry = registry or ProviderRegistry()
    providers = document.get("providers", {})
    if not isinstance(providers, dict):
        raise ConfigurationError("'providers' must be an object")
    for name, options in providers.items():
        registry.create(name, options)

    server_block = document.get("server", {})
    if not isinstance(server_block, dict):
        raise ConfigurationError("'server' must be an object")
    store = ConfigStore(_build_server_scope(server_block))

    locations = document.get("locations", [])
    if not isinstance(locations, list):
        raise ConfigurationError("'locations' must be a list")
    for block in locations:
        store.add_location(_build_location(block, registry))

    listen = document.get("listen", {})
    if not isinstance(listen, dict):
        raise ConfigurationError("'listen' must be an object")
    host = listen.get("host", DEFAULT_HTTP_HOST)
    port = listen.get("port", DEFAULT_HTTP_PORT)
    if isinstance(port, bool) or not isinstance(port, int) or not 0 < port < 65536:
        raise ConfigurationError(f"Invalid listen port: {port!r}")

    store.freeze()
    logger.info(
        f"Configuration loaded: {len(store.locations)} location(s), "
        f"providers={registry.names()}"
    )
    return LoadedConfig(store=store, registry=registry, host=host, port=port)


def load_config(path: str, registry: Optional[ProviderRegistry] = None) -> LoadedConfig:
    """
    Load and validate a configuration file

    Raises:
        ConfigurationError: Unreadable file or invalid document
    """
    try:
        document = JSONStore(path, read_only=True).load()
    except JSONStoreError as e:
        raise ConfigurationError(f"Cannot load configuration: {e}")
    return build_config(document, registry)
