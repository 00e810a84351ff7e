"""
Provider Registry - Named credential providers

Module: security.providers.registry
Date: 2026-10-18
Version: 0.1.0

Locations reference providers by name. The registry resolves those
names at configuration time so that an unknown name fails the load
instead of a request.
"""

import logging
from typing import Any, Dict, List

from ...persistence.json_store import JSONStoreError
from ..errors import ConfigurationError
from .base import AuthnProvider
from .file_provider import FileProvider
from .remote_provider import DEFAULT_TIMEOUT, RemoteProvider


class ProviderRegistry:
    """Maps provider names to provider instances"""

    def __init__(self):
        self.logger = logging.getLogger("security.providers.registry")
        self._providers: Dict[str, AuthnProvider] = {}

    def register(self, provider: AuthnProvider) -> AuthnProvider:
        if provider.name in self._providers:
            raise ConfigurationError(f"Duplicate Authn provider: {provider.name}")
        self._providers[provider.name] = provider
        self.logger.debug(f"Provider registered: {provider!r}")
        return provider

    def lookup(self, name: str) -> AuthnProvider:
        """
        Provider by name

        Raises:
            ConfigurationError: Unknown provider
        """
        try:
            return self._providers[name]
        except KeyError:
            raise ConfigurationError(f"Unknown Authn provider: {name}")

    def resolve(self, names) -> List[AuthnProvider]:
        return [self.lookup(name) for name in names]

    def names(self) -> List[str]:
        return list(self._providers)

    def create(self, name: str, options: Dict[str, Any]) -> AuthnProvider:
        """
        Build and register a provider from its configuration block

        Args:
            name: Provider name
            options: {"type": "file", "path": ...} or
                {"type": "remote", "url": ..., "timeout": ...}

        Raises:
            ConfigurationError: Unknown type or missing option
        """
        if not isinstance(options, dict):
            raise ConfigurationError(f"Provider '{name}': options must be an object")

        kind = options.get("type")
        if kind == "file":
            path = options.get("path")
            if not path:
                raise ConfigurationError(f"Provider '{name}': 'path' is required")
            rounds = options.get("bcrypt_rounds", 10)
            if isinstance(rounds, bool) or not isinstance(rounds, int) or not 4 <= rounds <= 31:
                raise ConfigurationError(f"Provider '{name}': 'bcrypt_rounds' must be an integer between 4 and 31")
            try:
                provider = FileProvider(name, path, bcrypt_rounds=rounds)
            except JSONStoreError as e:
                raise ConfigurationError(f"Provider '{name}': {e}")
            return self.register(provider)

        if kind == "remote":
            url = options.get("url")
            if not url:
                raise ConfigurationError(f"Provider '{name}': 'url' is required")
            timeout = options.get("timeout", DEFAULT_TIMEOUT)
            if isinstance(timeout, bool) or not isinstance(timeout, (int, float)) or timeout <= 0:
                raise ConfigurationError(f"Provider '{name}': 'timeout' must be a positive number")
            return self.register(RemoteProvider(name, url, timeout=float(timeout)))

        raise ConfigurationError(f"Provider '{name}': unknown type {kind!r}")

    async def close(self) -> None:
        for provider in self._providers.values():
            await provider.close()
