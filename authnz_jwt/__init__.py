"""
authnz-jwt - JWT bearer token authentication service

Issues signed tokens to users whose credentials pass a chain of
authentication providers, and guards protected locations by checking
the bearer token of every request.

CHANGELOG:
[2026-10-18 v0.1.0] Initial project setup
  - Scoped configuration (server / location) with precedence rules
  - Provider chain (file, remote)
  - Token issuance and verification (HS256 / HS384 / HS512)
  - aiohttp front end

ARCHITECTURE:
- Layer 1 : Transport (aiohttp login route + bearer middleware)
- Layer 2 : Orchestration (AuthServer)
- Layer 3 : Security (ProviderChain, TokenIssuer, TokenVerifier, KeyPolicy)
- Layer 4 : Configuration & persistence (ConfigStore, ConfigResolver, JSONStore)

SECURITY NOTES:
- Secrets must match the algorithm key length exactly
- Tokens with alg "none" are always rejected
- Configuration is frozen before serving
"""

__version__ = "0.1.0"
__author__ = "authnz-jwt Development Team"

# Version info
VERSION_MAJOR = 0
VERSION_MINOR = 1
VERSION_PATCH = 0

# Export main classes
from .core.auth_server import AuthServer, AuthResponse
from .config.loader import LoadedConfig, build_config, load_config
from .security.errors import AuthnzJWTError, ConfigurationError
from .security.token_issuer import TokenIssuer
from .security.token_verifier import TokenVerifier

__all__ = [
    "AuthServer",
    "AuthResponse",
    "LoadedConfig",
    "build_config",
    "load_config",
    "AuthnzJWTError",
    "ConfigurationError",
    "TokenIssuer",
    "TokenVerifier",
]
