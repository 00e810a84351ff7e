"""
Security module - credentials, keys and tokens

Provides:
- Error hierarchy (ConfigurationError, CredentialError, TokenError)
- KeyPolicy: secret length per HMAC algorithm
- TokenClaims: typed claims
- RequestContext: per-request authentication state

TokenIssuer, TokenVerifier and ProviderChain live in their own modules
(security.token_issuer, security.token_verifier, security.provider_chain).
"""

from .errors import (
    AuthnzJWTError,
    ConfigurationError,
    KeyPolicyError,
    CredentialError,
    TokenError,
)
from .key_policy import KeyPolicy
from .claims import TokenClaims, ClaimFormatError
from .request_context import RequestContext

__all__ = [
    "AuthnzJWTError",
    "ConfigurationError",
    "KeyPolicyError",
    "CredentialError",
    "TokenError",
    "KeyPolicy",
    "TokenClaims",
    "ClaimFormatError",
    "RequestContext",
]
