"""
Errors raised by the token lifecycle engine

Module: security.errors
Date: 2026-10-18
Version: 0.1.0

Three families:
  - ConfigurationError: administrator fault, always an internal error
  - CredentialError: login refused by the provider chain
  - TokenError: bearer token rejected by the verifier

SECURITY NOTES:
- Messages never carry secret material
- Denied and not-found credentials look the same to the client
"""

from typing import Optional


class AuthnzJWTError(Exception):
    """Base error"""
    pass


class ConfigurationError(AuthnzJWTError):
    """Configuration is missing, malformed or violates policy"""
    pass


class KeyPolicyError(ConfigurationError):
    """Secret length or algorithm rejected by the key policy"""
    pass


class CredentialError(AuthnzJWTError):
    """Login attempt did not end with a granted verdict"""

    def __init__(self, message: str, verdict=None):
        super().__init__(message)
        self.verdict = verdict


class TokenError(AuthnzJWTError):
    """Bearer token rejected"""

    def __init__(self, message: str, kind=None, description: Optional[str] = None):
        super().__init__(message)
        self.kind = kind
        self.description = description or message
