"""
Credential providers

Provides:
- AuthnProvider / ProviderVerdict: provider capability
- FileProvider: local bcrypt user file
- RemoteProvider: delegated directory over HTTP
- ProviderRegistry: name -> provider
"""

from .base import AuthnProvider, ProviderVerdict
from .file_provider import (
    FileProvider,
    UserRecord,
    UserError,
    UserNotFoundError,
    UserExistsError,
)
from .remote_provider import RemoteProvider
from .registry import ProviderRegistry

__all__ = [
    "AuthnProvider",
    "ProviderVerdict",
    "FileProvider",
    "UserRecord",
    "UserError",
    "UserNotFoundError",
    "UserExistsError",
    "RemoteProvider",
    "ProviderRegistry",
]
