"""
Authn Provider - Credential checker capability

Module: security.providers.base
Date: 2026-10-18
Version: 0.1.0

A provider verifies a (user, password) pair against one identity source
and answers with a ProviderVerdict. Providers own their I/O deadlines;
the chain never imposes a timeout.
"""

from abc import ABC, abstractmethod
from enum import Enum

from ..request_context import RequestContext


class ProviderVerdict(Enum):
    """Outcome of a password check"""
    GRANTED = "granted"
    DENIED = "denied"
    USER_NOT_FOUND = "user_not_found"
    GENERAL_ERROR = "general_error"


class AuthnProvider(ABC):
    """Base class for credential providers"""

    def __init__(self, name: str):
        self.name = name

    @abstractmethod
    async def check_password(
        self,
        context: RequestContext,
        user: str,
        password: str,
    ) -> ProviderVerdict:
        """
        Verify credentials

        Args:
            context: Current request context
            user: Username (non-empty)
            password: Plaintext password (non-empty)

        Returns:
            ProviderVerdict
        """

    async def close(self) -> None:
        """Release resources held by the provider"""
        return None

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self.name!r})"
