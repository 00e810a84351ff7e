"""
Remote Provider - Delegated directory check over HTTP

Module: security.providers.remote_provider
Date: 2026-10-18
Version: 0.1.0

CHANGELOG:
[2026-10-18 v0.1.0] Initial implementation
  - POST {"user", "password"} as JSON to a directory endpoint
  - Status code mapped to a ProviderVerdict
  - Per-provider timeout

ARCHITECTURE:
Status mapping:
  200         -> GRANTED
  401, 403    -> DENIED
  404         -> USER_NOT_FOUND
  other       -> GENERAL_ERROR
Timeouts and connection failures are GENERAL_ERROR. The request is
sent once; there are no retries.
"""

import asyncio
import logging
from typing import Optional

import aiohttp

from ..request_context import RequestContext
from .base import AuthnProvider, ProviderVerdict

DEFAULT_TIMEOUT = 5.0


class RemoteProvider(AuthnProvider):
    """Delegates the password check to a remote directory service"""

    def __init__(self, name: str, url: str, timeout: float = DEFAULT_TIMEOUT):
        """
        Initialize remote provider

        Args:
            name: Provider name used in configuration
            url: Endpoint receiving the credential POST
            timeout: Total deadline for one check, in seconds
        """
        super().__init__(name)
        self.logger = logging.getLogger("security.providers.remote")
        self.url = url
        self.timeout = aiohttp.ClientTimeout(total=timeout)
        self._session: Optional[aiohttp.ClientSession] = None

    async def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(timeout=self.timeout)
        return self._session

    async def check_password(
        self,
        context: RequestContext,
        user: str,
        password: str,
    ) -> ProviderVerdict:
        session = await self._get_session()
        try:
            async with session.post(
                self.url,
                json={"user": user, "password": password},
                headers={"X-Request-Id": context.request_id},
            ) as response:
                status = response.status
        except asyncio.TimeoutError:
            self.logger.error(f"Directory {self.url} timed out for user '{user}'")
            return ProviderVerdict.GENERAL_ERROR
        except aiohttp.ClientError as e:
            self.logger.error(f"Directory {self.url} unreachable: {e}")
            return ProviderVerdict.GENERAL_ERROR

        if status == 200:
            return ProviderVerdict.GRANTED
        if status in (401, 403):
            return ProviderVerdict.DENIED
        if status == 404:
            return ProviderVerdict.USER_NOT_FOUND

        self.logger.error(f"Directory {self.url} answered unexpected status {status}")
        return ProviderVerdict.GENERAL_ERROR

    async def close(self) -> None:
        if self._session is not None and not self._session.closed:
            await self._session.close()
        self._session = None
