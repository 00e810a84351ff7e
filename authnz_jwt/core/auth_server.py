"""
Auth Server - Orchestrates login and bearer checks

Module: core.auth_server
Date: 2026-10-18
Version: 0.1.0

CHANGELOG:
[2026-10-18 v0.1.0] Initial implementation
  - Login flow: scopes -> provider chain -> token issuer
  - Bearer flow: scopes -> header parsing -> token verifier
  - WWW-Authenticate challenges per outcome
  - HTTP listener lifecycle (start / stop / run)

ARCHITECTURE:
AuthServer is independent of the HTTP library: it takes a request
context plus the submitted values and returns an AuthResponse (status,
identity, token, headers). transport.http_transport maps aiohttp
requests onto it.

    login:     ConfigResolver -> ProviderChain -> TokenIssuer
    resource:  ConfigResolver -> TokenVerifier -> identity

SECURITY NOTES:
- Configuration faults answer 500 and are only detailed in the log
- Denied and unknown users both answer 401
- Nothing is cached between requests
"""

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, Optional

from ..config.loader import LoadedConfig
from ..config.resolver import ConfigResolver
from ..config.scoped_config import Location
from ..security.errors import ConfigurationError
from ..security.key_policy import KeyPolicy
from ..security.provider_chain import ProviderChain
from ..security.request_context import RequestContext
from ..security.token_issuer import TokenIssuer, now_ts
from ..security.token_verifier import TokenVerifier
from ..transport.http_transport import HTTPConfig, HTTPTransport
from .constants import (
    BEARER_PREFIX,
    CHALLENGE_HEADER,
    DESCRIPTION_NOT_BEARER,
    ERROR_INVALID_REQUEST,
    ERROR_INVALID_TOKEN,
    HTTP_BAD_REQUEST,
    HTTP_INTERNAL_SERVER_ERROR,
    HTTP_OK,
    HTTP_UNAUTHORIZED,
    JWT_AUTH_TYPE,
    SERVER_NAME,
    SERVER_VERSION,
)


@dataclass
class AuthResponse:
    """Outcome of a login or bearer check"""
    status: int
    user: Optional[str] = None
    token: Optional[str] = None
    headers: Dict[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return self.status == HTTP_OK


def _quote(value: str) -> str:
    return value.replace("\\", "\\\\").replace('"', '\\"')


def bearer_challenge(
    realm: str,
    error: Optional[str] = None,
    description: Optional[str] = None,
) -> str:
    """WWW-Authenticate value for the Bearer scheme"""
    challenge = f'Bearer realm="{_quote(realm)}"'
    if error:
        challenge += f', error="{error}"'
    if description:
        challenge += f', error_description="{_quote(description)}"'
    return challenge


class AuthServer:
    """
    Token lifecycle engine bound to a loaded configuration

    Typical usage:
        server = AuthServer(load_config("authnz_jwt.json"))
        await server.run()
    """

    def __init__(
        self,
        config: LoadedConfig,
        clock: Callable[[], int] = now_ts,
    ):
        """
        Initialize the auth server

        Args:
            config: Frozen configuration and provider registry
            clock: Returns the current UNIX time in seconds
        """
        self.logger = logging.getLogger("core.auth_server")
        self.config = config
        self.store = config.store
        self.registry = config.registry
        self.resolver = ConfigResolver()
        key_policy = KeyPolicy()
        self.issuer = TokenIssuer(key_policy, clock=clock)
        self.verifier = TokenVerifier(key_policy, clock=clock)

        self.transport = None
        self._is_running = False

        self.logger.info(f"Server initialized: {SERVER_NAME} v{SERVER_VERSION}")

    @property
    def is_running(self) -> bool:
        return self._is_running

    def location_for(self, path: str) -> Optional[Location]:
        return self.store.match(path)

    async def login(
        self,
        context: RequestContext,
        user: Optional[str],
        password: Optional[str],
    ) -> AuthResponse:
        """
        Check credentials and issue a token

        Args:
            context: Request context (path selects the scopes)
            user: Submitted "user" field, None when missing
            password: Submitted "password" field, None when missing

        Returns:
            AuthResponse with the token on success; 401 or 500 otherwise
        """
        if user is None or password is None:
            self.logger.warning(f"Login on {context.path} without user and password fields")
            return AuthResponse(HTTP_UNAUTHORIZED)

        scopes = self.store.scopes_for(context.path)
        try:
            providers = self.registry.resolve(scopes.directory.providers)
        except ConfigurationError as e:
            self.logger.error(f"Login on {context.path}: {e}")
            return AuthResponse(HTTP_INTERNAL_SERVER_ERROR)

        outcome = await ProviderChain(providers).check(context, user, password)
        if not outcome.granted:
            return AuthResponse(outcome.http_status)

        context.authenticate(user, JWT_AUTH_TYPE)
        effective = self.resolver.effective_config(scopes)
        try:
            token = self.issuer.issue(user, effective)
        except ConfigurationError as e:
            self.logger.error(f"Cannot issue token on {context.path}: {e}")
            return AuthResponse(HTTP_INTERNAL_SERVER_ERROR, user=user)

        return AuthResponse(HTTP_OK, user=user, token=token)

    def authenticate(
        self,
        context: RequestContext,
        authorization: Optional[str],
    ) -> AuthResponse:
        """
        Check the Authorization header of a protected request

        Args:
            context: Request context (path selects the scopes)
            authorization: Raw Authorization header, None when absent

        Returns:
            AuthResponse: 200 with identity, 400 / 401 with a Bearer
            challenge, or 500 on configuration faults
        """
        location = self.store.match(context.path)
        realm = location.auth_name if location else None
        if not realm:
            self.logger.error(f"need AuthName: {context.path}")
            return AuthResponse(HTTP_INTERNAL_SERVER_ERROR)

        effective = self.resolver.effective_config(self.store.scopes_for(context.path))
        if not effective.signature_secret:
            self.logger.error(
                "You must specify the SignatureSecret directive in configuration"
            )
            return AuthResponse(HTTP_INTERNAL_SERVER_ERROR)

        if authorization is None:
            return AuthResponse(
                HTTP_UNAUTHORIZED,
                headers={CHALLENGE_HEADER: bearer_challenge(realm)},
            )

        if len(authorization) <= len(BEARER_PREFIX) or not authorization.startswith(BEARER_PREFIX):
            self.logger.warning(f"Authorization on {context.path} is not a Bearer credential")
            return AuthResponse(
                HTTP_BAD_REQUEST,
                headers={
                    CHALLENGE_HEADER: bearer_challenge(
                        realm, ERROR_INVALID_REQUEST, DESCRIPTION_NOT_BEARER
                    )
                },
            )

        token = authorization[len(BEARER_PREFIX):]
        try:
            result = self.verifier.verify(token, effective)
        except ConfigurationError as e:
            self.logger.error(f"Cannot verify token on {context.path}: {e}")
            return AuthResponse(HTTP_INTERNAL_SERVER_ERROR)

        if not result.accepted:
            return AuthResponse(
                HTTP_UNAUTHORIZED,
                headers={
                    CHALLENGE_HEADER: bearer_challenge(
                        realm, ERROR_INVALID_TOKEN, result.description
                    )
                },
            )

        context.authenticate(result.identity, JWT_AUTH_TYPE)
        return AuthResponse(HTTP_OK, user=result.identity)

    async def start(self) -> None:
        """
        Start the HTTP listener

        Raises:
            Exception: If the listener cannot bind
        """
        if self._is_running:
            self.logger.warning("Server already running")
            return

        self.transport = HTTPTransport(
            self, HTTPConfig(host=self.config.host, port=self.config.port)
        )
        await self.transport.start()
        self._is_running = True
        self.logger.info(f"Server started on {self.config.host}:{self.config.port}")

    async def stop(self) -> None:
        """Stop the listener and release provider resources"""
        if self.transport is not None:
            try:
                await self.transport.stop()
            except Exception as e:
                self.logger.error(f"Error stopping transport: {e}")
            self.transport = None
        await self.registry.close()
        self._is_running = False
        self.logger.info("Server stopped")

    async def run(self) -> None:
        """Run until cancelled"""
        await self.start()
        try:
            while self._is_running:
                await asyncio.sleep(1)
        finally:
            await self.stop()
