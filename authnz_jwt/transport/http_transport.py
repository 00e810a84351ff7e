"""
HTTP Transport - aiohttp front end for the auth server

Module: transport.http_transport
Date: 2026-10-18
Version: 0.1.0

CHANGELOG:
[2026-10-18 v0.1.0] Initial implementation
  - Login route per "jwt-login-handler" location (POST form -> JSON token)
  - Bearer middleware for "AuthType jwt" locations
  - Default protected handler answering the identity
  - AppRunner / TCPSite lifecycle

ARCHITECTURE:
The transport only translates aiohttp requests: every decision is taken
by the server object (core.auth_server.AuthServer), which exposes
location_for(), login() and authenticate().

    POST /login  user=...&password=...   -> {"token": "..."}
    GET  /api/x  Authorization: Bearer t -> handler, request[USER_KEY] set

SECURITY NOTES:
- Login only accepts POST
- Request bodies are capped (client_max_size)
- No TLS here: terminate TLS in front of the listener
"""

import logging
from dataclasses import dataclass
from typing import Optional

from aiohttp import web

from ..core.constants import (
    AUTHORIZATION_HEADER,
    FORM_PASSWORD_FIELD,
    FORM_USER_FIELD,
    DEFAULT_HTTP_HOST,
    DEFAULT_HTTP_PORT,
    HTTP_METHOD_NOT_ALLOWED,
    MAX_LOGIN_BODY_SIZE,
)
from ..security.request_context import RequestContext

CONTEXT_KEY = web.RequestKey("auth_context", RequestContext)
USER_KEY = web.RequestKey("user", str)


@dataclass
class HTTPConfig:
    """HTTP Transport Configuration"""
    host: str = DEFAULT_HTTP_HOST
    port: int = DEFAULT_HTTP_PORT
    max_body_size: int = MAX_LOGIN_BODY_SIZE


def _form_value(form, name: str) -> Optional[str]:
    value = form.get(name)
    return value if isinstance(value, str) else None


class HTTPTransport:
    """
    Serves the login handler and guards protected locations.

    Args:
        server: AuthServer (or any object with location_for, login and
            authenticate)
        config: HTTPConfig instance (uses defaults if None)
    """

    def __init__(self, server, config: Optional[HTTPConfig] = None):
        self.server = server
        self.config = config or HTTPConfig()
        self.app: Optional[web.Application] = None
        self.runner: Optional[web.AppRunner] = None
        self.logger = logging.getLogger("transport.http")
        self.is_running = False

    def build_app(self, default_routes: bool = True) -> web.Application:
        """
        Create the aiohttp application

        Args:
            default_routes: Add a catch-all identity handler under every
                protected location

        Returns:
            web.Application with the bearer middleware installed
        """
        server = self.server
        logger = self.logger

        @web.middleware
        async def bearer_middleware(request: web.Request, handler):
            context = RequestContext(path=request.path, method=request.method)
            request[CONTEXT_KEY] = context

            location = server.location_for(request.path)
            if location is not None and location.requires_token and not location.is_login_handler:
                result = server.authenticate(
                    context, request.headers.get(AUTHORIZATION_HEADER)
                )
                if not result.ok:
                    logger.debug(f"{request.method} {request.path} -> {result.status}")
                    return web.Response(status=result.status, headers=result.headers)
                request[USER_KEY] = result.user

            return await handler(request)

        app = web.Application(
            middlewares=[bearer_middleware],
            client_max_size=self.config.max_body_size,
        )

        # Most specific paths first, the router stops at the first match
        locations = sorted(
            server.store.locations,
            key=lambda loc: (not loc.is_login_handler, -len(loc.path)),
        )
        for location in locations:
            base = location.path.rstrip("/")
            if location.is_login_handler:
                app.router.add_route("*", base or "/", self._login_handler)
                logger.info(f"Login handler mounted on {location.path}")
            elif location.requires_token and default_routes:
                app.router.add_route("*", base or "/", self._identity_handler)
                app.router.add_route("*", base + "/{tail:.*}", self._identity_handler)
                logger.info(f"Protected location mounted on {location.path}")

        self.app = app
        return app

    async def _login_handler(self, request: web.Request) -> web.StreamResponse:
        """Handle a credential submission"""
        context: RequestContext = request[CONTEXT_KEY]

        if request.method != "POST":
            self.logger.error(
                f"the login handler only supports the POST method for {request.path}"
            )
            return web.Response(status=HTTP_METHOD_NOT_ALLOWED, headers={"Allow": "POST"})

        form = await request.post()
        result = await self.server.login(
            context,
            _form_value(form, FORM_USER_FIELD),
            _form_value(form, FORM_PASSWORD_FIELD),
        )
        if not result.ok:
            return web.Response(status=result.status, headers=result.headers)
        return web.json_response({"token": result.token})

    async def _identity_handler(self, request: web.Request) -> web.StreamResponse:
        """Default content of a protected location"""
        return web.json_response({"user": request.get(USER_KEY)})

    async def start(self) -> None:
        """Start the HTTP listener"""
        try:
            app = self.app or self.build_app()
            self.runner = web.AppRunner(app)
            await self.runner.setup()
            site = web.TCPSite(self.runner, self.config.host, self.config.port)
            await site.start()

            self.is_running = True
            self.logger.info(
                f"HTTP server started on {self.config.host}:{self.config.port}"
            )
        except Exception as e:
            self.logger.error(f"Server startup failed: {e}")
            self.is_running = False
            raise

    async def stop(self) -> None:
        """Stop the HTTP listener"""
        if self.runner:
            await self.runner.cleanup()
            self.runner = None
        self.is_running = False
        self.logger.info("HTTP transport stopped")
