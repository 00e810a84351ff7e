"""
Unit Tests - Remote provider

Module: tests.test_remote_provider
Date: 2026-10-18
Version: 0.1.0

DESCRIPTION:
Status code mapping of the delegated directory check, against a local
aiohttp test server.
"""

import asyncio
import logging
import unittest

from aiohttp import web
from aiohttp.test_utils import AioHTTPTestCase

from authnz_jwt.security.providers import ProviderVerdict, RemoteProvider
from authnz_jwt.security.request_context import RequestContext

logging.basicConfig(
    level=logging.CRITICAL,
    format="%(name)s - %(levelname)s - %(message)s"
)

DIRECTORY = {
    "alice": "wonderland",
}


class TestRemoteProvider(AioHTTPTestCase):
    """Test verdicts returned by a directory endpoint"""

    async def get_application(self):
        self.received = []

        async def check(request):
            body = await request.json()
            self.received.append((body, request.headers.get("X-Request-Id")))
            user = body.get("user")
            if user == "teapot":
                return web.Response(status=418)
            if user == "slow":
                await asyncio.sleep(1)
                return web.Response(status=200)
            if user not in DIRECTORY:
                return web.Response(status=404)
            if DIRECTORY[user] != body.get("password"):
                return web.Response(status=401)
            return web.Response(status=200)

        async def forbidden(request):
            return web.Response(status=403)

        app = web.Application()
        app.router.add_post("/check", check)
        app.router.add_post("/forbidden", forbidden)
        return app

    async def check(self, user, password, path="/check", timeout=5.0):
        provider = RemoteProvider("ldap", str(self.server.make_url(path)), timeout=timeout)
        context = RequestContext(path="/login", method="POST")
        try:
            return await provider.check_password(context, user, password)
        finally:
            await provider.close()

    async def test_granted(self):
        """Test that 200 grants"""
        verdict = await self.check("alice", "wonderland")
        self.assertEqual(verdict, ProviderVerdict.GRANTED)
        body, request_id = self.received[0]
        self.assertEqual(body, {"user": "alice", "password": "wonderland"})
        self.assertTrue(request_id)

    async def test_denied(self):
        """Test that 401 and 403 deny"""
        self.assertEqual(await self.check("alice", "nope"), ProviderVerdict.DENIED)
        self.assertEqual(
            await self.check("alice", "wonderland", path="/forbidden"),
            ProviderVerdict.DENIED,
        )

    async def test_not_found(self):
        """Test that 404 reports an unknown user"""
        self.assertEqual(await self.check("bob", "x"), ProviderVerdict.USER_NOT_FOUND)

    async def test_unexpected_status(self):
        """Test that other statuses are general errors"""
        self.assertEqual(await self.check("teapot", "x"), ProviderVerdict.GENERAL_ERROR)

    async def test_timeout(self):
        """Test that a slow directory is a general error"""
        verdict = await self.check("slow", "x", timeout=0.2)
        self.assertEqual(verdict, ProviderVerdict.GENERAL_ERROR)

    async def test_unreachable(self):
        """Test that connection failures are general errors"""
        provider = RemoteProvider("ldap", "http://127.0.0.1:1/check", timeout=1.0)
        context = RequestContext(path="/login", method="POST")
        try:
            verdict = await provider.check_password(context, "alice", "wonderland")
        finally:
            await provider.close()
        self.assertEqual(verdict, ProviderVerdict.GENERAL_ERROR)


if __name__ == "__main__":
    unittest.main()
