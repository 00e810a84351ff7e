"""
Unit Tests - Provider chain

Module: tests.test_provider_chain
Date: 2026-10-18
Version: 0.1.0

DESCRIPTION:
- Fallback on USER_NOT_FOUND, short-circuit on any other verdict
- Empty credentials never reach a provider
- Provider-in-use note lifetime
- Verdict to HTTP status mapping
"""

import asyncio
import logging
import unittest

from authnz_jwt.security.errors import CredentialError
from authnz_jwt.security.provider_chain import LoginOutcome, ProviderChain
from authnz_jwt.security.providers import AuthnProvider, ProviderVerdict
from authnz_jwt.security.request_context import RequestContext

logging.basicConfig(
    level=logging.CRITICAL,
    format="%(name)s - %(levelname)s - %(message)s"
)

NOTE = "authn_provider_name"


class StubProvider(AuthnProvider):
    """Answers a fixed verdict and records calls"""

    def __init__(self, name, verdict):
        super().__init__(name)
        self.verdict = verdict
        self.calls = []
        self.notes_seen = []

    async def check_password(self, context, user, password):
        self.calls.append((user, password))
        self.notes_seen.append(context.get_note(NOTE))
        return self.verdict


class FailingProvider(AuthnProvider):
    """Raises instead of answering"""

    async def check_password(self, context, user, password):
        raise RuntimeError("directory down")


class TestProviderChainOrder(unittest.TestCase):
    """Test chain traversal"""

    def setUp(self):
        self.context = RequestContext(path="/login", method="POST")

    def run_chain(self, providers, user="alice", password="secret"):
        return asyncio.run(ProviderChain(providers).check(self.context, user, password))

    def test_falls_through_not_found(self):
        """Test that USER_NOT_FOUND moves on to the next provider"""
        p1 = StubProvider("p1", ProviderVerdict.USER_NOT_FOUND)
        p2 = StubProvider("p2", ProviderVerdict.GRANTED)
        outcome = self.run_chain([p1, p2])

        self.assertTrue(outcome.granted)
        self.assertEqual(outcome.provider, "p2")
        self.assertEqual(len(p1.calls), 1)
        self.assertEqual(len(p2.calls), 1)

    def test_denied_short_circuits(self):
        """Test that DENIED stops the chain"""
        p1 = StubProvider("p1", ProviderVerdict.DENIED)
        p2 = StubProvider("p2", ProviderVerdict.GRANTED)
        outcome = self.run_chain([p1, p2])

        self.assertEqual(outcome.verdict, ProviderVerdict.DENIED)
        self.assertEqual(outcome.provider, "p1")
        self.assertEqual(p2.calls, [])

    def test_general_error_short_circuits(self):
        """Test that GENERAL_ERROR stops the chain"""
        p1 = StubProvider("p1", ProviderVerdict.GENERAL_ERROR)
        p2 = StubProvider("p2", ProviderVerdict.GRANTED)
        outcome = self.run_chain([p1, p2])

        self.assertEqual(outcome.verdict, ProviderVerdict.GENERAL_ERROR)
        self.assertEqual(p2.calls, [])

    def test_all_not_found(self):
        """Test that the last USER_NOT_FOUND is the answer"""
        p1 = StubProvider("p1", ProviderVerdict.USER_NOT_FOUND)
        p2 = StubProvider("p2", ProviderVerdict.USER_NOT_FOUND)
        outcome = self.run_chain([p1, p2])

        self.assertEqual(outcome.verdict, ProviderVerdict.USER_NOT_FOUND)
        self.assertEqual(outcome.provider, "p2")

    def test_no_providers(self):
        """Test that an empty chain is a general error"""
        outcome = self.run_chain([])
        self.assertEqual(outcome.verdict, ProviderVerdict.GENERAL_ERROR)
        self.assertIsNone(outcome.provider)

    def test_empty_credentials(self):
        """Test that empty user or password never reaches a provider"""
        for user, password in (("", "secret"), ("alice", ""), (None, "secret"), ("alice", None)):
            with self.subTest(user=user, password=password):
                p1 = StubProvider("p1", ProviderVerdict.GRANTED)
                outcome = self.run_chain([p1], user=user, password=password)
                self.assertEqual(outcome.verdict, ProviderVerdict.USER_NOT_FOUND)
                self.assertEqual(p1.calls, [])

    def test_raising_provider(self):
        """Test that a provider exception counts as GENERAL_ERROR"""
        p2 = StubProvider("p2", ProviderVerdict.GRANTED)
        outcome = self.run_chain([FailingProvider("broken"), p2])

        self.assertEqual(outcome.verdict, ProviderVerdict.GENERAL_ERROR)
        self.assertEqual(outcome.provider, "broken")
        self.assertEqual(p2.calls, [])


class TestProviderNote(unittest.TestCase):
    """Test the provider-in-use note"""

    def test_note_set_during_call_and_cleared(self):
        """Test that each provider sees its own name, then the note is removed"""
        context = RequestContext(path="/login", method="POST")
        p1 = StubProvider("p1", ProviderVerdict.USER_NOT_FOUND)
        p2 = StubProvider("p2", ProviderVerdict.DENIED)
        asyncio.run(ProviderChain([p1, p2]).check(context, "alice", "pw"))

        self.assertEqual(p1.notes_seen, ["p1"])
        self.assertEqual(p2.notes_seen, ["p2"])
        self.assertIsNone(context.get_note(NOTE))

    def test_note_cleared_after_exception(self):
        """Test that the note is removed when a provider raises"""
        context = RequestContext(path="/login", method="POST")
        asyncio.run(ProviderChain([FailingProvider("broken")]).check(context, "alice", "pw"))
        self.assertNotIn(NOTE, context.notes)


class TestLoginOutcome(unittest.TestCase):
    """Test outcome helpers"""

    def test_http_status(self):
        """Test verdict to status mapping"""
        self.assertEqual(LoginOutcome(ProviderVerdict.GRANTED).http_status, 200)
        self.assertEqual(LoginOutcome(ProviderVerdict.DENIED).http_status, 401)
        self.assertEqual(LoginOutcome(ProviderVerdict.USER_NOT_FOUND).http_status, 401)
        self.assertEqual(LoginOutcome(ProviderVerdict.GENERAL_ERROR).http_status, 500)

    def test_check_or_raise(self):
        """Test that a refused login raises CredentialError with the verdict"""
        context = RequestContext(path="/login", method="POST")
        chain = ProviderChain([StubProvider("p1", ProviderVerdict.DENIED)])
        with self.assertRaises(CredentialError) as ctx:
            asyncio.run(chain.check_or_raise(context, "alice", "pw"))
        self.assertEqual(ctx.exception.verdict, ProviderVerdict.DENIED)

    def test_check_or_raise_granted(self):
        """Test that a granted login returns the outcome"""
        context = RequestContext(path="/login", method="POST")
        chain = ProviderChain([StubProvider("p1", ProviderVerdict.GRANTED)])
        outcome = asyncio.run(chain.check_or_raise(context, "alice", "pw"))
        self.assertTrue(outcome.granted)


if __name__ == "__main__":
    unittest.main()
