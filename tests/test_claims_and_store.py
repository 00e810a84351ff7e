"""
Unit Tests - Claims codec helpers and JSON store

Module: tests.test_claims_and_store
Date: 2026-10-18
Version: 0.1.0
"""

import logging
import os
import tempfile
import unittest
from pathlib import Path

from authnz_jwt.persistence import JSONStore, JSONStoreFormatError, JSONStoreIOError
from authnz_jwt.security.claims import ClaimFormatError, TokenClaims
from authnz_jwt.security.request_context import RequestContext

logging.basicConfig(
    level=logging.CRITICAL,
    format="%(name)s - %(levelname)s - %(message)s"
)


class TestTokenClaims(unittest.TestCase):
    """Test wire mapping of claims"""

    def test_to_wire(self):
        """Test time claims as strings and absent claims omitted"""
        claims = TokenClaims(user="alice", iat=10, exp=70, iss="x")
        self.assertEqual(
            claims.to_wire(),
            {"iat": "10", "exp": "70", "iss": "x", "user": "alice"},
        )

    def test_from_wire_accepts_both_time_forms(self):
        """Test integer and decimal string time claims"""
        claims = TokenClaims.from_wire({"user": "alice", "exp": "70", "nbf": 5, "iat": 1.0})
        self.assertEqual((claims.exp, claims.nbf, claims.iat), (70, 5, 1))

    def test_from_wire_keeps_extra(self):
        """Test that unknown claims are preserved"""
        claims = TokenClaims.from_wire({"user": "alice", "role": "admin"})
        self.assertEqual(claims.extra, {"role": "admin"})

    def test_from_wire_rejects_bad_types(self):
        """Test non-integer times and non-string identities"""
        for payload in ({"exp": "soon"}, {"exp": 1.5}, {"nbf": True},
                        {"user": 42}, {"iss": ["x"]}, {"aud": ["a", "b"]}):
            with self.subTest(payload=payload):
                with self.assertRaises(ClaimFormatError):
                    TokenClaims.from_wire(payload)


class TestRequestContext(unittest.TestCase):
    """Test request notes and identity"""

    def test_notes(self):
        """Test set, get and unset"""
        context = RequestContext(path="/login", method="POST")
        context.set_note("k", "v")
        self.assertEqual(context.get_note("k"), "v")
        context.unset_note("k")
        context.unset_note("k")
        self.assertIsNone(context.get_note("k"))

    def test_authenticate(self):
        """Test identity attachment"""
        context = RequestContext(path="/api")
        self.assertFalse(context.is_authenticated)
        context.authenticate("alice", "jwt")
        info = context.get_info()
        self.assertEqual(info["user"], "alice")
        self.assertEqual(info["auth_type"], "jwt")
        self.assertEqual(info["path"], "/api")


class TestJSONStore(unittest.TestCase):
    """Test JSON documents on disk"""

    def setUp(self):
        self.temp_dir = tempfile.TemporaryDirectory()
        self.path = Path(self.temp_dir.name) / "store.json"

    def tearDown(self):
        self.temp_dir.cleanup()

    def test_writable_store_created(self):
        """Test that a writable store creates its file with 0600"""
        store = JSONStore(str(self.path), {"users": []})
        self.assertEqual(store.load(), {"users": []})
        if os.name == "posix":
            self.assertEqual(self.path.stat().st_mode & 0o777, 0o600)

    def test_save_and_load(self):
        """Test persistence across instances"""
        JSONStore(str(self.path)).save({"a": 1})
        self.assertEqual(JSONStore(str(self.path)).load(), {"a": 1})

    def test_uncreatable_directory(self):
        """Test that a parent path blocked by a file raises JSONStoreIOError"""
        blocker = Path(self.temp_dir.name) / "blocker"
        blocker.write_text("", encoding="utf-8")
        with self.assertRaises(JSONStoreIOError):
            JSONStore(str(blocker / "sub" / "store.json"))

    def test_read_only_store(self):
        """Test that a read-only store is never created or written"""
        store = JSONStore(str(self.path), read_only=True)
        self.assertFalse(self.path.exists())
        with self.assertRaises(JSONStoreIOError):
            store.load()
        with self.assertRaises(JSONStoreIOError):
            store.save({})

    def test_format_errors(self):
        """Test invalid JSON and non-object documents"""
        store = JSONStore(str(self.path), read_only=True)
        for content in ("{oops", "[1, 2]"):
            with self.subTest(content=content):
                self.path.write_text(content, encoding="utf-8")
                with self.assertRaises(JSONStoreFormatError):
                    store.load()


if __name__ == "__main__":
    unittest.main()
