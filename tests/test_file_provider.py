"""
Unit Tests - File provider

Module: tests.test_file_provider
Date: 2026-10-18
Version: 0.1.0

DESCRIPTION:
bcrypt user file: verdicts, administration helpers and store errors.
"""

import asyncio
import json
import logging
import tempfile
import unittest
from pathlib import Path

from authnz_jwt.security.providers import (
    FileProvider,
    ProviderVerdict,
    UserExistsError,
    UserNotFoundError,
)
from authnz_jwt.security.request_context import RequestContext

logging.basicConfig(
    level=logging.CRITICAL,
    format="%(name)s - %(levelname)s - %(message)s"
)


class TestFileProvider(unittest.TestCase):
    """Test password checks against the user file"""

    def setUp(self):
        self.temp_dir = tempfile.TemporaryDirectory()
        self.path = Path(self.temp_dir.name) / "users.json"
        self.provider = FileProvider("local", str(self.path), bcrypt_rounds=4)
        self.provider.create_user("alice", "wonderland")
        self.context = RequestContext(path="/login", method="POST")

    def tearDown(self):
        self.temp_dir.cleanup()

    def check(self, user, password):
        return asyncio.run(self.provider.check_password(self.context, user, password))

    def test_granted(self):
        """Test correct credentials"""
        self.assertEqual(self.check("alice", "wonderland"), ProviderVerdict.GRANTED)

    def test_wrong_password(self):
        """Test password mismatch"""
        self.assertEqual(self.check("alice", "looking-glass"), ProviderVerdict.DENIED)

    def test_unknown_user(self):
        """Test unknown user"""
        self.assertEqual(self.check("bob", "wonderland"), ProviderVerdict.USER_NOT_FOUND)

    def test_disabled_user(self):
        """Test that a disabled user is denied"""
        self.provider.set_user_enabled("alice", False)
        self.assertEqual(self.check("alice", "wonderland"), ProviderVerdict.DENIED)

    def test_password_change(self):
        """Test that a new password replaces the old one"""
        self.provider.set_password("alice", "queen")
        self.assertEqual(self.check("alice", "queen"), ProviderVerdict.GRANTED)
        self.assertEqual(self.check("alice", "wonderland"), ProviderVerdict.DENIED)

    def test_corrupt_file(self):
        """Test that an unreadable user file is a general error"""
        self.path.write_text("{broken", encoding="utf-8")
        self.assertEqual(self.check("alice", "wonderland"), ProviderVerdict.GENERAL_ERROR)

    def test_corrupt_hash(self):
        """Test that a corrupt hash denies instead of raising"""
        data = json.loads(self.path.read_text(encoding="utf-8"))
        data["users"][0]["password_hash"] = "not-a-bcrypt-hash"
        self.path.write_text(json.dumps(data), encoding="utf-8")
        self.assertEqual(self.check("alice", "wonderland"), ProviderVerdict.DENIED)


class TestFileProviderAdministration(unittest.TestCase):
    """Test user administration"""

    def setUp(self):
        self.temp_dir = tempfile.TemporaryDirectory()
        self.path = Path(self.temp_dir.name) / "nested" / "users.json"
        self.provider = FileProvider("local", str(self.path), bcrypt_rounds=4)

    def tearDown(self):
        self.temp_dir.cleanup()

    def test_file_created(self):
        """Test that a missing user file is created empty"""
        self.assertTrue(self.path.exists())
        self.assertEqual(self.provider.list_users(), [])

    def test_no_plaintext_stored(self):
        """Test that the password is stored as a bcrypt hash"""
        self.provider.create_user("alice", "wonderland")
        content = self.path.read_text(encoding="utf-8")
        self.assertNotIn("wonderland", content)
        self.assertTrue(self.provider.get_user("alice").password_hash.startswith("$2"))

    def test_duplicate_user(self):
        """Test that usernames are unique"""
        self.provider.create_user("alice", "wonderland")
        with self.assertRaises(UserExistsError):
            self.provider.create_user("alice", "other")

    def test_empty_values(self):
        """Test that empty username or password is refused"""
        with self.assertRaises(ValueError):
            self.provider.create_user("", "pw")
        with self.assertRaises(ValueError):
            self.provider.create_user("alice", "")

    def test_delete_user(self):
        """Test user deletion"""
        self.provider.create_user("alice", "wonderland")
        self.provider.delete_user("alice")
        self.assertIsNone(self.provider.get_user("alice"))
        with self.assertRaises(UserNotFoundError):
            self.provider.delete_user("alice")

    def test_update_unknown_user(self):
        """Test that updates of unknown users raise"""
        with self.assertRaises(UserNotFoundError):
            self.provider.set_user_enabled("ghost", False)


if __name__ == "__main__":
    unittest.main()
