"""
Unit Tests - Key Policy

Module: tests.test_key_policy
Date: 2026-10-18
Version: 0.1.0

DESCRIPTION:
Secret length enforcement for HS256 / HS384 / HS512 and refusal of
unsupported algorithms.
"""

import unittest
import logging

from authnz_jwt.security.key_policy import KeyPolicy
from authnz_jwt.security.errors import ConfigurationError, KeyPolicyError

logging.basicConfig(
    level=logging.CRITICAL,
    format="%(name)s - %(levelname)s - %(message)s"
)


class TestKeyPolicyLengths(unittest.TestCase):
    """Test exact key lengths per algorithm"""

    def setUp(self):
        self.policy = KeyPolicy()

    def test_length_table(self):
        """Test accepted and rejected lengths for every algorithm"""
        cases = [
            ("HS256", 32, True),
            ("HS256", 31, False),
            ("HS256", 33, False),
            ("HS384", 48, True),
            ("HS384", 47, False),
            ("HS384", 32, False),
            ("HS512", 64, True),
            ("HS512", 63, False),
            ("HS512", 65, False),
        ]
        for algorithm, length, expected in cases:
            with self.subTest(algorithm=algorithm, length=length):
                self.assertEqual(
                    self.policy.is_valid(b"k" * length, algorithm), expected
                )

    def test_error_message_reports_lengths(self):
        """Test that the error names the required and current lengths"""
        with self.assertRaises(KeyPolicyError) as ctx:
            self.policy.check(b"k" * 63, "HS512")
        self.assertEqual(
            str(ctx.exception),
            "The secret length must be 64 with HS512 (current length is 63)",
        )

    def test_str_secret_measured_in_utf8_bytes(self):
        """Test that a text secret is measured as encoded bytes"""
        # 16 two-byte characters
        self.policy.check("é" * 16, "HS256")
        self.assertFalse(self.policy.is_valid("é" * 32, "HS256"))

    def test_key_policy_error_is_configuration_error(self):
        """Test that policy violations are configuration faults"""
        self.assertTrue(issubclass(KeyPolicyError, ConfigurationError))


class TestKeyPolicyAlgorithms(unittest.TestCase):
    """Test algorithm support"""

    def setUp(self):
        self.policy = KeyPolicy()

    def test_unsupported_algorithms(self):
        """Test that non-HMAC and unknown algorithms are refused"""
        for algorithm in ("RS256", "none", "hs256", ""):
            with self.subTest(algorithm=algorithm):
                with self.assertRaises(KeyPolicyError):
                    self.policy.check(b"k" * 32, algorithm)

    def test_required_length(self):
        """Test required length lookup"""
        self.assertEqual(KeyPolicy.required_length("HS256"), 32)
        self.assertEqual(KeyPolicy.required_length("HS384"), 48)
        self.assertEqual(KeyPolicy.required_length("HS512"), 64)
        with self.assertRaises(KeyPolicyError):
            KeyPolicy.required_length("ES256")


if __name__ == "__main__":
    unittest.main()
