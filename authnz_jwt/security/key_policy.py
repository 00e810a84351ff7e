"""
Key Policy - Secret length enforcement per HMAC algorithm

Module: security.key_policy
Date: 2026-10-18
Version: 0.1.0

CHANGELOG:
[2026-10-18 v0.1.0] Initial implementation
  - Exact length check: HS256=32, HS384=48, HS512=64 bytes
  - Unsupported algorithm rejection

SECURITY NOTES:
- Runs before every signing and every verification, never cached
- The length table drives both the check and the error text
- Errors report the secret length, never the secret
"""

import logging
from typing import Union

from ..core.constants import KEY_LENGTHS, SUPPORTED_ALGORITHMS
from .errors import KeyPolicyError


class KeyPolicy:
    """Checks that a signing secret fits its algorithm"""

    def __init__(self):
        self.logger = logging.getLogger("security.key_policy")

    def check(self, secret: Union[bytes, str], algorithm: str) -> None:
        """
        Validate secret length for algorithm

        Args:
            secret: Signing secret (str is measured as UTF-8 bytes)
            algorithm: HS256, HS384 or HS512

        Raises:
            KeyPolicyError: Unsupported algorithm or wrong secret length
        """
        required = KEY_LENGTHS.get(algorithm)
        if required is None:
            message = (
                f"Unsupported signature algorithm {algorithm!r}: the only "
                f"supported algorithms are {', '.join(SUPPORTED_ALGORITHMS)}"
            )
            self.logger.error(message)
            raise KeyPolicyError(message)

        if isinstance(secret, str):
            secret = secret.encode("utf-8")
        key_len = len(secret)

        if key_len != required:
            message = (
                f"The secret length must be {required} with {algorithm} "
                f"(current length is {key_len})"
            )
            self.logger.error(message)
            raise KeyPolicyError(message)

    def is_valid(self, secret: Union[bytes, str], algorithm: str) -> bool:
        try:
            self.check(secret, algorithm)
        except KeyPolicyError:
            return False
        return True

    @staticmethod
    def required_length(algorithm: str) -> int:
        if algorithm not in KEY_LENGTHS:
            raise KeyPolicyError(f"Unsupported signature algorithm {algorithm!r}")
        return KEY_LENGTHS[algorithm]


# ============================================================================
# Unit Tests
# ============================================================================

if __name__ == "__main__":
    import unittest

    class TestKeyPolicy(unittest.TestCase):
        """Test suite for KeyPolicy"""

        def setUp(self):
            """Setup before each test"""
            self.policy = KeyPolicy()

        def test_exact_lengths(self):
            """Test exact lengths are accepted"""
            self.policy.check(b"a" * 32, "HS256")
            self.policy.check(b"a" * 48, "HS384")
            self.policy.check(b"a" * 64, "HS512")

        def test_off_by_one(self):
            """Test one byte short or long is refused"""
            self.assertFalse(self.policy.is_valid(b"a" * 31, "HS256"))
            self.assertFalse(self.policy.is_valid(b"a" * 65, "HS512"))

        def test_unsupported(self):
            """Test unsupported algorithm"""
            with self.assertRaises(KeyPolicyError):
                self.policy.check(b"a" * 32, "RS256")

    unittest.main()
