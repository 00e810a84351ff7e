"""
Token Claims - Typed claim structure

Module: security.claims
Date: 2026-10-18
Version: 0.1.0

The wire mapping is only built (to_wire) or read (from_wire) at the codec
boundary. Time claims are integer Unix seconds written as decimal strings;
on read both integers and decimal strings are accepted.
"""

import re
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from ..core.constants import (
    CLAIM_AUD,
    CLAIM_EXP,
    CLAIM_IAT,
    CLAIM_ISS,
    CLAIM_NBF,
    CLAIM_SUB,
    CLAIM_USER,
)

_DECIMAL = re.compile(r"^-?[0-9]+$")

_TIME_CLAIMS = (CLAIM_IAT, CLAIM_EXP, CLAIM_NBF)
_STRING_CLAIMS = (CLAIM_ISS, CLAIM_SUB, CLAIM_AUD, CLAIM_USER)


class ClaimFormatError(ValueError):
    """A reserved claim has the wrong type"""
    pass


def _parse_time(name: str, value: Any) -> int:
    if isinstance(value, bool):
        raise ClaimFormatError(f"'{name}' must be an integer timestamp")
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str) and _DECIMAL.match(value):
        return int(value)
    raise ClaimFormatError(f"'{name}' must be an integer timestamp")


@dataclass
class TokenClaims:
    """Reserved claims of a token; unknown claims are kept in extra"""
    user: Optional[str] = None
    iat: Optional[int] = None
    exp: Optional[int] = None
    nbf: Optional[int] = None
    iss: Optional[str] = None
    sub: Optional[str] = None
    aud: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_wire(self) -> Dict[str, Any]:
        """Mapping handed to the JWT codec"""
        payload: Dict[str, Any] = {}
        for name in _TIME_CLAIMS:
            value = getattr(self, name)
            if value is not None:
                payload[name] = str(value)
        for name in _STRING_CLAIMS:
            value = getattr(self, name)
            if value is not None:
                payload[name] = value
        for name, value in self.extra.items():
            payload.setdefault(name, value)
        return payload

    @classmethod
    def from_wire(cls, payload: Dict[str, Any]) -> "TokenClaims":
        """
        Build claims from a decoded payload

        Raises:
            ClaimFormatError: Time claim not an integer, or string claim
                not a string
        """
        values: Dict[str, Any] = {}
        for name in _TIME_CLAIMS:
            if name in payload:
                values[name] = _parse_time(name, payload[name])
        for name in _STRING_CLAIMS:
            if name in payload:
                value = payload[name]
                if not isinstance(value, str):
                    raise ClaimFormatError(f"'{name}' must be a string")
                values[name] = value

        reserved = set(_TIME_CLAIMS) | set(_STRING_CLAIMS)
        extra = {k: v for k, v in payload.items() if k not in reserved}
        return cls(extra=extra, **values)


# ============================================================================
# Unit Tests
# ============================================================================

if __name__ == "__main__":
    import unittest

    class TestTokenClaims(unittest.TestCase):
        """Test suite for TokenClaims"""

        def test_wire_time_claims_are_strings(self):
            """Test time claims are written as decimal strings"""
            payload = TokenClaims(user="alice", iat=1, exp=61).to_wire()
            self.assertEqual(payload["iat"], "1")
            self.assertEqual(payload["exp"], "61")
            self.assertNotIn("nbf", payload)

        def test_from_wire(self):
            """Test reading string and integer times"""
            claims = TokenClaims.from_wire({"user": "alice", "exp": "61", "iat": 1})
            self.assertEqual(claims.exp, 61)
            self.assertEqual(claims.iat, 1)

        def test_bad_time(self):
            """Test non-numeric time claim"""
            with self.assertRaises(ClaimFormatError):
                TokenClaims.from_wire({"exp": "tomorrow"})

    unittest.main()
