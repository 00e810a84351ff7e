"""
Request Context - Per-request authentication state

Module: security.request_context
Date: 2026-10-18
Version: 0.1.0

CHANGELOG:
[2026-10-18 v0.1.0] Initial implementation
  - Request id, path and method
  - Notes table (auxiliary per-request state, e.g. provider in use)
  - Authenticated identity once login or bearer check succeeds

ARCHITECTURE:
One RequestContext is created per inbound request by the transport and
dropped when the response is sent. Nothing in it outlives the request.

SECURITY NOTES:
- Never holds the password or the signing secret
- Identity is set only after a granted login or an accepted token
"""

import logging
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Optional


@dataclass
class RequestMetadata:
    """
    Metadata about a request

    Attributes:
        request_id: Unique request identifier
        path: Request path (selects the directory scope)
        method: HTTP method
        received_at: When the request arrived
    """
    request_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    path: str = "/"
    method: str = "GET"
    received_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


class RequestContext:
    """
    Authentication context of a single request

    Holds the notes table read by downstream logging and the identity
    attached by the login handler or the bearer check.
    """

    def __init__(self, path: str = "/", method: str = "GET", request_id: Optional[str] = None):
        self.logger = logging.getLogger("security.request_context")
        self.metadata = RequestMetadata(
            request_id=request_id or str(uuid.uuid4()),
            path=path,
            method=method,
        )
        self.notes: Dict[str, Any] = {}
        self.user: Optional[str] = None
        self.auth_type: Optional[str] = None
        self.auth_time: Optional[datetime] = None

    @property
    def request_id(self) -> str:
        return self.metadata.request_id

    @property
    def path(self) -> str:
        return self.metadata.path

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None

    def set_note(self, key: str, value: Any) -> None:
        self.notes[key] = value

    def get_note(self, key: str, default: Any = None) -> Any:
        return self.notes.get(key, default)

    def unset_note(self, key: str) -> None:
        self.notes.pop(key, None)

    def authenticate(self, user: str, auth_type: str) -> None:
        """Attach the authenticated identity"""
        self.user = user
        self.auth_type = auth_type
        self.auth_time = datetime.now(timezone.utc)
        self.logger.debug(f"Request {self.request_id[:8]} authenticated as {user} ({auth_type})")

    def get_info(self) -> Dict[str, Any]:
        """Request information for logging"""
        return {
            "request_id": self.request_id,
            "path": self.path,
            "method": self.metadata.method,
            "received_at": self.metadata.received_at.isoformat(),
            "user": self.user,
            "auth_type": self.auth_type,
            "notes": dict(self.notes),
        }

    def __repr__(self) -> str:
        return (
            f"RequestContext("
            f"id={self.request_id[:8]}..., "
            f"path={self.path}, "
            f"user={self.user}"
            f")"
        )


# ============================================================================
# Unit Tests
# ============================================================================

if __name__ == "__main__":
    import unittest

    class TestRequestContext(unittest.TestCase):
        """Test suite for RequestContext"""

        def test_initialization(self):
            """Test context initialization"""
            context = RequestContext(path="/login", method="POST")
            self.assertIsNotNone(context.request_id)
            self.assertEqual(context.path, "/login")
            self.assertFalse(context.is_authenticated)
            self.assertEqual(context.notes, {})

        def test_request_id_is_unique(self):
            """Test each context gets a unique request ID"""
            self.assertNotEqual(RequestContext().request_id, RequestContext().request_id)

        def test_notes(self):
            """Test note set and unset"""
            context = RequestContext()
            context.set_note("provider", "file")
            self.assertEqual(context.get_note("provider"), "file")
            context.unset_note("provider")
            self.assertIsNone(context.get_note("provider"))

        def test_authenticate(self):
            """Test identity attachment"""
            context = RequestContext()
            context.authenticate("alice", "jwt")
            self.assertTrue(context.is_authenticated)
            self.assertIsNotNone(context.auth_time)
            self.assertIn("user=alice", repr(context))

    unittest.main()
