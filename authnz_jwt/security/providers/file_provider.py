"""
File Provider - Local user store with bcrypt hashes

Module: security.providers.file_provider
Date: 2026-10-18
Version: 0.1.0

CHANGELOG:
[2026-10-18 v0.1.0] Initial implementation
  - User registration with bcrypt password hashing
  - Password check returning a ProviderVerdict
  - Enable / disable, password change, deletion
  - Persistent storage in a JSON user file

ARCHITECTURE:
FileProvider provides:
  - Secure password hashing with bcrypt
  - Credential verification for the provider chain
  - Administration helpers for the user file

SECURITY NOTES:
- Plaintext passwords are never stored or logged
- Disabled users are denied, not reported as missing
- bcrypt runs in a worker thread so the event loop keeps serving
"""

import asyncio
import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

import bcrypt

from ...persistence.json_store import JSONStore, JSONStoreError
from ..request_context import RequestContext
from .base import AuthnProvider, ProviderVerdict


class UserError(Exception):
    """Base user store error"""
    pass


class UserNotFoundError(UserError):
    """User not found"""
    pass


class UserExistsError(UserError):
    """User already exists"""
    pass


class UserRecord:
    """Represents a stored user"""

    def __init__(
        self,
        username: str,
        password_hash: str,
        enabled: bool = True,
        created_at: Optional[datetime] = None,
        metadata: Optional[Dict[str, Any]] = None,
    ):
        self.username = username
        self.password_hash = password_hash
        self.enabled = enabled
        self.created_at = created_at or datetime.now(timezone.utc)
        self.metadata = metadata or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON storage"""
        return {
            "username": self.username,
            "password_hash": self.password_hash,
            "enabled": self.enabled,
            "created_at": self.created_at.isoformat(),
            "metadata": self.metadata,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "UserRecord":
        """Create from dictionary (from JSON)"""
        created_at = data.get("created_at")
        return cls(
            username=data["username"],
            password_hash=data["password_hash"],
            enabled=data.get("enabled", True),
            created_at=datetime.fromisoformat(created_at) if created_at else None,
            metadata=data.get("metadata", {}),
        )


class FileProvider(AuthnProvider):
    """
    Verifies credentials against a local JSON user file.

    The file is created (empty) when missing. Each check reads the file
    again, so users added by an administrator are visible immediately.
    """

    def __init__(self, name: str, path: str, bcrypt_rounds: int = 10):
        """
        Initialize file provider

        Args:
            name: Provider name used in configuration
            path: Path of the JSON user file
            bcrypt_rounds: Cost factor for new hashes (10-12 recommended)
        """
        super().__init__(name)
        self.logger = logging.getLogger("security.providers.file")
        self.bcrypt_rounds = bcrypt_rounds
        self.store = JSONStore(path, {"users": []})
        self.logger.info(f"FileProvider '{name}' initialized (file={self.store.file_path})")

    async def check_password(
        self,
        context: RequestContext,
        user: str,
        password: str,
    ) -> ProviderVerdict:
        try:
            record = self._find(user)
        except (JSONStoreError, KeyError, ValueError) as e:
            self.logger.error(f"Cannot read user file {self.store.file_path}: {e}")
            return ProviderVerdict.GENERAL_ERROR

        if record is None:
            return ProviderVerdict.USER_NOT_FOUND

        if not record.enabled:
            self.logger.warning(f"User '{user}' is disabled")
            return ProviderVerdict.DENIED

        matches = await asyncio.to_thread(
            self._verify_password, password, record.password_hash
        )
        if not matches:
            return ProviderVerdict.DENIED
        return ProviderVerdict.GRANTED

    def create_user(
        self,
        username: str,
        password: str,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> UserRecord:
        """
        Create a new user with hashed password

        Raises:
            UserExistsError: If username already exists
            ValueError: If username or password is empty
        """
        if not username or not password:
            raise ValueError("username and password required")
        if self._find(username) is not None:
            raise UserExistsError(f"User '{username}' already exists")

        record = UserRecord(
            username=username,
            password_hash=self._hash_password(password),
            metadata=metadata,
        )
        data = self.store.load()
        data.setdefault("users", []).append(record.to_dict())
        self.store.save(data)

        self.logger.info(f"User created: {username}")
        return record

    def set_password(self, username: str, password: str) -> UserRecord:
        """Replace a user's password hash"""
        if not password:
            raise ValueError("password required")
        return self._update(username, password_hash=self._hash_password(password))

    def set_user_enabled(self, username: str, enabled: bool) -> UserRecord:
        """Enable or disable a user"""
        record = self._update(username, enabled=enabled)
        status = "enabled" if enabled else "disabled"
        self.logger.info(f"User {status}: {username}")
        return record

    def get_user(self, username: str) -> Optional[UserRecord]:
        return self._find(username)

    def list_users(self) -> List[UserRecord]:
        data = self.store.load()
        return [UserRecord.from_dict(u) for u in data.get("users", [])]

    def delete_user(self, username: str) -> None:
        """
        Delete a user

        Raises:
            UserNotFoundError: If user doesn't exist
        """
        data = self.store.load()
        users = data.get("users", [])
        for i, user_dict in enumerate(users):
            if user_dict["username"] == username:
                users.pop(i)
                self.store.save(data)
                self.logger.info(f"User deleted: {username}")
                return
        raise UserNotFoundError(f"User '{username}' not found")

    def _find(self, username: str) -> Optional[UserRecord]:
        data = self.store.load()
        for user_dict in data.get("users", []):
            if user_dict["username"] == username:
                return UserRecord.from_dict(user_dict)
        return None

    def _update(self, username: str, **fields: Any) -> UserRecord:
        data = self.store.load()
        for user_dict in data.get("users", []):
            if user_dict["username"] == username:
                user_dict.update(fields)
                self.store.save(data)
                return UserRecord.from_dict(user_dict)
        raise UserNotFoundError(f"User '{username}' not found")

    def _hash_password(self, password: str) -> str:
        salt = bcrypt.gensalt(rounds=self.bcrypt_rounds)
        return bcrypt.hashpw(password.encode(), salt).decode()

    @staticmethod
    def _verify_password(password: str, password_hash: str) -> bool:
        """
        Verify password against bcrypt hash

        Returns:
            True if password matches, False otherwise (including a
            corrupt hash)
        """
        try:
            return bcrypt.checkpw(password.encode(), password_hash.encode())
        except ValueError:
            return False
