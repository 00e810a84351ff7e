"""
JSON Store - JSON file handling for configuration and user files

Module: persistence.json_store
Date: 2026-10-18
Version: 0.1.0

CHANGELOG:
[2026-10-18 v0.1.0] Initial implementation
  - Read-only mode for configuration files (never created)
  - Writable mode for the local user file (created on first use)
  - Atomic writes (temp file + rename), 0600 permissions

ARCHITECTURE:
JSONStore is shared by:
  - config.loader: reads the configuration document (read-only)
  - providers.file_provider: reads and rewrites the user file

SECURITY NOTES:
- The user file holds bcrypt hashes only, still written 0600
- A missing configuration file is an error, not an empty config
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional


class JSONStoreError(Exception):
    """Base JSON store error"""
    pass


class JSONStoreIOError(JSONStoreError):
    """File I/O error"""
    pass


class JSONStoreFormatError(JSONStoreError):
    """JSON format error"""
    pass


class JSONStore:
    """
    JSON document on disk.

    In writable mode the file (and its directory) is created with
    default_data when missing. In read-only mode a missing file raises
    on load() and save() is refused.
    """

    def __init__(
        self,
        file_path: str,
        default_data: Optional[Dict[str, Any]] = None,
        read_only: bool = False,
    ):
        """
        Initialize JSON store

        Args:
            file_path: Path to JSON file
            default_data: Initial content for a new writable store
            read_only: Never create or write the file
        """
        self.logger = logging.getLogger("persistence.json_store")
        self.file_path = Path(file_path)
        self.default_data = default_data or {}
        self.read_only = read_only

        if not read_only and not self.file_path.exists():
            try:
                self.file_path.parent.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                raise JSONStoreIOError(f"Failed to create {self.file_path.parent}: {e}")
            self._write_atomic(self.default_data)
            self.logger.info(f"Created new store: {self.file_path}")

    def load(self) -> Dict[str, Any]:
        """
        Load data from JSON file

        Returns:
            Parsed JSON object

        Raises:
            JSONStoreIOError: If file cannot be read
            JSONStoreFormatError: If content is not a JSON object
        """
        try:
            with open(self.file_path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError:
            raise JSONStoreIOError(f"File not found: {self.file_path}")
        except json.JSONDecodeError as e:
            raise JSONStoreFormatError(f"Invalid JSON in {self.file_path}: {e}")
        except OSError as e:
            raise JSONStoreIOError(f"Failed to read {self.file_path}: {e}")

        if not isinstance(data, dict):
            raise JSONStoreFormatError(
                f"{self.file_path}: top-level JSON value must be an object"
            )
        return data

    def save(self, data: Dict[str, Any]) -> None:
        """
        Save data to JSON file (atomic write)

        Raises:
            JSONStoreIOError: If write fails or store is read-only
        """
        if self.read_only:
            raise JSONStoreIOError(f"{self.file_path} is opened read-only")
        self._write_atomic(data)

    def _write_atomic(self, data: Dict[str, Any]) -> None:
        try:
            temp_path = self.file_path.with_suffix(".tmp")
            with open(temp_path, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2, default=str)
            temp_path.replace(self.file_path)
            self.file_path.chmod(0o600)
        except OSError as e:
            raise JSONStoreIOError(f"Failed to write {self.file_path}: {e}")


# ============================================================================
# Unit Tests
# ============================================================================

if __name__ == "__main__":
    import unittest
    import tempfile
    import shutil
    import os

    class TestJSONStore(unittest.TestCase):
        """Test suite for JSONStore"""

        def setUp(self):
            """Setup before each test"""
            self.test_dir = tempfile.mkdtemp()
            self.store_path = os.path.join(self.test_dir, "test.json")

        def tearDown(self):
            """Cleanup after each test"""
            if os.path.exists(self.test_dir):
                shutil.rmtree(self.test_dir)

        def test_initialization_creates_file(self):
            """Test writable store creates its file"""
            JSONStore(self.store_path, {"users": []})
            self.assertTrue(os.path.exists(self.store_path))

        def test_read_only_does_not_create(self):
            """Test read-only store never creates its file"""
            store = JSONStore(self.store_path, read_only=True)
            self.assertFalse(os.path.exists(self.store_path))
            with self.assertRaises(JSONStoreIOError):
                store.load()

        def test_save_and_load(self):
            """Test save and load round trip"""
            store = JSONStore(self.store_path)
            store.save({"key": "value"})
            self.assertEqual(store.load(), {"key": "value"})

        def test_invalid_json(self):
            """Test invalid JSON raises format error"""
            with open(self.store_path, "w") as f:
                f.write("{invalid")
            with self.assertRaises(JSONStoreFormatError):
                JSONStore(self.store_path).load()

    unittest.main()
