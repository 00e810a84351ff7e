"""
Scoped Config - Server and directory configuration records

Module: config.scoped_config
Date: 2026-10-18
Version: 0.1.0

CHANGELOG:
[2026-10-18 v0.1.0] Initial implementation
  - Directive enumeration
  - ScopedConfig with per-field "is-set" markers
  - Location (path prefix + directory scope + handler options)
  - ConfigStore with longest-prefix location matching

ARCHITECTURE:
Two scopes of configuration exist:
  - server: created once, no built-in defaults
  - directory: created per protected path, may be empty, carries
    built-in defaults (ExpDelay 3600, NbfDelay 0, Leeway 0) and the
    ordered provider list

Both are built during the configuration phase, then frozen. Requests
only read them, so no locking is needed.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, NamedTuple, Optional, Set

from ..core.constants import (
    DEFAULT_EXP_DELAY,
    DEFAULT_LEEWAY,
    DEFAULT_NBF_DELAY,
    DIRECTIVE_AUD,
    DIRECTIVE_EXP_DELAY,
    DIRECTIVE_ISS,
    DIRECTIVE_LEEWAY,
    DIRECTIVE_NBF_DELAY,
    DIRECTIVE_SIGNATURE_ALGORITHM,
    DIRECTIVE_SIGNATURE_SECRET,
    DIRECTIVE_SUB,
    JWT_AUTH_TYPE,
    JWT_LOGIN_HANDLER,
)
from ..security.errors import ConfigurationError


class Directive(Enum):
    """Configuration directives understood by the engine"""
    SIGNATURE_ALGORITHM = DIRECTIVE_SIGNATURE_ALGORITHM
    SIGNATURE_SECRET = DIRECTIVE_SIGNATURE_SECRET
    ISS = DIRECTIVE_ISS
    SUB = DIRECTIVE_SUB
    AUD = DIRECTIVE_AUD
    EXP_DELAY = DIRECTIVE_EXP_DELAY
    NBF_DELAY = DIRECTIVE_NBF_DELAY
    LEEWAY = DIRECTIVE_LEEWAY

    @property
    def is_integer(self) -> bool:
        return self in INTEGER_DIRECTIVES


INTEGER_DIRECTIVES = frozenset({
    Directive.EXP_DELAY,
    Directive.NBF_DELAY,
    Directive.LEEWAY,
})

DIRECTORY_DEFAULTS: Dict[Directive, int] = {
    Directive.EXP_DELAY: DEFAULT_EXP_DELAY,
    Directive.NBF_DELAY: DEFAULT_NBF_DELAY,
    Directive.LEEWAY: DEFAULT_LEEWAY,
}


class ScopeLevel(Enum):
    SERVER = "server"
    DIRECTORY = "directory"


class ScopedConfig:
    """
    One configuration scope.

    Every directive value is paired with an "is-set" marker so that a
    value the administrator wrote (even 0) can be told apart from a
    built-in default. The record is writable until freeze() is called.
    """

    def __init__(self, level: ScopeLevel, path: Optional[str] = None):
        self.logger = logging.getLogger("config.scoped_config")
        self.level = level
        self.path = path
        self._values: Dict[Directive, Any] = {}
        self._set: Set[Directive] = set()
        self._providers: List[str] = []
        self._frozen = False

        if level is ScopeLevel.DIRECTORY:
            self._values.update(DIRECTORY_DEFAULTS)

    @classmethod
    def server(cls) -> "ScopedConfig":
        return cls(ScopeLevel.SERVER)

    @classmethod
    def directory(cls, path: Optional[str] = None) -> "ScopedConfig":
        return cls(ScopeLevel.DIRECTORY, path)

    @property
    def is_frozen(self) -> bool:
        return self._frozen

    @property
    def providers(self) -> tuple:
        """Ordered provider names (directory scope only)"""
        return tuple(self._providers)

    def set(self, directive: Directive, value: Any) -> None:
        """
        Store a directive value and mark it as set

        Args:
            directive: Directive to set
            value: str for string directives (secret may be bytes),
                int for delays and leeway

        Raises:
            ConfigurationError: If frozen or value has the wrong type
        """
        self._check_writable()

        if directive.is_integer:
            if isinstance(value, bool) or not isinstance(value, int):
                raise ConfigurationError(
                    f"{directive.value}: argument must be numeric"
                )
        elif directive is Directive.SIGNATURE_SECRET:
            if isinstance(value, str):
                value = value.encode("utf-8")
            if not isinstance(value, bytes):
                raise ConfigurationError(
                    f"{directive.value}: argument must be a string"
                )
        elif not isinstance(value, str):
            raise ConfigurationError(f"{directive.value}: argument must be a string")

        self._values[directive] = value
        self._set.add(directive)

    def add_provider(self, name: str) -> None:
        """Append a provider name to the ordered provider list"""
        self._check_writable()
        if self.level is not ScopeLevel.DIRECTORY:
            raise ConfigurationError(
                "Provider is only allowed in a directory (location) scope"
            )
        self._providers.append(name)

    def is_set(self, directive: Directive) -> bool:
        return directive in self._set

    def get(self, directive: Directive) -> Any:
        """Stored value, built-in default, or None"""
        return self._values.get(directive)

    def freeze(self) -> "ScopedConfig":
        self._frozen = True
        return self

    def _check_writable(self) -> None:
        if self._frozen:
            raise ConfigurationError(
                f"{self.level.value} scope is read-only after configuration load"
            )

    def __repr__(self) -> str:
        names = sorted(d.value for d in self._set)
        return (
            f"ScopedConfig(level={self.level.value}, path={self.path!r}, "
            f"set={names}, providers={self._providers})"
        )


class ScopePair(NamedTuple):
    """The two scopes that apply to one request"""
    server: ScopedConfig
    directory: ScopedConfig


@dataclass
class Location:
    """A configured path prefix and its directory scope"""
    path: str
    scope: ScopedConfig
    handler: Optional[str] = None
    auth_type: Optional[str] = None
    auth_name: Optional[str] = None

    @property
    def is_login_handler(self) -> bool:
        return self.handler == JWT_LOGIN_HANDLER

    @property
    def requires_token(self) -> bool:
        return (self.auth_type or "").lower() == JWT_AUTH_TYPE

    def matches(self, request_path: str) -> bool:
        if self.path == "/":
            return True
        prefix = self.path.rstrip("/")
        return request_path == prefix or request_path.startswith(prefix + "/")


class ConfigStore:
    """
    Holds the server scope and every configured location.

    Built by the loader, then frozen. Lookups pick the location with
    the longest matching path prefix.
    """

    def __init__(self, server: Optional[ScopedConfig] = None):
        self.logger = logging.getLogger("config.store")
        self.server = server or ScopedConfig.server()
        self._locations: List[Location] = []
        self._empty_directory = ScopedConfig.directory().freeze()
        self._frozen = False

    @property
    def locations(self) -> List[Location]:
        return list(self._locations)

    def add_location(self, location: Location) -> Location:
        if self._frozen:
            raise ConfigurationError("Configuration is read-only after load")
        if any(loc.path == location.path for loc in self._locations):
            raise ConfigurationError(f"Duplicate location: {location.path}")
        self._locations.append(location)
        return location

    def freeze(self) -> "ConfigStore":
        self.server.freeze()
        for location in self._locations:
            location.scope.freeze()
        self._frozen = True
        self.logger.debug(
            f"Configuration frozen ({len(self._locations)} location(s))"
        )
        return self

    def match(self, request_path: str) -> Optional[Location]:
        """Location with the longest prefix matching request_path"""
        best: Optional[Location] = None
        for location in self._locations:
            if location.matches(request_path):
                if best is None or len(location.path) > len(best.path):
                    best = location
        return best

    def scopes_for(self, request_path: str) -> ScopePair:
        location = self.match(request_path)
        directory = location.scope if location else self._empty_directory
        return ScopePair(server=self.server, directory=directory)


# ============================================================================
# Unit Tests
# ============================================================================

if __name__ == "__main__":
    import unittest

    class TestScopedConfig(unittest.TestCase):
        """Test suite for ScopedConfig"""

        def test_directory_defaults_not_set(self):
            """Test defaults are present but not marked set"""
            scope = ScopedConfig.directory("/api")
            self.assertEqual(scope.get(Directive.EXP_DELAY), 3600)
            self.assertFalse(scope.is_set(Directive.EXP_DELAY))

        def test_explicit_zero_is_set(self):
            """Test an explicit 0 is marked set"""
            scope = ScopedConfig.directory("/api")
            scope.set(Directive.LEEWAY, 0)
            self.assertTrue(scope.is_set(Directive.LEEWAY))

        def test_freeze(self):
            """Test frozen scope is read-only"""
            scope = ScopedConfig.server().freeze()
            with self.assertRaises(ConfigurationError):
                scope.set(Directive.ISS, "x")

    class TestConfigStore(unittest.TestCase):
        """Test suite for ConfigStore"""

        def test_longest_prefix(self):
            """Test longest matching location wins"""
            store = ConfigStore()
            store.add_location(Location("/", ScopedConfig.directory("/")))
            api = store.add_location(Location("/api", ScopedConfig.directory("/api")))
            self.assertIs(store.match("/api/x"), api)
            self.assertEqual(store.match("/other").path, "/")

    unittest.main()
