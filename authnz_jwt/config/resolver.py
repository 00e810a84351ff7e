"""
Config Resolver - Effective directive value for a request

Module: config.resolver
Date: 2026-10-18
Version: 0.1.0

CHANGELOG:
[2026-10-18 v0.1.0] Initial implementation
  - resolve(): directory scope first, then server scope, else absent
  - resolve_with_default(): falls back to directory built-in defaults
  - EffectiveConfig assembled one directive at a time

ARCHITECTURE:
The resolver is a pure function over two frozen scopes. Every
directive, leeway included, is resolved with the same rule:

    directory is-set  ->  directory value
    server is-set     ->  server value
    otherwise         ->  absent

An explicit directory value of 0 therefore wins over a server value.
"""

import logging
from dataclasses import dataclass
from typing import Any, Optional

from .scoped_config import DIRECTORY_DEFAULTS, Directive, ScopePair


@dataclass(frozen=True)
class EffectiveConfig:
    """Per-request view of the configuration. Never stored."""
    signature_algorithm: Optional[str] = None
    signature_secret: Optional[bytes] = None
    iss: Optional[str] = None
    sub: Optional[str] = None
    aud: Optional[str] = None
    exp_delay: Optional[int] = None
    nbf_delay: Optional[int] = None
    leeway: int = 0

    def __repr__(self) -> str:
        # keep the secret out of logs
        secret = f"<{len(self.signature_secret)} bytes>" if self.signature_secret else None
        return (
            f"EffectiveConfig(alg={self.signature_algorithm}, secret={secret}, "
            f"iss={self.iss!r}, sub={self.sub!r}, aud={self.aud!r}, "
            f"exp_delay={self.exp_delay}, nbf_delay={self.nbf_delay}, "
            f"leeway={self.leeway})"
        )


class ConfigResolver:
    """Resolves directives against a (server, directory) scope pair"""

    def __init__(self):
        self.logger = logging.getLogger("config.resolver")

    @staticmethod
    def resolve(directive: Directive, scopes: ScopePair) -> Optional[Any]:
        """
        Effective value of one directive

        Args:
            directive: Directive to resolve
            scopes: Scope pair of the current request

        Returns:
            The directory value if set there, else the server value if
            set there, else None
        """
        if scopes.directory.is_set(directive):
            return scopes.directory.get(directive)
        if scopes.server.is_set(directive):
            return scopes.server.get(directive)
        return None

    @classmethod
    def resolve_with_default(cls, directive: Directive, scopes: ScopePair) -> Optional[Any]:
        """Like resolve(), falling back to the directory built-in default"""
        value = cls.resolve(directive, scopes)
        if value is None:
            return DIRECTORY_DEFAULTS.get(directive)
        return value

    def effective_config(self, scopes: ScopePair) -> EffectiveConfig:
        """
        Assemble the effective configuration field by field

        Delays and leeway use the directory defaults when neither scope
        sets them; everything else is absent unless configured.
        """
        config = EffectiveConfig(
            signature_algorithm=self.resolve(Directive.SIGNATURE_ALGORITHM, scopes),
            signature_secret=self.resolve(Directive.SIGNATURE_SECRET, scopes),
            iss=self.resolve(Directive.ISS, scopes),
            sub=self.resolve(Directive.SUB, scopes),
            aud=self.resolve(Directive.AUD, scopes),
            exp_delay=self.resolve_with_default(Directive.EXP_DELAY, scopes),
            nbf_delay=self.resolve_with_default(Directive.NBF_DELAY, scopes),
            leeway=self.resolve_with_default(Directive.LEEWAY, scopes),
        )
        self.logger.debug(f"Resolved {config}")
        return config
