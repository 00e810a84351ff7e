"""
Token Issuer - Builds and signs bearer tokens

Module: security.token_issuer
Date: 2026-10-18
Version: 0.1.0

CHANGELOG:
[2026-10-18 v0.1.0] Initial implementation
  - Claim construction from the effective configuration
  - Key policy enforced before every signature
  - HS256 / HS384 / HS512 signing through PyJWT

ARCHITECTURE:
Claims of an issued token:
  iat   always, the issue time
  exp   iat + ExpDelay, unless ExpDelay is negative
  nbf   iat + NbfDelay, unless NbfDelay is negative
  iss / sub / aud when configured
  user  always, the authenticated identity

SECURITY NOTES:
- Missing secret or algorithm is a configuration fault (HTTP 500)
- Each algorithm signs with its own tag
- Single attempt, no retries
"""

import logging
import time
from typing import Callable, Optional

import jwt

from ..config.resolver import EffectiveConfig
from .claims import TokenClaims
from .errors import ConfigurationError
from .key_policy import KeyPolicy


def now_ts() -> int:
    """Current UNIX timestamp (seconds)"""
    return int(time.time())


class TokenIssuer:
    """Mints signed tokens for authenticated users"""

    def __init__(
        self,
        key_policy: Optional[KeyPolicy] = None,
        clock: Callable[[], int] = now_ts,
    ):
        """
        Initialize token issuer

        Args:
            key_policy: Key policy to enforce (default KeyPolicy())
            clock: Returns the current UNIX time in seconds
        """
        self.logger = logging.getLogger("security.token_issuer")
        self.key_policy = key_policy or KeyPolicy()
        self.clock = clock

    def build_claims(self, identity: str, config: EffectiveConfig) -> TokenClaims:
        """Claims for identity, stamped with the current time"""
        now = self.clock()
        claims = TokenClaims(user=identity, iat=now)

        if config.exp_delay is not None and config.exp_delay >= 0:
            claims.exp = now + config.exp_delay
        if config.nbf_delay is not None and config.nbf_delay >= 0:
            claims.nbf = now + config.nbf_delay

        claims.iss = config.iss
        claims.sub = config.sub
        claims.aud = config.aud
        return claims

    def issue(self, identity: str, config: EffectiveConfig) -> str:
        """
        Build and sign a token

        Args:
            identity: Authenticated username
            config: Effective configuration of the login request

        Returns:
            Compact serialized JWT

        Raises:
            ConfigurationError: Missing secret or algorithm, or key policy
                violation (KeyPolicyError)
            ValueError: Empty identity
        """
        if not identity:
            raise ValueError("identity required")

        if not config.signature_secret:
            message = "You must specify the SignatureSecret directive in configuration"
            self.logger.error(message)
            raise ConfigurationError(message)
        if not config.signature_algorithm:
            message = "You must specify the SignatureAlgorithm directive in configuration"
            self.logger.error(message)
            raise ConfigurationError(message)

        self.key_policy.check(config.signature_secret, config.signature_algorithm)

        claims = self.build_claims(identity, config)
        token = jwt.encode(
            claims.to_wire(),
            config.signature_secret,
            algorithm=config.signature_algorithm,
            headers={"typ": "JWT"},
        )

        self.logger.info(
            f"Token issued for {identity} (alg={config.signature_algorithm}, "
            f"exp={claims.exp}, nbf={claims.nbf})"
        )
        return token
