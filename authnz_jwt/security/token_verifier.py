"""
Token Verifier - Validation pipeline for bearer tokens

Module: security.token_verifier
Date: 2026-10-18
Version: 0.1.0

CHANGELOG:
[2026-10-18 v0.1.0] Initial implementation
  - Key policy, structural decode, "none" algorithm refusal
  - Signature check confined to the configured algorithm
  - iss / aud / sub equality checks
  - exp (mandatory) and nbf (optional) with symmetric leeway
  - user claim extraction

ARCHITECTURE:
Linear pipeline, every stage either passes or ends the run with a
RejectionKind:

    1. key policy + decode        -> MALFORMED
    2. alg "none"                 -> ALGORITHM_NONE
       signature (configured alg) -> MALFORMED
    3. iss                        -> ISSUER_MISMATCH
    4. aud                        -> AUDIENCE_MISMATCH
    5. sub                        -> SUBJECT_MISMATCH
    6. exp missing / exp+leeway<now -> EXPIRATION_MISSING / EXPIRED
    7. nbf-leeway>now             -> NOT_YET_VALID
    8. user missing               -> USER_MISSING

Claim checks (3-5) are skipped when either side is absent.

SECURITY NOTES:
- exp is mandatory on verification even though issuance may omit it
- "none" is refused independently of PyJWT's own behavior
- Verification keeps no state: the same token verifies the same way twice
- Configuration faults raise ConfigurationError (HTTP 500), they are
  not token rejections
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, Optional

import jwt

from ..config.resolver import EffectiveConfig
from ..core.constants import ALG_NONE
from .claims import ClaimFormatError, TokenClaims
from .errors import ConfigurationError, TokenError
from .key_policy import KeyPolicy
from .token_issuer import now_ts

# Registered-claim checks are done by the pipeline itself; PyJWT only
# verifies structure and signature.
_DECODE_OPTIONS: Dict[str, Any] = {
    "verify_signature": True,
    "verify_exp": False,
    "verify_nbf": False,
    "verify_iat": False,
    "verify_aud": False,
    "verify_iss": False,
}


class RejectionKind(Enum):
    """Why a token was refused"""
    MALFORMED = "malformed"
    ALGORITHM_NONE = "algorithm_none"
    ISSUER_MISMATCH = "issuer_mismatch"
    AUDIENCE_MISMATCH = "audience_mismatch"
    SUBJECT_MISMATCH = "subject_mismatch"
    EXPIRATION_MISSING = "expiration_missing"
    EXPIRED = "expired"
    NOT_YET_VALID = "not_yet_valid"
    USER_MISSING = "user_missing"

    @property
    def description(self) -> str:
        """error_description sent in the challenge header"""
        return _DESCRIPTIONS[self]


_DESCRIPTIONS = {
    RejectionKind.MALFORMED: "Token is malformed",
    RejectionKind.ALGORITHM_NONE: "Token is malformed",
    RejectionKind.ISSUER_MISMATCH: "Issuer is not valid",
    RejectionKind.AUDIENCE_MISMATCH: "Audience is not valid",
    RejectionKind.SUBJECT_MISMATCH: "Subject is not valid",
    RejectionKind.EXPIRATION_MISSING: "Expiration is missing in token",
    RejectionKind.EXPIRED: "Token expired",
    RejectionKind.NOT_YET_VALID: "Token can't be processed now due to nbf field",
    RejectionKind.USER_MISSING: "Username was not in token",
}


@dataclass
class VerificationResult:
    """Identity of an accepted token, or the rejection kind"""
    identity: Optional[str] = None
    rejection: Optional[RejectionKind] = None
    claims: Optional[TokenClaims] = None

    @property
    def accepted(self) -> bool:
        return self.rejection is None and self.identity is not None

    @property
    def description(self) -> Optional[str]:
        return self.rejection.description if self.rejection else None


class TokenVerifier:
    """Validates bearer tokens against the effective configuration"""

    def __init__(
        self,
        key_policy: Optional[KeyPolicy] = None,
        clock: Callable[[], int] = now_ts,
    ):
        """
        Initialize token verifier

        Args:
            key_policy: Key policy to enforce (default KeyPolicy())
            clock: Returns the current UNIX time in seconds
        """
        self.logger = logging.getLogger("security.token_verifier")
        self.key_policy = key_policy or KeyPolicy()
        self.clock = clock

    def verify(self, token: str, config: EffectiveConfig) -> VerificationResult:
        """
        Run the validation pipeline

        Args:
            token: Compact serialized JWT
            config: Effective configuration of the request

        Returns:
            VerificationResult (accepted identity or rejection kind)

        Raises:
            ConfigurationError: Missing secret or algorithm, or key policy
                violation
        """
        secret = config.signature_secret
        algorithm = config.signature_algorithm
        if not secret:
            message = "You must specify the SignatureSecret directive in configuration"
            self.logger.error(message)
            raise ConfigurationError(message)
        if not algorithm:
            message = "You must specify the SignatureAlgorithm directive in configuration"
            self.logger.error(message)
            raise ConfigurationError(message)

        self.key_policy.check(secret, algorithm)

        # 1-2. structure, algorithm confinement, signature
        if not token or not isinstance(token, str):
            return self._reject(RejectionKind.MALFORMED, "Token must be a non-empty string")
        try:
            header = jwt.get_unverified_header(token)
        except jwt.InvalidTokenError as e:
            return self._reject(RejectionKind.MALFORMED, f"Decoding process has failed: {e}")

        declared = header.get("alg")
        if not isinstance(declared, str):
            return self._reject(RejectionKind.MALFORMED, "Token header has no algorithm")
        if declared.lower() == ALG_NONE:
            return self._reject(RejectionKind.ALGORITHM_NONE, "Token declares the none algorithm")

        try:
            payload = jwt.decode(
                token,
                secret,
                algorithms=[algorithm],
                options=_DECODE_OPTIONS,
            )
        except jwt.InvalidTokenError as e:
            return self._reject(RejectionKind.MALFORMED, f"Decoding process has failed: {e}")

        try:
            claims = TokenClaims.from_wire(payload)
        except ClaimFormatError as e:
            return self._reject(RejectionKind.MALFORMED, f"Invalid claim: {e}")

        # 3-5. claim equality
        if config.iss and claims.iss is not None and claims.iss != config.iss:
            return self._reject(
                RejectionKind.ISSUER_MISMATCH,
                "Token issuer does not match with configured issuer",
            )
        if config.aud and claims.aud is not None and claims.aud != config.aud:
            return self._reject(
                RejectionKind.AUDIENCE_MISMATCH,
                "Token audience does not match with configured audience",
            )
        if config.sub and claims.sub is not None and claims.sub != config.sub:
            return self._reject(
                RejectionKind.SUBJECT_MISMATCH,
                "Token subject does not match with configured subject",
            )

        # 6-7. time window
        leeway = config.leeway or 0
        now = self.clock()
        if claims.exp is None:
            return self._reject(RejectionKind.EXPIRATION_MISSING, "Missing exp in token")
        if claims.exp + leeway < now:
            return self._reject(
                RejectionKind.EXPIRED,
                f"Token expired (exp={claims.exp}, leeway={leeway}, now={now})",
            )
        if claims.nbf is not None and claims.nbf - leeway > now:
            return self._reject(
                RejectionKind.NOT_YET_VALID,
                f"Nbf check failed, token can't be processed now (nbf={claims.nbf}, leeway={leeway}, now={now})",
            )

        # 8. identity
        if not claims.user:
            return self._reject(RejectionKind.USER_MISSING, "Username was not in token")

        self.logger.debug(f"Token accepted for {claims.user}")
        return VerificationResult(identity=claims.user, claims=claims)

    def verify_or_raise(self, token: str, config: EffectiveConfig) -> str:
        """
        Like verify(), returning the identity

        Raises:
            TokenError: Carrying the rejection kind
            ConfigurationError: As verify()
        """
        result = self.verify(token, config)
        if not result.accepted:
            raise TokenError(
                f"Token rejected: {result.rejection.name}",
                kind=result.rejection,
                description=result.description,
            )
        return result.identity

    def _reject(self, kind: RejectionKind, reason: str) -> VerificationResult:
        self.logger.warning(f"{reason} [{kind.name}]")
        return VerificationResult(rejection=kind)
