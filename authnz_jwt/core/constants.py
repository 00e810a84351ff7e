"""
Constants for authnz-jwt

Module: core.constants
Date: 2026-10-18
Version: 0.1.0

CHANGELOG:
[2026-10-18 v0.1.0] Initial constants definition
  - Directive names and built-in defaults
  - Key lengths per HMAC algorithm
  - Handler / auth type names
  - HTTP status codes and challenge messages

SECURITY NOTES:
- Only symmetric HMAC algorithms are supported
- Key lengths are exact, not minimums
- Expiration is issued by default (3600s)
"""

from typing import Final

# ============================================================================
# Server identity
# ============================================================================

SERVER_NAME: Final[str] = "authnz-jwt"
SERVER_VERSION: Final[str] = "0.1.0"

DEFAULT_HTTP_HOST: Final[str] = "127.0.0.1"
DEFAULT_HTTP_PORT: Final[int] = 8080
DEFAULT_CONFIG_PATH: Final[str] = "./authnz_jwt.json"

# Environment variables
ENV_CONFIG_PATH: Final[str] = "AUTHNZ_JWT_CONFIG"
ENV_SIGNATURE_SECRET: Final[str] = "AUTHNZ_JWT_SIGNATURE_SECRET"
ENV_LOG_LEVEL: Final[str] = "AUTHNZ_JWT_LOG_LEVEL"

# ============================================================================
# Directives
# ============================================================================

DIRECTIVE_SIGNATURE_ALGORITHM: Final[str] = "SignatureAlgorithm"
DIRECTIVE_SIGNATURE_SECRET: Final[str] = "SignatureSecret"
DIRECTIVE_ISS: Final[str] = "Iss"
DIRECTIVE_SUB: Final[str] = "Sub"
DIRECTIVE_AUD: Final[str] = "Aud"
DIRECTIVE_EXP_DELAY: Final[str] = "ExpDelay"
DIRECTIVE_NBF_DELAY: Final[str] = "NbfDelay"
DIRECTIVE_LEEWAY: Final[str] = "Leeway"
DIRECTIVE_PROVIDER: Final[str] = "Provider"

# Location keys that are not JWT directives
LOCATION_PATH: Final[str] = "path"
LOCATION_HANDLER: Final[str] = "Handler"
LOCATION_AUTH_TYPE: Final[str] = "AuthType"
LOCATION_AUTH_NAME: Final[str] = "AuthName"

JWT_LOGIN_HANDLER: Final[str] = "jwt-login-handler"
JWT_AUTH_TYPE: Final[str] = "jwt"

# Built-in defaults of a directory scope
DEFAULT_EXP_DELAY: Final[int] = 3600
DEFAULT_NBF_DELAY: Final[int] = 0
DEFAULT_LEEWAY: Final[int] = 0

# ============================================================================
# Signature algorithms
# ============================================================================

ALG_HS256: Final[str] = "HS256"
ALG_HS384: Final[str] = "HS384"
ALG_HS512: Final[str] = "HS512"
ALG_NONE: Final[str] = "none"

# Exact secret length in bytes for each algorithm
KEY_LENGTHS = {
    ALG_HS256: 32,
    ALG_HS384: 48,
    ALG_HS512: 64,
}

SUPPORTED_ALGORITHMS = tuple(KEY_LENGTHS)

# ============================================================================
# Claims
# ============================================================================

CLAIM_IAT: Final[str] = "iat"
CLAIM_EXP: Final[str] = "exp"
CLAIM_NBF: Final[str] = "nbf"
CLAIM_ISS: Final[str] = "iss"
CLAIM_SUB: Final[str] = "sub"
CLAIM_AUD: Final[str] = "aud"
CLAIM_USER: Final[str] = "user"

# ============================================================================
# Login form
# ============================================================================

FORM_USER_FIELD: Final[str] = "user"
FORM_PASSWORD_FIELD: Final[str] = "password"
MAX_LOGIN_BODY_SIZE: Final[int] = 8192

# Request note holding the name of the provider in use
AUTHN_PROVIDER_NAME_NOTE: Final[str] = "authn_provider_name"

# ============================================================================
# HTTP
# ============================================================================

HTTP_OK: Final[int] = 200
HTTP_BAD_REQUEST: Final[int] = 400
HTTP_UNAUTHORIZED: Final[int] = 401
HTTP_METHOD_NOT_ALLOWED: Final[int] = 405
HTTP_INTERNAL_SERVER_ERROR: Final[int] = 500

AUTHORIZATION_HEADER: Final[str] = "Authorization"
CHALLENGE_HEADER: Final[str] = "WWW-Authenticate"
BEARER_PREFIX: Final[str] = "Bearer "

ERROR_INVALID_REQUEST: Final[str] = "invalid_request"
ERROR_INVALID_TOKEN: Final[str] = "invalid_token"
DESCRIPTION_NOT_BEARER: Final[str] = "Authentication type must be Bearer"


# ============================================================================
# Unit Tests
# ============================================================================

if __name__ == "__main__":
    import unittest

    class TestConstants(unittest.TestCase):
        """Test suite for constants module"""

        def test_key_lengths(self):
            """Test key length per algorithm"""
            self.assertEqual(KEY_LENGTHS[ALG_HS256], 32)
            self.assertEqual(KEY_LENGTHS[ALG_HS384], 48)
            self.assertEqual(KEY_LENGTHS[ALG_HS512], 64)

        def test_none_not_supported(self):
            """Test that the none algorithm is never supported"""
            self.assertNotIn(ALG_NONE, SUPPORTED_ALGORITHMS)

        def test_default_delays(self):
            """Test built-in delays"""
            self.assertEqual(DEFAULT_EXP_DELAY, 3600)
            self.assertEqual(DEFAULT_NBF_DELAY, 0)
            self.assertEqual(DEFAULT_LEEWAY, 0)

        def test_bearer_prefix(self):
            """Test the scheme prefix includes the separator"""
            self.assertTrue(BEARER_PREFIX.endswith(" "))

    unittest.main()
