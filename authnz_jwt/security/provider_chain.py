"""
Provider Chain - Ordered fallback over credential providers

Module: security.provider_chain
Date: 2026-10-18
Version: 0.1.0

CHANGELOG:
[2026-10-18 v0.1.0] Initial implementation
  - Short-circuit on the first decisive verdict
  - Empty credentials never reach a provider
  - Provider-in-use note on the request context
  - Verdict -> HTTP status mapping

ARCHITECTURE:
    no providers            -> GENERAL_ERROR
    empty user or password  -> USER_NOT_FOUND
    provider says NOT_FOUND -> try the next provider
    anything else           -> final answer

SECURITY NOTES:
- DENIED and USER_NOT_FOUND are logged differently but both give 401
- A provider raising is logged and counted as GENERAL_ERROR
"""

import logging
from dataclasses import dataclass
from typing import Optional, Sequence

from ..core.constants import (
    AUTHN_PROVIDER_NAME_NOTE,
    HTTP_INTERNAL_SERVER_ERROR,
    HTTP_OK,
    HTTP_UNAUTHORIZED,
)
from .errors import CredentialError
from .providers.base import AuthnProvider, ProviderVerdict
from .request_context import RequestContext

_STATUS_BY_VERDICT = {
    ProviderVerdict.GRANTED: HTTP_OK,
    ProviderVerdict.DENIED: HTTP_UNAUTHORIZED,
    ProviderVerdict.USER_NOT_FOUND: HTTP_UNAUTHORIZED,
    ProviderVerdict.GENERAL_ERROR: HTTP_INTERNAL_SERVER_ERROR,
}


@dataclass
class LoginOutcome:
    """Result of a login attempt"""
    verdict: ProviderVerdict
    provider: Optional[str] = None

    @property
    def granted(self) -> bool:
        return self.verdict is ProviderVerdict.GRANTED

    @property
    def http_status(self) -> int:
        return _STATUS_BY_VERDICT[self.verdict]


class ProviderChain:
    """Runs a login attempt through an ordered list of providers"""

    def __init__(self, providers: Sequence[AuthnProvider]):
        self.logger = logging.getLogger("security.provider_chain")
        self.providers = tuple(providers)

    async def check(
        self,
        context: RequestContext,
        user: Optional[str],
        password: Optional[str],
    ) -> LoginOutcome:
        """
        Resolve a login attempt to a verdict

        Args:
            context: Request context (receives the provider-in-use note)
            user: Submitted username
            password: Submitted password

        Returns:
            LoginOutcome with the final verdict and the provider that
            gave it
        """
        if not self.providers:
            self.logger.error(f"no authn provider configured for {context.path}")
            return LoginOutcome(ProviderVerdict.GENERAL_ERROR)

        if not user or not password:
            self._log_refusal(context, user, ProviderVerdict.USER_NOT_FOUND)
            return LoginOutcome(ProviderVerdict.USER_NOT_FOUND)

        outcome = LoginOutcome(ProviderVerdict.USER_NOT_FOUND)
        for provider in self.providers:
            context.set_note(AUTHN_PROVIDER_NAME_NOTE, provider.name)
            try:
                verdict = await provider.check_password(context, user, password)
            except Exception as e:
                self.logger.error(f"Provider '{provider.name}' failed: {e}", exc_info=True)
                verdict = ProviderVerdict.GENERAL_ERROR
            finally:
                context.unset_note(AUTHN_PROVIDER_NAME_NOTE)

            outcome = LoginOutcome(verdict, provider.name)
            if verdict is not ProviderVerdict.USER_NOT_FOUND:
                break

        if outcome.granted:
            self.logger.info(f"user '{user}' granted by provider '{outcome.provider}'")
        else:
            self._log_refusal(context, user, outcome.verdict)
        return outcome

    async def check_or_raise(
        self,
        context: RequestContext,
        user: Optional[str],
        password: Optional[str],
    ) -> LoginOutcome:
        """
        Like check(), raising unless the verdict is GRANTED

        Raises:
            CredentialError: Carrying the refusing verdict
        """
        outcome = await self.check(context, user, password)
        if not outcome.granted:
            raise CredentialError(
                f"Login refused for '{user}': {outcome.verdict.value}",
                verdict=outcome.verdict,
            )
        return outcome

    def _log_refusal(self, context: RequestContext, user: Optional[str], verdict: ProviderVerdict) -> None:
        if verdict is ProviderVerdict.DENIED:
            self.logger.warning(
                f"user '{user}': authentication failure for \"{context.path}\": password mismatch"
            )
        elif verdict is ProviderVerdict.USER_NOT_FOUND:
            self.logger.warning(f"user '{user}' not found: {context.path}")
        else:
            self.logger.error(f"user '{user}': provider error for \"{context.path}\"")
