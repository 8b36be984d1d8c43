"""Login request dispatcher.

Routes each login request to the provider named by its ``type`` field and
hands back that provider's result untouched.
"""

import logging
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

from .provider import ConfigurationError, LoginHandler, LoginResult

logger = logging.getLogger(__name__)

MISSING_PROVIDER_MESSAGE = "Authentication Provider not specified"
UNPROCESSABLE_STATUS = 422


def build_not_found_provider_message(provider_names: list[str]) -> str:
    """Message listing every registered provider, in registration order."""
    defined_providers = ", ".join(provider_names)
    return f"Provider not specified. Those are the providers already defined: {defined_providers}"


class LoginDispatcher:
    """Single login handler over a fixed set of built providers.

    The provider mapping is read-only after construction, so one dispatcher
    can serve any number of concurrent requests.

    Provider exceptions are not caught here; they belong to the transport's
    error handling.
    """

    def __init__(self, providers: Mapping[str, LoginHandler]):
        """Initialize dispatcher.

        Args:
            providers: Provider name -> built login handler

        Raises:
            ConfigurationError: If no providers are given
        """
        if not providers:
            raise ConfigurationError("Can't build login handler with zero providers defined")

        self._providers = MappingProxyType(dict(providers))
        self.not_found_message = build_not_found_provider_message(list(self._providers))

    @property
    def provider_names(self) -> tuple[str, ...]:
        return tuple(self._providers)

    async def handle(self, body: Any) -> LoginResult:
        """Dispatch a login request body to its provider.

        Args:
            body: Decoded request body; expected to be a mapping with a ``type`` key

        Returns:
            The provider's LoginResult, or a 422 result if no provider matches
        """
        if not isinstance(body, Mapping) or "type" not in body:
            logger.warning("Login request without provider type")
            return LoginResult(status=UNPROCESSABLE_STATUS, body=MISSING_PROVIDER_MESSAGE)

        provider_type = body["type"]
        handler = self._providers.get(provider_type) if isinstance(provider_type, str) else None
        if handler is None:
            logger.warning(f"Login request for unknown provider: {provider_type!r}")
            return LoginResult(status=UNPROCESSABLE_STATUS, body=self.not_found_message)

        logger.debug(f"Dispatching login request to provider: {provider_type}")
        return await handler(body)

    async def __call__(self, body: Any) -> LoginResult:
        return await self.handle(body)
