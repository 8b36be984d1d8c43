"""Login handler builder.

Collects named providers together with their options and, on ``build()``,
binds every factory to its options to produce a ``LoginDispatcher``.

Example:
    dispatcher = (
        LoginHandlerBuilder.new()
        .add_provider("emailAndPassword", EmailPasswordLogin, {
            "secret_or_private_key": settings.signing_key,
            "get_user_login_data": store.get_user_login_data,
        })
        .build()
    )
"""

import logging
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, ValidationError

from .dispatcher import LoginDispatcher
from .provider import ConfigurationError, ProviderFactory

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProviderEntry:
    """A provider registration waiting to be built."""

    name: str
    factory: ProviderFactory
    options: Any


class LoginHandlerBuilder:
    """Immutable accumulator of login providers.

    ``add_provider`` never mutates the builder it is called on; it returns a
    new builder extended by one entry, so partially composed builders can be
    shared and extended independently.
    """

    def __init__(self, entries: tuple[ProviderEntry, ...] = ()):
        self._entries = entries

    @classmethod
    def new(cls) -> "LoginHandlerBuilder":
        """Create an empty builder."""
        return cls()

    @property
    def provider_names(self) -> tuple[str, ...]:
        return tuple(entry.name for entry in self._entries)

    def add_provider(
        self,
        name: str,
        provider: ProviderFactory,
        options: Any = None,
    ) -> "LoginHandlerBuilder":
        """Register a provider under ``name``.

        Args:
            name: Value of the request ``type`` field that selects this provider
            provider: Factory taking ``options`` and returning a login handler
            options: Provider configuration, validated against the factory's
                ``options_model`` when it declares one

        Returns:
            New builder including the provider

        Raises:
            ConfigurationError: If the name is empty or taken, the provider is
                not callable, or the options do not match the provider's model
        """
        if not isinstance(name, str) or not name:
            raise ConfigurationError("Provider name must be a non-empty string")

        if name in self.provider_names:
            raise ConfigurationError(f"Provider '{name}' is already registered")

        if not callable(provider):
            raise ConfigurationError(f"Provider '{name}' is not callable")

        bound_options = _validate_options(name, provider, options)
        logger.info(f"Registered login provider: {name}")

        return LoginHandlerBuilder(self._entries + (ProviderEntry(name, provider, bound_options),))

    def build(self) -> LoginDispatcher:
        """Build every registered provider and return the dispatcher.

        Each factory is called exactly once.

        Raises:
            ConfigurationError: If no providers were registered
        """
        if not self._entries:
            raise ConfigurationError("Can't build login handler with zero providers defined")

        built_providers = {entry.name: entry.factory(entry.options) for entry in self._entries}

        logger.info(f"Login handler built with providers: {', '.join(built_providers)}")
        return LoginDispatcher(built_providers)


def _validate_options(name: str, provider: ProviderFactory, options: Any) -> Any:
    """Coerce options into the provider's declared options model, if any."""
    options_model = getattr(provider, "options_model", None)
    if not (isinstance(options_model, type) and issubclass(options_model, BaseModel)):
        return options

    if isinstance(options, options_model):
        return options

    if isinstance(options, BaseModel):
        options = options.model_dump()

    try:
        return options_model.model_validate(options)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid options for provider '{name}': {e}") from e
