"""Login provider contract.

Every authentication provider is a factory: it takes provider-specific
options and returns an async handler that turns a login request body into a
``LoginResult``. The dispatcher only ever deals with this shape, which is what
makes providers pluggable.
"""

from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, Mapping, Optional, Union

NOT_IMPLEMENTED_STATUS = 501

ResultBody = Union[str, Dict[str, Any]]


@dataclass(frozen=True)
class LoginResult:
    """Uniform outcome of a provider operation.

    Attributes:
        status: HTTP-like status code
        body: Response payload (text or JSON mapping), None for an empty response
    """

    status: int
    body: Optional[ResultBody] = None

    @classmethod
    def not_implemented(cls, message: str) -> "LoginResult":
        """Result for a provider operation that has no behaviour yet."""
        return cls(status=NOT_IMPLEMENTED_STATUS, body=message)

    @property
    def is_not_implemented(self) -> bool:
        return self.status == NOT_IMPLEMENTED_STATUS


LoginHandler = Callable[[Mapping[str, Any]], Awaitable[LoginResult]]

# A factory may expose an ``options_model`` attribute (a pydantic model class);
# the builder then validates options against it before the provider is built.
ProviderFactory = Callable[[Any], LoginHandler]


@dataclass(frozen=True)
class ProviderBundle:
    """The operations a provider exposes, each as a factory.

    Only ``login`` is dispatched today. ``signin`` and ``logout`` exist so a
    provider can grow beyond login without changing the contract.
    """

    login: ProviderFactory
    signin: ProviderFactory
    logout: ProviderFactory


def not_implemented_operation(provider: str, operation: str) -> ProviderFactory:
    """Build a factory whose handler always reports ``operation`` as unsupported.

    Args:
        provider: Provider display name used in the message
        operation: Operation name (e.g. 'signin')

    Returns:
        Factory accepting (and ignoring) provider options
    """
    message = f"Operation '{operation}' is not implemented by the {provider} provider"

    def factory(options: Any = None) -> LoginHandler:
        async def handler(body: Mapping[str, Any]) -> LoginResult:
            return LoginResult.not_implemented(message)

        return handler

    return factory


class ConfigurationError(Exception):
    """Login providers were composed incorrectly."""
    pass
