"""Pluggable login providers.

Providers are registered by name on a LoginHandlerBuilder and built into a
single LoginDispatcher that routes each request by its ``type`` field:
- emailAndPassword: email/password credentials with JWT (reference provider)
"""

from .provider import (
    ConfigurationError,
    LoginHandler,
    LoginResult,
    ProviderBundle,
    ProviderFactory,
    not_implemented_operation,
)
from .dispatcher import LoginDispatcher
from .registry import LoginHandlerBuilder
from .email_password import EmailPasswordLogin, EmailPasswordOptions, email_and_password_provider

__all__ = [
    "ConfigurationError",
    "EmailPasswordLogin",
    "EmailPasswordOptions",
    "LoginDispatcher",
    "LoginHandler",
    "LoginHandlerBuilder",
    "LoginResult",
    "ProviderBundle",
    "ProviderFactory",
    "email_and_password_provider",
    "not_implemented_operation",
]
