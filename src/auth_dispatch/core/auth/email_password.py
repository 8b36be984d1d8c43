"""Email and password login provider.

Reference provider for the login dispatcher: validates the request body,
looks the user up through an injected function, checks the password against
the stored bcrypt hash and returns a signed JWT on success.
"""

import logging
from typing import Any, Awaitable, Callable, Mapping, Optional, Union

from jose.constants import ALGORITHMS
from pydantic import BaseModel, Field, ValidationError, field_validator

from .provider import LoginResult, ProviderBundle, not_implemented_operation
from auth_dispatch.core.security import ExpiresIn, parse_expires_in, sign_token, verify_password
from auth_dispatch.domain.models import CredentialRecord, EmailPasswordLoginRequest

logger = logging.getLogger(__name__)

PROVIDER_NAME = "emailAndPassword"
TOKEN_REVALIDATION_UNSUPPORTED = "Token revalidation not yet supported on this route"
SIGNING_ALGORITHMS = ALGORITHMS.HMAC | ALGORITHMS.RSA_DS | ALGORITHMS.EC_DS

UserLoginDataLookup = Callable[[str, Optional[str]], Awaitable[Union[CredentialRecord, Mapping[str, Any]]]]


class EmailPasswordOptions(BaseModel):
    """Configuration of the email/password provider

    Attributes:
        secret_or_private_key: Shared secret (HS*) or PEM private key (RS*/ES*)
        expires_in: Token lifetime, seconds or a duration string like "1d"
        algorithm: JWS signing algorithm
        get_user_login_data: Async lookup (email, username) -> CredentialRecord
        verify_password: Async comparison (plain, hash) -> bool
        sign_token: Signer (claims, key, expires_in=..., algorithm=...) -> token
    """

    secret_or_private_key: str = Field(..., min_length=1)
    expires_in: ExpiresIn = "1d"
    algorithm: str = "HS256"
    get_user_login_data: Callable[..., Any]
    verify_password: Callable[..., Any] = verify_password
    sign_token: Callable[..., Any] = sign_token

    @field_validator("expires_in")
    @classmethod
    def validate_expires_in(cls, v):
        """Fail at registration rather than on the first successful login"""
        parse_expires_in(v)
        return v

    @field_validator("algorithm")
    @classmethod
    def validate_algorithm(cls, v):
        if v not in SIGNING_ALGORITHMS:
            raise ValueError(f"Unsupported signing algorithm: {v}")
        return v


class EmailPasswordLogin:
    """Login handler for email/password credentials.

    The class is the provider factory: ``EmailPasswordLogin(options)`` binds
    the configuration and the resulting instance handles requests.

    Outcomes:
    - 422: body does not match the expected shape
    - 422 + message: a token was sent instead of credentials (not supported yet)
    - 500: the credential lookup reported a database failure
    - 400: unknown user or wrong password (deliberately indistinguishable)
    - 200 + token: credentials are valid
    """

    options_model = EmailPasswordOptions

    def __init__(self, options: Union[EmailPasswordOptions, Mapping[str, Any]]):
        """Initialize email/password login handler.

        Args:
            options: EmailPasswordOptions or a mapping of its fields
        """
        if not isinstance(options, EmailPasswordOptions):
            options = EmailPasswordOptions.model_validate(options)
        self.options = options

    async def __call__(self, body: Mapping[str, Any]) -> LoginResult:
        """Authenticate a login request body.

        Args:
            body: Request body with ``default_fields``

        Returns:
            LoginResult as described on the class
        """
        try:
            request = EmailPasswordLoginRequest.model_validate(body)
        except ValidationError as e:
            logger.info(f"Login rejected: invalid request body ({e.error_count()} errors)")
            return LoginResult(status=422)

        if request.is_token_revalidation:
            return LoginResult(status=422, body=TOKEN_REVALIDATION_UNSUPPORTED)

        credentials = request.default_fields
        email = credentials.email

        record = await self.options.get_user_login_data(email, credentials.username)
        if not isinstance(record, CredentialRecord):
            record = CredentialRecord.model_validate(record)

        if record.database_failure:
            logger.error(f"Login failed: credential lookup unavailable (email: {email})")
            return LoginResult(status=500)

        if not record.success:
            logger.warning(f"Login failed: User not found (email: {email})")
            return LoginResult(status=400)

        if not await self.options.verify_password(credentials.password, record.password):
            logger.warning(f"Login failed: Invalid password (email: {email})")
            return LoginResult(status=400)

        token = self.options.sign_token(
            {"email": email},
            self.options.secret_or_private_key,
            expires_in=self.options.expires_in,
            algorithm=self.options.algorithm,
        )

        logger.info(f"User authenticated successfully: {email}")
        return LoginResult(status=200, body=token)


email_and_password_provider = ProviderBundle(
    login=EmailPasswordLogin,
    signin=not_implemented_operation(PROVIDER_NAME, "signin"),
    logout=not_implemented_operation(PROVIDER_NAME, "logout"),
)
