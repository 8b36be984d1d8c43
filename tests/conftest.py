"""
Pytest configuration and fixtures for login dispatch tests.

Provides fixtures for:
- Password hashes
- Credential lookups returning fixed records
- Email/password provider options
- RSA key pairs for RS256 signing
"""

from typing import Callable
from unittest.mock import AsyncMock

import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa

from auth_dispatch.core.security import hash_password
from auth_dispatch.domain.models import CredentialRecord

TEST_SECRET = "test-secret-key"
TEST_EMAIL = "some_email@example.com"
TEST_PASSWORD = "some_really_strong_password_xdd"


@pytest.fixture(scope="session")
def password_hash() -> str:
    """bcrypt hash of TEST_PASSWORD (hashed once, bcrypt is slow)."""
    return hash_password(TEST_PASSWORD)


@pytest.fixture
def lookup_returning() -> Callable[[CredentialRecord], AsyncMock]:
    """Build a credential lookup that always returns ``record``."""

    def factory(record: CredentialRecord) -> AsyncMock:
        return AsyncMock(return_value=record)

    return factory


@pytest.fixture
def found_lookup(lookup_returning, password_hash) -> AsyncMock:
    return lookup_returning(CredentialRecord.found(password_hash))


@pytest.fixture
def provider_options(found_lookup) -> dict:
    """Options for the email/password provider with a user that exists."""
    return {
        "secret_or_private_key": TEST_SECRET,
        "get_user_login_data": found_lookup,
    }


@pytest.fixture(scope="session")
def rsa_key_pair() -> tuple[str, str]:
    """Unencrypted RSA key pair as (private PEM, public PEM)."""
    private_key = rsa.generate_private_key(public_exponent=65537, key_size=2048)

    private_pem = private_key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption(),
    ).decode("utf-8")
    public_pem = private_key.public_key().public_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PublicFormat.SubjectPublicKeyInfo,
    ).decode("utf-8")

    return private_pem, public_pem


@pytest.fixture
def login_body() -> Callable[..., dict]:
    """Build a well-formed email/password login request body."""

    def factory(email: str = TEST_EMAIL, password: str = TEST_PASSWORD, **extra) -> dict:
        fields = {"email": email, "password": password, **extra}
        return {"type": "emailAndPassword", "default_fields": fields}

    return factory
