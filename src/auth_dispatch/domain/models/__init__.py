"""Domain models for the Auth Dispatch Service"""

from auth_dispatch.domain.models.credentials import (
    CredentialFields,
    CredentialRecord,
    EmailPasswordLoginRequest,
)

__all__ = [
    "CredentialFields",
    "CredentialRecord",
    "EmailPasswordLoginRequest",
]
