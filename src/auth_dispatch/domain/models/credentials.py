"""Credential Models

Purpose: Define the shapes exchanged by the email/password login provider

Key Components:
- CredentialFields: Email/password credentials sent by the client
- EmailPasswordLoginRequest: Login body, decoded into credentials or a token
- CredentialRecord: Outcome of looking up stored credentials
"""

from typing import Annotated, Optional, Union

from email_validator import EmailNotValidError, validate_email
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StringConstraints,
    field_validator,
    model_validator,
)

RevalidationToken = Annotated[str, StringConstraints(min_length=1)]


class CredentialFields(BaseModel):
    """Credentials for an email/password login

    The email is checked as a bare address and kept exactly as sent; the
    lookup and the token see what the client typed.
    """

    email: str
    username: Optional[str] = Field(None, min_length=1)
    password: str = Field(..., min_length=1)

    @field_validator("email")
    @classmethod
    def validate_email_address(cls, v):
        """Accept only a bare address (no display name, no normalization)"""
        if "<" in v or ">" in v:
            raise ValueError("Email must be a bare address")
        try:
            validate_email(v, check_deliverability=False)
        except EmailNotValidError as e:
            raise ValueError(f"Invalid email format: {e}") from e
        return v

    @field_validator("username", mode="before")
    @classmethod
    def reject_null_username(cls, v):
        """Username may be omitted, but not sent as null"""
        if v is None:
            raise ValueError("Username must be a string when present")
        return v


class EmailPasswordLoginRequest(BaseModel):
    """Login request body for the email/password provider

    ``default_fields`` carries either credentials or, for token revalidation,
    a previously issued token. Other keys (such as ``type``) are ignored.
    """

    default_fields: Union[CredentialFields, RevalidationToken]

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {
                    "type": "emailAndPassword",
                    "default_fields": {
                        "email": "jane.doe@example.com",
                        "password": "correct horse battery staple",
                    },
                }
            ]
        }
    )

    @property
    def is_token_revalidation(self) -> bool:
        return isinstance(self.default_fields, str)


class CredentialRecord(BaseModel):
    """Result of a stored-credential lookup

    Exactly one of three outcomes:
    - found: success=True with the stored password hash
    - not found: success=False, database_failure=False
    - lookup failed: success=False, database_failure=True
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    success: bool
    password: Optional[str] = None
    database_failure: bool = Field(False, alias="databaseFailure")

    @model_validator(mode="after")
    def check_outcome(self):
        """Reject records mixing the three outcomes"""
        if self.success:
            if not self.password:
                raise ValueError("A successful lookup must include the password hash")
            if self.database_failure:
                raise ValueError("A successful lookup cannot report a database failure")
        elif self.password is not None:
            raise ValueError("An unsuccessful lookup must not include a password hash")
        return self

    @classmethod
    def found(cls, password_hash: str) -> "CredentialRecord":
        return cls(success=True, password=password_hash)

    @classmethod
    def not_found(cls) -> "CredentialRecord":
        return cls(success=False, database_failure=False)

    @classmethod
    def lookup_failed(cls) -> "CredentialRecord":
        return cls(success=False, database_failure=True)
