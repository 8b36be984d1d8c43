"""Credential Storage

Purpose: Resolve stored login credentials for the email/password provider

Implements the provider's credential lookup on top of Redis and maps every
outcome onto a CredentialRecord:
- credentials stored for the email (and matching username) -> found
- nothing stored, or the username does not match -> not found
- Redis unavailable or erroring -> lookup failed

Storage Schema:
- auth:login:{email} -> {"password_hash": ..., "username": ...}
"""

import json
import logging
from typing import Optional

from redis.asyncio import Redis
from redis.exceptions import RedisError

from auth_dispatch.domain.models import CredentialRecord

logger = logging.getLogger(__name__)


class RedisCredentialStore:
    """Login credential storage backed by Redis"""

    def __init__(self, redis_client: Redis):
        """Initialize credential store

        Args:
            redis_client: Redis connection (decode_responses=True)
        """
        self.redis = redis_client
        self.login_key_pattern = "auth:login:{}"

    async def get_user_login_data(self, email: str, username: Optional[str] = None) -> CredentialRecord:
        """Look up the stored password hash for a login

        Never raises for a missing user; infrastructure errors are reported
        as a lookup failure.

        Args:
            email: Login email address
            username: Optional username that must match the stored one

        Returns:
            CredentialRecord describing the outcome
        """
        try:
            raw = await self.redis.get(self._login_key(email))
        except RedisError as e:
            logger.error(f"Credential lookup failed for {email}: {e}")
            return CredentialRecord.lookup_failed()

        if not raw:
            return CredentialRecord.not_found()

        try:
            stored = json.loads(raw)
            password_hash = stored["password_hash"]
        except (ValueError, KeyError, TypeError) as e:
            logger.error(f"Corrupt credential entry for {email}: {e}")
            return CredentialRecord.lookup_failed()

        if username is not None and stored.get("username") != username:
            return CredentialRecord.not_found()

        return CredentialRecord.found(password_hash)

    async def store_credentials(
        self, email: str, password_hash: str, username: Optional[str] = None
    ) -> None:
        """Store (or replace) the credentials for an email

        Args:
            email: Login email address
            password_hash: bcrypt hash of the password
            username: Optional username bound to the email
        """
        payload = json.dumps({"password_hash": password_hash, "username": username})
        await self.redis.set(self._login_key(email), payload)
        logger.info(f"Stored login credentials for {email}")

    async def delete_credentials(self, email: str) -> bool:
        """Delete the credentials for an email

        Returns:
            True if an entry was removed
        """
        deleted = await self.redis.delete(self._login_key(email))
        return deleted > 0

    def _login_key(self, email: str) -> str:
        return self.login_key_pattern.format(email.lower())
