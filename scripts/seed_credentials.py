#!/usr/bin/env python3
"""Store email/password login credentials in Redis.

Usage:
    python scripts/seed_credentials.py

Reads REDIS_* settings from the environment (or .env).
"""

import asyncio
from getpass import getpass
from typing import Optional

from auth_dispatch.core.security import hash_password
from auth_dispatch.infrastructure.auth.credential_store import RedisCredentialStore
from auth_dispatch.infrastructure.redis.client import close_redis_client, get_redis_client


async def seed(email: str, password: str, username: Optional[str]) -> None:
    redis_client = await get_redis_client()
    try:
        store = RedisCredentialStore(redis_client.get_client())
        await store.store_credentials(email, hash_password(password), username=username)
    finally:
        await close_redis_client()


def main() -> None:
    email = input("Email: ").strip()
    if not email:
        raise SystemExit("Email is required")
    username = input("Username (optional): ").strip() or None

    pw1 = getpass("Password: ")
    pw2 = getpass("Repeat password: ")
    if not pw1:
        raise SystemExit("Password is required")
    if pw1 != pw2:
        raise SystemExit("Passwords do not match")

    asyncio.run(seed(email, pw1, username))
    print(f"OK -> {email}")


if __name__ == "__main__":
    main()
