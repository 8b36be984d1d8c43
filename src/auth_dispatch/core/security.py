"""
Security utilities for login providers.

Provides password hashing and verification using bcrypt, and signing of
login tokens with python-jose.
"""

import asyncio
import logging
import re
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Union

import bcrypt
from jose import jwt

logger = logging.getLogger(__name__)

ExpiresIn = Union[str, int, float]

_SECOND = 1.0
_MINUTE = 60 * _SECOND
_HOUR = 60 * _MINUTE
_DAY = 24 * _HOUR
_WEEK = 7 * _DAY
_YEAR = 365.25 * _DAY

_UNIT_SECONDS = {
    "years": _YEAR, "year": _YEAR, "yrs": _YEAR, "yr": _YEAR, "y": _YEAR,
    "weeks": _WEEK, "week": _WEEK, "w": _WEEK,
    "days": _DAY, "day": _DAY, "d": _DAY,
    "hours": _HOUR, "hour": _HOUR, "hrs": _HOUR, "hr": _HOUR, "h": _HOUR,
    "minutes": _MINUTE, "minute": _MINUTE, "mins": _MINUTE, "min": _MINUTE, "m": _MINUTE,
    "seconds": _SECOND, "second": _SECOND, "secs": _SECOND, "sec": _SECOND, "s": _SECOND,
    "milliseconds": 0.001, "millisecond": 0.001, "msecs": 0.001, "msec": 0.001, "ms": 0.001,
}

_DURATION_PATTERN = re.compile(r"^(?P<value>\d*\.?\d+) *(?P<unit>[a-z]+)?$", re.IGNORECASE)


def parse_expires_in(value: ExpiresIn) -> timedelta:
    """Convert a token lifetime into a timedelta.

    Numbers are seconds. Strings carry a unit ("1d", "10h", "7 days");
    a string without a unit is milliseconds, so "120" is 120ms.

    Args:
        value: Lifetime as a number of seconds or a duration string

    Returns:
        Positive timedelta

    Raises:
        ValueError: If the value cannot be parsed or is not positive
    """
    if isinstance(value, bool):
        raise ValueError(f"Invalid token lifetime: {value!r}")

    if isinstance(value, (int, float)):
        seconds = float(value)
    elif isinstance(value, str):
        match = _DURATION_PATTERN.match(value.strip())
        if not match:
            raise ValueError(f"Invalid token lifetime: {value!r}")

        unit = (match.group("unit") or "ms").lower()
        if unit not in _UNIT_SECONDS:
            raise ValueError(f"Unknown time unit in token lifetime: {value!r}")
        seconds = float(match.group("value")) * _UNIT_SECONDS[unit]
    else:
        raise ValueError(f"Invalid token lifetime: {value!r}")

    if seconds <= 0:
        raise ValueError(f"Token lifetime must be positive: {value!r}")

    return timedelta(seconds=seconds)


# bcrypt only reads the first 72 bytes; bcrypt>=4.1 raises instead of truncating
BCRYPT_MAX_PASSWORD_BYTES = 72


def _encode_password(password: str) -> bytes:
    return password.encode("utf-8")[:BCRYPT_MAX_PASSWORD_BYTES]


def hash_password(password: str) -> str:
    """
    Hash a password using bcrypt.

    Passwords longer than 72 bytes are truncated, as bcrypt itself does.

    Args:
        password: Plain text password

    Returns:
        Hashed password as string
    """
    salt = bcrypt.gensalt()
    hashed = bcrypt.hashpw(_encode_password(password), salt)
    return hashed.decode("utf-8")


def _check_password(password: str, hashed_password: str) -> bool:
    try:
        return bcrypt.checkpw(_encode_password(password), hashed_password.encode("utf-8"))
    except ValueError as e:
        logger.warning(f"Stored password hash could not be parsed: {e}")
        return False


async def verify_password(password: str, hashed_password: str) -> bool:
    """
    Verify a password against its bcrypt hash.

    bcrypt is deliberately slow, so the check runs in a worker thread.

    Args:
        password: Plain text password to verify
        hashed_password: Previously hashed password

    Returns:
        True if password matches, False otherwise (including unparseable hashes)
    """
    return await asyncio.to_thread(_check_password, password, hashed_password)


def sign_token(
    claims: Dict[str, Any],
    key: str,
    *,
    expires_in: ExpiresIn = "1d",
    algorithm: str = "HS256",
) -> str:
    """
    Sign a login token.

    Args:
        claims: Token claims (e.g. {"email": ...})
        key: Shared secret or PEM private key
        expires_in: Token lifetime (see parse_expires_in)
        algorithm: JWS algorithm

    Returns:
        Encoded JWT token string
    """
    now = datetime.now(timezone.utc)

    to_encode = dict(claims)
    to_encode.update({
        "iat": now,  # Issued at
        "exp": now + parse_expires_in(expires_in),  # Expiration time
    })

    return jwt.encode(to_encode, key, algorithm=algorithm)
