"""Configuration Settings for the Auth Dispatch Service

Manages environment variables and application configuration.
"""

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings

DEFAULT_JWT_SECRET = "dev-secret-change-in-production"


class Settings(BaseSettings):
    """Application settings"""

    # Service info
    service_name: str = "auth-dispatch-service"
    service_version: str = "1.0.0"
    environment: str = "development"

    # Server configuration
    host: str = "0.0.0.0"
    port: int = 8000
    debug: bool = False

    # Redis configuration (credential lookup backend)
    redis_host: str = "localhost"
    redis_port: int = 6379
    redis_db: int = 0
    redis_password: Optional[str] = None

    @property
    def redis_url(self) -> str:
        """Construct Redis URL from components"""
        if self.redis_password:
            return f"redis://:{self.redis_password}@{self.redis_host}:{self.redis_port}/{self.redis_db}"
        return f"redis://{self.redis_host}:{self.redis_port}/{self.redis_db}"

    # Login token signing
    jwt_algorithm: str = "HS256"
    jwt_secret_key: str = DEFAULT_JWT_SECRET
    jwt_private_key_path: Optional[str] = None  # PEM file, used for RS*/ES* algorithms
    token_expires_in: str = "1d"

    @property
    def signing_key(self) -> str:
        """Key handed to the email/password provider.

        A PEM private key file takes precedence over the shared secret.
        """
        if self.jwt_private_key_path:
            return Path(self.jwt_private_key_path).read_text(encoding="utf-8")
        return self.jwt_secret_key

    # Provider registration
    login_provider_name: str = "emailAndPassword"

    # CORS configuration
    cors_origins: list[str] = ["*"]
    cors_allow_credentials: bool = True
    cors_allow_methods: list[str] = ["*"]
    cors_allow_headers: list[str] = ["*"]

    # Logging
    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance

    Returns:
        Settings instance
    """
    return Settings()
