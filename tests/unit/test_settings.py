"""
Unit tests for application settings.
"""

import pytest

from auth_dispatch.config.settings import DEFAULT_JWT_SECRET, Settings

pytestmark = pytest.mark.unit


class TestSettings:
    """Test settings defaults and derived values."""

    def test_login_defaults(self):
        settings = Settings(_env_file=None)

        assert settings.jwt_algorithm == "HS256"
        assert settings.token_expires_in == "1d"
        assert settings.login_provider_name == "emailAndPassword"
        assert settings.signing_key == DEFAULT_JWT_SECRET

    def test_redis_url_without_password(self):
        settings = Settings(_env_file=None, redis_host="cache", redis_port=6380, redis_db=2)

        assert settings.redis_url == "redis://cache:6380/2"

    def test_redis_url_with_password(self):
        settings = Settings(_env_file=None, redis_password="pw")

        assert settings.redis_url == "redis://:pw@localhost:6379/0"

    def test_private_key_file_takes_precedence(self, tmp_path, rsa_key_pair):
        private_pem, _ = rsa_key_pair
        key_file = tmp_path / "private.pem"
        key_file.write_text(private_pem, encoding="utf-8")

        settings = Settings(_env_file=None, jwt_secret_key="ignored", jwt_private_key_path=str(key_file))

        assert settings.signing_key == private_pem

    def test_environment_override(self, monkeypatch):
        monkeypatch.setenv("JWT_ALGORITHM", "RS256")
        monkeypatch.setenv("TOKEN_EXPIRES_IN", "2h")

        settings = Settings(_env_file=None)

        assert settings.jwt_algorithm == "RS256"
        assert settings.token_expires_in == "2h"
