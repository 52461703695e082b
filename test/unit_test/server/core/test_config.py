"""Unit tests for server configuration settings model.

Tests verify that the Settings model binds environment variables, including
the values documented in .env.example, and exposes the grouped configs.
"""

from pathlib import Path

import pytest

from lanmic_site.server.core.config import CORSConfig, SMTPConfig, Settings, UploadConfig


@pytest.fixture
def env_example_path() -> Path:
    """Get path to .env.example file."""
    return Path(__file__).resolve().parents[4] / ".env.example"


@pytest.fixture
def env_example_vars(env_example_path: Path) -> dict[str, str]:
    """Parse .env.example file and return environment variables."""
    env_vars = {}
    with open(env_example_path) as f:
        for line in f:
            line = line.strip()
            if not line or line.startswith("#"):
                continue
            if "=" in line:
                key, value = line.split("=", 1)
                env_vars[key.strip()] = value.strip()
    return env_vars


class TestSettingsBinding:
    def test_env_example_values_bind(self, env_example_vars: dict[str, str], monkeypatch):
        for key, value in env_example_vars.items():
            monkeypatch.setenv(key, value)

        settings = Settings(_env_file=None)

        assert settings.server_port == int(env_example_vars["LANMIC_SERVER_PORT"])
        assert settings.database.url == env_example_vars["DATABASE_URL"]
        assert settings.auth.access_token_expiry == env_example_vars["ACCESS_TOKEN_EXPIRY"]
        assert settings.auth.otp_expiry_minutes == 5
        assert settings.auth.password_reset_otp_expiry_minutes == 10
        assert settings.cors.origins == ["http://localhost:3000"]
        assert settings.relay.queue_size == 100
        assert settings.smtp.from_name == "LANMIC Admin"
        assert settings.logfire.enabled is False

    def test_smtp_group(self, monkeypatch):
        monkeypatch.setenv("SMTP_HOST", "smtp.example.com")
        monkeypatch.setenv("SMTP_PORT", "465")
        monkeypatch.setenv("SMTP_USER", "mailer@example.com")
        monkeypatch.setenv("SMTP_PASS", "secret")

        smtp = Settings(_env_file=None).smtp

        assert smtp.is_configured is True
        assert smtp.use_tls is True
        assert smtp.sender_address == "mailer@example.com"

    def test_production_flag(self, monkeypatch):
        monkeypatch.setenv("ENVIRONMENT", "Production")
        assert Settings(_env_file=None).is_production is True
        monkeypatch.setenv("ENVIRONMENT", "development")
        assert Settings(_env_file=None).is_production is False


class TestGroupedConfigs:
    def test_smtp_unconfigured_by_default(self):
        config = SMTPConfig()
        assert config.is_configured is False
        assert config.use_tls is False

    def test_from_email_overrides_user(self):
        config = SMTPConfig(user="user@example.com", from_email="noreply@example.com")
        assert config.sender_address == "noreply@example.com"

    def test_upload_defaults(self):
        config = UploadConfig()
        assert config.directory == "uploads"
        assert config.max_size_bytes == 5 * 1024 * 1024

    def test_cors_accepts_alias_and_name(self):
        assert CORSConfig(CORS_ORIGINS=["https://lanmic.com"]).origins == ["https://lanmic.com"]
        assert CORSConfig(origins=["https://lanmic.com"]).origins == ["https://lanmic.com"]
