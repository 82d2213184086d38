"""Unit tests for application settings configuration."""

from pathlib import Path

from app.config import Settings


def test_settings_uses_backend_env_file_independent_of_cwd():
    """Settings should always include backend/.env as an env source."""
    env_files = Settings.model_config.get("env_file")
    assert env_files is not None

    normalized = {str(Path(item)) for item in env_files}
    expected_backend_env = str(Path(__file__).resolve().parents[2] / ".env")

    assert expected_backend_env in normalized
    assert str(Path(".env")) in normalized


def test_error_detail_is_hidden_by_default(monkeypatch):
    monkeypatch.delenv("REST_EXPOSE_ERROR_DETAIL", raising=False)
    settings = Settings(_env_file=None)
    assert settings.rest_expose_error_detail is False


def test_log_levels_are_read_from_environment(monkeypatch):
    monkeypatch.setenv("LOG_LEVEL_CLONING", "DEBUG")
    monkeypatch.setenv("REST_EXPOSE_ERROR_DETAIL", "true")
    settings = Settings(_env_file=None)
    assert settings.log_level_cloning == "DEBUG"
    assert settings.rest_expose_error_detail is True
