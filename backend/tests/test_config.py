import pytest
from pydantic import ValidationError

from shop_api.config import DEFAULT_DATABASE_URL, Settings
from shop_api.errors import describe_validation_error
from shop_api.routes.users import UserCreateRequest


@pytest.fixture
def clean_env(monkeypatch):
    for name in ("DATABASE_URL", "SQL_ECHO", "CORS_ORIGINS", "HOST", "PORT", "LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    # Keep a developer's .env out of the picture
    monkeypatch.setattr("shop_api.config.load_dotenv", lambda: False)
    return monkeypatch


def test_settings_defaults(clean_env):
    settings = Settings.from_env()

    assert settings.database_url == DEFAULT_DATABASE_URL
    assert settings.sql_echo is False
    assert settings.port == 3000
    assert settings.cors_origins == ["http://localhost:3000", "http://127.0.0.1:3000"]


def test_settings_from_env(clean_env):
    clean_env.setenv("DATABASE_URL", "sqlite:///./data/test.db")
    clean_env.setenv("SQL_ECHO", "Yes")
    clean_env.setenv("CORS_ORIGINS", "https://a.example, ,https://b.example")
    clean_env.setenv("PORT", "8080")
    clean_env.setenv("LOG_LEVEL", "debug")

    settings = Settings.from_env()

    assert settings.database_url == "sqlite:///./data/test.db"
    assert settings.sql_echo is True
    assert settings.port == 8080
    assert settings.log_level == "DEBUG"
    assert settings.cors_origins[-2:] == ["https://a.example", "https://b.example"]


def test_describe_validation_error():
    with pytest.raises(ValidationError) as exc_info:
        UserCreateRequest.model_validate_json('{"first_name": 1, "last_name": []}')

    message = describe_validation_error(exc_info.value)
    assert message.startswith("first_name: ")
    assert "; last_name: " in message
