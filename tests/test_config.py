import pytest

from echoprompt.config import DEFAULT_GEMINI_MODEL, GeneratorConfig

ENV_VARS = (
    "GEMINI_API_KEY",
    "ECHOPROMPT_GEMINI_MODEL",
    "ECHOPROMPT_GEMINI_BASE_URL",
    "ECHOPROMPT_REQUEST_TIMEOUT",
    "ECHOPROMPT_ANALYTICS_ENABLED",
    "ECHOPROMPT_DATABASE_URL",
)


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return tmp_path / "missing.env"


def test_defaults_without_environment(clean_env):
    config = GeneratorConfig.from_env(clean_env)

    assert config.gemini_api_key is None
    assert config.gemini_model == DEFAULT_GEMINI_MODEL
    assert config.request_timeout_seconds == 30.0
    assert config.analytics_enabled is True
    assert config.database_url is None


def test_reads_environment(clean_env, monkeypatch):
    monkeypatch.setenv("GEMINI_API_KEY", "secret")
    monkeypatch.setenv("ECHOPROMPT_GEMINI_MODEL", "gemini-pro")
    monkeypatch.setenv("ECHOPROMPT_REQUEST_TIMEOUT", "5.5")
    monkeypatch.setenv("ECHOPROMPT_ANALYTICS_ENABLED", "Off")
    monkeypatch.setenv("ECHOPROMPT_DATABASE_URL", "sqlite:///echo.db")

    config = GeneratorConfig.from_env(clean_env)

    assert config.gemini_api_key == "secret"
    assert config.gemini_model == "gemini-pro"
    assert config.request_timeout_seconds == 5.5
    assert config.analytics_enabled is False
    assert config.database_url == "sqlite:///echo.db"


def test_loads_dotenv_file(clean_env):
    env_file = clean_env.parent / ".env"
    env_file.write_text("GEMINI_API_KEY=from-file\n")

    config = GeneratorConfig.from_env(env_file)

    assert config.gemini_api_key == "from-file"


def test_invalid_timeout_names_variable(clean_env, monkeypatch):
    monkeypatch.setenv("ECHOPROMPT_REQUEST_TIMEOUT", "soon")

    with pytest.raises(ValueError, match="ECHOPROMPT_REQUEST_TIMEOUT"):
        GeneratorConfig.from_env(clean_env)
