import logging

import pytest

from assistant import Settings, configure_logging

ENV_VARS = [
    "HOST",
    "PORT",
    "LLM_PROVIDER",
    "OPENAI_API_KEY",
    "OPENAI_MODEL",
    "AZURE_OPENAI_API_KEY",
    "AZURE_OPENAI_ENDPOINT",
    "AZURE_OPENAI_DEPLOYMENT",
    "AZURE_OPENAI_API_VERSION",
    "PROJECTS_PATH",
    "CHAT_TIMEOUT_SECONDS",
    "LOG_LEVEL",
    "CORS_ORIGINS",
]


@pytest.fixture()
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


def test_defaults(clean_env):
    settings = Settings.from_env()

    assert settings.port == 3000
    assert settings.openai_api_key is None
    assert settings.openai_model == "gpt-4o-mini"
    assert settings.llm_provider == "openai"
    assert settings.chat_timeout == 30.0
    assert settings.cors_origins == ("*",)


def test_reads_environment(clean_env):
    clean_env.setenv("PORT", "8080")
    clean_env.setenv("OPENAI_API_KEY", "sk-test")
    clean_env.setenv("LLM_PROVIDER", "Azure_OpenAI")
    clean_env.setenv("PROJECTS_PATH", "/srv/projects.json")
    clean_env.setenv("CHAT_TIMEOUT_SECONDS", "12.5")
    clean_env.setenv("LOG_LEVEL", "debug")
    clean_env.setenv("CORS_ORIGINS", "https://a.example, https://b.example")

    settings = Settings.from_env()

    assert settings.port == 8080
    assert settings.openai_api_key == "sk-test"
    assert settings.llm_provider == "azure_openai"
    assert settings.projects_path == "/srv/projects.json"
    assert settings.chat_timeout == 12.5
    assert settings.log_level == "DEBUG"
    assert settings.cors_origins == ("https://a.example", "https://b.example")


def test_empty_credential_counts_as_absent(clean_env):
    clean_env.setenv("OPENAI_API_KEY", "")

    assert Settings.from_env().openai_api_key is None


@pytest.mark.parametrize(("name", "value"), [("PORT", "abc"), ("CHAT_TIMEOUT_SECONDS", "soon"), ("CHAT_TIMEOUT_SECONDS", "0")])
def test_invalid_numbers_name_the_variable(clean_env, name, value):
    clean_env.setenv(name, value)

    with pytest.raises(ValueError, match=name):
        Settings.from_env()


def test_configure_logging_accepts_level_names():
    configure_logging("WARNING")

    assert logging.getLogger("assistant").getEffectiveLevel() <= logging.WARNING
