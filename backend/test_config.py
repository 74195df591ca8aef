import pytest

from webgen.config import Settings, load_settings, parse_origins
from webgen.inference.config import get_llm_client
from webgen.ir.errors import ConfigurationError


def test_missing_api_key_is_fatal():
    with pytest.raises(ConfigurationError):
        load_settings({})

    with pytest.raises(ConfigurationError):
        load_settings({"DEEPSEEK_API_KEY": "   "})


def test_defaults():
    settings = load_settings({"DEEPSEEK_API_KEY": "key"})

    assert settings == Settings(api_key="key")
    assert settings.llm_base_url == "https://api.deepseek.com/v1"
    assert settings.llm_model == "deepseek-chat"
    assert settings.max_tokens == 4000
    assert settings.cors_origins == ("*",)


def test_overrides():
    settings = load_settings({
        "DEEPSEEK_API_KEY": "key",
        "LLM_BASE_URL": "http://llama:8001",
        "LLM_MODEL": "mistral-7b-instruct",
        "LLM_TEMPERATURE": "0.2",
        "LLM_MAX_TOKENS": "2048",
        "LLM_TIMEOUT": "30",
        "DATABASE_URL": "sqlite://",
        "CORS_ORIGINS": "http://localhost:5173, https://builder.example.com",
        "LOG_LEVEL": "debug",
    })

    assert settings.llm_base_url == "http://llama:8001"
    assert settings.llm_model == "mistral-7b-instruct"
    assert settings.temperature == 0.2
    assert settings.max_tokens == 2048
    assert settings.timeout == 30.0
    assert settings.database_url == "sqlite://"
    assert settings.cors_origins == ("http://localhost:5173", "https://builder.example.com")
    assert settings.log_level == "DEBUG"


def test_bad_number_is_configuration_error():
    with pytest.raises(ConfigurationError):
        load_settings({"DEEPSEEK_API_KEY": "key", "LLM_MAX_TOKENS": "lots"})


def test_parse_origins():
    assert parse_origins(None) == ("*",)
    assert parse_origins(" , ") == ("*",)
    assert parse_origins("a,b") == ("a", "b")


def test_settings_are_injected_into_client():
    settings = load_settings({
        "DEEPSEEK_API_KEY": "key",
        "LLM_MODEL": "deepseek-coder",
        "LLM_TOP_P": "0.5",
    })

    client = get_llm_client(settings)

    assert client.api_key == "key"
    assert client.model == "deepseek-coder"
    assert client.top_p == 0.5
    assert client.base_url == "https://api.deepseek.com/v1"


def test_bad_log_level_is_configuration_error():
    with pytest.raises(ConfigurationError):
        load_settings({"DEEPSEEK_API_KEY": "key", "LOG_LEVEL": "chatty"})

    assert load_settings({"DEEPSEEK_API_KEY": "key", "LOG_LEVEL": " warning "}).log_level == "WARNING"
