from core.config import DEFAULT_CORS_ORIGINS, load_settings


def test_defaults():
    settings = load_settings({})
    assert settings.strict_selection is True
    assert settings.strict_projection is True
    assert settings.log_level == "INFO"
    assert settings.cors_origins == DEFAULT_CORS_ORIGINS


def test_overrides():
    settings = load_settings(
        {
            "DATA_PAGE_STRICT_SELECTION": "off",
            "DATA_PAGE_STRICT_PROJECTION": "0",
            "DATA_PAGE_LOG_LEVEL": "debug",
            "DATA_PAGE_CORS_ORIGINS": "http://a.test, http://b.test",
        }
    )
    assert settings.strict_selection is False
    assert settings.strict_projection is False
    assert settings.log_level == "DEBUG"
    assert settings.cors_origins == ["http://a.test", "http://b.test"]


def test_invalid_values_fall_back():
    settings = load_settings({"DATA_PAGE_STRICT_SELECTION": "maybe", "DATA_PAGE_LOG_LEVEL": "loud"})
    assert settings.strict_selection is True
    assert settings.log_level == "INFO"
