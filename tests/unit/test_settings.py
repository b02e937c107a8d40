"""設定のテスト"""

import pytest

from fsq_locations.infrastructure.config.settings import Settings


def test_defaults() -> None:
    settings = Settings(_env_file=None)

    assert settings.foursquare_api_base_url == "https://api.foursquare.com/v3"
    assert settings.default_language == "en"
    assert settings.get_supported_languages() == {
        "en", "es", "fr", "de", "it", "ja", "th", "tr", "ko", "ru", "pt", "id",
    }
    assert settings.get_request_fields() is None
    assert settings.refresh_threshold_hours == 24


def test_environment_variables(monkeypatch: pytest.MonkeyPatch) -> None:
    """環境変数から読み込む（大文字小文字を区別しない）"""
    monkeypatch.setenv("FOURSQUARE_API_KEY", "env-key")
    monkeypatch.setenv("REQUEST_FIELDS", "fsq_place_id,name")
    monkeypatch.setenv("default_language", "ja")

    settings = Settings(_env_file=None)

    assert settings.foursquare_api_key == "env-key"
    assert settings.get_request_fields() == ["fsq_place_id", "name"]
    assert settings.default_language == "ja"


def test_env_file(tmp_path) -> None:
    env_file = tmp_path / ".env"
    env_file.write_text("SUPPORTED_LANGUAGES=en, ja\nUNRELATED=1\n", encoding="utf-8")

    settings = Settings(_env_file=str(env_file))

    assert settings.get_supported_languages() == {"en", "ja"}
