"""ロケーション検索プロバイダのテスト"""

from datetime import timedelta

import pytest

from fsq_locations.features.categories.classifiers.range_classifier import RangeCategoryClassifier
from fsq_locations.features.categories.classifiers.string_classifier import (
    StringCategoryClassifier,
)
from fsq_locations.features.hours.domain.models import DayOfWeek
from fsq_locations.features.locations.domain.models import (
    LocationQuery,
    PluginStatus,
    RefreshParams,
    SearchParams,
    StorageStrategy,
)
from fsq_locations.features.locations.services.location_provider import (
    FoursquareLocationProvider,
)
from fsq_locations.features.places.clients.foursquare_client import FoursquareApiClient
from fsq_locations.features.places.domain.models import Location
from fsq_locations.infrastructure.config.settings import Settings
from fsq_locations.infrastructure.storage.api_key_store import ApiKeyStore
from fsq_locations.shared.exceptions.errors import (
    AuthenticationError,
    BackendError,
    ConfigurationError,
)

NOW_MS = 1_760_000_000_000
HOUR_MS = 60 * 60 * 1000

QUERY = LocationQuery(
    query="burger",
    user_latitude=35.6595,
    user_longitude=139.7005,
    search_radius=1500.7,
)


@pytest.fixture
def provider(key_store: ApiKeyStore, fake_http) -> FoursquareLocationProvider:
    api_client = FoursquareApiClient(api_key_store=key_store, http_client=fake_http)
    return FoursquareLocationProvider(api_client, clock=lambda: NOW_MS)


@pytest.fixture
def stored_location() -> Location:
    return Location(id="4b5f8e4bf964a520a3c129e3", label="Old Name", latitude=1.0, longitude=2.0)


def test_search_offline_returns_empty(provider: FoursquareLocationProvider, fake_http) -> None:
    """ネットワーク不可なら空リストを返しAPIを呼ばない"""
    result = provider.search(QUERY, SearchParams(allow_network=False, lang="ja"))

    assert result == []
    assert fake_http.calls == []


def test_search_maps_results_in_order(
    provider: FoursquareLocationProvider, fake_http, place_factory
) -> None:
    """正規化できないプレイスは除外し、APIの順序を保つ"""
    fake_http.respond(
        "/places/search",
        {
            "results": [
                place_factory(fsq_place_id="first", name="First"),
                {"fsq_place_id": "no-coordinates", "name": "Broken"},
                place_factory(fsq_place_id="second", name="Second"),
            ]
        },
    )

    result = provider.search(QUERY, SearchParams(allow_network=True, lang="ja"))

    assert [location.id for location in result] == ["first", "second"]
    call = fake_http.calls[0]
    assert call["params"]["radius"] == "1500"
    assert call["params"]["ll"] == "35.6595,139.7005"
    assert call["headers"]["Accept-Language"] == "ja"


def test_search_keeps_place_with_malformed_hours(
    provider: FoursquareLocationProvider, fake_http, place_factory
) -> None:
    """1つの営業時間の枠が不正でも、そのプレイスと他の結果は返す"""
    bad_hours = {
        "regular": [
            {"day": "Mon", "open": "0900", "close": "1700"},
            {"day": 3, "open": "1100", "close": "2300"},
        ]
    }
    fake_http.respond(
        "/places/search",
        {
            "results": [
                place_factory(fsq_place_id="good"),
                place_factory(fsq_place_id="bad", hours=bad_hours),
                place_factory(fsq_place_id="no-coordinates", latitude="north"),
            ]
        },
    )

    result = provider.search(QUERY, SearchParams())

    assert [location.id for location in result] == ["good", "bad"]
    schedule = result[1].opening_schedule
    assert schedule is not None
    assert [hours.day_of_week for hours in schedule.opening_hours] == [DayOfWeek.WEDNESDAY]


def test_search_without_results_key(provider: FoursquareLocationProvider, fake_http) -> None:
    fake_http.respond("/places/search", {})
    assert provider.search(QUERY, SearchParams()) == []


@pytest.mark.parametrize("lang", ["xx", None, "zh"])
def test_search_unsupported_language_falls_back(
    provider: FoursquareLocationProvider, fake_http, lang
) -> None:
    """対応外の言語はデフォルト言語(en)で送る"""
    fake_http.respond("/places/search", {"results": []})

    provider.search(QUERY, SearchParams(lang=lang))

    assert fake_http.calls[0]["headers"]["Accept-Language"] == "en"


def test_search_propagates_backend_error(provider: FoursquareLocationProvider, fake_http) -> None:
    """APIの失敗は空リストにせず送出する"""
    fake_http.fail("/places/search", 500)
    with pytest.raises(BackendError):
        provider.search(QUERY, SearchParams())


def test_search_propagates_authentication_error(
    provider: FoursquareLocationProvider, fake_http
) -> None:
    fake_http.fail("/places/search", 401)
    with pytest.raises(AuthenticationError):
        provider.search(QUERY, SearchParams())


def test_get(provider: FoursquareLocationProvider, fake_http, place_factory) -> None:
    fake_http.respond("/places/abc", place_factory(fsq_place_id="abc"))

    location = provider.get("abc", lang="de")

    assert location is not None
    assert location.id == "abc"
    assert fake_http.calls[0]["headers"]["Accept-Language"] == "de"


def test_get_not_found(provider: FoursquareLocationProvider, fake_http) -> None:
    fake_http.fail("/places/abc", 404)
    assert provider.get("abc") is None


def test_get_unauthorized_is_distinct_from_server_error(
    provider: FoursquareLocationProvider, fake_http
) -> None:
    """401と500は区別できる"""
    fake_http.fail("/places/abc", 401)
    with pytest.raises(AuthenticationError):
        provider.get("abc")

    fake_http.fail("/places/abc", 500)
    with pytest.raises(BackendError) as exc_info:
        provider.get("abc")
    assert not isinstance(exc_info.value, AuthenticationError)


def test_refresh_fresh_item_is_returned_unchanged(
    provider: FoursquareLocationProvider, fake_http, stored_location: Location
) -> None:
    """1時間前に更新されたものはAPIを呼ばずにそのまま返す"""
    result = provider.refresh(stored_location, RefreshParams(last_updated=NOW_MS - HOUR_MS))

    assert result is stored_location
    assert fake_http.calls == []


def test_refresh_stale_item_is_refetched(
    provider: FoursquareLocationProvider, fake_http, place_factory, stored_location: Location
) -> None:
    """2日前に更新されたものはIDで再取得する"""
    fake_http.respond(f"/places/{stored_location.id}", place_factory())

    result = provider.refresh(
        stored_location,
        RefreshParams(last_updated=NOW_MS - 48 * HOUR_MS, lang="fr"),
    )

    assert result is not None
    assert result.label == "Burger Stand"
    assert len(fake_http.calls) == 1
    assert fake_http.calls[0]["headers"]["Accept-Language"] == "fr"


def test_refresh_exactly_at_threshold_is_refetched(
    provider: FoursquareLocationProvider, fake_http, place_factory, stored_location: Location
) -> None:
    fake_http.respond(f"/places/{stored_location.id}", place_factory())
    provider.refresh(stored_location, RefreshParams(last_updated=NOW_MS - 24 * HOUR_MS))
    assert len(fake_http.calls) == 1


def test_refresh_removed_place(
    provider: FoursquareLocationProvider, fake_http, stored_location: Location
) -> None:
    """削除されたプレイスはNone"""
    fake_http.fail(f"/places/{stored_location.id}", 404)
    result = provider.refresh(stored_location, RefreshParams(last_updated=NOW_MS - 48 * HOUR_MS))
    assert result is None


def test_custom_freshness(key_store: ApiKeyStore, fake_http, stored_location: Location) -> None:
    api_client = FoursquareApiClient(api_key_store=key_store, http_client=fake_http)
    provider = FoursquareLocationProvider(
        api_client, freshness=timedelta(hours=2), clock=lambda: NOW_MS
    )
    assert provider.refresh(stored_location, RefreshParams(NOW_MS - HOUR_MS)) is stored_location


def test_plugin_state(provider: FoursquareLocationProvider, key_store: ApiKeyStore) -> None:
    """APIキーがなければセットアップが必要"""
    assert provider.get_plugin_state().status == PluginStatus.READY

    key_store.clear()
    state = provider.get_plugin_state()
    assert state.status == PluginStatus.SETUP_REQUIRED
    assert state.message


def test_storage_strategy(provider: FoursquareLocationProvider) -> None:
    assert provider.config.storage_strategy == StorageStrategy.STORE_COPY


def test_from_settings(tmp_path, fake_http) -> None:
    """設定から依存関係を組み立てる"""
    settings = Settings(
        _env_file=None,
        api_key_store_path=str(tmp_path / "key.json"),
        foursquare_api_key="env-key",
        supported_languages="en,ja",
        default_language="ja",
        request_fields="fsq_place_id, name ,latitude,longitude",
        category_id_format="integer",
        refresh_threshold_hours=6,
        attribution_icon_url="https://example.com/icon.png",
    )

    provider = FoursquareLocationProvider.from_settings(settings, http_client=fake_http)

    assert provider.api_client.get_api_key() == "env-key"
    assert provider.resolve_language("de") == "ja"
    assert provider.fields == ["fsq_place_id", "name", "latitude", "longitude"]
    assert provider.freshness == timedelta(hours=6)
    assert isinstance(provider.normalizer.classifier, RangeCategoryClassifier)
    assert provider.normalizer.attribution_icon_url == "https://example.com/icon.png"


def test_from_settings_default_classifier(tmp_path, fake_http) -> None:
    settings = Settings(_env_file=None, api_key_store_path=str(tmp_path / "key.json"))
    provider = FoursquareLocationProvider.from_settings(settings, http_client=fake_http)
    assert isinstance(provider.normalizer.classifier, StringCategoryClassifier)
    assert provider.fields is None


def test_from_settings_unknown_classifier(tmp_path) -> None:
    settings = Settings(
        _env_file=None,
        api_key_store_path=str(tmp_path / "key.json"),
        category_id_format="hex",
    )
    with pytest.raises(ConfigurationError):
        FoursquareLocationProvider.from_settings(settings)
