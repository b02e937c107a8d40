"""テスト共通のフィクスチャとフェイク"""

import json
from typing import Any, Optional

import pytest

from fsq_locations.infrastructure.storage.api_key_store import ApiKeyStore
from fsq_locations.shared.exceptions.errors import HTTPError


class FakeResponse:
    """requests.Responseの代わり"""

    def __init__(self, payload: Any, status_code: int = 200) -> None:
        self._payload = payload
        self.status_code = status_code
        self.text = json.dumps(payload)

    def json(self) -> Any:
        return self._payload


class FakeHTTPClient:
    """
    HTTPClientの代わり

    URLの末尾ごとにレスポンス（またはHTTPError）を登録し、呼び出しを記録する。
    """

    def __init__(self) -> None:
        self.routes: dict[str, Any] = {}
        self.calls: list[dict[str, Any]] = []

    def respond(self, path: str, payload: Any) -> None:
        self.routes[path] = FakeResponse(payload)

    def fail(self, path: str, status_code: Optional[int], body: str = "") -> None:
        self.routes[path] = HTTPError(
            f"status {status_code}", status_code=status_code, body=body
        )

    def get(
        self,
        url: str,
        params: Optional[dict[str, Any]] = None,
        headers: Optional[dict[str, str]] = None,
    ) -> FakeResponse:
        self.calls.append({"url": url, "params": params, "headers": headers})
        for path, result in self.routes.items():
            if url.endswith(path):
                if isinstance(result, Exception):
                    raise result
                return result
        raise AssertionError(f"Unexpected request: {url}")


@pytest.fixture
def fake_http() -> FakeHTTPClient:
    return FakeHTTPClient()


@pytest.fixture
def key_store(tmp_path) -> ApiKeyStore:
    store = ApiKeyStore(tmp_path / "api_key.json")
    store.set_api_key("test-key")
    return store


def make_place(**overrides: Any) -> dict[str, Any]:
    """現行API形式のプレイスJSONを作成"""
    place: dict[str, Any] = {
        "fsq_place_id": "4b5f8e4bf964a520a3c129e3",
        "name": "Burger Stand",
        "latitude": 35.6595,
        "longitude": 139.7005,
        "location": {
            "address": "1-2-3 Jinnan",
            "country": "JP",
            "locality": "Shibuya",
            "region": "Tokyo",
            "postcode": "150-0041",
            "formatted_address": "1-2-3 Jinnan, Shibuya, Tokyo 150-0041",
        },
        "categories": [
            {
                "fsq_category_id": "4bf58dd8d48988d16c941735",
                "name": "Burger Joint",
                "icon": {"prefix": "https://ss3.4sqi.net/img/categories_v2/food/burger_", "suffix": ".png"},
            },
            {"fsq_category_id": "4bf58dd8d48988d1e0931735", "name": "Coffee Shop"},
        ],
        "tel": "03-1234-5678",
        "email": "info@example.com",
        "website": "https://burger.example.com",
        "rating": 85,
        "hours": {
            "display": "Mon-Fri 9:00-17:00",
            "open_now": True,
            "regular": [
                {"day": 1, "open": "0900", "close": "1700"},
                {"day": 5, "open": "2200", "close": "+0200"},
            ],
        },
    }
    place.update(overrides)
    return place


@pytest.fixture
def place_factory():
    return make_place
