"""Foursquare Places APIクライアント"""

from typing import Any, Optional
from urllib.parse import quote

from pydantic import ValidationError

from ....infrastructure.storage.api_key_store import ApiKeyStore
from ....shared.exceptions.errors import (
    AuthenticationError,
    BackendError,
    ConfigurationError,
    HTTPError,
)
from ....shared.http.client import HTTPClient
from ....shared.logging.config import get_logger
from ..domain.models import RawPlace, RawPlaceSearch

logger = get_logger(__name__)

DEFAULT_BASE_URL = "https://api.foursquare.com/v3"

# APIキーの検証に使う、存在が安定しているプレイスのID
API_KEY_TEST_PLACE_ID = "51a2445e5019c80b56934c75"


class FoursquareApiClient:
    """
    Places APIクライアント

    APIキーはリクエストごとにキーストアから読み込む。
    """

    def __init__(
        self,
        api_key_store: ApiKeyStore,
        http_client: Optional[HTTPClient] = None,
        base_url: str = DEFAULT_BASE_URL,
    ) -> None:
        """
        Args:
            api_key_store: APIキーのストア
            http_client: HTTPクライアント（Noneの場合は新規作成）
            base_url: APIのベースURL
        """
        self.api_key_store = api_key_store
        self.http_client = http_client or HTTPClient()
        self.base_url = base_url.rstrip("/")

        logger.info(f"FoursquareApiClient initialized: {self.base_url}")

    def places_search(
        self,
        query: str,
        latitude: float,
        longitude: float,
        radius: int,
        fields: Optional[list[str]] = None,
        language: Optional[str] = None,
        api_key: Optional[str] = None,
    ) -> RawPlaceSearch:
        """
        プレイスを検索

        Args:
            query: 検索文字列
            latitude: 検索中心の緯度
            longitude: 検索中心の経度
            radius: 検索半径（メートル）
            fields: 取得するフィールド（Noneの場合はAPIのデフォルト）
            language: Accept-Languageに指定する言語
            api_key: APIキー（Noneの場合はキーストアの値）

        Returns:
            RawPlaceSearch: 検索結果

        Raises:
            AuthenticationError: APIキーが拒否された場合
            BackendError: それ以外の失敗
        """
        params: dict[str, Any] = {
            "query": query,
            "ll": f"{latitude},{longitude}",
            "radius": str(radius),
        }
        if fields:
            params["fields"] = ",".join(fields)

        data = self._get("/places/search", params, language=language, api_key=api_key)
        if data is None:
            return RawPlaceSearch()

        return self._parse_search(data)

    def place_by_id(
        self,
        place_id: str,
        fields: Optional[list[str]] = None,
        language: Optional[str] = None,
        api_key: Optional[str] = None,
    ) -> Optional[RawPlace]:
        """
        IDでプレイスを取得

        Args:
            place_id: プレイスID
            fields: 取得するフィールド（Noneの場合はAPIのデフォルト）
            language: Accept-Languageに指定する言語
            api_key: APIキー（Noneの場合はキーストアの値）

        Returns:
            Optional[RawPlace]: プレイス（見つからない場合はNone）

        Raises:
            AuthenticationError: APIキーが拒否された場合
            BackendError: それ以外の失敗
        """
        params: dict[str, Any] = {}
        if fields:
            params["fields"] = ",".join(fields)

        data = self._get(
            f"/places/{quote(place_id, safe='')}",
            params,
            language=language,
            api_key=api_key,
            allow_not_found=True,
        )
        if data is None:
            return None

        try:
            return RawPlace.model_validate(data)
        except ValidationError as e:
            raise BackendError(f"Malformed place response: {e}") from e

    def test_api_key(self, api_key: str) -> bool:
        """
        APIキーが有効か確認

        Args:
            api_key: 確認するAPIキー

        Returns:
            bool: 有効な場合True、拒否された場合False

        Raises:
            BackendError: 認証以外の理由で確認できなかった場合
        """
        if not api_key or not api_key.strip():
            logger.error("Invalid API key: empty")
            return False

        try:
            self.place_by_id(API_KEY_TEST_PLACE_ID, api_key=api_key)
            return True
        except AuthenticationError as e:
            logger.error(f"Invalid API key: {e}")
            return False

    def set_api_key(self, api_key: str) -> None:
        """APIキーを保存"""
        self.api_key_store.set_api_key(api_key)

    def get_api_key(self) -> Optional[str]:
        """保存済みのAPIキーを取得"""
        return self.api_key_store.get_api_key()

    def _parse_search(self, data: Any) -> RawPlaceSearch:
        """
        検索レスポンスを1件ずつ検証する

        検証できないプレイスはその1件だけを除外する。
        """
        if not isinstance(data, dict):
            raise BackendError(f"Malformed search response: {type(data).__name__}")

        results = data.get("results")
        if results is None:
            return RawPlaceSearch()
        if not isinstance(results, list):
            raise BackendError(f"Malformed search results: {type(results).__name__}")

        places = []
        for index, item in enumerate(results):
            try:
                places.append(RawPlace.model_validate(item))
            except ValidationError as e:
                logger.debug(f"Skipping malformed place at index {index}: {e}")

        return RawPlaceSearch(results=places)

    def _get(
        self,
        path: str,
        params: dict[str, Any],
        language: Optional[str] = None,
        api_key: Optional[str] = None,
        allow_not_found: bool = False,
    ) -> Optional[Any]:
        """
        APIにGETリクエストを送りJSONを返す

        Returns:
            Optional[Any]: レスポンスのJSON（allow_not_foundで404の場合はNone）
        """
        key = api_key if api_key is not None else self.api_key_store.get_api_key()
        if not key:
            raise ConfigurationError("Foursquare API key is not configured")

        headers = {"Authorization": key}
        if language:
            headers["Accept-Language"] = language

        url = f"{self.base_url}{path}"
        try:
            response = self.http_client.get(url, params=params, headers=headers)
        except HTTPError as e:
            if e.status_code == 401:
                raise AuthenticationError(
                    f"Unauthorized. Invalid API key?; body {e.body}",
                    status_code=e.status_code,
                    body=e.body,
                ) from e
            if e.status_code == 404 and allow_not_found:
                logger.debug(f"Not found: {url}")
                return None
            raise BackendError(
                f"API error: status {e.status_code}; body {e.body}",
                status_code=e.status_code,
                body=e.body,
            ) from e

        try:
            return response.json()
        except ValueError as e:
            raise BackendError(
                f"Invalid JSON from {url}: {e}",
                status_code=response.status_code,
                body=response.text,
            ) from e
