"""ロケーション検索プロバイダ"""

from datetime import timedelta
from typing import Callable, Iterable, Optional

from ....infrastructure.config.settings import Settings
from ....infrastructure.storage.api_key_store import ApiKeyStore
from ....shared.exceptions.errors import ConfigurationError
from ....shared.http.client import HTTPClient
from ....shared.logging.config import get_logger
from ....shared.utils.datetime_utils import DEFAULT_FRESHNESS, is_fresh, now_epoch_ms
from ...categories.classifiers.base import CategoryClassifier
from ...categories.classifiers.range_classifier import RangeCategoryClassifier
from ...categories.classifiers.string_classifier import StringCategoryClassifier
from ...places.clients.foursquare_client import FoursquareApiClient
from ...places.domain.models import Location
from ...places.normalizer import PlaceNormalizer
from ..domain.models import (
    LocationQuery,
    PluginConfig,
    PluginState,
    RefreshParams,
    SearchParams,
    StorageStrategy,
)

logger = get_logger(__name__)

# https://docs.foursquare.com/developer/reference/localization-v3
SUPPORTED_LANGUAGES = frozenset(
    {"en", "es", "fr", "de", "it", "ja", "th", "tr", "ko", "ru", "pt", "id"}
)
DEFAULT_LANGUAGE = "en"

SETUP_REQUIRED_MESSAGE = "Foursquare API key is not configured"


class FoursquareLocationProvider:
    """
    ランチャーの「場所」検索をPlaces APIにつなぐプロバイダ

    呼び出しごとに状態を持たず、1回の操作で最大1回だけAPIを呼ぶ。
    """

    config = PluginConfig(storage_strategy=StorageStrategy.STORE_COPY)

    def __init__(
        self,
        api_client: FoursquareApiClient,
        normalizer: Optional[PlaceNormalizer] = None,
        fields: Optional[list[str]] = None,
        supported_languages: Iterable[str] = SUPPORTED_LANGUAGES,
        default_language: str = DEFAULT_LANGUAGE,
        freshness: timedelta = DEFAULT_FRESHNESS,
        clock: Callable[[], int] = now_epoch_ms,
    ) -> None:
        """
        Args:
            api_client: Places APIクライアント
            normalizer: プレイスの正規化（Noneの場合はデフォルト設定で作成）
            fields: APIに要求するフィールド（Noneの場合はAPIのデフォルト）
            supported_languages: Accept-Languageで送信できる言語
            default_language: 対応外の言語の代わりに使う言語
            freshness: この期間内に更新されたデータは再取得しない
            clock: 現在時刻（エポックミリ秒）を返す関数
        """
        self.api_client = api_client
        self.normalizer = normalizer or PlaceNormalizer()
        self.fields = fields
        self.supported_languages = frozenset(supported_languages)
        self.default_language = default_language
        self.freshness = freshness
        self.clock = clock

        logger.info(
            f"FoursquareLocationProvider initialized: "
            f"storage={self.config.storage_strategy.value}, freshness={freshness}"
        )

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        http_client: Optional[HTTPClient] = None,
    ) -> "FoursquareLocationProvider":
        """
        設定から依存関係を組み立ててプロバイダを作成

        Args:
            settings: アプリケーション設定
            http_client: HTTPクライアント（Noneの場合は設定から作成）
        """
        api_key_store = ApiKeyStore(
            settings.api_key_store_path,
            default_api_key=settings.foursquare_api_key,
        )
        http_client = http_client or HTTPClient(
            timeout=settings.http_timeout,
            max_retries=settings.http_retry,
            user_agent=settings.http_user_agent,
        )
        api_client = FoursquareApiClient(
            api_key_store=api_key_store,
            http_client=http_client,
            base_url=settings.foursquare_api_base_url,
        )
        normalizer = PlaceNormalizer(
            classifier=cls._create_classifier(settings.category_id_format),
            attribution_icon_url=settings.attribution_icon_url,
        )
        return cls(
            api_client=api_client,
            normalizer=normalizer,
            fields=settings.get_request_fields(),
            supported_languages=settings.get_supported_languages(),
            default_language=settings.default_language,
            freshness=timedelta(hours=settings.refresh_threshold_hours),
        )

    @staticmethod
    def _create_classifier(category_id_format: str) -> CategoryClassifier:
        """カテゴリIDの形式に応じた分類器を作成"""
        id_format = category_id_format.lower()
        if id_format == "string":
            return StringCategoryClassifier()
        if id_format == "integer":
            return RangeCategoryClassifier()
        raise ConfigurationError(f"Unknown category id format: {category_id_format}")

    def resolve_language(self, lang: Optional[str]) -> str:
        """対応言語ならそのまま、それ以外はデフォルト言語を返す"""
        if lang in self.supported_languages:
            return lang
        return self.default_language

    def search(self, query: LocationQuery, params: SearchParams) -> list[Location]:
        """
        テキストで場所を検索

        Args:
            query: 検索クエリ
            params: ホスト側パラメータ

        Returns:
            list[Location]: 正規化できた場所（APIの返却順）

        Raises:
            AuthenticationError: APIキーが拒否された場合
            BackendError: それ以外の失敗
        """
        if not params.allow_network:
            return []

        language = self.resolve_language(params.lang)
        results = self.api_client.places_search(
            query.query,
            latitude=query.user_latitude,
            longitude=query.user_longitude,
            radius=int(query.search_radius),
            fields=self.fields,
            language=language,
        )
        places = results.results or []
        logger.debug(f"Search '{query.query}' returned {len(places)} places")

        locations = []
        for place in places:
            location = self.normalizer.normalize(place, language)
            if location is not None:
                locations.append(location)

        return locations

    def get(self, place_id: str, lang: Optional[str] = None) -> Optional[Location]:
        """
        IDで場所を取得

        Returns:
            Optional[Location]: 場所（見つからない、または正規化できない場合はNone）
        """
        place = self.api_client.place_by_id(place_id, fields=self.fields, language=lang)
        if place is None:
            return None
        return self.normalizer.normalize(place, lang)

    def refresh(self, item: Location, params: RefreshParams) -> Optional[Location]:
        """
        保存済みの場所を更新

        最終更新から閾値未満ならAPIを呼ばずにそのまま返す。

        Returns:
            Optional[Location]: 更新後の場所（Noneの場合ホストは削除扱いにする）
        """
        if is_fresh(params.last_updated, self.clock(), self.freshness):
            return item

        logger.debug(f"Refreshing stale location {item.id}")
        return self.get(item.id, lang=params.lang)

    def get_plugin_state(self) -> PluginState:
        """APIキーが未設定ならセットアップが必要"""
        if not self.api_client.get_api_key():
            return PluginState.setup_required(SETUP_REQUIRED_MESSAGE)
        return PluginState.ready()
