"""プレイスの正規化"""

from typing import Optional

from ...shared.logging.config import get_logger
from ..categories.classifiers.base import CategoryClassifier
from ..categories.classifiers.string_classifier import StringCategoryClassifier
from ..hours.decoder import decode_opening_schedule
from .domain.models import Address, Attribution, Location, RawPlace

logger = get_logger(__name__)

PROVIDER_NAME = "Foursquare"
PROFILE_URL_TEMPLATE = "https://foursquare.com/v/{place_id}"

# APIの評価(0〜100)をホストの評価(0〜10)に変換する係数
RATING_SCALE = 10.0


class PlaceNormalizer:
    """Places APIのプレイスをLocationに変換する"""

    def __init__(
        self,
        classifier: Optional[CategoryClassifier] = None,
        attribution_icon_url: Optional[str] = None,
    ) -> None:
        """
        Args:
            classifier: カテゴリ分類器（Noneの場合は文字列IDの分類器）
            attribution_icon_url: 帰属表示のアイコンURL
        """
        self.classifier = classifier or StringCategoryClassifier()
        self.attribution_icon_url = attribution_icon_url

    def normalize(self, place: RawPlace, language: Optional[str] = None) -> Optional[Location]:
        """
        プレイスをLocationに変換

        Args:
            place: APIのプレイス
            language: リクエスト時の言語（フィールドの選択には使わない）

        Returns:
            Optional[Location]: 正規化結果（id・名前・座標のいずれかが欠けている場合はNone）
        """
        place_id = self.resolve_id(place)
        if place_id is None:
            logger.debug("Skipping place without id")
            return None

        if place.name is None:
            logger.debug(f"Skipping place {place_id}: missing name")
            return None

        coordinates = self.resolve_coordinates(place)
        if coordinates is None:
            logger.debug(f"Skipping place {place_id}: missing coordinates")
            return None
        latitude, longitude = coordinates

        location = place.location
        category = place.categories[0] if place.categories else None

        return Location(
            id=place_id,
            label=place.name,
            latitude=latitude,
            longitude=longitude,
            address=Address(
                address=location.address if location else None,
                country=location.country if location else None,
                state=location.region if location else None,
                city=location.locality if location else None,
                postal_code=location.postcode if location else None,
            ),
            phone_number=place.tel,
            website_url=place.website,
            user_rating=place.rating / RATING_SCALE if place.rating is not None else None,
            attribution=Attribution(
                text=PROVIDER_NAME,
                url=PROFILE_URL_TEMPLATE.format(place_id=place_id),
                icon_url=self.attribution_icon_url,
            ),
            icon=self.classifier.classify_category(category),
            category=category.name if category else None,
            opening_schedule=decode_opening_schedule(place.hours.regular if place.hours else None),
        )

    @staticmethod
    def resolve_id(place: RawPlace) -> Optional[str]:
        """現行APIのfsq_place_id、なければ旧APIのfsq_idを使う"""
        if place.fsq_place_id is not None:
            return place.fsq_place_id
        return place.fsq_id

    @staticmethod
    def resolve_coordinates(place: RawPlace) -> Optional[tuple[float, float]]:
        """
        座標を解決

        現行APIの latitude/longitude を優先し、なければ旧APIの geocodes.main を使う。

        Returns:
            Optional[tuple[float, float]]: (緯度, 経度)
        """
        if place.latitude is not None and place.longitude is not None:
            return (place.latitude, place.longitude)

        main = place.geocodes.main if place.geocodes else None
        if main is not None and main.latitude is not None and main.longitude is not None:
            return (main.latitude, main.longitude)

        return None
