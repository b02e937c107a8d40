"""プレイス機能のドメインモデル

- ``Raw*``: Places APIのレスポンス形状（未知のフィールドは無視、null/欠損はNone）
- ``Location`` ほか: ホストに返す正規化済みのモデル
"""

from dataclasses import dataclass, field
from typing import Any, Optional, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    ValidationError,
    ValidatorFunctionWrapHandler,
    field_validator,
)

from ...categories.domain.enums import LocationIcon
from ...hours.domain.models import OpeningSchedule


class RawModel(BaseModel):
    """APIレスポンス用モデルの共通設定"""

    model_config = ConfigDict(extra="ignore")


class RawLatLon(RawModel):
    latitude: Optional[float] = None
    longitude: Optional[float] = None


class RawGeocodes(RawModel):
    """旧APIの座標群（mainのみ使用）"""

    main: Optional[RawLatLon] = None
    drop_off: Optional[RawLatLon] = None
    roof: Optional[RawLatLon] = None
    front_door: Optional[RawLatLon] = None
    road: Optional[RawLatLon] = None


class RawPlaceLocation(RawModel):
    address: Optional[str] = None
    country: Optional[str] = None
    formatted_address: Optional[str] = None
    locality: Optional[str] = None
    postcode: Optional[str] = None
    region: Optional[str] = None


class RawPlaceCategoryIcon(RawModel):
    prefix: Optional[str] = None
    suffix: Optional[str] = None


class RawPlaceCategory(RawModel):
    fsq_category_id: Optional[str] = None  # 現行API
    id: Optional[Union[int, str]] = None  # 旧API（整数ID）
    name: Optional[str] = None
    short_name: Optional[str] = None
    plural_name: Optional[str] = None
    icon: Optional[RawPlaceCategoryIcon] = None


class RawPlaceHoursRegular(RawModel):
    day: Optional[int] = None
    open: Optional[str] = None
    close: Optional[str] = None

    @field_validator("day", "open", "close", mode="wrap")
    @classmethod
    def invalid_as_none(cls, value: Any, handler: ValidatorFunctionWrapHandler) -> Any:
        """型が合わない値はNoneにする（枠の採否はデコーダーが判定する）"""
        try:
            return handler(value)
        except ValidationError:
            return None


class RawPlaceHours(RawModel):
    display: Optional[str] = None
    is_local_holiday: Optional[bool] = None
    open_now: Optional[bool] = None
    regular: Optional[list[RawPlaceHoursRegular]] = None

    @field_validator("regular", mode="before")
    @classmethod
    def drop_non_object_entries(cls, value: Any) -> Any:
        """オブジェクトでない枠は除外する"""
        if isinstance(value, list):
            return [entry for entry in value if isinstance(entry, (dict, RawPlaceHoursRegular))]
        return value


class RawPlace(RawModel):
    """Places APIのプレイス1件"""

    fsq_place_id: Optional[str] = None  # 現行API
    fsq_id: Optional[str] = None  # 旧API
    name: Optional[str] = None
    latitude: Optional[float] = None  # 現行API
    longitude: Optional[float] = None  # 現行API
    geocodes: Optional[RawGeocodes] = None  # 旧API
    location: Optional[RawPlaceLocation] = None
    categories: Optional[list[RawPlaceCategory]] = None
    tel: Optional[str] = None
    email: Optional[str] = None
    website: Optional[str] = None
    hours: Optional[RawPlaceHours] = None
    rating: Optional[float] = None  # 0〜100


class RawPlaceSearch(RawModel):
    """検索レスポンス"""

    results: Optional[list[RawPlace]] = None


@dataclass
class Address:
    """住所（すべて任意）"""

    address: Optional[str] = None
    country: Optional[str] = None
    state: Optional[str] = None
    city: Optional[str] = None
    postal_code: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "address": self.address,
            "country": self.country,
            "state": self.state,
            "city": self.city,
            "postal_code": self.postal_code,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Address":
        return cls(
            address=data.get("address"),
            country=data.get("country"),
            state=data.get("state"),
            city=data.get("city"),
            postal_code=data.get("postal_code"),
        )


@dataclass
class Attribution:
    """データ提供元の表示"""

    text: str
    url: Optional[str] = None
    icon_url: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        return {"text": self.text, "url": self.url, "icon_url": self.icon_url}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Attribution":
        return cls(
            text=data["text"],
            url=data.get("url"),
            icon_url=data.get("icon_url"),
        )


@dataclass
class Location:
    """
    ホストに返す正規化済みの場所

    id・label・緯度・経度は必須。これらが欠けたプレイスからは生成しない。
    """

    id: str
    label: str
    latitude: float
    longitude: float
    address: Address = field(default_factory=Address)
    phone_number: Optional[str] = None
    website_url: Optional[str] = None
    user_rating: Optional[float] = None  # 0〜10
    attribution: Optional[Attribution] = None
    icon: Optional[LocationIcon] = None
    category: Optional[str] = None
    opening_schedule: Optional[OpeningSchedule] = None

    def to_dict(self) -> dict[str, Any]:
        """ホスト返却用の辞書に変換"""
        return {
            "id": self.id,
            "label": self.label,
            "latitude": self.latitude,
            "longitude": self.longitude,
            "address": self.address.to_dict(),
            "phone_number": self.phone_number,
            "website_url": self.website_url,
            "user_rating": self.user_rating,
            "attribution": self.attribution.to_dict() if self.attribution else None,
            "icon": self.icon.value if self.icon else None,
            "category": self.category,
            "opening_schedule": (
                self.opening_schedule.to_dict() if self.opening_schedule else None
            ),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Location":
        """ホストが保持していた辞書から生成"""
        attribution = data.get("attribution")
        icon = data.get("icon")
        schedule = data.get("opening_schedule")
        return cls(
            id=data["id"],
            label=data["label"],
            latitude=data["latitude"],
            longitude=data["longitude"],
            address=Address.from_dict(data.get("address") or {}),
            phone_number=data.get("phone_number"),
            website_url=data.get("website_url"),
            user_rating=data.get("user_rating"),
            attribution=Attribution.from_dict(attribution) if attribution else None,
            icon=LocationIcon.from_value(icon) if icon else None,
            category=data.get("category"),
            opening_schedule=OpeningSchedule.from_dict(schedule) if schedule else None,
        )
