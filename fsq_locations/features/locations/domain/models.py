"""ロケーション検索（ホスト連携）のドメインモデル"""
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional


class StorageStrategy(str, Enum):
    """ホストが返却データをどう保持するか"""

    STORE_COPY = "store_copy"  # ホストが返却時点のコピーを保存する
    DEFERRED = "deferred"  # ホストが必要時にIDで再取得する


class PluginStatus(str, Enum):
    """プラグインの状態"""

    READY = "ready"
    SETUP_REQUIRED = "setup_required"


@dataclass(frozen=True)
class PluginConfig:
    """ホストに宣言するプラグイン設定"""

    storage_strategy: StorageStrategy = StorageStrategy.STORE_COPY


@dataclass(frozen=True)
class PluginState:
    """プラグインの状態"""

    status: PluginStatus
    message: Optional[str] = None

    @classmethod
    def ready(cls) -> "PluginState":
        return cls(status=PluginStatus.READY)

    @classmethod
    def setup_required(cls, message: str) -> "PluginState":
        return cls(status=PluginStatus.SETUP_REQUIRED, message=message)

    @property
    def is_ready(self) -> bool:
        return self.status == PluginStatus.READY

    def to_dict(self) -> dict[str, Any]:
        return {"status": self.status.value, "message": self.message}


@dataclass(frozen=True)
class LocationQuery:
    """検索クエリ"""

    query: str  # 検索文字列
    user_latitude: float  # ユーザーの緯度
    user_longitude: float  # ユーザーの経度
    search_radius: float  # 検索半径（メートル）


@dataclass(frozen=True)
class SearchParams:
    """検索時のホスト側パラメータ"""

    allow_network: bool = True
    lang: Optional[str] = None


@dataclass(frozen=True)
class RefreshParams:
    """リフレッシュ時のホスト側パラメータ"""

    last_updated: int  # 最終更新時刻（エポックミリ秒）
    lang: Optional[str] = None
