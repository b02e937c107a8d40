"""カテゴリ分類器の基底クラス"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Optional

import yaml

from ....shared.exceptions.errors import ConfigurationError
from ....shared.logging.config import get_logger
from ...places.domain.models import RawPlaceCategory
from ..domain.enums import LocationIcon

logger = get_logger(__name__)

# 分類テーブル（YAML）の配置ディレクトリ
CONFIG_DIR = Path(__file__).resolve().parent.parent / "config"


class CategoryClassifier(ABC):
    """プロバイダのカテゴリIDをアイコンに分類する抽象基底クラス"""

    def __init__(self) -> None:
        """分類器を初期化"""
        logger.debug(f"{self.__class__.__name__} initialized")

    @abstractmethod
    def classify(self, category_id: Any) -> Optional[LocationIcon]:
        """
        カテゴリIDをアイコンに分類

        Args:
            category_id: プロバイダのカテゴリID

        Returns:
            Optional[LocationIcon]: アイコン（一致するルールがない場合はNone）
        """
        pass

    @abstractmethod
    def extract_id(self, category: RawPlaceCategory) -> Any:
        """
        カテゴリからこの分類器が扱う形式のIDを取り出す

        Args:
            category: APIのカテゴリ

        Returns:
            カテゴリID（存在しない場合はNone）
        """
        pass

    def classify_category(self, category: Optional[RawPlaceCategory]) -> Optional[LocationIcon]:
        """
        APIのカテゴリをアイコンに分類

        Args:
            category: APIのカテゴリ（Noneの場合はNoneを返す）

        Returns:
            Optional[LocationIcon]: アイコン
        """
        if category is None:
            return None

        category_id = self.extract_id(category)
        if category_id is None:
            return None

        return self.classify(category_id)

    @staticmethod
    def load_config(config_path: str | Path) -> dict[str, Any]:
        """
        分類テーブルを読み込む

        Args:
            config_path: YAMLファイルのパス

        Returns:
            dict[str, Any]: 読み込んだ設定

        Raises:
            ConfigurationError: 読み込みに失敗した場合
        """
        try:
            with open(config_path, "r", encoding="utf-8") as f:
                config = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            raise ConfigurationError(f"Failed to load category table {config_path}: {e}") from e

        if not isinstance(config, dict):
            raise ConfigurationError(f"Invalid category table: {config_path}")

        return config

    @staticmethod
    def parse_icon(value: Any, source: str) -> LocationIcon:
        """
        テーブル上のアイコン名をLocationIconに変換

        Raises:
            ConfigurationError: 未知のアイコン名の場合
        """
        try:
            return LocationIcon.from_value(str(value))
        except ValueError as e:
            raise ConfigurationError(f"Unknown icon '{value}' in {source}") from e
