"""文字列カテゴリID用の分類器（現行API）"""

from pathlib import Path
from typing import Any, Optional

from ....shared.exceptions.errors import ConfigurationError
from ....shared.logging.config import get_logger
from ...places.domain.models import RawPlaceCategory
from ..domain.enums import LocationIcon
from .base import CONFIG_DIR, CategoryClassifier

logger = get_logger(__name__)


class StringCategoryClassifier(CategoryClassifier):
    """
    完全一致テーブルによる分類器

    テーブルはアイコンごとにカテゴリIDをまとめたYAMLから読み込む。
    同じIDが複数のアイコンに書かれている場合は先に書かれた方を採用する。
    """

    def __init__(self, config_path: Optional[str | Path] = None) -> None:
        """
        Args:
            config_path: 分類テーブルのパス（Noneの場合は同梱のcategories.yaml）
        """
        super().__init__()
        self.config_path = Path(config_path) if config_path else CONFIG_DIR / "categories.yaml"

        config = self.load_config(self.config_path)
        self.table = self._build_table(config)

        logger.info(f"StringCategoryClassifier loaded {len(self.table)} categories")

    def _build_table(self, config: dict[str, Any]) -> dict[str, LocationIcon]:
        """YAMLの内容からID→アイコンの辞書を作成"""
        groups = config.get("categories")
        if not isinstance(groups, dict):
            raise ConfigurationError(f"Missing 'categories' in {self.config_path}")

        table: dict[str, LocationIcon] = {}
        for icon_name, entries in groups.items():
            icon = self.parse_icon(icon_name, str(self.config_path))
            for category_id in entries or {}:
                table.setdefault(str(category_id), icon)

        return table

    def extract_id(self, category: RawPlaceCategory) -> Optional[str]:
        return category.fsq_category_id

    def classify(self, category_id: Any) -> Optional[LocationIcon]:
        if not isinstance(category_id, str):
            return None
        return self.table.get(category_id)
