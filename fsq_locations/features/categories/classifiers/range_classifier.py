"""整数カテゴリID用の分類器（旧API）"""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional, Union

from ....shared.exceptions.errors import ConfigurationError
from ....shared.logging.config import get_logger
from ...places.domain.models import RawPlaceCategory
from ..domain.enums import LocationIcon
from .base import CONFIG_DIR, CategoryClassifier

logger = get_logger(__name__)


@dataclass(frozen=True)
class ExactMatch:
    """特定のIDに一致するルール"""

    category_id: int
    icon: LocationIcon

    def matches(self, category_id: int) -> bool:
        return category_id == self.category_id


@dataclass(frozen=True)
class RangeMatch:
    """範囲（両端を含む）に一致するルール"""

    low: int
    high: int
    icon: LocationIcon

    def matches(self, category_id: int) -> bool:
        return self.low <= category_id <= self.high


Rule = Union[ExactMatch, RangeMatch]


class RangeCategoryClassifier(CategoryClassifier):
    """
    順序付きルールによる分類器

    ルールは宣言順に評価され、最初に一致したものが採用される。
    範囲は重なってよく、狭いルールを広い範囲より前に置くことで
    カテゴリ階層の入れ子を表現する（例: 13031 Burger Joint は
    13000-13392 Dining and Drinking より先に評価される）。
    """

    def __init__(
        self,
        config_path: Optional[str | Path] = None,
        rules: Optional[list[Rule]] = None,
    ) -> None:
        """
        Args:
            config_path: ルール定義のパス（Noneの場合は同梱のlegacy_categories.yaml）
            rules: ルールを直接指定する場合（指定時はconfig_pathを読まない）
        """
        super().__init__()
        self.config_path = (
            Path(config_path) if config_path else CONFIG_DIR / "legacy_categories.yaml"
        )

        if rules is not None:
            self.rules = list(rules)
        else:
            self.rules = self._parse_rules(self.load_config(self.config_path))

        logger.info(f"RangeCategoryClassifier loaded {len(self.rules)} rules")

    def _parse_rules(self, config: dict[str, Any]) -> list[Rule]:
        """YAMLの内容からルールのリストを作成（順序を維持）"""
        entries = config.get("rules")
        if not isinstance(entries, list):
            raise ConfigurationError(f"Missing 'rules' in {self.config_path}")

        rules: list[Rule] = []
        for entry in entries:
            icon = self.parse_icon(entry.get("icon"), str(self.config_path))

            if "id" in entry:
                rules.append(ExactMatch(int(entry["id"]), icon))
            elif "range" in entry:
                low, high = (int(value) for value in entry["range"])
                if low > high:
                    raise ConfigurationError(
                        f"Invalid range [{low}, {high}] in {self.config_path}"
                    )
                rules.append(RangeMatch(low, high, icon))
            else:
                raise ConfigurationError(f"Rule without id or range: {entry}")

        return rules

    def extract_id(self, category: RawPlaceCategory) -> Optional[int]:
        category_id = category.id
        if isinstance(category_id, str):
            return int(category_id) if category_id.isascii() and category_id.isdigit() else None
        return category_id

    def classify(self, category_id: Any) -> Optional[LocationIcon]:
        # boolはintのサブクラスなので除外
        if isinstance(category_id, bool) or not isinstance(category_id, int):
            return None

        for rule in self.rules:
            if rule.matches(category_id):
                return rule.icon

        return None
