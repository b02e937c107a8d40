"""APIキーの永続化ストア"""
import json
from pathlib import Path
from typing import Optional

from ...shared.exceptions.errors import StorageError
from ...shared.logging.config import get_logger

logger = get_logger(__name__)


class ApiKeyStore:
    """
    APIキーをJSONファイルに保存するストア

    値は1つだけ保持する。ファイルが存在しない、または値が空の場合は
    「未設定」として扱う。
    """

    KEY_NAME = "api_key"

    def __init__(self, path: str | Path, default_api_key: Optional[str] = None) -> None:
        """
        Args:
            path: 保存先ファイルのパス
            default_api_key: ファイルに値がない場合に返す初期値（設定ファイル由来）
        """
        self.path = Path(path)
        self.default_api_key = default_api_key or None
        logger.info(f"ApiKeyStore initialized: {self.path}")

    def get_api_key(self) -> Optional[str]:
        """
        現在のAPIキーを取得

        Returns:
            Optional[str]: APIキー（未設定の場合はNone）

        Raises:
            StorageError: ファイルの読み込みに失敗した場合
        """
        if not self.path.exists():
            return self.default_api_key

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.error(f"Failed to read API key store: {e}")
            raise StorageError(f"Failed to read API key store {self.path}: {e}") from e

        api_key = data.get(self.KEY_NAME) if isinstance(data, dict) else None
        return api_key or self.default_api_key

    def set_api_key(self, api_key: str) -> None:
        """
        APIキーを保存

        Args:
            api_key: 保存するAPIキー

        Raises:
            StorageError: ファイルの書き込みに失敗した場合
        """
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "w", encoding="utf-8") as f:
                json.dump({self.KEY_NAME: api_key}, f)
        except OSError as e:
            logger.error(f"Failed to write API key store: {e}")
            raise StorageError(f"Failed to write API key store {self.path}: {e}") from e

        logger.info("API key stored")

    def clear(self) -> None:
        """保存済みのAPIキーを削除"""
        try:
            self.path.unlink(missing_ok=True)
        except OSError as e:
            raise StorageError(f"Failed to clear API key store {self.path}: {e}") from e

        logger.info("API key cleared")
