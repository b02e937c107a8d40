"""カスタム例外定義"""
from typing import Optional


class PluginError(Exception):
    """プラグイン基底例外"""

    pass


class HTTPError(PluginError):
    """HTTP関連のエラー"""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        body: Optional[str] = None,
    ) -> None:
        """
        Args:
            message: エラーメッセージ
            status_code: HTTPステータスコード（通信失敗時はNone）
            body: レスポンスボディ（診断用）
        """
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class ApiError(PluginError):
    """Places APIのエラー基底クラス"""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        body: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class AuthenticationError(ApiError):
    """APIキーが拒否された（HTTP 401）"""

    pass


class BackendError(ApiError):
    """401以外の失敗（4xx/5xx、通信エラー、不正なレスポンス）"""

    pass


class ConfigurationError(PluginError):
    """設定エラー"""

    pass


class StorageError(PluginError):
    """ストレージ関連のエラー"""

    pass
