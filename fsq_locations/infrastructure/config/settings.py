"""アプリケーション設定（Pydantic Settings）"""
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """アプリケーション設定"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Foursquare Places API
    foursquare_api_base_url: str = Field(
        default="https://api.foursquare.com/v3",
        description="Places APIのベースURL",
    )
    foursquare_api_key: Optional[str] = Field(
        default=None,
        description="APIキー（キーストアが空の場合の初期値）",
    )
    api_key_store_path: str = Field(
        default=".fsq_locations/api_key.json",
        description="APIキーの保存先ファイル",
    )
    attribution_icon_url: Optional[str] = Field(
        default=None,
        description="帰属表示に使うアイコンのURL",
    )
    default_language: str = Field(
        default="en",
        description="対応外の言語が指定された場合に使う言語",
    )
    supported_languages: str = Field(
        default="en,es,fr,de,it,ja,th,tr,ko,ru,pt,id",
        description="Accept-Languageで送信できる言語（カンマ区切り）",
    )
    request_fields: str = Field(
        default="",
        description="APIに要求するフィールド（カンマ区切り、空ならAPIのデフォルト）",
    )
    category_id_format: str = Field(
        default="string",
        description="カテゴリIDの形式 (string: 現行API, integer: 旧API)",
    )
    refresh_threshold_hours: float = Field(
        default=24.0,
        description="この時間未満の更新済みデータは再取得しない",
    )

    # HTTP
    http_timeout: int = Field(
        default=20,
        description="HTTPリクエストのタイムアウト（秒）",
    )
    http_retry: int = Field(
        default=3,
        description="HTTPリクエストのリトライ回数",
    )
    http_user_agent: str = Field(
        default="fsq-locations/1.0",
        description="HTTPリクエストのUser-Agent",
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="ログレベル (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )

    # Server
    port: int = Field(
        default=8080,
        description="HTTPサーバーのポート番号",
    )

    def get_supported_languages(self) -> set[str]:
        """対応言語の集合を取得"""
        return {lang.strip() for lang in self.supported_languages.split(",") if lang.strip()}

    def get_request_fields(self) -> Optional[list[str]]:
        """要求フィールドのリストを取得（未設定ならNone）"""
        fields = [field.strip() for field in self.request_fields.split(",") if field.strip()]
        return fields or None
