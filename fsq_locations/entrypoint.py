"""CLIエントリーポイント"""
import argparse
import json
import sys
from typing import Any, Optional

from .features.locations.domain.models import LocationQuery, RefreshParams, SearchParams
from .features.locations.services.location_provider import FoursquareLocationProvider
from .features.places.domain.models import Location
from .infrastructure.config.settings import Settings
from .shared.exceptions.errors import AuthenticationError, PluginError
from .shared.logging.config import get_logger, setup_logging

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_AUTH_FAILURE = 2
EXIT_INTERRUPTED = 130


def build_parser() -> argparse.ArgumentParser:
    """引数パーサーを作成"""
    parser = argparse.ArgumentParser(
        prog="fsq-locations",
        description="Foursquare Places APIで場所を検索するツール",
    )

    parser.add_argument(
        "--env-file",
        type=str,
        default=".env",
        help="環境変数ファイルのパス（デフォルト: .env）",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="ログレベル",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    search = subparsers.add_parser("search", help="テキストで場所を検索")
    search.add_argument("query", type=str, help="検索文字列")
    search.add_argument("--lat", type=float, required=True, help="検索中心の緯度")
    search.add_argument("--lon", type=float, required=True, help="検索中心の経度")
    search.add_argument("--radius", type=float, default=5000, help="検索半径（メートル）")
    search.add_argument("--lang", type=str, help="言語コード（例: ja）")
    search.add_argument("--offline", action="store_true", help="ネットワークを使わない")

    get = subparsers.add_parser("get", help="IDで場所を取得")
    get.add_argument("place_id", type=str, help="プレイスID")
    get.add_argument("--lang", type=str, help="言語コード")

    refresh = subparsers.add_parser("refresh", help="保存済みの場所を更新")
    refresh.add_argument("location_file", type=str, help="場所のJSONファイル")
    refresh.add_argument(
        "--last-updated-ms",
        type=int,
        required=True,
        help="最終更新時刻（エポックミリ秒）",
    )
    refresh.add_argument("--lang", type=str, help="言語コード")

    subparsers.add_parser("state", help="プラグインの状態を表示")

    set_key = subparsers.add_parser("set-key", help="APIキーを保存")
    set_key.add_argument("api_key", type=str, help="APIキー")
    set_key.add_argument(
        "--skip-test",
        action="store_true",
        help="保存前にAPIキーを検証しない",
    )

    test_key = subparsers.add_parser("test-key", help="APIキーを検証")
    test_key.add_argument("api_key", type=str, help="APIキー")

    return parser


def print_json(data: Any) -> None:
    """結果をJSONで標準出力に書き出す"""
    print(json.dumps(data, ensure_ascii=False, indent=2))


def run_command(args: argparse.Namespace, provider: FoursquareLocationProvider) -> int:
    """
    サブコマンドを実行

    Returns:
        int: 終了コード
    """
    if args.command == "search":
        locations = provider.search(
            LocationQuery(
                query=args.query,
                user_latitude=args.lat,
                user_longitude=args.lon,
                search_radius=args.radius,
            ),
            SearchParams(allow_network=not args.offline, lang=args.lang),
        )
        print_json([location.to_dict() for location in locations])
        return EXIT_OK

    if args.command == "get":
        location = provider.get(args.place_id, lang=args.lang)
        print_json(location.to_dict() if location else None)
        return EXIT_OK if location else EXIT_FAILURE

    if args.command == "refresh":
        with open(args.location_file, "r", encoding="utf-8") as f:
            item = Location.from_dict(json.load(f))
        location = provider.refresh(
            item,
            RefreshParams(last_updated=args.last_updated_ms, lang=args.lang),
        )
        print_json(location.to_dict() if location else None)
        return EXIT_OK if location else EXIT_FAILURE

    if args.command == "state":
        state = provider.get_plugin_state()
        print_json(state.to_dict())
        return EXIT_OK

    if args.command == "set-key":
        if not args.skip_test and not provider.api_client.test_api_key(args.api_key):
            logger.error("API key was rejected, not saving")
            return EXIT_AUTH_FAILURE
        provider.api_client.set_api_key(args.api_key)
        print_json({"saved": True})
        return EXIT_OK

    if args.command == "test-key":
        valid = provider.api_client.test_api_key(args.api_key)
        print_json({"valid": valid})
        return EXIT_OK if valid else EXIT_AUTH_FAILURE

    raise ValueError(f"Unknown command: {args.command}")


def main(
    argv: Optional[list[str]] = None,
    provider: Optional[FoursquareLocationProvider] = None,
) -> int:
    """
    メインエントリーポイント

    Args:
        argv: コマンドライン引数（Noneの場合はsys.argv）
        provider: プロバイダ（Noneの場合は設定から作成）

    Returns:
        int: 終了コード（0: 成功, 1: 失敗, 2: APIキー拒否, 130: 中断）
    """
    args = build_parser().parse_args(argv)

    try:
        # 設定を読み込み
        settings = Settings(_env_file=args.env_file)

        # ログレベルを上書き
        if args.log_level:
            settings.log_level = args.log_level

        setup_logging(level=settings.log_level)

        if provider is None:
            provider = FoursquareLocationProvider.from_settings(settings)

        return run_command(args, provider)

    except KeyboardInterrupt:
        logger.warning("Interrupted by user")
        return EXIT_INTERRUPTED
    except AuthenticationError as e:
        logger.error(f"Foursquare rejected the API key: {e}")
        return EXIT_AUTH_FAILURE
    except (PluginError, OSError, ValueError) as e:
        logger.error(f"Command failed: {e}", exc_info=True)
        return EXIT_FAILURE


if __name__ == "__main__":
    sys.exit(main())
