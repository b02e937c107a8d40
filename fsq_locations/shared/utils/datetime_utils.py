"""日時関連ユーティリティ"""

from datetime import datetime, timedelta, timezone

# リフレッシュ不要とみなす期間
DEFAULT_FRESHNESS = timedelta(days=1)


def now_utc() -> datetime:
    """現在のUTC時間を取得"""
    return datetime.now(timezone.utc)


def now_epoch_ms() -> int:
    """現在時刻をエポックミリ秒で取得"""
    return int(now_utc().timestamp() * 1000)


def is_fresh(
    last_updated_ms: int,
    now_ms: int,
    threshold: timedelta = DEFAULT_FRESHNESS,
) -> bool:
    """
    最終更新からの経過時間が閾値未満かどうか

    Args:
        last_updated_ms: 最終更新時刻（エポックミリ秒）
        now_ms: 現在時刻（エポックミリ秒）
        threshold: 鮮度の閾値

    Returns:
        bool: 閾値未満ならTrue
    """
    threshold_ms = int(threshold.total_seconds() * 1000)
    return (now_ms - last_updated_ms) < threshold_ms
