"""営業時間デコーダー

Places APIの営業時間は1枠ごとに
``{"day": 1, "open": "0900", "close": "1700"}`` の形で返される。
``day`` は月曜=1 〜 日曜=7、``close`` が ``"+0200"`` のように ``+`` で
始まる場合は翌日の時刻を表す。
"""

import re
from datetime import date, datetime, time, timedelta
from typing import Any, Iterable, Optional

from ...shared.logging.config import get_logger
from .domain.models import DayOfWeek, OpeningHours, OpeningSchedule

logger = get_logger(__name__)

_HHMM = re.compile(r"[0-9]{4}")
_NEXT_DAY_MARKER = "+"


def parse_hhmm(value: Optional[str]) -> Optional[time]:
    """
    "HHMM"形式の文字列を時刻に変換

    Args:
        value: 4桁の時刻文字列

    Returns:
        Optional[time]: 時刻（形式が不正、または時刻として成立しない場合はNone）
    """
    if value is None or not _HHMM.fullmatch(value):
        return None

    try:
        return time(int(value[:2]), int(value[2:]))
    except ValueError:
        # 25時や60分など
        return None


def decode_opening_hours(
    day: Optional[int],
    open_time: Optional[str],
    close_time: Optional[str],
) -> Optional[OpeningHours]:
    """
    営業時間の1枠をデコード

    Args:
        day: 曜日番号（1〜7）
        open_time: 開店時刻 "HHMM"
        close_time: 閉店時刻 "HHMM" または翌日を表す "+HHMM"

    Returns:
        Optional[OpeningHours]: デコード結果（不正な枠はNone）
    """
    if isinstance(day, bool) or not isinstance(day, int) or not 1 <= day <= 7:
        return None

    start = parse_hhmm(open_time)
    if start is None:
        return None

    if close_time is None:
        return None

    closes_next_day = close_time.startswith(_NEXT_DAY_MARKER)
    end = parse_hhmm(close_time[1:] if closes_next_day else close_time)
    if end is None:
        return None

    # 翌日マーカーなしで閉店が開店より前の場合は負の長さになる（補正しない）
    duration = datetime.combine(date.min, end) - datetime.combine(date.min, start)
    if closes_next_day:
        duration += timedelta(days=1)

    return OpeningHours(
        day_of_week=DayOfWeek(day),
        start_time=start,
        duration=duration,
    )


def decode_opening_schedule(regular: Optional[Iterable[Any]]) -> Optional[OpeningSchedule]:
    """
    営業時間の一覧をスケジュールに変換

    デコードできない枠は読み飛ばし、残りの枠でスケジュールを作る。

    Args:
        regular: ``day`` / ``open`` / ``close`` 属性を持つ枠の一覧

    Returns:
        Optional[OpeningSchedule]: スケジュール（一覧自体がない場合はNone）
    """
    if regular is None:
        return None

    opening_hours = []
    for entry in regular:
        decoded = decode_opening_hours(entry.day, entry.open, entry.close)
        if decoded is None:
            logger.debug(
                f"Skipping invalid opening hours: day={entry.day}, "
                f"open={entry.open}, close={entry.close}"
            )
            continue
        opening_hours.append(decoded)

    return OpeningSchedule(opening_hours=opening_hours)
