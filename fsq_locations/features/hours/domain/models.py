"""営業時間のドメインモデル"""
from dataclasses import dataclass, field
from datetime import time, timedelta
from enum import IntEnum
from typing import Any


class DayOfWeek(IntEnum):
    """曜日（ISO 8601: 月曜=1 〜 日曜=7）"""

    MONDAY = 1
    TUESDAY = 2
    WEDNESDAY = 3
    THURSDAY = 4
    FRIDAY = 5
    SATURDAY = 6
    SUNDAY = 7


@dataclass(frozen=True)
class OpeningHours:
    """週ごとの営業時間の1枠"""

    day_of_week: DayOfWeek  # 曜日
    start_time: time  # 開店時刻
    duration: timedelta  # 営業時間の長さ（翌日閉店の場合は1日加算済み）

    def to_dict(self) -> dict[str, Any]:
        """ホスト返却用の辞書に変換"""
        return {
            "day_of_week": int(self.day_of_week),
            "start_time": self.start_time.strftime("%H:%M"),
            "duration_seconds": int(self.duration.total_seconds()),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "OpeningHours":
        """辞書から生成"""
        hour, minute = (int(part) for part in data["start_time"].split(":"))
        return cls(
            day_of_week=DayOfWeek(int(data["day_of_week"])),
            start_time=time(hour, minute),
            duration=timedelta(seconds=data["duration_seconds"]),
        )


@dataclass
class OpeningSchedule:
    """週間の営業スケジュール"""

    opening_hours: list[OpeningHours] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {"opening_hours": [hours.to_dict() for hours in self.opening_hours]}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "OpeningSchedule":
        return cls(
            opening_hours=[
                OpeningHours.from_dict(entry) for entry in data.get("opening_hours", [])
            ]
        )
