from .day import DayRecordRead, SmokeItemData, StatisticsSummary
from .target import (
    DailyLimit,
    QuitSchedule,
    Target,
    TargetAdapter,
    decode_target,
    encode_target,
)

__all__ = [
    "DayRecordRead",
    "SmokeItemData",
    "StatisticsSummary",
    "DailyLimit",
    "QuitSchedule",
    "Target",
    "TargetAdapter",
    "decode_target",
    "encode_target",
]
