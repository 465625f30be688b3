from .day_record import DayRecord, MAX_COUNT
from .app_setting import AppSetting

__all__ = [
    "DayRecord",
    "MAX_COUNT",
    "AppSetting",
]
