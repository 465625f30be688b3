from .day_provisioner import DayProvisioner
from .history_store import HistoryStore, RecordNotFoundError, SqlHistoryStore
from .notifier import ChangeNotifier, UpdateType
from .preferences import POSSIBLE_DAYS, StatisticsPreferences
from .statistics import StatisticsEngine
from .target_engine import TargetEngine
from .target_storage import TargetStorage
from .tracker import SmokeTracker

__all__ = [
    "DayProvisioner",
    "HistoryStore",
    "RecordNotFoundError",
    "SqlHistoryStore",
    "ChangeNotifier",
    "UpdateType",
    "POSSIBLE_DAYS",
    "StatisticsPreferences",
    "StatisticsEngine",
    "TargetEngine",
    "TargetStorage",
    "SmokeTracker",
]
