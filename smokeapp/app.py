from __future__ import annotations

from smokeapp.db.session import create_all
from smokeapp.logging_config import setup_logging
from smokeapp.services import SmokeTracker


def main() -> None:
    logger = setup_logging()
    logger.info("Starting SmokeApp")

    create_all()

    tracker = SmokeTracker.from_settings()
    created = tracker.refresh()
    logger.info("History is up to date, %s new day(s)", len(created))

    summary = tracker.summary()
    logger.info(
        "Total: %s | average: %s | last %s days: %s | dynamics over %s days: %+.0f%%",
        summary.total_smokes,
        summary.average_all,
        summary.average_days,
        summary.average_last,
        summary.dynamics_days,
        summary.dynamics * 100,
    )

    performance = tracker.targets.performance()
    if performance is not None:
        logger.info("Target fulfilment: %.0f%%", performance * 100)
    days_left = tracker.targets.days_left_to_quit()
    if days_left is not None:
        logger.info("Days left to quit: %s", days_left)
