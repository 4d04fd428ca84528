"""Celery configuration for the scheduled archive run."""

from __future__ import annotations

import os

from celery import Celery
from celery.schedules import crontab

from stockarchiver.utils.dates import timezone_name

broker_url = os.environ.get("REDIS_URL", "redis://redis:6379/0")

celery_app = Celery("stockarchiver", broker=broker_url)
celery_app.conf.timezone = timezone_name()
celery_app.conf.beat_schedule = {
    "archive-zero-stock": {
        "task": "stockarchiver.jobs.archive.run_archive",
        "schedule": crontab(hour=int(os.environ.get("ARCHIVE_HOUR", "6")), minute=int(os.environ.get("ARCHIVE_MINUTE", "0"))),
    },
}


@celery_app.task(name="stockarchiver.jobs.archive.run_archive")
def run_archive_task() -> int:  # pragma: no cover - executed by worker
    import asyncio

    from stockarchiver.jobs.archive import run_archive

    exit_code = asyncio.run(run_archive())
    if exit_code:
        raise RuntimeError(f"Archive run failed with exit code {exit_code}")
    return exit_code
