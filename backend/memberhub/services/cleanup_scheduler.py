"""
Cleanup Scheduler Service

Periodically sweeps profile picture storage:
- temp files abandoned by interrupted picture and record writes
- pictures whose owner is gone, soft-deleted, or no longer references them

Uses APScheduler for the interval job.
"""

import logging
from datetime import datetime, timedelta
from pathlib import Path

from apscheduler.schedulers.asyncio import AsyncIOScheduler

from memberhub.config import settings
from memberhub.middleware import AvatarStorageError, RecordStorageError
from .atomic_file import is_temp_file
from .booking_ledger import BOOKING_DIRECTORY
from .providers import get_avatar_store, get_user_directory
from .user_directory import USER_DIRECTORY

logger = logging.getLogger(__name__)

scheduler = AsyncIOScheduler()

JOB_ID = "sweep_avatar_storage"


def _sweep_temp_files(path: Path, cutoff: datetime, summary: dict) -> None:
    """Remove write_atomically leftovers in path older than cutoff."""
    if not path.is_dir():
        return

    for entry in path.iterdir():
        if not is_temp_file(entry):
            continue
        try:
            if datetime.fromtimestamp(entry.stat().st_mtime) < cutoff:
                entry.unlink()
                summary["temp_files_deleted"] += 1
                logger.info(f"Removed abandoned temp file: {entry}")
        except FileNotFoundError:
            continue
        except OSError as e:
            summary["errors"] += 1
            logger.error(f"Failed to remove temp file {entry}: {e}")


async def sweep_avatar_storage(store=None, directory=None) -> dict:
    """
    Remove orphaned profile pictures and stale temp files.

    Both kinds of file are only removed once older than
    settings.TEMP_FILE_TTL_MINUTES. Temp files are swept from the picture,
    member and booking directories.

    Args:
        store: AvatarStore to sweep (default: configured instance)
        directory: UserDirectory holding the owners (default: configured instance)

    Returns:
        dict: Summary of the sweep with counts
    """
    store = store or get_avatar_store()
    directory = directory or get_user_directory()

    summary = {
        "temp_files_deleted": 0,
        "orphans_deleted": 0,
        "errors": 0,
    }

    cutoff = datetime.now() - timedelta(minutes=settings.TEMP_FILE_TTL_MINUTES)
    for path in (
        store.avatars_path,
        store.base_path / USER_DIRECTORY,
        store.base_path / BOOKING_DIRECTORY,
    ):
        _sweep_temp_files(path, cutoff, summary)

    # Fresh files may belong to an upload whose record update is in flight
    owners = directory.list_avatar_owners()
    for user_id in store.list_user_ids():
        expected_key = store.storage_key(user_id)
        if owners.get(user_id) == expected_key:
            continue
        try:
            # The owner may have uploaded since the snapshot was taken
            owner = directory.get_user(user_id)
            if owner is not None and owner.avatarPath == expected_key:
                continue
            if store.delete_if_stale(user_id, cutoff.timestamp()):
                summary["orphans_deleted"] += 1
                logger.info(f"Removed orphaned profile picture for user {user_id}")
        except (OSError, AvatarStorageError, RecordStorageError) as e:
            summary["errors"] += 1
            logger.error(f"Failed to remove orphaned picture for user {user_id}: {e}")

    logger.info(
        f"Storage sweep completed: {summary['orphans_deleted']} orphans, "
        f"{summary['temp_files_deleted']} temp files deleted, "
        f"{summary['errors']} errors"
    )

    return summary


def start_cleanup_scheduler():
    """
    Start the cleanup scheduler.

    Safe to call multiple times - will not add duplicate jobs.
    """
    if scheduler.running:
        logger.debug("Scheduler already running")
        return

    if not scheduler.get_job(JOB_ID):
        scheduler.add_job(
            sweep_avatar_storage,
            "interval",
            hours=settings.CLEANUP_INTERVAL_HOURS,
            id=JOB_ID,
            name="Sweep profile picture storage",
            replace_existing=True,
        )
        logger.info(
            f"Scheduled storage sweep: every {settings.CLEANUP_INTERVAL_HOURS} hour(s), "
            f"temp file TTL: {settings.TEMP_FILE_TTL_MINUTES} minutes"
        )

    scheduler.start()
    logger.info("Cleanup scheduler started")


def stop_cleanup_scheduler():
    """Stop the cleanup scheduler gracefully."""
    if scheduler.running:
        scheduler.shutdown(wait=False)
        logger.info("Cleanup scheduler stopped")


def get_scheduler_status() -> dict:
    """
    Get current scheduler status for health checks.

    Returns:
        dict: Scheduler status including running state and job info
    """
    job = scheduler.get_job(JOB_ID)
    return {
        "running": scheduler.running,
        "job_scheduled": job is not None,
        "next_run": str(job.next_run_time) if job else None,
        "interval_hours": settings.CLEANUP_INTERVAL_HOURS,
        "temp_file_ttl_minutes": settings.TEMP_FILE_TTL_MINUTES,
    }
