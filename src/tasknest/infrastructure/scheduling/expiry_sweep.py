"""Background expiry sweep.

Runs ``CleanupService.sweep`` on an interval inside the API process using
APScheduler's asyncio scheduler.
"""

from apscheduler.schedulers.asyncio import AsyncIOScheduler

from tasknest.core.config import get_settings
from tasknest.core.logging import LoggingContext, get_logger
from tasknest.domain.services.cleanup_service import CleanupService, SweepResult
from tasknest.infrastructure.persistence.database import get_db_manager
from tasknest.infrastructure.persistence.sql_store import SqlAlchemyLifecycleStore

logger = get_logger(__name__)

SWEEP_JOB_ID = "expiry-sweep"

expiry_scheduler = AsyncIOScheduler()


async def run_expiry_sweep() -> SweepResult:
    """Run one sweep in its own session."""
    with LoggingContext(job="expiry_sweep"):
        async with get_db_manager().session() as session:
            return await CleanupService(SqlAlchemyLifecycleStore(session)).sweep()


async def _scheduled_sweep() -> None:
    try:
        await run_expiry_sweep()
    except Exception as e:
        logger.exception("Expiry sweep failed", error=str(e))


def start_scheduler() -> None:
    if expiry_scheduler.running:
        return
    settings = get_settings()
    expiry_scheduler.add_job(
        _scheduled_sweep,
        "interval",
        minutes=settings.cleanup_interval_minutes,
        id=SWEEP_JOB_ID,
        max_instances=1,
        coalesce=True,
        replace_existing=True,
    )
    expiry_scheduler.start()
    logger.info("Expiry scheduler started", interval_minutes=settings.cleanup_interval_minutes)


def shutdown_scheduler() -> None:
    if expiry_scheduler.running:
        expiry_scheduler.shutdown(wait=False)
        logger.info("Expiry scheduler stopped")
