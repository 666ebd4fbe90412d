"""Background jobs."""

from tasknest.infrastructure.scheduling.expiry_sweep import (
    run_expiry_sweep,
    shutdown_scheduler,
    start_scheduler,
)

__all__ = ["run_expiry_sweep", "shutdown_scheduler", "start_scheduler"]
