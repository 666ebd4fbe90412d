"""Periodic removal of expired lifecycle records.

Lazy expiry checks on every read keep behaviour correct without this sweep;
it only keeps the tables small and flips overdue invitations so workspace
statistics stay accurate.
"""

from dataclasses import dataclass

from tasknest.core.logging import get_logger
from tasknest.domain.entities import CodePurpose
from tasknest.domain.expiry import utcnow
from tasknest.domain.services.invitation_service import InvitationService
from tasknest.domain.store import LifecycleStore

logger = get_logger(__name__)


@dataclass
class SweepResult:
    pending_registrations: int = 0
    one_time_codes: int = 0
    invitations: int = 0


class CleanupService:
    """Deletes expired pending registrations and codes, expires invitations."""

    def __init__(self, store: LifecycleStore) -> None:
        self.store = store

    async def sweep(self) -> SweepResult:
        now = utcnow()
        try:
            emails = await self.store.pending_registrations.delete_expired(now)
            codes = 0
            if emails:
                codes = await self.store.one_time_codes.delete_for_emails(
                    emails, CodePurpose.EMAIL_VERIFICATION
                )
            codes += await self.store.one_time_codes.delete_expired(now)
            invitations = await InvitationService(self.store).expire_overdue(now)
            await self.store.commit()
        except Exception:
            await self.store.rollback()
            raise

        result = SweepResult(
            pending_registrations=len(emails),
            one_time_codes=codes,
            invitations=invitations,
        )
        logger.info(
            "Expiry sweep completed",
            pending_registrations=result.pending_registrations,
            one_time_codes=result.one_time_codes,
            invitations=result.invitations,
        )
        return result
