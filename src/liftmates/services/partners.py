"""Training partner invitations and partner statistics."""

import logging
from datetime import datetime

from ..db.repositories import PartnerRepository, UserRepository, WorkoutRepository
from ..db.store import DataStore
from ..errors import NotFoundError
from ..models.partner import PartnerLink, PartnerStatus, UserProfile
from ..models.stats import PartnerStats
from ..session import Session
from .stats import start_of_week, summarize_week
from .users import UserService

logger = logging.getLogger(__name__)


class PartnerService:
    """Manages partner links between users."""

    def __init__(self, store: DataStore):
        self.partners = PartnerRepository(store)
        self.users = UserRepository(store)
        self.workouts = WorkoutRepository(store)
        self.user_service = UserService(store)

    async def search_users(self, session: Session, query: str, limit: int = 10) -> list[UserProfile]:
        """Find users by name or username, skipping self and existing invites."""
        me = await self.user_service.get_current_profile(session)
        excluded = set(await self.partners.invited_ids(me.id))
        excluded.add(me.id)

        matches: dict[str, UserProfile] = {}
        for column in ("username", "name"):
            for profile in await self.users.search(column, query):
                if profile.id not in excluded:
                    matches.setdefault(profile.id, profile)
        return list(matches.values())[:limit]

    async def send_invite(self, session: Session, partner_id: str) -> PartnerLink:
        """Create a pending invite from the current user to ``partner_id``.

        A second invite for the same pair is rejected by the store and
        surfaces as PersistenceError.
        """
        user_id = await self.user_service.resolve_user_id(session)
        if await self.users.get(partner_id) is None:
            raise NotFoundError(f"User {partner_id} not found")
        link = await self.partners.create(
            PartnerLink(user_id=user_id, partner_id=partner_id, status=PartnerStatus.PENDING)
        )
        logger.info("Invite %s sent from %s to %s", link.id, user_id, partner_id)
        return link

    async def get_partners(self, session: Session) -> dict[str, list[PartnerLink]]:
        """Invites sent and received by the current user."""
        user_id = await self.user_service.resolve_user_id(session)
        return {
            "sent": await self.partners.list_sent(user_id),
            "received": await self.partners.list_received(user_id),
        }

    async def respond_to_invite(
        self, session: Session, invite_id: str, status: PartnerStatus
    ) -> None:
        """Accept or reject an invite addressed to the current user."""
        user_id = await self.user_service.resolve_user_id(session)
        status = PartnerStatus(status)
        if status == PartnerStatus.PENDING:
            raise ValueError("An invite can only be accepted or rejected")
        link = await self.partners.get(invite_id)
        if link is None or link.partner_id != user_id:
            raise NotFoundError(f"Invite {invite_id} not found")
        await self.partners.update(invite_id, {"status": status.value})
        logger.info("Invite %s %s", invite_id, status.value)

    async def cancel_invite(self, session: Session, invite_id: str) -> None:
        """Remove an invite the current user sent or received."""
        user_id = await self.user_service.resolve_user_id(session)
        link = await self.partners.get(invite_id)
        if link is None or user_id not in (link.user_id, link.partner_id):
            raise NotFoundError(f"Invite {invite_id} not found")
        await self.partners.delete(invite_id)
        logger.info("Invite %s cancelled", invite_id)

    async def toggle_favorite_partner(
        self, session: Session, partner_id: str, is_favorite: bool
    ) -> None:
        """Flag an accepted partner as a favorite."""
        user_id = await self.user_service.resolve_user_id(session)
        await self.partners.set_favorite(user_id, partner_id, is_favorite)

    async def get_partner_stats(
        self, session: Session, partner_id: str, now: datetime | None = None
    ) -> PartnerStats:
        """This week's statistics for a partner."""
        user_id = await self.user_service.resolve_user_id(session)
        partner = await self.users.get(partner_id)
        if partner is None:
            raise NotFoundError("Partner not found")

        link = await self.partners.get_link(user_id, partner_id, PartnerStatus.ACCEPTED)

        now = now or datetime.now().astimezone()
        workouts = await self.workouts.list_for_user(partner_id, start_of_week(now), now)
        week = summarize_week(workouts)
        return PartnerStats(
            name=partner.name,
            username=partner.username,
            is_favorite=link.is_favorite if link else False,
            **week.to_dict(),
        )
