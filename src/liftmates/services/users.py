"""User profile service."""

import logging

from ..db.repositories import UserRepository
from ..db.store import DataStore
from ..errors import NotFoundError
from ..models.partner import UserProfile
from ..session import Session

logger = logging.getLogger(__name__)


class UserService:
    """Creates and resolves user profiles for a session."""

    def __init__(self, store: DataStore):
        self.users = UserRepository(store)

    async def create_profile(
        self,
        session: Session,
        email: str,
        name: str,
        username: str,
        height: float | None = None,
        weight: float | None = None,
    ) -> UserProfile:
        """Create the profile for the session's auth identity."""
        auth_id = session.require_auth_id()
        profile = await self.users.create(
            UserProfile(
                auth_id=auth_id,
                email=email,
                name=name,
                username=username,
                height=height,
                weight=weight,
            )
        )
        logger.info("Created profile %s for %s", profile.id, username)
        return profile

    async def get_current_profile(self, session: Session) -> UserProfile:
        """Return the session's profile.

        Raises:
            AuthenticationError: no active session
            NotFoundError: the auth identity has no profile yet
        """
        auth_id = session.require_auth_id()
        profile = await self.users.get_by_auth_id(auth_id)
        if profile is None:
            raise NotFoundError("User profile not found")
        return profile

    async def resolve_user_id(self, session: Session) -> str:
        """Return the profile id for the session, looking it up if needed."""
        session.require_auth_id()
        if session.user_id is not None:
            return session.user_id
        profile = await self.get_current_profile(session)
        return profile.id
