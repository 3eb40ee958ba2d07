"""Explicit user session handle passed into every service call."""

from dataclasses import dataclass

from .errors import AuthenticationError


@dataclass(frozen=True)
class Session:
    """The signed-in user, as reported by the auth provider.

    ``auth_id`` is the identity issued by the auth provider. ``user_id`` is
    the id of the matching row in the ``users`` table, when the caller
    already knows it; services look it up from ``auth_id`` otherwise.
    """

    auth_id: str | None = None
    user_id: str | None = None

    def get_current_user_id(self) -> str | None:
        """Return the auth identity, or None when signed out."""
        return self.auth_id

    def require_auth_id(self) -> str:
        """Return the auth identity or raise AuthenticationError."""
        auth_id = self.get_current_user_id()
        if auth_id is None:
            raise AuthenticationError()
        return auth_id


ANONYMOUS = Session()
