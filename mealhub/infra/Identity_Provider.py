"""Session-based identity resolution.

Credentials are verified elsewhere; this module only maps an opaque session
token to a user, and issues/revokes such tokens.
"""
import logging
import secrets
from datetime import datetime, timedelta, timezone
from typing import Optional

from mealhub.domain.User import User
from mealhub.infra.Document_Store import DocumentStore
from mealhub.infra.User_Repository import UserRepository
from mealhub.utilities.config import SESSION_TTL_DAYS
from mealhub.utilities.constants import SESSIONS

logger = logging.getLogger(__name__)


class IdentityProvider:
    def __init__(self, store: DocumentStore, users: UserRepository):
        self.store = store
        self.users = users

    def issue(self, user_id: str, ttl_days: int = SESSION_TTL_DAYS) -> str:
        token = secrets.token_urlsafe(32)
        expires = datetime.now(timezone.utc) + timedelta(days=ttl_days)
        self.store.set(SESSIONS, token, {'userId': user_id, 'expiresAt': expires.isoformat()})
        return token

    def revoke(self, token: str) -> None:
        if token:
            self.store.delete(SESSIONS, token)

    def resolve(self, token: Optional[str]) -> Optional[User]:
        """Return the session's user, or None for a missing/unknown/expired session."""
        if not token:
            return None
        session = self.store.get(SESSIONS, token)
        if session is None:
            return None
        try:
            expires = datetime.fromisoformat(session.get('expiresAt') or '')
        except (TypeError, ValueError):
            expires = None
        if expires is None or expires.tzinfo is None:
            logger.warning("Session with unreadable expiry dropped")
            self.revoke(token)
            return None
        if expires <= datetime.now(timezone.utc):
            self.revoke(token)
            return None
        return self.users.get(session.get('userId', ''))
