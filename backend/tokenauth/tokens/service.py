import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Callable

from sqlmodel import Session

from ..core.crypto import generate_token_secret
from ..core.settings import settings
from ..models.UserToken import UserToken
from .exceptions import Conflict, Expired, IssuanceFailed, NotFound
from .store import TokenStore

logger = logging.getLogger(__name__)


@dataclass
class IssuedToken:
    secret: str
    expires_at: datetime


class TokenService:
    """
    Issues and validates bearer tokens on top of a TokenStore.

    A token is Active while now < expires_at, Expired afterwards and
    Deleted once removed from the store. Nothing moves a token back to
    Active; a new login issues a new token.
    """

    def __init__(
        self,
        store: TokenStore,
        ttl: timedelta | None = None,
        max_attempts: int | None = None,
        generator: Callable[[], str] = generate_token_secret,
    ):
        self.store = store
        self.ttl = ttl if ttl is not None else timedelta(hours=settings.TOKEN_TTL_HOURS)
        self.max_attempts = max_attempts if max_attempts is not None else settings.TOKEN_ISSUE_ATTEMPTS
        self.generator = generator

    def now(self) -> datetime:
        return self.store.clock()

    def bound_to(self, session: Session) -> "TokenService":
        """
        Returns a service with the same TTL, retry bound, generator and clock
        working on another session.
        """
        return TokenService(
            TokenStore(session, clock=self.store.clock),
            ttl=self.ttl,
            max_attempts=self.max_attempts,
            generator=self.generator,
        )

    def issue(self, user_id: int) -> IssuedToken:
        """
        Creates a token for user_id and returns the plaintext secret.
        This is the only place the plaintext is available.
        """
        for attempt in range(1, self.max_attempts + 1):
            secret = self.generator()
            try:
                token = self.store.insert(user_id, secret, self.ttl)
            except Conflict:
                logger.warning("Token secret collision for user %s (attempt %d/%d)", user_id, attempt, self.max_attempts)
                continue
            logger.info("Issued token %s for user %s, expires at %s", token.id, user_id, token.expires_at.isoformat())
            return IssuedToken(secret=secret, expires_at=token.expires_at)

        logger.error("Token issuance for user %s failed after %d attempts", user_id, self.max_attempts)
        raise IssuanceFailed(f"Could not issue a unique token after {self.max_attempts} attempts")

    def authenticate(self, secret: str) -> int:
        """
        Returns the owning user id for a presented secret.
        Raises NotFound for unknown secrets and Expired once the TTL has passed.
        """
        if not secret:
            raise NotFound("Empty token")

        token = self.store.find_by_secret(secret)
        if token is None:
            raise NotFound("Unknown token")

        if token.is_expired(self.now()):
            raise Expired(token.id, token.expires_at)

        return token.user_id

    def revoke(self, secret: str) -> bool:
        token = self.store.find_by_secret(secret)
        if token is None:
            return False
        self.store.delete(token.id)
        logger.info("Revoked token %s of user %s", token.id, token.user_id)
        return True

    def revoke_all(self, user_id: int) -> int:
        count = self.store.delete_by_owner(user_id)
        logger.info("Revoked %d token(s) of user %s", count, user_id)
        return count

    def list_tokens(self, user_id: int) -> list[UserToken]:
        return self.store.find_by_owner(user_id)

    def revoke_token(self, token_id: int) -> bool:
        token = self.store.get(token_id)
        if token is None:
            return False
        user_id = token.user_id
        self.store.delete(token_id)
        logger.info("Revoked token %s of user %s", token_id, user_id)
        return True
