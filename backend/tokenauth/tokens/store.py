import logging
from datetime import datetime, timedelta
from typing import Callable

from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from ..core.crypto import hash_token_secret
from ..models.UserToken import UserToken, utc_now
from .exceptions import Conflict

logger = logging.getLogger(__name__)


class TokenStore:
    """
    Persistence for token records.

    Lookups return records whether or not they have expired; deciding
    what an expired record means is left to TokenService.
    """

    def __init__(self, session: Session, clock: Callable[[], datetime] = utc_now):
        self.session = session
        self.clock = clock

    def insert(self, user_id: int, secret: str, ttl: timedelta) -> UserToken:
        token = UserToken(
            secret_hash=hash_token_secret(secret),
            user_id=user_id,
            expires_at=self.clock() + ttl,
        )
        self.session.add(token)
        try:
            self.session.commit()
        except IntegrityError as e:
            self.session.rollback()
            # The unique index on secret_hash is the only collision guard
            if "secret_hash" in str(e.orig):
                logger.debug("Unique violation on secret_hash for user %s", user_id)
                raise Conflict("Token secret already in use") from e
            logger.error("Could not store token for user %s: %s", user_id, e.orig)
            raise
        self.session.refresh(token)
        return token

    def find_by_secret(self, secret: str) -> UserToken | None:
        statement = select(UserToken).where(UserToken.secret_hash == hash_token_secret(secret))
        return self.session.exec(statement).first()

    def find_by_owner(self, user_id: int) -> list[UserToken]:
        statement = select(UserToken).where(UserToken.user_id == user_id).order_by(UserToken.id)
        return list(self.session.exec(statement).all())

    def get(self, token_id: int) -> UserToken | None:
        return self.session.get(UserToken, token_id)

    def delete(self, token_id: int) -> bool:
        token = self.session.get(UserToken, token_id)
        if not token:
            return False
        self.session.delete(token)
        self.session.commit()
        return True

    def delete_by_owner(self, user_id: int) -> int:
        tokens = self.find_by_owner(user_id)
        for token in tokens:
            self.session.delete(token)
        self.session.commit()
        return len(tokens)
