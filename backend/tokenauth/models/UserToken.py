from datetime import datetime, timezone
from sqlmodel import SQLModel, Field

def utc_now() -> datetime:
    return datetime.now(timezone.utc)

class UserToken(SQLModel, table=True):
    """
    Opaque bearer token bound to a user account.
    The record is treated as deleted once expires_at has passed.
    """
    __tablename__ = "user_tokens"

    id: int | None = Field(default=None, primary_key=True)
    secret_hash: str = Field(unique=True, index=True, nullable=False)
    user_id: int = Field(foreign_key="users.id", index=True, nullable=False)
    expires_at: datetime = Field(nullable=False)

    def is_expired(self, now: datetime) -> bool:
        return self.expires_at <= now

# Properties to return via API (the secret never leaves after login)
class UserTokenPublic(SQLModel):
    id: int
    user_id: int
    expires_at: datetime
    active: bool

class Token(SQLModel):
    access_token: str # Bearer secret
    token_type: str # Token type
    expires_at: datetime
