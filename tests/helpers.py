from datetime import datetime, timedelta, timezone

from sqlmodel import SQLModel, Session

from tokenauth.core.database import build_engine
from tokenauth.models.User import User
from tokenauth.models.UserToken import UserToken  # noqa: F401 (registers the table)

T0 = datetime(2026, 1, 1, 12, 0, 0, tzinfo=timezone.utc)


class FakeClock:
    def __init__(self, now: datetime = T0):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs):
        self.now = self.now + timedelta(**kwargs)


def make_engine(url: str = "sqlite://"):
    engine = build_engine(url)
    SQLModel.metadata.create_all(engine)
    return engine


def add_user(session: Session, username: str, hashed_password: str = "not-a-real-hash", **kwargs) -> User:
    user = User(username=username, hashed_password=hashed_password, **kwargs)
    session.add(user)
    session.commit()
    session.refresh(user)
    return user
