import logging

from fastapi import HTTPException
from sqlmodel import Session, select

from ..models.User import User, UserCreate
from ..auth.service import get_password_hash
from ..tokens.service import TokenService

logger = logging.getLogger(__name__)

async def create_user(session: Session, user: UserCreate):
    statement = select(User).where(User.username == user.username)
    db_user = session.exec(statement).first()
    if db_user:
        raise HTTPException(status_code=400, detail="Username already registered")

    db_user = User(
        username=user.username,
        hashed_password=get_password_hash(user.password),
        full_name=user.full_name,
        is_active=True,
        is_admin=user.is_admin
    )
    session.add(db_user)
    session.commit()
    session.refresh(db_user)
    logger.info("Created user %s (id=%s)", db_user.username, db_user.id)
    return db_user

async def delete_user(session: Session, token_service: TokenService, user_id: int):
    db_user = session.get(User, user_id)
    if not db_user:
        raise HTTPException(status_code=404, detail="User not found")
    if db_user.is_admin:
        raise HTTPException(status_code=403, detail="Administrators cannot be deleted")

    # Tokens go first so nothing can authenticate as the deleted account
    token_service.revoke_all(user_id)

    session.delete(db_user)
    session.commit()
    logger.info("Deleted user %s", user_id)
    return True

async def get_all_users(session: Session):
    return session.exec(select(User).order_by(User.id)).all()
