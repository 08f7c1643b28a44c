import asyncio
import logging
from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from passlib.context import CryptContext
from sqlmodel import Session, select

from ..core.database import get_session
from ..core.settings import settings
from ..models.User import User
from ..tokens.dependencies import get_token_service
from ..tokens.exceptions import Expired, NotFound
from ..tokens.service import TokenService

logger = logging.getLogger(__name__)

# Password hashing
pwd_context = CryptContext(
    schemes=["argon2"], 
    deprecated="auto",
    argon2__time_cost=2, 
    argon2__memory_cost=102400, 
    argon2__parallelism=8
)

# Bearer scheme (for extracting token from header)
# auto_error is off so a missing header gets the same 401 as a bad token
bearer_scheme = HTTPBearer(auto_error=False)

def verify_password(plain_password, hashed_password):
    return pwd_context.verify(plain_password + settings.PASSWORD_PEPPER, hashed_password)

def get_password_hash(password):
    return pwd_context.hash(password + settings.PASSWORD_PEPPER)

def authenticate_in_own_session(token_service: TokenService, secret: str) -> int:
    # Worker threads never share the request session
    with Session(token_service.store.session.get_bind()) as session:
        return token_service.bound_to(session).authenticate(secret)

def credentials_exception() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )

async def authenticate_user(session: Session, username: str, password: str):
    statement = select(User).where(User.username == username)
    user = session.exec(statement).first()
    if not user:
        return False
    if not user.is_active:
        return False
    if not verify_password(password, user.hashed_password):
        return False
    return user

async def get_bearer_secret(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)]
) -> str:
    if credentials is None or credentials.scheme.lower() != "bearer" or not credentials.credentials:
        raise credentials_exception()
    return credentials.credentials

async def get_current_user(
    secret: Annotated[str, Depends(get_bearer_secret)],
    token_service: TokenService = Depends(get_token_service),
    session: Session = Depends(get_session),
):
    """
    Resolves the bearer token of the request to an active user.
    Unknown and expired tokens are indistinguishable to the client.
    """
    try:
        user_id = await asyncio.wait_for(
            asyncio.to_thread(authenticate_in_own_session, token_service, secret),
            timeout=settings.AUTH_TIMEOUT_SECONDS,
        )
    except NotFound:
        logger.info("Rejected request: unknown token")
        raise credentials_exception()
    except Expired as e:
        logger.info("Rejected request: token %s expired at %s", e.token_id, e.expires_at.isoformat())
        raise credentials_exception()
    except asyncio.TimeoutError:
        logger.error("Token lookup exceeded %.1fs", settings.AUTH_TIMEOUT_SECONDS)
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Authentication backend unavailable",
        )

    user = session.get(User, user_id)
    if user is None or not user.is_active:
        logger.warning("Rejected request: token owner %s missing or inactive", user_id)
        raise credentials_exception()
    return user

async def get_current_active_admin(current_user: Annotated[User, Depends(get_current_user)]):
    if not current_user.is_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN, detail="Not enough privileges"
        )
    return current_user
