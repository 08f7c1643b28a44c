from typing import Annotated
from fastapi import APIRouter, Depends, HTTPException, status
from sqlmodel import Session
from ..core.database import get_session
from ..models.User import LoginRequest, User
from ..models.UserToken import Token
from ..tokens.dependencies import get_token_service
from ..tokens.exceptions import IssuanceFailed
from ..tokens.service import TokenService
from .service import authenticate_user, get_bearer_secret, get_current_user

router = APIRouter(prefix="/auth", tags=["auth"])

@router.post("/login", response_model=Token)
async def login(
    login_data: LoginRequest,
    session: Session = Depends(get_session),
    token_service: TokenService = Depends(get_token_service),
):
    """
    Login with username and password to get a bearer token.
    """
    user = await authenticate_user(session, login_data.username, login_data.password)

    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect username or password",
            headers={"WWW-Authenticate": "Bearer"},
        )

    try:
        issued = token_service.issue(user.id)
    except IssuanceFailed:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Could not issue token",
        )
    return Token(access_token=issued.secret, token_type="bearer", expires_at=issued.expires_at)


@router.post("/logout")
async def logout(
    current_user: Annotated[User, Depends(get_current_user)],
    secret: Annotated[str, Depends(get_bearer_secret)],
    token_service: TokenService = Depends(get_token_service),
):
    """
    Logout the current session by deleting the presented token.
    """
    token_service.revoke(secret)
    return {"message": "Logged out successfully"}


@router.post("/logout-all")
async def logout_all(
    current_user: Annotated[User, Depends(get_current_user)],
    token_service: TokenService = Depends(get_token_service),
):
    """
    Delete every token of the current user (logout everywhere).
    """
    count = token_service.revoke_all(current_user.id)
    return {"message": "Logged out from all sessions", "revoked": count}
