from fastapi import APIRouter, Depends, HTTPException, status
from sqlmodel import Session
from ..core.database import get_session
from ..models.User import UserCreate, UserResponse, User
from ..models.UserToken import UserTokenPublic
from ..auth.service import get_current_active_admin, get_current_user
from ..tokens.dependencies import get_token_service
from ..tokens.service import TokenService
from .service import create_user, delete_user, get_all_users

router = APIRouter(prefix="/users", tags=["users"])

@router.post("", status_code=status.HTTP_201_CREATED, response_model=UserResponse)
async def create_new_user(
    user: UserCreate, 
    session: Session = Depends(get_session),
    current_admin: User = Depends(get_current_active_admin)
):
    """
    Create a new user (Admin only).
    """
    return await create_user(session, user)

@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user_endpoint(
    user_id: int, 
    session: Session = Depends(get_session),
    token_service: TokenService = Depends(get_token_service),
    current_admin: User = Depends(get_current_active_admin)
):
    """
    Delete a user and all of their tokens (Admin only).
    """
    await delete_user(session, token_service, user_id)
    return None

@router.get("", response_model=list[UserResponse])
async def read_users(
    session: Session = Depends(get_session),
    current_admin: User = Depends(get_current_active_admin)
):
    """
    List all users (Admin only).
    """
    return await get_all_users(session)

@router.get("/me", response_model=UserResponse)
async def read_current_user(current_user: User = Depends(get_current_user)):
    """
    Return the account the bearer token belongs to.
    """
    return current_user

@router.get("/{user_id}/tokens", response_model=list[UserTokenPublic])
async def read_user_tokens(
    user_id: int,
    session: Session = Depends(get_session),
    token_service: TokenService = Depends(get_token_service),
    current_admin: User = Depends(get_current_active_admin)
):
    """
    List every token of a user, expired ones included (Admin only).
    """
    if not session.get(User, user_id):
        raise HTTPException(status_code=404, detail="User not found")

    now = token_service.now()
    return [
        UserTokenPublic(
            id=token.id,
            user_id=token.user_id,
            expires_at=token.expires_at,
            active=not token.is_expired(now),
        )
        for token in token_service.list_tokens(user_id)
    ]
