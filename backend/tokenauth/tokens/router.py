from fastapi import APIRouter, Depends, status
from ..models.User import User
from ..auth.service import get_current_active_admin
from .dependencies import get_token_service
from .service import TokenService

router = APIRouter(prefix="/tokens", tags=["tokens"])

@router.delete("/{token_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_token(
    token_id: int,
    token_service: TokenService = Depends(get_token_service),
    current_admin: User = Depends(get_current_active_admin)
):
    """
    Delete a single token by id (Admin only). Deleting a missing token is not an error.
    """
    token_service.revoke_token(token_id)
    return None
