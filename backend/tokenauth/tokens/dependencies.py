from fastapi import Depends
from sqlmodel import Session

from ..core.database import get_session
from .service import TokenService
from .store import TokenStore

def get_token_service(session: Session = Depends(get_session)) -> TokenService:
    return TokenService(TokenStore(session))
