import logging

from sqlmodel import Session, select
from .database import engine
from .settings import settings
from ..models.User import User
from ..auth.service import get_password_hash

logger = logging.getLogger(__name__)

def init_db(bind=None):
    if not settings.ADMIN_USERNAME or not settings.ADMIN_PASSWORD:
        logger.info("ADMIN_USERNAME/ADMIN_PASSWORD not set, skipping admin creation.")
        return

    with Session(bind or engine) as session:
        statement = select(User).where(User.username == settings.ADMIN_USERNAME)
        user = session.exec(statement).first()
        
        if not user:
            logger.info("Creating initial admin user: %s", settings.ADMIN_USERNAME)

            admin_user = User(
                username=settings.ADMIN_USERNAME,
                hashed_password=get_password_hash(settings.ADMIN_PASSWORD),
                full_name="Administrator",
                is_active=True,
                is_admin=True,
            )
            
            session.add(admin_user)
            session.commit()
            logger.info("Admin user created successfully.")
        else:
            logger.info("Admin user already exists.")
