from contextlib import asynccontextmanager
from fastapi import FastAPI
from .core.database import create_db_and_tables
from .core.logging_config import setup_logging
from .core.settings import settings
from .models.User import User # Import models to register them with SQLModel
from .models.UserToken import UserToken
from .core.init_db import init_db

from .auth.router import router as auth_router
from .users.router import router as users_router
from .tokens.router import router as tokens_router

setup_logging(settings.LOG_LEVEL)

@asynccontextmanager
async def lifespan(app: FastAPI):
    create_db_and_tables()
    init_db()
    yield



app = FastAPI(title=settings.PROJECT_NAME, lifespan=lifespan)

app.include_router(auth_router)
app.include_router(users_router)
app.include_router(tokens_router)

@app.get("/")
def read_root():
    return {"message": f"Welcome to {settings.PROJECT_NAME}"}
