from sqlmodel import Field, SQLModel

# ==========================================
# SQLModel (Database Entity + Base Pydantic)
# ==========================================
class User(SQLModel, table=True):
    __tablename__ = "users"

    id: int | None = Field(default=None, primary_key=True)
    username: str = Field(unique=True, index=True, nullable=False)
    hashed_password: str = Field(nullable=False)
    full_name: str | None = Field(default=None, nullable=True)
    is_active: bool = Field(default=True)
    is_admin: bool = Field(default=False)

# ==========================================
# Pydantic Models (DTOs)
# ==========================================

# Properties to receive via API on creation (Admin)
class UserCreate(SQLModel):
    username: str
    password: str
    full_name: str | None = None
    is_admin: bool = False

# Properties to receive via API on login
class LoginRequest(SQLModel):
    username: str
    password: str

# Properties to return via API
class UserResponse(SQLModel):
    id: int
    username: str
    full_name: str | None = None
    is_active: bool
    is_admin: bool
