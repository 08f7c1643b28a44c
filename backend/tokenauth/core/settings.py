from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    PROJECT_NAME: str = "TokenAuth"
    DATABASE_URL: str = "sqlite:///./data/tokenauth.db"

    # Token Config
    TOKEN_TTL_HOURS: int = 48
    TOKEN_ISSUE_ATTEMPTS: int = 3
    AUTH_TIMEOUT_SECONDS: float = 5.0
    TOKEN_HASH_KEY: str

    # Security
    PASSWORD_PEPPER: str

    # Initial admin (optional, skipped when unset)
    ADMIN_USERNAME: str | None = None
    ADMIN_PASSWORD: str | None = None

    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(env_file=".env")

settings = Settings()
