from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Database (the only connection string the portal reads)
    DATABASE_URL: str = "sqlite:///./jobportal.db"

    # JWT Authentication
    SECRET_KEY: str = "change-me-jobportal-signing-key-0123456789abcdef"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 24 * 60

    # Password hashing work factor
    BCRYPT_ROUNDS: int = 12

    # Application
    APP_NAME: str = "JobPortal"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    BACKEND_CORS_ORIGINS: str = "*"

    # Pagination
    DEFAULT_PAGE_SIZE: int = 10
    MAX_PAGE_SIZE: int = 100


settings = Settings()
