"""Application configuration."""
from pydantic_settings import BaseSettings
from typing import List


class Settings(BaseSettings):
    """Application settings."""

    # Database
    DATABASE_URL: str = "sqlite+aiosqlite:///./groundbook.db"

    # API
    API_HOST: str = "0.0.0.0"
    API_PORT: int = 8000
    DEBUG: bool = True
    LOG_LEVEL: str = "INFO"
    CORS_ORIGINS: List[str] = ["*"]

    # Auth
    JWT_SECRET: str = "replace_with_secure_random_string"
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24 * 7
    BCRYPT_ROUNDS: int = 12

    # Uploads
    UPLOAD_DIR: str = "uploads"
    MAX_UPLOAD_BYTES: int = 5 * 1024 * 1024

    # Payments
    UPI_SCHEME: str = "upi"
    PAYMENT_CURRENCY: str = "INR"

    # Bookings
    ENFORCE_REJECT_OWNERSHIP: bool = True

    class Config:
        env_file = ".env"
        case_sensitive = True


settings = Settings()
