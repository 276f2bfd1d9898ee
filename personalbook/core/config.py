from pydantic_settings import BaseSettings
from typing import List, Any, Optional
import json
from urllib.parse import quote
from pathlib import Path


def parse_cors_origins(v: Any) -> List[str]:
    """Parse CORS origins from string or list"""
    if isinstance(v, list):
        return v
    if isinstance(v, str):
        # Try JSON parsing first
        if v.startswith('['):
            try:
                return json.loads(v)
            except json.JSONDecodeError:
                pass
        # Fall back to comma-separated
        return [origin.strip() for origin in v.split(',') if origin.strip()]
    return []


class Settings(BaseSettings):
    """Application settings - all configurable via environment variables"""

    # ==========================================
    # Application
    # ==========================================
    APP_NAME: str = "Personal Book"
    APP_VERSION: str = "1.0.0"
    ENVIRONMENT: str = "development"
    DEBUG: bool = True

    # Server Configuration
    SERVER_HOST: str = "0.0.0.0"
    SERVER_PORT: int = 5000

    # ==========================================
    # Database
    # ==========================================
    DATABASE_URL: str
    DB_ECHO: bool = False
    DB_POOL_SIZE: int = 10
    DB_MAX_OVERFLOW: int = 20
    DB_POOL_TIMEOUT: int = 30
    DB_POOL_RECYCLE: int = 1800  # 30 minutes

    # ==========================================
    # Authentication
    # ==========================================
    JWT_SECRET_KEY: str
    JWT_ALGORITHM: str = "HS256"
    # None keeps tokens long-lived (no exp claim)
    ACCESS_TOKEN_EXPIRE_MINUTES: Optional[int] = None
    BCRYPT_ROUNDS: int = 12  # 4 for dev (fast), 12 for prod (secure)

    # ==========================================
    # Master account (seeded at startup when absent)
    # ==========================================
    MASTER_EMAIL: str = "admin@example.com"
    MASTER_PASSWORD: str = "admin123"
    MASTER_USERNAME: str = "Master Admin"

    # ==========================================
    # Users & profiles
    # ==========================================
    SECRET_ID_MAX_ATTEMPTS: int = 10
    PUBLIC_PROFILE_BASE_URL: str = "http://localhost:3000/p"
    DEFAULT_AVATAR_URL: str = "https://api.dicebear.com/7.x/avataaars/svg"

    # ==========================================
    # Email (registration notification)
    # ==========================================
    NOTIFICATIONS_ENABLED: bool = True
    SMTP_HOST: str = "smtp.gmail.com"
    SMTP_PORT: int = 587
    SMTP_USER: str = ""
    SMTP_PASSWORD: str = ""
    SMTP_START_TLS: bool = True
    EMAIL_FROM: str = "noreply@personalbook.app"
    EMAIL_FROM_NAME: str = "Personal Book"

    # ==========================================
    # CORS (stored as comma-separated string, parsed to list)
    # ==========================================
    CORS_ORIGINS_STR: str = "http://localhost:3000,http://localhost:5173,http://127.0.0.1:3000,http://127.0.0.1:5173"

    @property
    def CORS_ORIGINS(self) -> List[str]:
        """Parse CORS origins from comma-separated string"""
        return parse_cors_origins(self.CORS_ORIGINS_STR)

    # ==========================================
    # Requests
    # ==========================================
    # Profile documents embed images as data URLs
    MAX_REQUEST_SIZE: int = 10485760  # 10MB

    # ==========================================
    # Logging
    # ==========================================
    LOG_LEVEL: str = "INFO"
    LOG_FILE: str = "logs/app.log"

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"  # Ignore extra fields in .env that aren't defined in Settings

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        if self.LOG_FILE:
            Path(self.LOG_FILE).parent.mkdir(exist_ok=True, parents=True)

    def is_dev_mode(self) -> bool:
        """Check if running in development mode"""
        return self.ENVIRONMENT == "development" or self.DEBUG

    def get_share_url(self, public_link_key: str) -> str:
        """Get public share URL for a profile"""
        return f"{self.PUBLIC_PROFILE_BASE_URL.rstrip('/')}/{public_link_key}"

    def get_default_avatar(self, seed: str) -> str:
        """Get the default avatar image URL for a new profile"""
        return f"{self.DEFAULT_AVATAR_URL}?seed={quote(seed)}"


# Create settings instance
settings = Settings()
