# quintave/core/config.py

from pathlib import Path
from pydantic_settings import BaseSettings, SettingsConfigDict

# Get the project root directory (where .env should be located)
BASE_DIR = Path(__file__).resolve().parent.parent.parent

class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=str(BASE_DIR / ".env"),
        env_file_encoding='utf-8',
        case_sensitive=True,
        extra="ignore"
    )

    # App Configuration
    APP_NAME: str = "Quintave API"
    DEBUG: bool = False
    VERSION: str = "1.0.0"

    # Database Configuration
    DATABASE_URL: str

    # JWT / Session Configuration
    SECRET_KEY: str
    ALGORITHM: str = "HS256"
    SESSION_COOKIE_NAME: str = "app_session_id"
    SESSION_TTL_SECONDS: int = 365 * 24 * 60 * 60  # one year
    COOKIE_SECURE: bool = False

    # CORS / Redirect Configuration
    FRONTEND_URL: str = "http://localhost:3000"
    APP_URL: str = "http://localhost:3000"
    NATIVE_OAUTH_REDIRECT: str = "quintave://oauth/callback?success=true"

    # Google OAuth Configuration
    GOOGLE_CLIENT_ID: str = ""
    GOOGLE_CLIENT_SECRET: str = ""

    # RevenueCat webhook shared secret (sent verbatim in the Authorization header)
    REVENUECAT_WEBHOOK_SECRET: str = ""

    # Envelope budgeting / paywall rules
    TRIAL_DAYS: int = 30
    MAX_BUCKETS: int = 5

    # Optional: Environment
    ENVIRONMENT: str = "development"

    @property
    def is_sqlite(self) -> bool:
        """SQLite engines (tests, local dev) don't take pool sizing arguments"""
        return self.DATABASE_URL.startswith("sqlite")

    @property
    def oauth_redirect_uri(self) -> str:
        return f"{self.APP_URL.rstrip('/')}/api/oauth/callback"

# Create a global settings instance
settings = Settings()
