from typing import List, Optional
from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    SECRET_KEY: str
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24

    ENVIRONMENT: str = "development"  # "development" or "production"

    ADMIN_API_KEY: str

    # Dashboard frontend, used for OAuth redirects and demo links
    SITE_URL: str = "http://localhost:3000"
    CORS_ORIGINS: List[str] = ["http://localhost:3000"]

    GOOGLE_CLIENT_ID: Optional[str] = None
    GOOGLE_CLIENT_SECRET: Optional[str] = None

    # Every demo session drives the same shared business
    DEMO_BUSINESS_ID: str = "eea1f8b5-f4ed-4141-85c7-c381643ce9df"
    DEMO_PHONE_NUMBER: str = "+12159862752"
    DEMO_SESSION_MINUTES: int = 60

    CONTEXT_LATENCY_TARGET_MS: int = 200

    @property
    def calendar_redirect_uri(self) -> str:
        return f"{self.SITE_URL.rstrip('/')}/api/calendar/callback"

    @property
    def google_oauth_configured(self) -> bool:
        return bool(self.GOOGLE_CLIENT_ID and self.GOOGLE_CLIENT_SECRET)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

settings = Settings()
