from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List, Optional

class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite:///./bisa.db"
    DEBUG: bool = True
    # Overrides the DEBUG-derived level when set, e.g. "WARNING"
    LOG_LEVEL: Optional[str] = None
    AUTO_CREATE_TABLES: bool = True

    SECRET_KEY: str = "your-super-secret-jwt-signing-key-here"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 15
    REFRESH_TOKEN_EXPIRE_DAYS: int = 7

    CORS_ORIGINS: List[str] = ["http://localhost:8081", "http://localhost:19006"]
    FIREBASE_PROJECT_ID: Optional[str] = None

    # Fact-check provider
    FACTCHECK_AI_SERVICE_URL: str = "https://api.openai.com/v1/chat/completions"
    FACTCHECK_AI_API_KEY: str = ""
    FACTCHECK_AI_MODEL: str = "gpt-4"
    FACTCHECK_ENABLE_MOCK: bool = True
    FACTCHECK_TIMEOUT_SECONDS: float = 30.0
    FACTCHECK_MAX_RESPONSE_BYTES: int = 2 * 1024 * 1024
    FACTCHECK_FRESHNESS_HOURS: int = 24

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True, extra="ignore")

settings = Settings()
