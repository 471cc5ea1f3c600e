import os
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional

class Settings(BaseSettings):
    APP_NAME: str = "Flect Analytics"
    ENV: str = os.getenv("ENV", "development")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    # AI relay (serverless function that forwards check-ins to the LLM)
    AI_RELAY_URL: str = os.getenv("AI_RELAY_URL", "http://localhost:54321/functions/v1/process-check-in")
    AI_RELAY_API_KEY: Optional[str] = os.getenv("AI_RELAY_API_KEY") or None
    AI_RELAY_TIMEOUT_SECONDS: float = float(os.getenv("AI_RELAY_TIMEOUT_SECONDS", "10.0"))
    AI_HISTORY_SAMPLE_SIZE: int = int(os.getenv("AI_HISTORY_SAMPLE_SIZE", "10"))

    # Internal features / flags
    AI_ENRICHMENT_ENABLED: bool = os.getenv("AI_ENRICHMENT_ENABLED", "1") in ("1", "true", "True")

    # Pydantic v2 settings config
    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")

def _load_settings() -> "Settings":
    s = Settings()
    if s.AI_RELAY_TIMEOUT_SECONDS <= 0:
        # Timeout must stay positive
        s.AI_RELAY_TIMEOUT_SECONDS = 10.0
    s.LOG_LEVEL = s.LOG_LEVEL.upper()
    return s

settings = _load_settings()
