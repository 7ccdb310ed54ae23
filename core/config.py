"""
Application configuration using Pydantic Settings
"""

from pydantic_settings import BaseSettings
from typing import List, Optional


class Settings(BaseSettings):
    """Application settings with environment variable support"""

    # Database
    DATABASE_URL: str = "sqlite+aiosqlite:///./data/disclosures.db"

    # API
    API_HOST: str = "0.0.0.0"
    API_PORT: int = 3001
    CORS_ORIGINS: str = "http://localhost:5173,http://localhost:3000"

    # Environment
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"

    # SEC EDGAR (requires a descriptive User-Agent)
    SEC_USER_AGENT: str = "Disclosure Tracker (educational project) admin@example.com"
    SEC_FORM4_FEED_URL: str = (
        "https://www.sec.gov/cgi-bin/browse-edgar"
        "?action=getcurrent&type=4&company=&dateb=&owner=only&count=100&output=atom"
    )
    SEC_DATA_BASE_URL: str = "https://data.sec.gov"
    SEC_ARCHIVES_BASE_URL: str = "https://www.sec.gov"
    HTTP_TIMEOUT_SECONDS: float = 30.0

    # Scheduling
    SCHEDULER_ENABLED: bool = True
    INSIDER_FETCH_INTERVAL_MINUTES: int = 5
    CONGRESS_FETCH_INTERVAL_MINUTES: int = 60
    HOLDINGS_FETCH_HOUR: int = 6
    INITIAL_FETCH_DELAY_SECONDS: int = 2

    # Sample data
    CONGRESS_SAMPLE_SIZE: int = 250
    CONGRESS_SAMPLE_SEED: Optional[int] = None

    @property
    def cors_origins(self) -> List[str]:
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"


settings = Settings()
