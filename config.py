# School Fee Tracker - configuration
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    secret_key: str = "dev-secret-change-in-production"
    database_url: str = "sqlite+aiosqlite:///./school_fees.db"
    access_expire_minutes: int = 60
    cors_origins: list[str] = ["*"]
    # Empty string keeps the audit trail in memory only
    audit_log_file: str = "data/audit_log.jsonl"
    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        extra = "ignore"


def get_settings() -> Settings:
    return Settings()
