"""Noteboard configuration — loaded from environment / .env file."""

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_prefix="NOTEBOARD_", extra="ignore")

    env: str = "development"  # development | production
    master_key: str = ""  # passphrase the secrets key is derived from
    database_url: str = "sqlite+aiosqlite:///./data/noteboard.db"
    log_level: str = "INFO"
    host: str = "127.0.0.1"
    port: int = 3001

    # Built SPA, served only in production
    frontend_dist: Path = Path("frontend/dist")
    cors_origins: list[str] = ["http://localhost:3000"]

    @property
    def is_production(self) -> bool:
        return self.env.lower() == "production"


settings = Settings()
