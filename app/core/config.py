from pydantic_settings import BaseSettings
from typing import Optional

class Settings(BaseSettings):
    # Database
    DATABASE_URL: Optional[str] = None
    DB_HOST: str = "localhost"
    DB_PORT: int = 5432
    DB_USER: str = "chantier"
    DB_PASSWORD: str = "chantier_password"
    DB_NAME: str = "chantier_db"
    DB_ECHO: bool = False
    CREATE_TABLES_ON_STARTUP: bool = True

    @property
    def database_url(self) -> str:
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return f"postgresql://{self.DB_USER}:{self.DB_PASSWORD}@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}"

    # URLs
    FRONTEND_URL: str = "http://localhost:3000"

    # Logging
    LOG_LEVEL: str = "INFO"

    # Stats cascade: when enabled, task mutations also recompute the stats
    # of the team(s) the task belongs to.
    CASCADE_TEAM_STATS: bool = False

    class Config:
        env_file = ".env"
        extra = "ignore"  # Allow extra fields in .env file

settings = Settings()
