"""Application settings and validation."""

import os
from pathlib import Path

BASE = Path(__file__).resolve().parent.parent
DEFAULT_DB_URL = f"sqlite:///{BASE / 'app.db'}"
IN_MEMORY_URLS = ("sqlite://", "sqlite:///:memory:")


class Settings:
    ENV: str
    DATABASE_URL: str
    DB_ECHO: bool
    LOG_LEVEL: str
    ALLOW_DEV_CORS: bool
    TITLE_SEARCH_CASE_SENSITIVE: bool

    def __init__(self):
        self.ENV = os.getenv("ENV", "dev").lower()
        self.DATABASE_URL = os.getenv("DATABASE_URL", DEFAULT_DB_URL)
        self.DB_ECHO = os.getenv("DB_ECHO", "false").lower() == "true"
        self.LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
        self.ALLOW_DEV_CORS = os.getenv("ALLOW_DEV_CORS", "true").lower() == "true"
        self.TITLE_SEARCH_CASE_SENSITIVE = os.getenv("TITLE_SEARCH_CASE_SENSITIVE", "true").lower() == "true"
        self._validate()

    def _validate(self):
        if self.ENV != "dev" and self.DATABASE_URL in IN_MEMORY_URLS:
            raise RuntimeError("DATABASE_URL must point to a durable database in non-dev environments")


settings = Settings()
