"""Application settings and validation."""

import os
from pathlib import Path

BASE = Path(__file__).resolve().parent.parent
DEFAULT_JWT_SECRET = "change_me_for_prod"
RELAXED_ENVS = ("dev", "test")


class Settings:
    ENV: str
    DATABASE_URL: str
    JWT_SECRET: str
    JWT_ALGORITHM: str
    JWT_EXPIRE_SECONDS: int
    LOG_LEVEL: str
    ALLOW_DEV_CORS: bool

    def __init__(self):
        self.ENV = os.getenv("ENV", "dev").lower()
        if self.ENV == "test":
            self.DATABASE_URL = os.getenv("TEST_DATABASE_URL", "sqlite://")
        elif self.ENV == "dev":
            self.DATABASE_URL = os.getenv("DATABASE_URL", f"sqlite:///{BASE / 'bloglist.db'}")
        else:
            self.DATABASE_URL = os.getenv("DATABASE_URL", "")
        self.JWT_SECRET = os.getenv("JWT_SECRET", DEFAULT_JWT_SECRET if self.ENV in RELAXED_ENVS else "")
        self.JWT_ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")
        self.JWT_EXPIRE_SECONDS = int(os.getenv("JWT_EXPIRE_SECONDS", "3600"))  # one hour
        self.LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
        self.ALLOW_DEV_CORS = os.getenv("ALLOW_DEV_CORS", "true").lower() == "true"
        self._validate()

    def _validate(self):
        if not self.DATABASE_URL:
            raise RuntimeError("DATABASE_URL must be set outside dev/test environments")
        if not self.JWT_SECRET:
            raise RuntimeError("JWT_SECRET must be set")
        if self.ENV not in RELAXED_ENVS and self.JWT_SECRET == DEFAULT_JWT_SECRET:
            raise RuntimeError("JWT_SECRET must be set to a non-default value in non-dev environments")
        if self.JWT_EXPIRE_SECONDS <= 0:
            raise RuntimeError("JWT_EXPIRE_SECONDS must be positive")

    @property
    def is_test(self) -> bool:
        return self.ENV == "test"
