from os import getenv
from typing import Optional


def _int_env(name: str, default: int) -> int:
    raw = getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return int(raw)


class Settings:
    """Environment-driven settings.

    Values are read when the object is built, so tests can set env vars and
    create a fresh ``Settings()``.
    """

    def __init__(self):
        # Direct URL bypasses the Cloud SQL connector (local dev, tests)
        self.DATABASE_URL: Optional[str] = getenv("DATABASE_URL") or None

        self.GOOGLE_CLOUD_PROJECT: Optional[str] = getenv("GOOGLE_CLOUD_PROJECT") or None
        self.DB_REGION = getenv("DB_REGION", "us-central1")
        self.DB_INSTANCE = getenv("DB_INSTANCE", "quickstart-instance")
        self.INSTANCE_CONNECTION_NAME: Optional[str] = getenv("INSTANCE_CONNECTION_NAME") or None
        self.DB_IAM_USER: Optional[str] = getenv("DB_IAM_USER") or None
        self.DB_NAME = getenv("DB_NAME", "quickstart_db")
        self.DB_IP_TYPE = getenv("DB_IP_TYPE", "PUBLIC").upper()

        self.DB_POOL_SIZE = _int_env("DB_POOL_SIZE", 5)
        self.DB_MAX_OVERFLOW = _int_env("DB_MAX_OVERFLOW", 2)
        self.DB_POOL_TIMEOUT = _int_env("DB_POOL_TIMEOUT", 30)  # seconds
        self.DB_POOL_RECYCLE = _int_env("DB_POOL_RECYCLE", 1800)

        self.LOG_LEVEL = getenv("LOG_LEVEL", "INFO").upper()

    def instance_connection_name(self, project_id: str) -> str:
        if self.INSTANCE_CONNECTION_NAME:
            return self.INSTANCE_CONNECTION_NAME
        return f"{project_id}:{self.DB_REGION}:{self.DB_INSTANCE}"

    def iam_user(self, project_id: str) -> str:
        # Postgres sees service accounts without the ".gserviceaccount.com" suffix
        if self.DB_IAM_USER:
            return self.DB_IAM_USER
        return f"quickstart-service-account@{project_id}.iam"


settings = Settings()
