import logging
from typing import Callable, Iterator, Optional

import google.auth
from fastapi import Request
from google.cloud.sql.connector import Connector, IPTypes
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from quickstart_todo.core.config import Settings

logger = logging.getLogger(__name__)

Base = declarative_base()


def resolve_project_id(settings: Settings) -> str:
    """Project id from settings, else from the ambient credentials."""
    if settings.GOOGLE_CLOUD_PROJECT:
        return settings.GOOGLE_CLOUD_PROJECT

    _, project_id = google.auth.default()
    if not project_id:
        raise RuntimeError(
            "Could not determine the Google Cloud project; set GOOGLE_CLOUD_PROJECT"
        )
    return project_id


class StoreUnavailableError(Exception):
    """The connector could not open a connection (identity, network, instance lookup)."""


def connector_creator(connector: Connector, instance: str, user: str, db_name: str) -> Callable:
    """Pool ``creator`` that opens pg8000 connections through the connector.

    SQLAlchemy only wraps DBAPI errors, so connector and credential failures
    are re-raised as ``StoreUnavailableError``.
    """

    def getconn():
        try:
            return connector.connect(instance, "pg8000", user=user, db=db_name)
        except Exception as exc:
            raise StoreUnavailableError(f"Cannot connect to {instance}: {exc}") from exc

    return getconn


class Database:
    """Owns the engine (connection pool) and, on Cloud SQL, the connector.

    Built once at startup and closed at shutdown.
    """

    def __init__(self, engine: Engine, connector: Optional[Connector] = None):
        self.engine = engine
        self.connector = connector
        self.SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    @classmethod
    def from_settings(cls, settings: Settings) -> "Database":
        if settings.DATABASE_URL:
            logger.info("Using direct database URL (connector disabled)")
            return cls(create_engine(settings.DATABASE_URL, echo=False))

        project_id = resolve_project_id(settings)
        instance = settings.instance_connection_name(project_id)
        user = settings.iam_user(project_id)

        # IAM database auth: the connector exchanges the ambient credentials for a login token
        connector = Connector(ip_type=IPTypes[settings.DB_IP_TYPE], enable_iam_auth=True)

        engine = create_engine(
            "postgresql+pg8000://",
            creator=connector_creator(connector, instance, user, settings.DB_NAME),
            pool_size=settings.DB_POOL_SIZE,
            max_overflow=settings.DB_MAX_OVERFLOW,
            pool_timeout=settings.DB_POOL_TIMEOUT,
            pool_recycle=settings.DB_POOL_RECYCLE,
            pool_pre_ping=True,
        )
        logger.info(f"Cloud SQL pool ready instance={instance} db={settings.DB_NAME} user={user}")
        return cls(engine, connector)

    def session(self) -> Iterator[Session]:
        db = self.SessionLocal()
        try:
            yield db
        finally:
            db.close()

    def close(self) -> None:
        self.engine.dispose()
        if self.connector is not None:
            self.connector.close()
        logger.info("Database pool closed")


def get_db(request: Request) -> Iterator[Session]:
    """Request-scoped session dependency."""
    yield from request.app.state.database.session()
