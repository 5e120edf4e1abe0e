import os
import logging

from sqlalchemy import create_engine, text
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

logger = logging.getLogger(__name__)

SQLALCHEMY_DATABASE_URL = os.getenv("DATABASE_URL")
CONNECT_TIMEOUT = int(os.getenv("PORTAL_CONNECT_TIMEOUT", "2"))

Base = declarative_base()


def make_engine(url=None, timeout=CONNECT_TIMEOUT):
    """Build an engine for the configured URL; SQLite URLs share one connection."""
    url = url or SQLALCHEMY_DATABASE_URL
    if url.startswith("sqlite"):
        return create_engine(url, connect_args={"check_same_thread": False}, poolclass=StaticPool)
    connect_args = {"connect_timeout": timeout} if url.startswith("postgresql") else {}
    return create_engine(url, connect_args=connect_args, pool_pre_ping=True)


def make_session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


def probe(engine):
    """Run a trivial query so an unreachable server fails here, not mid-request."""
    with engine.connect() as conn:
        conn.execute(text("SELECT 1"))
    logger.info("Database reachable at %s", engine.url.render_as_string(hide_password=True))


def create_schema(engine):
    Base.metadata.create_all(bind=engine)
