# database.py
"""
Engine and session handling for the LandlordPro backend.

Production runs on MS SQL Server through pymssql, configured with the
DB_* variables. DATABASE_URL, when set, replaces them entirely; the test
suite uses it to run on an in-memory SQLite database.

Every unit of work (an HTTP request, a scheduled job) gets one session:
committed when the work finishes, rolled back when it raises.
"""
import logging
import os
from contextlib import contextmanager
from typing import Generator, Iterator
from urllib.parse import quote_plus

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import QueuePool, StaticPool
from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)


def build_database_url() -> str:
     explicit = os.getenv("DATABASE_URL")
     if explicit:
          return explicit
     user = quote_plus(os.getenv("DB_USER", ""))
     password = quote_plus(os.getenv("DB_PASS", ""))
     server = os.getenv("DB_SERVER", "localhost")
     port = os.getenv("DB_PORT", "1433")
     name = os.getenv("DB_NAME", "landlordpro")
     return f"mssql+pymssql://{user}:{password}@{server}:{port}/{name}"


def create_db_engine(url: str, echo: bool = False) -> Engine:
     if url.startswith("sqlite"):
          # One shared connection, otherwise each session sees its own empty in-memory database
          return create_engine(
               url,
               echo=echo,
               connect_args={"check_same_thread": False},
               poolclass=StaticPool,
          )
     return create_engine(
          url,
          echo=echo,
          poolclass=QueuePool,
          pool_size=int(os.getenv("DB_POOL_SIZE", "5")),
          max_overflow=int(os.getenv("DB_MAX_OVERFLOW", "10")),
          pool_timeout=30,
          pool_recycle=1800,
          pool_pre_ping=True,
     )


DATABASE_URL = build_database_url()
engine = create_db_engine(DATABASE_URL, echo=os.getenv("SQL_ECHO", "false").lower() == "true")

SessionLocal = sessionmaker(
     bind=engine,
     autocommit=False,
     autoflush=False,
     expire_on_commit=False,
)


@contextmanager
def get_session_context() -> Iterator[Session]:
     """
     Session for work outside a request, e.g. the scheduled jobs:

          with get_session_context() as db:
               expire_leases(db)
     """
     session = SessionLocal()
     try:
          yield session
          session.commit()
     except Exception:
          session.rollback()
          raise
     finally:
          session.close()


def get_session() -> Generator[Session, None, None]:
     """
     FastAPI dependency. Routes commit their own writes; anything left
     pending is committed here, and an exception rolls the request back
     so multi-step writes (a property and its floors) stay all-or-nothing.
     """
     with get_session_context() as session:
          yield session


def init_db() -> None:
     """Create missing tables. Deployed databases are migrated with Alembic."""
     from models import Base
     Base.metadata.create_all(bind=engine)


def check_connection() -> bool:
     try:
          with engine.connect() as conn:
               conn.execute(text("SELECT 1"))
          return True
     except Exception:
          logger.exception("Database connection failed")
          return False
