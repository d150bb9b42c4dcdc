from sqlalchemy import create_engine, event
from sqlalchemy.orm import declarative_base, sessionmaker
import os
from dotenv import load_dotenv
import logging

load_dotenv()
logger = logging.getLogger(__name__)

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./reelwave.db")


def build_engine(url: str = DATABASE_URL):
    """
    Create the engine backing local persistence.

    SQLite is the default store; the connection is shared with the event loop
    thread, so same-thread checking is disabled for it.
    """
    connect_args = {"check_same_thread": False} if url.startswith("sqlite") else {}
    new_engine = create_engine(
        url,
        connect_args=connect_args,
        pool_pre_ping=True,  # Test connections before using them
        echo=os.getenv("DB_ECHO", "false").lower() == "true"  # Set to true for SQL debugging
    )

    @event.listens_for(new_engine, "connect")
    def receive_connect(dbapi_conn, connection_record):
        """Log when a new connection is created"""
        logger.debug("Database connection established")

    return new_engine


engine = build_engine()

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()


def init_db(bind=None):
    """Create the persisted state tables if they do not exist yet."""
    # Register models with Base before create_all
    from reelwave.models import PersistedRecord  # noqa: F401

    Base.metadata.create_all(bind=bind or engine)
