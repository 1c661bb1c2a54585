"""
Database models for the Recap meeting summary service.
"""
import contextlib
import datetime
import os
import uuid
from enum import Enum

from sqlalchemy import Column, Integer, String, Boolean, DateTime, ForeignKey, Text, JSON, create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, relationship, sessionmaker, scoped_session

from recap.config import DATABASE_URL
from recap.utils.logger import get_logger

logger = get_logger(__name__)

# Global variables for database connections
DB_ENGINE = None
DB_SESSION = None

Base = declarative_base()


class Theme(str, Enum):
    LIGHT = "light"
    DARK = "dark"


class SummaryStatus(str, Enum):
    DRAFT = "draft"
    APPROVED = "approved"
    SENT = "sent"


class EmailFormat(str, Enum):
    HTML = "html"
    PDF = "pdf"
    BOTH = "both"


class DeliveryStatus(str, Enum):
    SENT = "sent"
    FAILED = "failed"
    PENDING = "pending"


def _new_id():
    return str(uuid.uuid4())


def _isoformat(value):
    return value.isoformat() if value else None


class User(Base):
    """Account that owns summaries."""
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=_new_id)
    email = Column(String(255), nullable=False, unique=True, index=True)
    password = Column(String(255), nullable=False)  # werkzeug password hash
    full_name = Column(String(255), nullable=False)
    created_at = Column(DateTime, default=datetime.datetime.utcnow)
    theme = Column(String(10), default=Theme.LIGHT.value)

    # Relationships
    summaries = relationship("Summary", back_populates="user", cascade="all, delete-orphan", passive_deletes=True)

    def __repr__(self):
        return f"<User(id={self.id}, email='{self.email}')>"

    def to_dict(self):
        """Public representation, never includes the password hash."""
        return {
            "id": self.id,
            "email": self.email,
            "fullName": self.full_name,
            "theme": self.theme,
            "createdAt": _isoformat(self.created_at),
        }


class Summary(Base):
    """A transcript together with its generated and edited summary."""
    __tablename__ = "summaries"

    id = Column(String(36), primary_key=True, default=_new_id)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    title = Column(String(255), nullable=False)
    original_content = Column(Text, nullable=False)
    prompt = Column(Text, nullable=False)
    tone = Column(String(50), nullable=False)
    summary_content = Column(Text, nullable=False, default="")
    word_count = Column(Integer, nullable=False, default=0)
    status = Column(String(20), nullable=False, default=SummaryStatus.DRAFT.value)  # draft, approved, sent
    auto_saved = Column(Boolean, default=False)
    created_at = Column(DateTime, default=datetime.datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.datetime.utcnow)

    # Relationships
    user = relationship("User", back_populates="summaries")
    email_logs = relationship("EmailLog", back_populates="summary", cascade="all, delete-orphan", passive_deletes=True)

    def __repr__(self):
        return f"<Summary(id={self.id}, title='{self.title}', status='{self.status}')>"

    def to_dict(self):
        return {
            "id": self.id,
            "userId": self.user_id,
            "title": self.title,
            "originalContent": self.original_content,
            "prompt": self.prompt,
            "tone": self.tone,
            "summaryContent": self.summary_content,
            "wordCount": self.word_count,
            "status": self.status,
            "autoSaved": bool(self.auto_saved),
            "createdAt": _isoformat(self.created_at),
            "updatedAt": _isoformat(self.updated_at),
        }


class EmailLog(Base):
    """Record of one attempt to email a summary."""
    __tablename__ = "email_logs"

    id = Column(String(36), primary_key=True, default=_new_id)
    summary_id = Column(String(36), ForeignKey("summaries.id", ondelete="CASCADE"), nullable=False, index=True)
    recipients = Column(JSON, nullable=False)  # list of email addresses
    subject = Column(String(255), nullable=False)
    format = Column(String(10), nullable=False)  # html, pdf, both
    status = Column(String(10), nullable=False)  # sent, failed, pending
    sent_at = Column(DateTime, default=datetime.datetime.utcnow)

    # Relationships
    summary = relationship("Summary", back_populates="email_logs")

    def __repr__(self):
        return f"<EmailLog(id={self.id}, summary_id={self.summary_id}, status='{self.status}')>"

    def to_dict(self):
        return {
            "id": self.id,
            "summaryId": self.summary_id,
            "recipients": list(self.recipients or []),
            "subject": self.subject,
            "format": self.format,
            "status": self.status,
            "sentAt": _isoformat(self.sent_at),
        }


def _ensure_sqlite_directory(database_url):
    """Create the parent directory of a file-backed SQLite database."""
    if not database_url.startswith("sqlite:///"):
        return
    path = database_url[len("sqlite:///"):]
    if path and path != ":memory:":
        directory = os.path.dirname(os.path.abspath(path))
        os.makedirs(directory, exist_ok=True)


def create_db_engine(database_url=None):
    """
    Create a SQLAlchemy engine for the given URL.

    SQLite connections get foreign key enforcement switched on so that deleting
    a summary cascades to its email logs.
    """
    database_url = database_url or DATABASE_URL
    _ensure_sqlite_directory(database_url)

    if database_url.startswith("sqlite"):
        engine = create_engine(
            database_url,
            echo=False,  # Set to True for SQL query logging
            connect_args={"check_same_thread": False},
        )

        @event.listens_for(engine, 'connect')
        def receive_connect(dbapi_connection, connection_record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys = ON")
            cursor.execute("PRAGMA busy_timeout = 60000")
            cursor.close()
    else:
        engine = create_engine(
            database_url,
            echo=False,
            pool_pre_ping=True,  # Enable connection pooling with ping
            pool_recycle=3600,  # Recycle connections after an hour
        )

    return engine


def init_db(database_url=None):
    """Initialize the database connection and return (engine, session factory)."""
    global DB_ENGINE, DB_SESSION

    # If we already have an engine, return it
    if DB_ENGINE is not None and DB_SESSION is not None and database_url is None:
        return DB_ENGINE, DB_SESSION

    engine = create_db_engine(database_url)

    # Create all tables if they don't exist
    Base.metadata.create_all(engine)

    session_factory = sessionmaker(
        bind=engine,
        autocommit=False,
        autoflush=False,
        expire_on_commit=False  # Prevent objects from expiring after commit
    )

    # Scoped session that handles thread-local storage
    Session = scoped_session(session_factory)

    DB_ENGINE = engine
    DB_SESSION = Session

    logger.info(f"Database initialized: {engine.url.render_as_string(hide_password=True)}")
    return engine, Session


@contextlib.contextmanager
def get_db_session(session_factory=None):
    """
    Provide a transactional session scope.

    Commits when the block finishes, rolls back on error and always closes.
    """
    if session_factory is None:
        _, session_factory = init_db()

    session = session_factory()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def close_connections(session_factory=None, engine: Engine = None):
    """Close database sessions and dispose of the engine."""
    global DB_ENGINE, DB_SESSION

    session_factory = session_factory or DB_SESSION
    engine = engine or DB_ENGINE

    if session_factory is not None and hasattr(session_factory, "remove"):
        session_factory.remove()
        logger.info("Database session cleared")

    if engine is not None:
        engine.dispose()
        logger.info("Database engine disposed")

    if engine is DB_ENGINE:
        DB_ENGINE = None
        DB_SESSION = None
