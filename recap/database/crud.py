"""
CRUD operations for the Recap meeting summary service.
"""
import datetime
from typing import List, Dict, Any, Optional
from sqlalchemy.orm import Session
from sqlalchemy import desc
from recap.database.models import User, Summary, EmailLog, SummaryStatus
from recap.utils.logger import get_logger

logger = get_logger(__name__)

SUMMARY_UPDATABLE_FIELDS = ("summary_content", "status", "auto_saved", "word_count")


# Users

def create_user(db: Session, email: str, password_hash: str, full_name: str) -> User:
    """
    Create a new user.

    Args:
        db: Database session
        email: Unique email address
        password_hash: Already hashed password
        full_name: Display name

    Returns:
        Created user object
    """
    user = User(email=email, password=password_hash, full_name=full_name)
    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info(f"Created user {user.id}")
    return user


def get_user(db: Session, user_id: str) -> Optional[User]:
    """Get a user by ID."""
    return db.query(User).filter(User.id == user_id).first()


def get_user_by_email(db: Session, email: str) -> Optional[User]:
    """
    Get a user by email address.

    Args:
        db: Database session
        email: User email address

    Returns:
        User object if found, None otherwise
    """
    return db.query(User).filter(User.email == email).first()


def update_user_theme(db: Session, user_id: str, theme: str) -> Optional[User]:
    """Change a user's theme preference."""
    user = get_user(db, user_id)
    if user is None:
        return None
    user.theme = theme
    db.commit()
    db.refresh(user)
    return user


# Summaries

def create_summary(db: Session, user_id: str, summary_data: Dict[str, Any]) -> Summary:
    """
    Create a new summary owned by a user.

    Args:
        db: Database session
        user_id: Owner ID
        summary_data: Dictionary with title, original_content, prompt and tone

    Returns:
        Created summary with generated id and timestamps
    """
    now = datetime.datetime.utcnow()
    summary = Summary(
        user_id=user_id,
        title=summary_data["title"],
        original_content=summary_data["original_content"],
        prompt=summary_data["prompt"],
        tone=summary_data["tone"],
        summary_content=summary_data.get("summary_content", ""),
        word_count=summary_data.get("word_count", 0),
        status=summary_data.get("status", SummaryStatus.DRAFT.value),
        auto_saved=summary_data.get("auto_saved", False),
        created_at=now,
        updated_at=now,
    )
    db.add(summary)
    db.commit()
    db.refresh(summary)
    return summary


def get_summary(db: Session, summary_id: str) -> Optional[Summary]:
    """Get a summary by ID, regardless of owner."""
    return db.query(Summary).filter(Summary.id == summary_id).first()


def get_user_summaries(db: Session, user_id: str) -> List[Summary]:
    """
    Get all summaries owned by a user, most recently updated first.

    Args:
        db: Database session
        user_id: Owner ID

    Returns:
        List of summaries
    """
    return db.query(Summary).filter(
        Summary.user_id == user_id
    ).order_by(desc(Summary.updated_at)).all()


def update_summary(db: Session, summary_id: str, updates: Dict[str, Any]) -> Optional[Summary]:
    """
    Apply a partial update to a summary.

    Only the editable fields are written; updated_at is refreshed on every call.

    Args:
        db: Database session
        summary_id: Summary ID
        updates: Field values keyed by column name

    Returns:
        Updated summary, or None if it does not exist
    """
    summary = get_summary(db, summary_id)
    if summary is None:
        return None

    for field, value in updates.items():
        if field not in SUMMARY_UPDATABLE_FIELDS:
            raise ValueError(f"Field '{field}' cannot be updated")
        setattr(summary, field, value)

    summary.updated_at = datetime.datetime.utcnow()
    db.commit()
    db.refresh(summary)
    return summary


def delete_summary(db: Session, summary_id: str) -> bool:
    """
    Delete a summary; its email logs are removed by the foreign key cascade.

    Returns:
        True if a summary was deleted
    """
    summary = get_summary(db, summary_id)
    if summary is None:
        return False
    db.delete(summary)
    db.commit()
    logger.info(f"Deleted summary {summary_id}")
    return True


# Email logs

def create_email_log(db: Session, summary_id: str, recipients: List[str], subject: str,
                     email_format: str, status: str) -> EmailLog:
    """
    Record an email attempt for a summary.

    Args:
        db: Database session
        summary_id: Summary ID
        recipients: Recipient addresses
        subject: Subject line
        email_format: html, pdf or both
        status: sent, failed or pending

    Returns:
        Created email log
    """
    email_log = EmailLog(
        summary_id=summary_id,
        recipients=list(recipients),
        subject=subject,
        format=email_format,
        status=status,
        sent_at=datetime.datetime.utcnow(),
    )
    db.add(email_log)
    db.commit()
    db.refresh(email_log)
    return email_log


def get_summary_email_logs(db: Session, summary_id: str) -> List[EmailLog]:
    """Get the email logs of a summary, newest first."""
    return db.query(EmailLog).filter(
        EmailLog.summary_id == summary_id
    ).order_by(desc(EmailLog.sent_at)).all()
