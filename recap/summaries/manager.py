"""
Summary lifecycle manager.

A summary moves draft -> approved -> sent through explicit client updates.
Generation, export and email sharing are available in every status and never
change it. Every operation on an existing summary goes through one ownership
guard, which reports unknown and foreign summaries the same way.
"""
from typing import Dict, Any, List, Optional

from sqlalchemy.orm import Session

from recap.config import MIN_SUMMARY_LENGTH
from recap.database import crud
from recap.database.models import Summary, EmailLog, SummaryStatus, EmailFormat, DeliveryStatus
from recap.errors import NotFoundOrForbidden, ValidationFailed, GenerationFailed, DeliveryFailed, UpstreamFailure
from recap.export.renderer import EXPORT_FORMATS, ExportedDocument
from recap.utils.logger import get_logger
from recap.utils.text import count_words, is_valid_email

logger = get_logger(__name__)

SUMMARY_STATUSES = [s.value for s in SummaryStatus]
EMAIL_FORMATS = [f.value for f in EmailFormat]


def _require_text(value, field_name: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationFailed(f"{field_name} is required")
    return value


class SummaryManager:
    """
    Coordinates the summary lifecycle with the external collaborators.

    Args:
        db_session: SQLAlchemy session for this request
        generator: object with generate_summary(transcript, prompt, tone) -> str
        renderer: object with render(summary, fmt) -> ExportedDocument
        dispatcher: object with send_summary(summary, sender, recipients, subject, format, cc_self)
    """

    def __init__(self, db_session: Session, generator=None, renderer=None, dispatcher=None,
                 min_summary_length: int = MIN_SUMMARY_LENGTH):
        self.db = db_session
        self.generator = generator
        self.renderer = renderer
        self.dispatcher = dispatcher
        self.min_summary_length = min_summary_length

    def _get_owned_summary(self, summary_id: str, user_id: str) -> Summary:
        """Ownership guard shared by every operation on an existing summary."""
        summary = crud.get_summary(self.db, summary_id)
        if summary is None or summary.user_id != user_id:
            raise NotFoundOrForbidden("Summary not found")
        return summary

    def create(self, user_id: str, title: str, original_content: str, prompt: str, tone: str) -> Summary:
        summary = crud.create_summary(self.db, user_id, {
            "title": _require_text(title, "Title").strip(),
            "original_content": _require_text(original_content, "Transcript"),
            "prompt": _require_text(prompt, "Prompt"),
            "tone": _require_text(tone, "Tone").strip(),
        })
        logger.info(f"Created summary {summary.id} for user {user_id}")
        return summary

    def get(self, summary_id: str, user_id: str) -> Summary:
        return self._get_owned_summary(summary_id, user_id)

    def list_for_user(self, user_id: str) -> List[Summary]:
        return crud.get_user_summaries(self.db, user_id)

    def generate(self, summary_id: str, user_id: str) -> Summary:
        """
        Generate (or regenerate) the summary text with the AI generator.

        The status is left as it is. Nothing is written when generation fails.
        """
        summary = self._get_owned_summary(summary_id, user_id)

        try:
            content = self.generator.generate_summary(summary.original_content, summary.prompt, summary.tone)
        except UpstreamFailure:
            raise
        except Exception as e:
            logger.error(f"Summary generation failed for {summary_id}: {e}")
            raise GenerationFailed(f"Failed to generate summary: {e}")

        if not content or len(content) < self.min_summary_length:
            raise GenerationFailed("Failed to generate summary: Generated summary is too short")

        logger.info(f"Generated summary {summary_id} ({count_words(content)} words)")
        return crud.update_summary(self.db, summary_id, {
            "summary_content": content,
            "word_count": count_words(content),
        })

    def update(self, summary_id: str, user_id: str, summary_content: Optional[str] = None,
               status: Optional[str] = None, auto_saved: Optional[bool] = None,
               word_count: Optional[int] = None) -> Summary:
        """
        Partially update a summary.

        Status changes are not ordered; any known status is accepted. A supplied
        word_count is ignored in favour of the count derived from the content.
        """
        summary = self._get_owned_summary(summary_id, user_id)

        updates: Dict[str, Any] = {}
        if summary_content is not None:
            if not isinstance(summary_content, str):
                raise ValidationFailed("summaryContent must be a string")
            updates["summary_content"] = summary_content
        if status is not None:
            if status not in SUMMARY_STATUSES:
                raise ValidationFailed(f"Invalid status: {status}")
            updates["status"] = status
        if auto_saved is not None:
            updates["auto_saved"] = bool(auto_saved)

        content = updates.get("summary_content", summary.summary_content)
        updates["word_count"] = count_words(content)
        if word_count is not None and word_count != updates["word_count"]:
            logger.debug(f"Ignoring client word count {word_count} for {summary_id}, derived {updates['word_count']}")

        return crud.update_summary(self.db, summary_id, updates)

    def approve(self, summary_id: str, user_id: str) -> Summary:
        return self.update(summary_id, user_id, status=SummaryStatus.APPROVED.value)

    def delete(self, summary_id: str, user_id: str) -> None:
        self._get_owned_summary(summary_id, user_id)
        crud.delete_summary(self.db, summary_id)

    def export(self, summary_id: str, user_id: str, fmt: str) -> ExportedDocument:
        summary = self._get_owned_summary(summary_id, user_id)
        if fmt not in EXPORT_FORMATS:
            raise ValidationFailed(f"Unsupported export format: {fmt}")
        return self.renderer.render(summary, fmt)

    def share(self, summary_id: str, user_id: str, recipients: List[str], subject: str,
              email_format: str, cc_self: bool = False) -> EmailLog:
        """
        Email a summary and record the attempt.

        Validation failures leave no log. A failed delivery is logged with
        status "failed" before the error is raised.
        """
        summary = self._get_owned_summary(summary_id, user_id)

        if not recipients:
            raise ValidationFailed("At least one recipient is required")
        invalid = [r for r in recipients if not is_valid_email(r)]
        if invalid:
            raise ValidationFailed(f"Invalid email address: {', '.join(str(r) for r in invalid)}")
        recipients = [r.strip() for r in recipients]

        subject = _require_text(subject, "Subject").strip()
        if email_format not in EMAIL_FORMATS:
            raise ValidationFailed(f"Invalid email format: {email_format}")

        sender = summary.user
        try:
            self.dispatcher.send_summary(summary, sender, recipients, subject, email_format, cc_self=cc_self)
        except Exception as e:
            crud.create_email_log(self.db, summary.id, recipients, subject, email_format,
                                  DeliveryStatus.FAILED.value)
            if isinstance(e, UpstreamFailure):
                raise
            raise DeliveryFailed(f"Failed to send email: {e}")

        email_log = crud.create_email_log(self.db, summary.id, recipients, subject, email_format,
                                          DeliveryStatus.SENT.value)
        logger.info(f"Shared summary {summary_id} with {len(recipients)} recipient(s)")
        return email_log

    def email_logs(self, summary_id: str, user_id: str) -> List[EmailLog]:
        self._get_owned_summary(summary_id, user_id)
        return crud.get_summary_email_logs(self.db, summary_id)
