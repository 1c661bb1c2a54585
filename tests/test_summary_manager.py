"""
Tests for the summary lifecycle manager.

Validates:
- Ownership guard on every operation
- Generation writes content and word count only on success
- Word count always follows the content
- Status updates, export and email sharing with their logs
"""

import pytest

from recap.database import crud
from recap.errors import (
    DeliveryFailed,
    GenerationFailed,
    NotFoundOrForbidden,
    ValidationFailed,
)
from recap.summaries.manager import SummaryManager

from conftest import STUB_SUMMARY, StubDispatcher, StubGenerator


@pytest.fixture
def manager(db_session, generator, renderer, dispatcher):
    return SummaryManager(db_session, generator=generator, renderer=renderer, dispatcher=dispatcher)


@pytest.fixture
def summary(manager, user):
    return manager.create(user.id, "Weekly sync", "Ana: we ship Friday.", "Summarise decisions", "casual")


# ---------------------------------------------------------------------------
# Create / read
# ---------------------------------------------------------------------------

class TestCreate:
    def test_new_summary_is_empty_draft(self, summary, user):
        assert summary.user_id == user.id
        assert summary.status == "draft"
        assert summary.summary_content == ""
        assert summary.word_count == 0

    @pytest.mark.parametrize("field", ["title", "original_content", "prompt", "tone"])
    def test_required_fields(self, manager, user, field):
        values = {
            "title": "Sync",
            "original_content": "transcript",
            "prompt": "prompt",
            "tone": "professional",
        }
        values[field] = "   "
        with pytest.raises(ValidationFailed):
            manager.create(user.id, **values)

    def test_list_only_own(self, manager, summary, user, other_user):
        manager.create(other_user.id, "Theirs", "t", "p", "concise")
        assert [s.id for s in manager.list_for_user(user.id)] == [summary.id]


class TestOwnership:
    def test_unknown_and_foreign_look_the_same(self, manager, summary, other_user):
        with pytest.raises(NotFoundOrForbidden) as foreign:
            manager.get(summary.id, other_user.id)
        with pytest.raises(NotFoundOrForbidden) as unknown:
            manager.get("does-not-exist", other_user.id)
        assert foreign.value.message == unknown.value.message == "Summary not found"

    @pytest.mark.parametrize("operation", [
        lambda m, sid, uid: m.generate(sid, uid),
        lambda m, sid, uid: m.update(sid, uid, summary_content="hijack"),
        lambda m, sid, uid: m.approve(sid, uid),
        lambda m, sid, uid: m.delete(sid, uid),
        lambda m, sid, uid: m.export(sid, uid, "pdf"),
        lambda m, sid, uid: m.share(sid, uid, ["x@example.com"], "Notes", "html"),
        lambda m, sid, uid: m.email_logs(sid, uid),
    ])
    def test_foreign_user_rejected(self, manager, summary, other_user, generator, dispatcher, db_session, operation):
        with pytest.raises(NotFoundOrForbidden):
            operation(manager, summary.id, other_user.id)

        db_session.refresh(summary)
        assert summary.summary_content == ""
        assert generator.calls == []
        assert dispatcher.sent == []
        assert crud.get_summary_email_logs(db_session, summary.id) == []


# ---------------------------------------------------------------------------
# Generation
# ---------------------------------------------------------------------------

class TestGenerate:
    def test_generate_sets_content_and_count(self, manager, summary, user, generator):
        result = manager.generate(summary.id, user.id)
        assert result.summary_content == STUB_SUMMARY
        assert result.word_count == 30
        assert result.status == "draft"
        assert generator.calls == [("Ana: we ship Friday.", "Summarise decisions", "casual")]

    def test_regenerate_keeps_status(self, manager, summary, user):
        manager.approve(summary.id, user.id)
        assert manager.generate(summary.id, user.id).status == "approved"

    def test_short_output_writes_nothing(self, db_session, summary, user):
        manager = SummaryManager(db_session, generator=StubGenerator(text="too short"))
        with pytest.raises(GenerationFailed):
            manager.generate(summary.id, user.id)
        db_session.refresh(summary)
        assert summary.summary_content == ""
        assert summary.word_count == 0

    def test_generator_error_is_wrapped(self, db_session, summary, user):
        manager = SummaryManager(db_session, generator=StubGenerator(error=RuntimeError("quota")))
        with pytest.raises(GenerationFailed) as excinfo:
            manager.generate(summary.id, user.id)
        assert "quota" in excinfo.value.message
        assert excinfo.value.status_code == 500

    def test_upstream_error_passes_through(self, db_session, summary, user):
        error = GenerationFailed("AI summarization failed: no key")
        manager = SummaryManager(db_session, generator=StubGenerator(error=error))
        with pytest.raises(GenerationFailed) as excinfo:
            manager.generate(summary.id, user.id)
        assert excinfo.value is error


# ---------------------------------------------------------------------------
# Update
# ---------------------------------------------------------------------------

class TestUpdate:
    def test_word_count_follows_content(self, manager, summary, user):
        updated = manager.update(summary.id, user.id, summary_content="one two three", word_count=99)
        assert updated.word_count == 3

    def test_word_count_recomputed_without_content(self, manager, summary, user):
        manager.update(summary.id, user.id, summary_content="a b")
        updated = manager.update(summary.id, user.id, word_count=1000)
        assert updated.word_count == 2

    def test_autosave_flag(self, manager, summary, user):
        updated = manager.update(summary.id, user.id, summary_content="draft text", auto_saved=True)
        assert updated.auto_saved is True

    def test_status_transitions_are_permissive(self, manager, summary, user):
        assert manager.update(summary.id, user.id, status="sent").status == "sent"
        assert manager.update(summary.id, user.id, status="draft").status == "draft"

    def test_invalid_status(self, manager, summary, user):
        with pytest.raises(ValidationFailed):
            manager.update(summary.id, user.id, status="archived")

    def test_approve(self, manager, summary, user):
        assert manager.approve(summary.id, user.id).status == "approved"


class TestDelete:
    def test_delete_removes_summary_and_logs(self, manager, summary, user, db_session):
        manager.share(summary.id, user.id, ["x@example.com"], "Notes", "html")
        manager.delete(summary.id, user.id)
        with pytest.raises(NotFoundOrForbidden):
            manager.get(summary.id, user.id)
        assert crud.get_summary_email_logs(db_session, summary.id) == []


# ---------------------------------------------------------------------------
# Export and sharing
# ---------------------------------------------------------------------------

class TestExport:
    @pytest.mark.parametrize("fmt", ["pdf", "docx"])
    def test_export_delegates_to_renderer(self, manager, summary, user, renderer, fmt):
        document = manager.export(summary.id, user.id, fmt)
        assert document.filename == f"Weekly sync.{fmt}"
        assert renderer.calls == [(summary.id, fmt)]

    def test_unknown_format(self, manager, summary, user, renderer):
        with pytest.raises(ValidationFailed):
            manager.export(summary.id, user.id, "odt")
        assert renderer.calls == []


class TestShare:
    def test_success_logs_sent(self, manager, summary, user, dispatcher):
        log = manager.share(summary.id, user.id, [" x@example.com ", "y@example.com"], " Notes ", "both",
                            cc_self=True)
        assert log.status == "sent"
        assert log.recipients == ["x@example.com", "y@example.com"]
        assert log.subject == "Notes"
        assert dispatcher.sent[0]["sender"] == user.email
        assert dispatcher.sent[0]["cc_self"] is True

    def test_status_not_changed_by_sharing(self, manager, summary, user):
        manager.share(summary.id, user.id, ["x@example.com"], "Notes", "html")
        assert manager.get(summary.id, user.id).status == "draft"

    @pytest.mark.parametrize("recipients,subject,fmt", [
        ([], "Notes", "html"),
        (["not-an-email"], "Notes", "html"),
        (["x@example.com"], "  ", "html"),
        (["x@example.com"], "Notes", "docx"),
    ])
    def test_invalid_requests_leave_no_log(self, manager, summary, user, dispatcher, db_session,
                                           recipients, subject, fmt):
        with pytest.raises(ValidationFailed):
            manager.share(summary.id, user.id, recipients, subject, fmt)
        assert dispatcher.sent == []
        assert crud.get_summary_email_logs(db_session, summary.id) == []

    def test_delivery_failure_logs_failed(self, db_session, summary, user):
        manager = SummaryManager(db_session, dispatcher=StubDispatcher(error=ConnectionRefusedError("smtp down")))
        with pytest.raises(DeliveryFailed):
            manager.share(summary.id, user.id, ["x@example.com"], "Notes", "pdf")

        logs = manager.email_logs(summary.id, user.id)
        assert [log.status for log in logs] == ["failed"]
        assert logs[0].format == "pdf"

    def test_logs_accumulate(self, manager, summary, user):
        manager.share(summary.id, user.id, ["x@example.com"], "One", "html")
        manager.share(summary.id, user.id, ["x@example.com"], "Two", "html")
        assert len(manager.email_logs(summary.id, user.id)) == 2
