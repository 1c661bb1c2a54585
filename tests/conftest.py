"""
Shared fixtures for the Recap test suite.

Every test gets its own SQLite file under tmp_path. The AI generator, the
export renderer and the email dispatcher are replaced by stubs so that no
network or native library is needed.
"""

import pytest

from recap.api.server import create_app
from recap.api.services import get_services
from recap.auth.credentials import CredentialService, hash_password
from recap.database import crud
from recap.database.models import init_db, close_connections
from recap.export.renderer import ExportedDocument, PDF_MIMETYPE, DOCX_MIMETYPE, safe_filename

STUB_SUMMARY = "hello world " * 15  # 30 words


class StubGenerator:
    def __init__(self, text=STUB_SUMMARY, error=None):
        self.text = text
        self.error = error
        self.calls = []

    def generate_summary(self, transcript, custom_prompt, tone):
        self.calls.append((transcript, custom_prompt, tone))
        if self.error is not None:
            raise self.error
        return self.text


class StubRenderer:
    def __init__(self):
        self.calls = []

    def render(self, summary, fmt):
        self.calls.append((summary.id, fmt))
        mimetype = PDF_MIMETYPE if fmt == "pdf" else DOCX_MIMETYPE
        return ExportedDocument(f"{fmt}:{summary.title}".encode(), safe_filename(summary.title, fmt), mimetype)


class StubDispatcher:
    def __init__(self, error=None):
        self.error = error
        self.sent = []

    def send_summary(self, summary, sender, recipients, subject, email_format, cc_self=False):
        if self.error is not None:
            raise self.error
        self.sent.append({
            "summary_id": summary.id,
            "sender": sender.email,
            "recipients": list(recipients),
            "subject": subject,
            "format": email_format,
            "cc_self": cc_self,
        })


@pytest.fixture
def database_url(tmp_path):
    return f"sqlite:///{tmp_path / 'recap-test.db'}"


@pytest.fixture
def db_session(database_url):
    """Session on a fresh database."""
    engine, Session = init_db(database_url)
    session = Session()
    yield session
    session.close()
    close_connections(Session, engine)


@pytest.fixture
def user(db_session):
    return crud.create_user(db_session, "ana@example.com", hash_password("secret"), "Ana Lima")


@pytest.fixture
def other_user(db_session):
    return crud.create_user(db_session, "bo@example.com", hash_password("secret"), "Bo Park")


@pytest.fixture
def credentials():
    return CredentialService(secret="test-secret", expiry_days=7)


@pytest.fixture
def generator():
    return StubGenerator()


@pytest.fixture
def renderer():
    return StubRenderer()


@pytest.fixture
def dispatcher():
    return StubDispatcher()


@pytest.fixture
def settings(tmp_path, database_url):
    return {
        "DATABASE_URL": database_url,
        "UPLOAD_FOLDER": str(tmp_path / "uploads"),
        "JWT_SECRET": "test-secret",
    }


@pytest.fixture
def app(settings, generator, renderer, dispatcher):
    app = create_app(settings, generator=generator, renderer=renderer, dispatcher=dispatcher)
    app.config["TESTING"] = True
    yield app
    with app.app_context():
        services = get_services()
        close_connections(services.session_factory, services.engine)


@pytest.fixture
def client(app):
    return app.test_client()


def register(client, email="ana@example.com", password="secret", full_name="Ana Lima"):
    """Register an account through the API and return its auth header."""
    response = client.post("/api/auth/register", json={
        "email": email,
        "password": password,
        "fullName": full_name,
    })
    assert response.status_code == 200, response.get_json()
    return {"Authorization": f"Bearer {response.get_json()['token']}"}


@pytest.fixture
def auth_headers(client):
    return register(client)


@pytest.fixture
def register_user(client):
    """Factory registering further accounts, for ownership tests."""
    def _register(email, full_name="Other User"):
        return register(client, email=email, full_name=full_name)
    return _register
