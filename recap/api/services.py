"""
Collaborators shared by the API views of one application instance.
"""
from dataclasses import dataclass, field
from typing import Any, Dict

from flask import current_app

from recap.auth.credentials import CredentialService
from recap.database.models import init_db, get_db_session
from recap.email.sender import SmtpDispatcher
from recap.export.renderer import ExportRenderer
from recap.summaries.manager import SummaryManager
from recap.utils.gemini_client import GeminiClient

EXTENSION_KEY = "recap"


@dataclass
class RecapServices:
    engine: Any
    session_factory: Any
    credentials: CredentialService
    generator: Any
    renderer: Any
    dispatcher: Any
    settings: Dict[str, Any] = field(default_factory=dict)

    def summary_manager(self, db) -> SummaryManager:
        return SummaryManager(db, generator=self.generator, renderer=self.renderer, dispatcher=self.dispatcher)

    def session_scope(self):
        return get_db_session(self.session_factory)


def build_services(settings: Dict[str, Any], generator=None, renderer=None, dispatcher=None) -> RecapServices:
    """Create the database, credential and external collaborators from settings."""
    engine, session_factory = init_db(settings["DATABASE_URL"])

    renderer = renderer or ExportRenderer()
    generator = generator or GeminiClient(api_key=settings["GEMINI_API_KEY"], model=settings["GEMINI_MODEL"])
    dispatcher = dispatcher or SmtpDispatcher(
        renderer,
        host=settings["SMTP_HOST"],
        port=settings["SMTP_PORT"],
        user=settings["SMTP_USER"],
        password=settings["SMTP_PASSWORD"],
        from_address=settings["SMTP_FROM_ADDRESS"],
        use_tls=settings["SMTP_USE_TLS"],
    )
    credentials = CredentialService(
        secret=settings["JWT_SECRET"],
        algorithm=settings["JWT_ALGORITHM"],
        expiry_days=settings["JWT_EXPIRY_DAYS"],
    )

    return RecapServices(
        engine=engine,
        session_factory=session_factory,
        credentials=credentials,
        generator=generator,
        renderer=renderer,
        dispatcher=dispatcher,
        settings=settings,
    )


def get_services() -> RecapServices:
    return current_app.extensions[EXTENSION_KEY]
