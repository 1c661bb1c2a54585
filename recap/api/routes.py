"""
REST endpoints of the Recap API.

- /api/auth/*                    account registration, login, profile, theme
- /api/upload                    transcript file to text
- /api/summaries[/<id>]          summary CRUD and lifecycle
- /api/summaries/<id>/export/*   PDF and DOCX downloads
- /api/summaries/<id>/email      share by email
"""
import io
import os
import uuid

from flask import Blueprint, jsonify, request, send_file
from werkzeug.utils import secure_filename

from recap.api.auth import require_auth
from recap.api.schemas import (
    parse_body,
    RegisterRequest,
    LoginRequest,
    ThemeRequest,
    SummaryCreateRequest,
    SummaryUpdateRequest,
    EmailShareRequest,
)
from recap.api.services import get_services
from recap.auth.accounts import AccountManager
from recap.config import PROMPT_TEMPLATES, TONE_LABELS
from recap.errors import ExtractionFailed, ValidationFailed
from recap.utils.file_processor import process_file, is_supported_file_type
from recap.utils.logger import get_logger

logger = get_logger(__name__)

api = Blueprint("api", __name__, url_prefix="/api")


def too_large_message(max_bytes: int) -> str:
    return f"File too large. Maximum size is {max_bytes // (1024 * 1024)}MB"


# ============== Auth ==============

@api.route("/auth/register", methods=["POST"])
def register():
    body = parse_body(RegisterRequest, request.get_json(silent=True))
    services = get_services()
    with services.session_scope() as db:
        user, token = AccountManager(db, services.credentials).register(body.email, body.password, body.full_name)
        return jsonify({"user": user.to_dict(), "token": token})


@api.route("/auth/login", methods=["POST"])
def login():
    body = parse_body(LoginRequest, request.get_json(silent=True))
    services = get_services()
    with services.session_scope() as db:
        user, token = AccountManager(db, services.credentials).login(body.email, body.password)
        return jsonify({"user": user.to_dict(), "token": token})


@api.route("/auth/me", methods=["GET"])
@require_auth
def me(auth, db):
    return jsonify({"user": auth.user.to_dict()})


@api.route("/auth/theme", methods=["PATCH"])
@require_auth
def update_theme(auth, db):
    try:
        body = parse_body(ThemeRequest, request.get_json(silent=True))
    except ValidationFailed:
        raise ValidationFailed("Invalid theme value")
    AccountManager(db, get_services().credentials).set_theme(auth.user_id, body.theme)
    return jsonify({"success": True})


# ============== Upload ==============

@api.route("/upload", methods=["POST"])
@require_auth
def upload(auth, db):
    """Extract the text of an uploaded transcript file."""
    settings = get_services().settings
    uploaded = request.files.get("file")
    if uploaded is None or not uploaded.filename:
        raise ValidationFailed("No file uploaded")

    allowed = settings["ALLOWED_EXTENSIONS"]
    if not is_supported_file_type(uploaded.filename, allowed):
        raise ValidationFailed(f"Unsupported file type. Allowed: {', '.join(allowed)}")

    extension = os.path.splitext(uploaded.filename)[1].lower()
    upload_dir = settings["UPLOAD_FOLDER"]
    os.makedirs(upload_dir, exist_ok=True)
    path = os.path.join(upload_dir, f"{uuid.uuid4().hex}_{secure_filename(uploaded.filename) or 'upload'}")

    try:
        uploaded.save(path)
        size = os.path.getsize(path)
    except OSError as e:
        if os.path.exists(path):
            os.remove(path)
        raise ExtractionFailed(f"Failed to process file: {e}")

    if size > settings["MAX_UPLOAD_SIZE"]:
        os.remove(path)
        raise ValidationFailed(too_large_message(settings["MAX_UPLOAD_SIZE"]))

    logger.info(f"User {auth.user_id} uploaded {uploaded.filename} ({size} bytes)")

    text = process_file(path, extension)
    return jsonify({"text": text, "filename": uploaded.filename, "size": size})


# ============== Summaries ==============

@api.route("/summaries", methods=["POST"])
@require_auth
def create_summary(auth, db):
    body = parse_body(SummaryCreateRequest, request.get_json(silent=True))
    summary = get_services().summary_manager(db).create(
        auth.user_id, body.title, body.original_content, body.prompt, body.tone
    )
    return jsonify(summary.to_dict())


@api.route("/summaries", methods=["GET"])
@require_auth
def list_summaries(auth, db):
    summaries = get_services().summary_manager(db).list_for_user(auth.user_id)
    return jsonify([s.to_dict() for s in summaries])


@api.route("/summaries/<summary_id>", methods=["GET"])
@require_auth
def get_summary(summary_id, auth, db):
    return jsonify(get_services().summary_manager(db).get(summary_id, auth.user_id).to_dict())


@api.route("/summaries/<summary_id>", methods=["PATCH"])
@require_auth
def update_summary(summary_id, auth, db):
    body = parse_body(SummaryUpdateRequest, request.get_json(silent=True))
    summary = get_services().summary_manager(db).update(
        summary_id,
        auth.user_id,
        summary_content=body.summary_content,
        status=body.status,
        auto_saved=body.auto_saved,
        word_count=body.word_count,
    )
    return jsonify(summary.to_dict())


@api.route("/summaries/<summary_id>", methods=["DELETE"])
@require_auth
def delete_summary(summary_id, auth, db):
    get_services().summary_manager(db).delete(summary_id, auth.user_id)
    return jsonify({"success": True})


@api.route("/summaries/<summary_id>/generate", methods=["POST"])
@require_auth
def generate_summary(summary_id, auth, db):
    summary = get_services().summary_manager(db).generate(summary_id, auth.user_id)
    return jsonify(summary.to_dict())


@api.route("/summaries/<summary_id>/approve", methods=["POST"])
@require_auth
def approve_summary(summary_id, auth, db):
    summary = get_services().summary_manager(db).approve(summary_id, auth.user_id)
    return jsonify(summary.to_dict())


@api.route("/summaries/<summary_id>/export/<fmt>", methods=["GET"])
@require_auth
def export_summary(summary_id, fmt, auth, db):
    document = get_services().summary_manager(db).export(summary_id, auth.user_id, fmt)
    return send_file(
        io.BytesIO(document.content),
        mimetype=document.mimetype,
        as_attachment=True,
        download_name=document.filename,
    )


@api.route("/summaries/<summary_id>/email", methods=["POST"])
@require_auth
def email_summary(summary_id, auth, db):
    body = parse_body(EmailShareRequest, request.get_json(silent=True))
    email_log = get_services().summary_manager(db).share(
        summary_id, auth.user_id, body.recipients, body.subject, body.format, cc_self=body.cc_self
    )
    return jsonify({"success": True, "message": "Email sent successfully", "emailLog": email_log.to_dict()})


@api.route("/summaries/<summary_id>/emails", methods=["GET"])
@require_auth
def list_email_logs(summary_id, auth, db):
    logs = get_services().summary_manager(db).email_logs(summary_id, auth.user_id)
    return jsonify([log.to_dict() for log in logs])


# ============== Client support ==============

@api.route("/templates", methods=["GET"])
def templates():
    """Prompt presets and tone labels for the summary form."""
    return jsonify({
        "templates": [{"id": key, "prompt": prompt} for key, prompt in PROMPT_TEMPLATES.items()],
        "tones": [{"id": key, "label": label} for key, label in TONE_LABELS.items()],
    })


@api.route("/config", methods=["GET"])
def client_config():
    settings = get_services().settings
    return jsonify({
        "autosaveDelayMs": settings["AUTOSAVE_DELAY_MS"],
        "maxUploadBytes": settings["MAX_UPLOAD_SIZE"],
        "allowedExtensions": settings["ALLOWED_EXTENSIONS"],
    })


@api.route("/health", methods=["GET"])
def health():
    return jsonify({"status": "ok"})
