"""
Configuration settings for the Recap meeting summary service.
"""
import os
from pathlib import Path
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

# Base directory
BASE_DIR = Path(__file__).resolve().parent.parent

# Database configuration
DATABASE_PATH = BASE_DIR / "data" / "recap.db"
DATABASE_URL = os.getenv("DATABASE_URL", f"sqlite:///{DATABASE_PATH}")

# API Keys and credentials
GEMINI_API_KEY = os.getenv("GEMINI_API_KEY")
GEMINI_MODEL = os.getenv("GEMINI_MODEL", "gemini-2.5-flash")

JWT_SECRET = os.getenv("JWT_SECRET", "change-me-in-production")
JWT_ALGORITHM = "HS256"
JWT_EXPIRY_DAYS = int(os.getenv("JWT_EXPIRY_DAYS", "7"))

# Outbound SMTP (sending summaries)
SMTP_HOST = os.getenv("SMTP_HOST", "localhost")
SMTP_PORT = int(os.getenv("SMTP_PORT", "587"))
SMTP_USER = os.getenv("SMTP_USER", "")
SMTP_PASSWORD = os.getenv("SMTP_PASSWORD", "")
SMTP_FROM_ADDRESS = os.getenv("SMTP_FROM_ADDRESS", SMTP_USER or "recap@localhost")
SMTP_USE_TLS = os.getenv("SMTP_USE_TLS", "true").lower() in ("1", "true", "yes")

# Uploads
UPLOAD_FOLDER = Path(os.getenv("UPLOAD_FOLDER", str(BASE_DIR / "uploads")))
MAX_UPLOAD_SIZE = 10 * 1024 * 1024  # 10MB
ALLOWED_EXTENSIONS = [".txt", ".pdf", ".docx"]

# Web server
HOST = os.getenv("RECAP_HOST", "127.0.0.1")
PORT = int(os.getenv("RECAP_PORT", "5000"))
CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_DIR = Path(os.getenv("LOG_DIR", str(BASE_DIR / "logs")))

# Client autosave debounce, advertised through /api/config
AUTOSAVE_DELAY_MS = int(os.getenv("AUTOSAVE_DELAY_MS", "2000"))

# Summary generation
MIN_SUMMARY_LENGTH = 50  # Shorter output is treated as a failed generation

DEFAULT_TONE = "professional"

TONE_INSTRUCTIONS = {
    "professional": "Use a formal, business-appropriate tone with clear structure and professional language.",
    "casual": "Use a friendly, conversational tone that's approachable and easy to understand.",
    "concise": "Be direct and to-the-point, focusing on essential information only.",
    "detailed": "Provide comprehensive coverage with thorough explanations and context.",
}

TONE_LABELS = {
    "professional": "Professional & Formal",
    "casual": "Casual & Friendly",
    "concise": "Concise & Direct",
    "detailed": "Detailed & Thorough",
}

# Prompt presets offered to the client
PROMPT_TEMPLATES = {
    "executive": (
        "Create an executive summary with key decisions, high-level outcomes, and strategic "
        "implications. Focus on what leadership needs to know."
    ),
    "action": (
        "Focus on action items, tasks, assignments, and deadlines. Include responsible persons "
        "and priority levels for each item."
    ),
    "detailed": (
        "Provide comprehensive discussion points, detailed explanations, and thorough coverage "
        "of all topics discussed."
    ),
    "custom": "",
}


def as_dict():
    """Return the settings a Flask app instance is built from."""
    return {
        "DATABASE_URL": DATABASE_URL,
        "GEMINI_API_KEY": GEMINI_API_KEY,
        "GEMINI_MODEL": GEMINI_MODEL,
        "JWT_SECRET": JWT_SECRET,
        "JWT_ALGORITHM": JWT_ALGORITHM,
        "JWT_EXPIRY_DAYS": JWT_EXPIRY_DAYS,
        "SMTP_HOST": SMTP_HOST,
        "SMTP_PORT": SMTP_PORT,
        "SMTP_USER": SMTP_USER,
        "SMTP_PASSWORD": SMTP_PASSWORD,
        "SMTP_FROM_ADDRESS": SMTP_FROM_ADDRESS,
        "SMTP_USE_TLS": SMTP_USE_TLS,
        "UPLOAD_FOLDER": str(UPLOAD_FOLDER),
        "MAX_UPLOAD_SIZE": MAX_UPLOAD_SIZE,
        "ALLOWED_EXTENSIONS": list(ALLOWED_EXTENSIONS),
        "CORS_ORIGINS": list(CORS_ORIGINS),
        "AUTOSAVE_DELAY_MS": AUTOSAVE_DELAY_MS,
    }
