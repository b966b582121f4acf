"""
Global configuration constants for PDF Notes.

Deployment-specific values come from the environment (an optional ``.env``
file is loaded first); everything else is a plain constant.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from dotenv import load_dotenv
from loguru import logger

load_dotenv()

PROJECT_ROOT = Path(__file__).resolve().parent

# ── Gemini API ───────────────────────────────────────────────────────────────
GEMINI_API_BASE = "https://generativelanguage.googleapis.com/v1beta"
GEMINI_API_KEY = os.getenv("GEMINI_API_KEY") or os.getenv("API_KEY") or ""

GEMINI_MODELS = [
    "gemini-2.5-flash",
    "gemini-2.0-flash",
    "gemini-1.5-flash",
    "gemini-1.5-pro",
]

# ── LLM defaults ─────────────────────────────────────────────────────────────
DEFAULT_MODEL = os.getenv("NOTES_MODEL", "gemini-2.5-flash")
DEFAULT_TEMPERATURE = float(os.getenv("NOTES_TEMPERATURE", "0.4"))
REQUEST_TIMEOUT = (10, 300)     # (connect, read) seconds

SYSTEM_INSTRUCTION = (
    "You are a helpful and precise research assistant. "
    "Focus on accuracy and structure."
)

# ── PDF constraints ──────────────────────────────────────────────────────────
MAX_PDF_SIZE_MB = 50
MAX_TEXT_CHARS = int(os.getenv("NOTES_MAX_TEXT_CHARS", "30000"))

# ── Notes & analytics ────────────────────────────────────────────────────────
WORDS_PER_MINUTE = 200
CHART_TOP_N = 10
CHART_LABEL_LIMIT = 22

# ── Speech ───────────────────────────────────────────────────────────────────
SPEECH_RATE_MIN = 0.5
SPEECH_RATE_MAX = 2.0
SPEECH_RATE_STEP = 0.25

# ── Persistence ──────────────────────────────────────────────────────────────
DATABASE_URL = os.getenv(
    "NOTES_DATABASE_URL", f"sqlite:///{PROJECT_ROOT / 'data' / 'pdf_notes.db'}"
)
NOTES_KEY = "pdf_notes_library"
SETTINGS_KEY = "pdf_notes_settings"
USER_KEY = "pdf_notes_user"

# ── Logging ──────────────────────────────────────────────────────────────────
LOG_LEVEL = os.getenv("NOTES_LOG_LEVEL", "INFO")
LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
    "<level>{message}</level>"
)


def configure_logging(level: str = LOG_LEVEL) -> None:
    """Replace loguru's default sink with a formatted stderr sink."""
    logger.remove()
    logger.add(sys.stderr, level=level, format=LOG_FORMAT)
