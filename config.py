"""
OncoAssist Configuration
========================
Environment-driven settings. Values come from the process environment,
optionally seeded from a local .env file.
"""

import os
from dotenv import load_dotenv

load_dotenv()

# --- Model ---
OPENAI_API_KEY = os.getenv("OPENAI_API_KEY")
MODEL = os.getenv("ONCOASSIST_MODEL", "gpt-4.1-mini")
TEMPERATURE = float(os.getenv("ONCOASSIST_TEMPERATURE", "0"))

# --- Logging ---
LOG_LEVEL = os.getenv("ONCOASSIST_LOG_LEVEL", "INFO").upper()

# --- Guideline documents ---
GUIDELINE_FETCH_TIMEOUT = float(os.getenv("GUIDELINE_FETCH_TIMEOUT", "5"))
# Empty means any public host
GUIDELINE_FETCH_ALLOWED_HOSTS = [
    h.strip().lower() for h in os.getenv("GUIDELINE_FETCH_ALLOWED_HOSTS", "").split(",") if h.strip()
]
TEXT_UPLOAD_EXTENSIONS = (".txt", ".md")
SIMULATED_UPLOAD_EXTENSIONS = (".pdf",)

# Cancer types that fall back to simulated NCCN content when nothing is uploaded
SIMULATED_GUIDELINE_TYPES = ("Colon Cancer", "Rectal Cancer")

# --- HTTP API ---
CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]
MAX_NOTE_LENGTH = 3000
