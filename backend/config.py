import os
from dotenv import load_dotenv

load_dotenv()

# ── Model ─────────────────────────────────────────────────────────────────────
GEMINI_API_KEY = (os.getenv("GEMINI_API_KEY") or os.getenv("AI_API_KEY") or "").strip()
GEMINI_MODEL = os.getenv("GEMINI_MODEL", "gemini-1.5-flash")

MODEL_TIMEOUT_SECONDS = 6.0
MODEL_RETRY_DELAY_SECONDS = 0.4
MODEL_MAX_ATTEMPTS = 2
MODEL_TEMPERATURE = 0.7
MODEL_MAX_OUTPUT_TOKENS = 1200

# Admission window for outbound model calls (process-wide, not per client)
MODEL_WINDOW_SECONDS = 60.0
MODEL_WINDOW_MAX_CALLS = 30

# ── Encyclopedia summaries ────────────────────────────────────────────────────
WIKI_ENDPOINT = os.getenv("WIKI_ENDPOINT", "https://en.wikipedia.org/api/rest_v1/page/summary/")
WIKI_TIMEOUT_SECONDS = 4.0
WIKI_CACHE_TTL_SECONDS = 60 * 60
WIKI_CACHE_MAXSIZE = 512
WIKI_USER_AGENT = "SmartStudyAssistant/1.0"

# ── HTTP surface ──────────────────────────────────────────────────────────────
_raw_origins = os.getenv("ALLOWED_ORIGINS", "http://localhost:5173")
ALLOWED_ORIGINS = [o.strip() for o in _raw_origins.split(",") if o.strip()]
STUDY_RATE_LIMIT = os.getenv("STUDY_RATE_LIMIT", "30/minute; 300/hour")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
PORT = int(os.getenv("PORT", "3000"))
