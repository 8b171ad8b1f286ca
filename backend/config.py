"""
config.py
---------
Central configuration for Wanderplan.
All values come from environment variables with documented defaults;
secrets are never hard-coded.

Policy constants (budget split, hotel flexibility, fallback ladder) live here
so alternative policies can be tried by setting env vars instead of editing code.
"""

import os
from pathlib import Path

# Load .env from the backend directory (if it exists) so env vars in that file
# are picked up by os.getenv() below.
from dotenv import load_dotenv

_env_path = Path(__file__).parent / ".env"
if _env_path.exists():
    load_dotenv(_env_path, override=True)


def _flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in ("1", "true", "yes")


# ── Budget split (fractions of the total trip budget) ────────────────────────
# Must not sum above 1.0; the allocator rejects policies that do.
BUDGET_SHARE_ACCOMMODATION: float = float(os.getenv("BUDGET_SHARE_ACCOMMODATION", "0.55"))
BUDGET_SHARE_ACTIVITIES: float    = float(os.getenv("BUDGET_SHARE_ACTIVITIES",    "0.30"))
BUDGET_SHARE_FOOD: float          = float(os.getenv("BUDGET_SHARE_FOOD",          "0.15"))

# ── Hotel selection ──────────────────────────────────────────────────────────
# price <= per_night * (1 + HOTEL_PRICE_FLEXIBILITY)
HOTEL_PRICE_FLEXIBILITY: float     = float(os.getenv("HOTEL_PRICE_FLEXIBILITY",     "0.15"))
HOTEL_MIN_RATING: float            = float(os.getenv("HOTEL_MIN_RATING",            "3.0"))
HOTEL_MAX_RADIUS_KM: float         = float(os.getenv("HOTEL_MAX_RADIUS_KM",         "5.0"))
# Fallback ladder: widen radius → lower rating → shift activity money to lodging
HOTEL_RADIUS_STEP_KM: float        = float(os.getenv("HOTEL_RADIUS_STEP_KM",        "3.0"))
HOTEL_RELAXED_MIN_RATING: float    = float(os.getenv("HOTEL_RELAXED_MIN_RATING",    "2.5"))
HOTEL_FLOOR_MIN_RATING: float      = float(os.getenv("HOTEL_FLOOR_MIN_RATING",      "2.0"))
HOTEL_ACTIVITY_TRANSFER_PCT: float = float(os.getenv("HOTEL_ACTIVITY_TRANSFER_PCT", "0.10"))

# ── Itinerary scheduling ─────────────────────────────────────────────────────
# Activities farther than this from the hotel are not scheduled
ACTIVITY_RADIUS_KM: float = float(os.getenv("ACTIVITY_RADIUS_KM", "8.0"))

# ── Dialogue ─────────────────────────────────────────────────────────────────
MAX_TRAVELERS: int            = int(os.getenv("MAX_TRAVELERS",     "20"))
MAX_DURATION_DAYS: int        = int(os.getenv("MAX_DURATION_DAYS", "90"))
DEFAULT_CURRENCY_SYMBOL: str  = os.getenv("DEFAULT_CURRENCY_SYMBOL", "£")

# ── Catalog ──────────────────────────────────────────────────────────────────
# Stub mode serves the bundled catalog (modules/tool_usage/catalog_data.py).
# Set USE_STUB_CATALOG=false and CATALOG_BASE_URL to query a remote catalog.
USE_STUB_CATALOG: bool         = _flag("USE_STUB_CATALOG", "true")
CATALOG_BASE_URL: str          = os.getenv("CATALOG_BASE_URL", "")
CATALOG_REQUEST_TIMEOUT: int   = int(os.getenv("CATALOG_REQUEST_TIMEOUT", "10"))
CATALOG_MAX_RETRIES: int       = int(os.getenv("CATALOG_MAX_RETRIES",     "3"))
CATALOG_BACKOFF_SECONDS: float = float(os.getenv("CATALOG_BACKOFF_SECONDS", "0.5"))

# ── Session store ────────────────────────────────────────────────────────────
SESSION_BACKEND: str = os.getenv("SESSION_BACKEND", "in_memory")   # "in_memory" | "redis"

# ── Redis ────────────────────────────────────────────────────────────────────
REDIS_HOST: str     = os.getenv("REDIS_HOST",     "localhost")
REDIS_PORT: int     = int(os.getenv("REDIS_PORT", "6379"))
REDIS_DB: int       = int(os.getenv("REDIS_DB",   "0"))
REDIS_PASSWORD: str = os.getenv("REDIS_PASSWORD", "")
# TTL (seconds), reset on every write
CONVERSATION_TTL: int = int(os.getenv("CONVERSATION_TTL", "86400"))    # 24 hours

# ── Logging ──────────────────────────────────────────────────────────────────
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
# Structured JSONL event logs; empty = backend/logs
LOGS_DIR: str  = os.getenv("LOGS_DIR", "")
