"""
Configuration and environment setup for the Convergent backend.
"""

import os

from dotenv import load_dotenv

load_dotenv()


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return int(raw)


def _float_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return float(raw)


# OpenAlex
OPENALEX_BASE_URL = os.getenv("OPENALEX_BASE_URL", "https://api.openalex.org").rstrip("/")
OPENALEX_MAILTO = os.getenv("OPENALEX_MAILTO", "demo@convergent.ai")
OPENALEX_USER_AGENT = os.getenv(
    "OPENALEX_USER_AGENT",
    f"Convergent Demo (mailto:{OPENALEX_MAILTO})"
)

# Outbound request policy
REQUEST_INTERVAL_MS = _int_env("REQUEST_INTERVAL_MS", 25)
REQUEST_TIMEOUT_SECONDS = _float_env("REQUEST_TIMEOUT_SECONDS", 15.0)
MAX_RETRIES = _int_env("MAX_RETRIES", 2)
RETRY_BACKOFF_SECONDS = _float_env("RETRY_BACKOFF_SECONDS", 0.5)
PARALLEL_MAX_WORKERS = _int_env("PARALLEL_MAX_WORKERS", 4)

# Matching and listing
MATCH_SCORE_THRESHOLD = _int_env("MATCH_SCORE_THRESHOLD", 0)
DEMO_COMPANY = os.getenv("DEMO_COMPANY", "BioTech Innovations Inc.")
DEFAULT_PER_PAGE = _int_env("DEFAULT_PER_PAGE", 20)
MAX_PER_PAGE = _int_env("MAX_PER_PAGE", 200)
RECENT_WORKS_LIMIT = 10
TOP_CONCEPTS_LIMIT = 10

# CORS / logging
CORS_ALLOW_ORIGINS = os.getenv("CORS_ALLOW_ORIGINS", "*")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
