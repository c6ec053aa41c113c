import logging
import os
from typing import List

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

DEFAULT_MODEL = "gemini-2.5-flash"


def gemini_model() -> str:
    return os.getenv("GEMINI_MODEL") or DEFAULT_MODEL


def log_level() -> int:
    level = logging.getLevelName((os.getenv("LOG_LEVEL") or "INFO").strip().upper())
    # getLevelName returns a string for unknown names
    return level if isinstance(level, int) else logging.INFO


def cors_allow_origins() -> List[str]:
    raw = os.getenv("CORS_ALLOW_ORIGINS", "*")
    return [origin.strip() for origin in raw.split(",") if origin.strip()] or ["*"]
