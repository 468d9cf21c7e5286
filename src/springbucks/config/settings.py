"""Application settings for the springbucks store.

Environment variables are loaded from a ``.env`` file using ``python-dotenv``
and exposed through a Pydantic settings object.
"""

from __future__ import annotations

import os
import re
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict

# Load environment variables from a .env file if present
load_dotenv()

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------
DEFAULT_DB_PATH = Path("data") / "springbucks.sqlite3"
DEFAULT_CURRENCY = "TWD"
_CURRENCY_RE = re.compile(r"^[A-Z]{3}$")


class Settings(BaseModel):
    """Immutable settings object used across the application."""

    db_path: Path
    currency: str = DEFAULT_CURRENCY

    model_config = ConfigDict(frozen=True)


def _build_settings() -> Settings:
    """Construct the ``Settings`` instance based on environment variables."""

    db_path = Path(os.getenv("SPRINGBUCKS_DB_PATH") or DEFAULT_DB_PATH)
    currency = os.getenv("SPRINGBUCKS_CURRENCY", DEFAULT_CURRENCY).strip()
    if not _CURRENCY_RE.match(currency):
        raise RuntimeError(
            f"SPRINGBUCKS_CURRENCY must be a three-letter ISO-4217 code, got {currency!r}"
        )
    return Settings(db_path=db_path, currency=currency)


# Public settings instance
settings = _build_settings()
