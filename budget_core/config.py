"""Configuration for the budget period engine.

Values are read once at import time and may be overridden through
environment variables.
"""

import logging
import os
from pathlib import Path

_PROJECT_ROOT = Path(__file__).parent.parent.resolve()


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


# Both period walks stop this many years away from "now".
HORIZON_YEARS = _env_int("BUDGET_HORIZON_YEARS", 10)

DEFAULT_PAST_PERIODS = _env_int("BUDGET_PAST_PERIODS", 6)
DEFAULT_FUTURE_PERIODS = _env_int("BUDGET_FUTURE_PERIODS", 6)

SEED_PATH = Path(os.getenv("BUDGET_SEED_PATH", _PROJECT_ROOT / "data" / "seed.json")).resolve()

LOG_LEVEL = os.getenv("BUDGET_LOG_LEVEL", "INFO").upper()


def configure_logging(level: str | None = None) -> None:
    """Install a root handler; meant for entry points, not library code."""
    logging.basicConfig(
        level=level or LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
