from __future__ import annotations

import logging
import os
from enum import Enum
from typing import List, Optional

logger = logging.getLogger("adaptive-maths.config")


class ResetLevelPolicy(str, Enum):
    KEEP = "keep"  # next run resumes at the last adapted level
    RESTART = "restart"  # reset() drops back to level 1


def _reset_policy_from_env() -> ResetLevelPolicy:
    raw = os.getenv("PRACTICE_RESET_LEVEL", ResetLevelPolicy.KEEP.value).strip().lower()
    try:
        return ResetLevelPolicy(raw)
    except ValueError:
        logger.warning("Unknown PRACTICE_RESET_LEVEL=%r; using 'keep'", raw)
        return ResetLevelPolicy.KEEP


def _seed_from_env() -> Optional[int]:
    raw = os.getenv("PRACTICE_SEED", "").strip()
    if not raw:
        return None
    try:
        return int(raw)
    except ValueError:
        logger.warning("Ignoring non-integer PRACTICE_SEED=%r", raw)
        return None


DEFAULT_ORIGINS = [
    "http://localhost:3000",
    "http://127.0.0.1:3000",
]


def _origins_from_env() -> List[str]:
    extra = [o.strip() for o in os.getenv("CORS_ORIGINS", "").split(",") if o.strip()]
    return DEFAULT_ORIGINS + [o for o in extra if o not in DEFAULT_ORIGINS]


# Load once at module import
RESET_LEVEL_POLICY = _reset_policy_from_env()
PRACTICE_SEED = _seed_from_env()
CORS_ORIGINS = _origins_from_env()
