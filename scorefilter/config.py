from __future__ import annotations

import os
from typing import Any, List

from loguru import logger
from pydantic import BaseModel, Field


# ---------------------------
# Scores
# ---------------------------

DEFAULT_SCORE = 0.0  # seed value for new items, and the value reset() restores


# ---------------------------
# Logging / observability
# ---------------------------

LOG_ENV_VAR = "SCOREFILTER_LOG"
LOG_ENABLED = os.getenv(LOG_ENV_VAR, "0").strip().lower() in {"1", "true", "yes"}

# library code stays silent unless the host opts in
if LOG_ENABLED:
    logger.enable("scorefilter")
else:
    logger.disable("scorefilter")


# ---------------------------
# Pydantic models shared around the package
# ---------------------------

class ScoredEntry(BaseModel):
    """
    A single active item together with its current score.
    """

    item: Any
    score: float


class FilterSnapshot(BaseModel):
    """
    Point-in-time view of a ScoredCollection.
    ``active`` follows the ordered (best first) view.
    """

    count: int = Field(ge=0)
    active: List[ScoredEntry]
    removed: List[Any]

    def best_item(self) -> Any:
        """Top active item, or None when nothing is left."""
        return self.active[0].item if self.active else None
