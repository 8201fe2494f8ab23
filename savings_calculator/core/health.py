"""Health-check helpers."""

from __future__ import annotations

import time
from datetime import datetime, timezone

from savings_calculator.schemas.health import HealthResponse


def get_health(started_at: float) -> HealthResponse:
    """Return service status and seconds elapsed since ``started_at``."""
    return HealthResponse(
        status="ok",
        timestamp=datetime.now(timezone.utc).isoformat(),
        uptime=round(time.monotonic() - started_at, 3),
    )
