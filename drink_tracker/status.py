"""BAC status helpers for display.

Finnish legal limits, expressed as BAC percent like the rest of the package
(0.05 % == 0.5 per mille). The calculator itself never looks at these.
"""

from datetime import datetime
from typing import Optional

LEGAL_LIMIT_REGULAR = 0.05
LEGAL_LIMIT_PROFESSIONAL = 0.02


def to_permille(bac: float) -> float:
    return bac * 10.0


def format_permille(bac: float) -> str:
    return f"{to_permille(bac):.1f}‰"


def bac_status(bac: float) -> dict:
    """Return a status band for the given BAC."""
    if bac <= 0:
        return {"status": "sober", "title": "Sober", "level": "ok"}
    if bac <= LEGAL_LIMIT_PROFESSIONAL:
        return {"status": "below_professional_limit", "title": "Below Professional Limit", "level": "ok"}
    if bac <= LEGAL_LIMIT_REGULAR:
        return {"status": "below_regular_limit", "title": "Below Regular Limit", "level": "caution"}
    return {"status": "above_legal_limit", "title": "Above Legal Limit", "level": "danger"}


def _plural(n: int, word: str) -> str:
    return f"{n} {word}" if n == 1 else f"{n} {word}s"


def time_until_sober_text(sober_at: Optional[datetime], now: datetime) -> str:
    """Human-readable time left until sober_at, e.g. '2 hours 5 minutes'."""
    if sober_at is None:
        return "N/A"
    seconds = (sober_at - now).total_seconds()
    if seconds <= 0:
        return "You are sober now!"
    if seconds < 60:
        return "Less than a minute"

    hours = int(seconds // 3600)
    minutes = int((seconds % 3600) // 60)
    parts = []
    if hours > 0:
        parts.append(_plural(hours, "hour"))
    if minutes > 0 or hours == 0:
        parts.append(_plural(minutes, "minute"))
    return " ".join(parts)
