"""
Horodatages du catalogue.

Toutes les dates manipulees par le catalogue sont en UTC avec fuseau
(aware) : SQLModel refuse les datetime naifs a l'ecriture, et SQLite
les restitue sans fuseau selon les versions.
"""

from datetime import datetime, timezone
from typing import Optional


def utc_now() -> datetime:
    """Instant courant en UTC."""
    return datetime.now(timezone.utc)


def utc_from_timestamp(timestamp: float) -> datetime:
    """Convertit un timestamp POSIX (st_mtime) en datetime UTC."""
    return datetime.fromtimestamp(timestamp, tz=timezone.utc)


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """
    Normalise une date en UTC aware.

    Une date naive est consideree comme deja exprimee en UTC.
    """
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)
