# utils/timezone.py
"""
POLÍTICA DE TIMEZONE DO SISTEMA

REGRAS:
1. GRAVAÇÃO NO BANCO: Sempre UTC (timezone-aware)
2. SERIALIZAÇÃO JSON: ISO 8601 com timezone explícito

USO:
    from utils.timezone import get_utc_now, ensure_utc

    created_at = Column("createdAt", DateTime(timezone=True), default=get_utc_now)

IMPORTANTE:
- Nunca use datetime.utcnow() ou datetime.now() diretamente
- SQLite devolve datetimes naive: passe por ensure_utc() antes de expor
"""

from datetime import datetime, timezone
from typing import Optional

UTC = timezone.utc


def now_utc() -> datetime:
    """
    Retorna o datetime atual em UTC com timezone-aware.

    Example:
        >>> created_at = now_utc()
        >>> created_at.tzinfo
        datetime.timezone.utc
    """
    return datetime.now(UTC)


def ensure_utc(dt: Optional[datetime]) -> Optional[datetime]:
    """
    Garante que o datetime esteja em UTC.

    Datetimes naive são tratados como UTC (é assim que são gravados).
    """
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC)


def get_utc_now():
    """Função callable para uso em Column(default=...)."""
    return now_utc()
