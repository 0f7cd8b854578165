"""
Plain records exchanged between repositories and the analytics core.
Repositories never hand SQLAlchemy rows or raw JSON dicts to callers.
"""
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class EntryRecord:
    id: str
    user_id: int
    weight: float
    entry_date: date
    created_at: datetime
    updated_at: Optional[datetime] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'user_id': self.user_id,
            'weight': self.weight,
            'entry_date': self.entry_date.isoformat(),
            'created_at': self.created_at.isoformat() if self.created_at else None,
            'updated_at': self.updated_at.isoformat() if self.updated_at else None
        }


@dataclass(frozen=True)
class ProfileRecord:
    user_id: int
    height: Optional[float] = None
    dark_mode: Optional[bool] = None
    weight_goal: Optional[float] = None
    updated_at: Optional[datetime] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'user_id': self.user_id,
            'height': self.height,
            'dark_mode': self.dark_mode,
            'weight_goal': self.weight_goal,
            'updated_at': self.updated_at.isoformat() if self.updated_at else None
        }


def id_sort_key(entry_id: str):
    """Numeric ids (SQL primary keys) compare as integers, others as text."""
    if entry_id.isdigit():
        return (0, int(entry_id), '')
    return (1, 0, entry_id)


def newest_first_key(entry: EntryRecord):
    """Sort key giving newest date first with a stable same-day tie-break."""
    return (entry.entry_date, entry.created_at, id_sort_key(entry.id))
