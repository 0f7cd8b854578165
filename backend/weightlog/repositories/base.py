from datetime import date
from typing import Any, Dict, List, Optional, Protocol

from weightlog.repositories.records import EntryRecord, ProfileRecord


ENTRY_UPDATABLE_FIELDS = ('weight', 'entry_date')
PROFILE_MERGEABLE_FIELDS = ('height', 'dark_mode', 'weight_goal')


class RepositoryError(Exception):
    """Base class for storage failures."""


class RepositoryUnavailable(RepositoryError):
    """The backing store could not be reached or read."""


class EntryNotFoundError(RepositoryError):
    """No entry exists with the requested id."""


class EntryRepository(Protocol):
    """
    Capability set every entry store provides.

    Implementations do not inherit from this class; any object with these
    methods can back the weight service.
    """

    def list_entries(self, user_id: int) -> List[EntryRecord]:
        """Entries for a user, newest entry_date first."""
        ...

    def get_entry(self, entry_id: str) -> Optional[EntryRecord]:
        ...

    def create_entry(self, user_id: int, weight: float, entry_date: date) -> EntryRecord:
        ...

    def update_entry(self, entry_id: str, partial_fields: Dict[str, Any]) -> None:
        ...

    def delete_entry(self, entry_id: str) -> None:
        ...

    def get_profile(self, user_id: int) -> Optional[ProfileRecord]:
        ...

    def merge_profile(self, user_id: int, partial_fields: Dict[str, Any]) -> None:
        """Apply only the given fields; fields not present are left untouched."""
        ...


def pick_fields(partial_fields: Dict[str, Any], allowed) -> Dict[str, Any]:
    unknown = set(partial_fields) - set(allowed)
    if unknown:
        raise ValueError(f"Unsupported fields: {', '.join(sorted(unknown))}")
    return {k: v for k, v in partial_fields.items() if k in allowed}
