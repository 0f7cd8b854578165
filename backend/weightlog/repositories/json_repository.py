"""
Entry store kept in a single local JSON file.

File layout:
{
    "entries": [
        {"id": "...", "user_id": 1, "weight": 80.5, "entry_date": "2024-01-03",
         "created_at": "...", "updated_at": null}
    ],
    "profiles": {
        "1": {"height": 175, "dark_mode": true, "weight_goal": 75, "updated_at": "..."}
    }
}

The whole file is rewritten on every write.
"""
import json
import logging
import os
import threading
import uuid
from datetime import date, datetime
from typing import Any, Dict, List, Optional

from weightlog.repositories.base import (
    ENTRY_UPDATABLE_FIELDS,
    PROFILE_MERGEABLE_FIELDS,
    EntryNotFoundError,
    RepositoryUnavailable,
    pick_fields,
)
from weightlog.repositories.records import EntryRecord, ProfileRecord, newest_first_key

logger = logging.getLogger(__name__)


class JsonFileEntryRepository:

    def __init__(self, path: str):
        self.path = path
        self._lock = threading.Lock()

    # ------------------------------------------------------------------
    # File access

    def _load(self) -> Dict[str, Any]:
        if not os.path.exists(self.path):
            return {'entries': [], 'profiles': {}}
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                content = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise RepositoryUnavailable(f"Cannot read entry store {self.path}: {e}") from e

        if not isinstance(content, dict):
            raise RepositoryUnavailable(f"Entry store {self.path} is not a JSON object")
        content.setdefault('entries', [])
        content.setdefault('profiles', {})
        entries, profiles = content['entries'], content['profiles']
        if not (isinstance(entries, list) and all(isinstance(raw, dict) for raw in entries)):
            raise RepositoryUnavailable(f"Entry store {self.path}: 'entries' must be a list of objects")
        if not (isinstance(profiles, dict) and all(isinstance(raw, dict) for raw in profiles.values())):
            raise RepositoryUnavailable(f"Entry store {self.path}: 'profiles' must map user ids to objects")
        return content

    def _save(self, content: Dict[str, Any]) -> None:
        tmp_path = f'{self.path}.tmp'
        try:
            with open(tmp_path, 'w', encoding='utf-8') as f:
                json.dump(content, f, indent=2)
            os.replace(tmp_path, self.path)
        except OSError as e:
            raise RepositoryUnavailable(f"Cannot write entry store {self.path}: {e}") from e

    def _to_record(self, raw: Dict[str, Any]) -> EntryRecord:
        try:
            return EntryRecord(
                id=str(raw['id']),
                user_id=raw['user_id'],
                weight=float(raw['weight']),
                entry_date=date.fromisoformat(raw['entry_date']),
                created_at=datetime.fromisoformat(raw['created_at']),
                updated_at=datetime.fromisoformat(raw['updated_at']) if raw.get('updated_at') else None
            )
        except (KeyError, TypeError, ValueError) as e:
            raise RepositoryUnavailable(f"Malformed entry in {self.path}: {e!r}") from e

    @staticmethod
    def _find_index(entries: List[Dict[str, Any]], entry_id: str) -> int:
        for index, raw in enumerate(entries):
            if raw.get('id') == entry_id:
                return index
        raise EntryNotFoundError(f"Entry {entry_id} not found")

    # ------------------------------------------------------------------
    # Entries

    def list_entries(self, user_id: int) -> List[EntryRecord]:
        content = self._load()
        records = [
            self._to_record(raw) for raw in content['entries']
            if raw.get('user_id') == user_id
        ]
        return sorted(records, key=newest_first_key, reverse=True)

    def get_entry(self, entry_id: str) -> Optional[EntryRecord]:
        content = self._load()
        for raw in content['entries']:
            if raw.get('id') == entry_id:
                return self._to_record(raw)
        return None

    def create_entry(self, user_id: int, weight: float, entry_date: date) -> EntryRecord:
        raw = {
            'id': uuid.uuid4().hex,
            'user_id': user_id,
            'weight': float(weight),
            'entry_date': entry_date.isoformat(),
            'created_at': datetime.utcnow().isoformat(),
            'updated_at': None
        }
        with self._lock:
            content = self._load()
            content['entries'].append(raw)
            self._save(content)
        logger.debug("Created entry %s for user %s in %s", raw['id'], user_id, self.path)
        return self._to_record(raw)

    def update_entry(self, entry_id: str, partial_fields: Dict[str, Any]) -> None:
        fields = pick_fields(partial_fields, ENTRY_UPDATABLE_FIELDS)
        with self._lock:
            content = self._load()
            index = self._find_index(content['entries'], entry_id)
            raw = content['entries'][index]

            if 'weight' in fields:
                raw['weight'] = float(fields['weight'])
            if 'entry_date' in fields:
                raw['entry_date'] = fields['entry_date'].isoformat()
            raw['updated_at'] = datetime.utcnow().isoformat()

            self._save(content)

    def delete_entry(self, entry_id: str) -> None:
        with self._lock:
            content = self._load()
            index = self._find_index(content['entries'], entry_id)
            del content['entries'][index]
            self._save(content)

    # ------------------------------------------------------------------
    # Profiles

    def get_profile(self, user_id: int) -> Optional[ProfileRecord]:
        content = self._load()
        raw = content['profiles'].get(str(user_id))
        if raw is None:
            return None
        try:
            updated_at = datetime.fromisoformat(raw['updated_at']) if raw.get('updated_at') else None
        except (TypeError, ValueError) as e:
            raise RepositoryUnavailable(f"Malformed profile for user {user_id} in {self.path}: {e!r}") from e
        return ProfileRecord(
            user_id=user_id,
            height=raw.get('height'),
            dark_mode=raw.get('dark_mode'),
            weight_goal=raw.get('weight_goal'),
            updated_at=updated_at
        )

    def merge_profile(self, user_id: int, partial_fields: Dict[str, Any]) -> None:
        fields = pick_fields(partial_fields, PROFILE_MERGEABLE_FIELDS)
        with self._lock:
            content = self._load()
            profile = content['profiles'].setdefault(str(user_id), {})
            profile.update(fields)
            profile['updated_at'] = datetime.utcnow().isoformat()
            self._save(content)
