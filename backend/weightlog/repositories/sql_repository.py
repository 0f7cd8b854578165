import logging
from datetime import date, datetime
from typing import Any, Dict, List, Optional

from sqlalchemy.exc import SQLAlchemyError

from weightlog import db
from weightlog.models.weight_entry import WeightEntry
from weightlog.models.user_profile import UserProfile
from weightlog.repositories.base import (
    ENTRY_UPDATABLE_FIELDS,
    PROFILE_MERGEABLE_FIELDS,
    EntryNotFoundError,
    RepositoryUnavailable,
    pick_fields,
)
from weightlog.repositories.records import EntryRecord, ProfileRecord

logger = logging.getLogger(__name__)


class SqlEntryRepository:
    """Entry store backed by the application's SQLAlchemy database."""

    @staticmethod
    def _to_record(entry: WeightEntry) -> EntryRecord:
        return EntryRecord(
            id=str(entry.id),
            user_id=entry.user_id,
            weight=float(entry.weight),
            entry_date=entry.entry_date,
            created_at=entry.created_at,
            updated_at=entry.updated_at
        )

    @staticmethod
    def _to_profile_record(profile: UserProfile) -> ProfileRecord:
        return ProfileRecord(
            user_id=profile.user_id,
            height=profile.height,
            dark_mode=profile.dark_mode,
            weight_goal=profile.weight_goal,
            updated_at=profile.updated_at
        )

    @staticmethod
    def _find(entry_id: str) -> Optional[WeightEntry]:
        try:
            pk = int(entry_id)
        except (TypeError, ValueError):
            return None
        return db.session.get(WeightEntry, pk)

    def list_entries(self, user_id: int) -> List[EntryRecord]:
        try:
            rows = WeightEntry.query.filter_by(user_id=user_id).order_by(
                WeightEntry.entry_date.desc(),
                WeightEntry.created_at.desc(),
                WeightEntry.id.desc()
            ).all()
        except SQLAlchemyError as e:
            db.session.rollback()
            raise RepositoryUnavailable(f"Failed to list entries: {e}") from e
        return [self._to_record(row) for row in rows]

    def get_entry(self, entry_id: str) -> Optional[EntryRecord]:
        try:
            entry = self._find(entry_id)
        except SQLAlchemyError as e:
            db.session.rollback()
            raise RepositoryUnavailable(f"Failed to load entry {entry_id}: {e}") from e
        return self._to_record(entry) if entry else None

    def create_entry(self, user_id: int, weight: float, entry_date: date) -> EntryRecord:
        try:
            entry = WeightEntry(
                user_id=user_id,
                weight=float(weight),
                entry_date=entry_date
            )
            db.session.add(entry)
            db.session.commit()
        except SQLAlchemyError as e:
            db.session.rollback()
            raise RepositoryUnavailable(f"Failed to create entry: {e}") from e
        logger.debug("Created entry %s for user %s", entry.id, user_id)
        return self._to_record(entry)

    def update_entry(self, entry_id: str, partial_fields: Dict[str, Any]) -> None:
        fields = pick_fields(partial_fields, ENTRY_UPDATABLE_FIELDS)
        try:
            entry = self._find(entry_id)
            if not entry:
                raise EntryNotFoundError(f"Entry {entry_id} not found")

            if 'weight' in fields:
                entry.weight = float(fields['weight'])
            if 'entry_date' in fields:
                entry.entry_date = fields['entry_date']
            entry.updated_at = datetime.utcnow()

            db.session.commit()
        except SQLAlchemyError as e:
            db.session.rollback()
            raise RepositoryUnavailable(f"Failed to update entry {entry_id}: {e}") from e

    def delete_entry(self, entry_id: str) -> None:
        try:
            entry = self._find(entry_id)
            if not entry:
                raise EntryNotFoundError(f"Entry {entry_id} not found")
            db.session.delete(entry)
            db.session.commit()
        except SQLAlchemyError as e:
            db.session.rollback()
            raise RepositoryUnavailable(f"Failed to delete entry {entry_id}: {e}") from e

    def get_profile(self, user_id: int) -> Optional[ProfileRecord]:
        try:
            profile = UserProfile.query.filter_by(user_id=user_id).first()
        except SQLAlchemyError as e:
            db.session.rollback()
            raise RepositoryUnavailable(f"Failed to load profile: {e}") from e
        return self._to_profile_record(profile) if profile else None

    def merge_profile(self, user_id: int, partial_fields: Dict[str, Any]) -> None:
        fields = pick_fields(partial_fields, PROFILE_MERGEABLE_FIELDS)
        try:
            profile = UserProfile.query.filter_by(user_id=user_id).first()
            if not profile:
                profile = UserProfile(user_id=user_id)
                db.session.add(profile)

            for field_name, value in fields.items():
                setattr(profile, field_name, value)
            profile.updated_at = datetime.utcnow()

            db.session.commit()
        except SQLAlchemyError as e:
            db.session.rollback()
            raise RepositoryUnavailable(f"Failed to update profile: {e}") from e
