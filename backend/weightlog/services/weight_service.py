import logging
from dataclasses import replace
from datetime import date
from typing import Any, Dict, List, Optional

from weightlog.repositories import (
    EntryRepository,
    EntryNotFoundError,
    EntryRecord,
    ProfileRecord,
    RepositoryUnavailable,
    get_entry_repository,
)
from weightlog.services.entry_validator import EntryValidator, WeightValidationError
from weightlog.services.trend_analyzer import TrendAnalyzer
from weightlog.services.range_filter import RangeFilter
from weightlog.services.bmi_engine import BmiEngine, BMI_RANGES
from weightlog.services.goal_tracker import GoalTracker

logger = logging.getLogger(__name__)


class EntryValidationError(ValueError):
    """A weight failed the plausibility checks."""

    def __init__(self, error: WeightValidationError):
        super().__init__(error.message)
        self.error = error


class WeightService:
    """
    Glue between an entry repository and the analytics core.

    Reads degrade to "no data" when the store is unavailable; writes let the
    failure through so a lost write is never reported as saved.
    """

    @staticmethod
    def _repo(repository: Optional[EntryRepository]) -> EntryRepository:
        return repository if repository is not None else get_entry_repository()

    # ------------------------------------------------------------------
    # Read paths

    @staticmethod
    def list_entries(user_id: int, repository: Optional[EntryRepository] = None) -> List[EntryRecord]:
        try:
            return WeightService._repo(repository).list_entries(user_id)
        except RepositoryUnavailable as e:
            logger.warning("Entry store unavailable for user %s, treating as empty: %s", user_id, e)
            return []

    @staticmethod
    def get_profile(user_id: int, repository: Optional[EntryRepository] = None) -> Optional[ProfileRecord]:
        try:
            return WeightService._repo(repository).get_profile(user_id)
        except RepositoryUnavailable as e:
            logger.warning("Profile store unavailable for user %s: %s", user_id, e)
            return None

    @staticmethod
    def get_owned_entry(user_id: int, entry_id: str,
                        repository: Optional[EntryRepository] = None) -> EntryRecord:
        entry = WeightService._repo(repository).get_entry(entry_id)
        if not entry or entry.user_id != user_id:
            raise EntryNotFoundError("Entry not found")
        return entry

    # ------------------------------------------------------------------
    # Write paths

    @staticmethod
    def add_entry(user_id: int, weight: float, entry_date: Optional[date] = None,
                  repository: Optional[EntryRepository] = None) -> EntryRecord:
        repo = WeightService._repo(repository)
        if entry_date is None:
            entry_date = date.today()

        recent_entries = WeightService.list_entries(user_id, repo)
        error = EntryValidator.validate(weight, recent_entries, is_new_entry=True)
        if error:
            raise EntryValidationError(error)

        try:
            return repo.create_entry(user_id, weight, entry_date)
        except RepositoryUnavailable:
            logger.error("Failed to save entry for user %s", user_id)
            raise

    @staticmethod
    def update_entry(user_id: int, entry_id: str, fields: Dict[str, Any],
                     repository: Optional[EntryRepository] = None) -> EntryRecord:
        repo = WeightService._repo(repository)
        existing = WeightService.get_owned_entry(user_id, entry_id, repo)

        if 'weight' in fields:
            # Edits skip the latest-entry comparison
            error = EntryValidator.validate(fields['weight'], [], is_new_entry=False)
            if error:
                raise EntryValidationError(error)

        try:
            repo.update_entry(entry_id, fields)
        except RepositoryUnavailable:
            logger.error("Failed to update entry %s for user %s", entry_id, user_id)
            raise

        try:
            return WeightService.get_owned_entry(user_id, entry_id, repo)
        except RepositoryUnavailable as e:
            # The write went through; answer with the fields as written
            logger.warning("Could not re-read entry %s after update: %s", entry_id, e)
            return replace(existing, **fields)

    @staticmethod
    def delete_entry(user_id: int, entry_id: str,
                     repository: Optional[EntryRepository] = None) -> None:
        repo = WeightService._repo(repository)
        WeightService.get_owned_entry(user_id, entry_id, repo)
        try:
            repo.delete_entry(entry_id)
        except RepositoryUnavailable:
            logger.error("Failed to delete entry %s for user %s", entry_id, user_id)
            raise

    @staticmethod
    def update_profile(user_id: int, fields: Dict[str, Any],
                       repository: Optional[EntryRepository] = None) -> Optional[ProfileRecord]:
        repo = WeightService._repo(repository)
        try:
            repo.merge_profile(user_id, fields)
        except RepositoryUnavailable:
            logger.error("Failed to update profile for user %s", user_id)
            raise
        return WeightService.get_profile(user_id, repo)

    # ------------------------------------------------------------------
    # Analytics

    @staticmethod
    def get_stats(user_id: int, time_range: str = 'all', today: Optional[date] = None,
                  repository: Optional[EntryRepository] = None) -> Dict[str, Any]:
        entries = WeightService.list_entries(user_id, repository)
        in_range = RangeFilter.filter_by_range(entries, time_range, today)

        return {
            'time_range': time_range,
            'statistics': TrendAnalyzer.analyze(in_range),
            'step_trends': TrendAnalyzer.step_trends(in_range),
            'trend': TrendAnalyzer.regression_trend(in_range)
        }

    @staticmethod
    def get_graph_data(user_id: int, time_range: str = 'all', today: Optional[date] = None,
                       repository: Optional[EntryRepository] = None) -> Dict[str, Any]:
        entries = WeightService.list_entries(user_id, repository)
        series = RangeFilter.series_for_range(entries, time_range, today)
        newest_first = list(reversed(series))

        data_points = [
            {'date': e.entry_date.isoformat(), 'value': e.weight, 'entry_id': e.id}
            for e in series
        ]

        return {
            'time_range': time_range,
            'data_points': data_points,
            'statistics': TrendAnalyzer.analyze(newest_first),
            'reference_line': [data_points[0], data_points[-1]] if len(data_points) > 1 else []
        }

    @staticmethod
    def get_bmi(user_id: int, repository: Optional[EntryRepository] = None) -> Dict[str, Any]:
        entries = WeightService.list_entries(user_id, repository)
        profile = WeightService.get_profile(user_id, repository)

        latest_weight = entries[0].weight if entries else None
        height = profile.height if profile else None

        return {
            'latest_weight': latest_weight,
            'height': height,
            'bmi': BmiEngine.summarize(latest_weight, height),
            'ranges': BMI_RANGES
        }

    @staticmethod
    def get_goal(user_id: int, repository: Optional[EntryRepository] = None) -> Dict[str, Any]:
        entries = WeightService.list_entries(user_id, repository)
        profile = WeightService.get_profile(user_id, repository)

        goal = profile.weight_goal if profile else None
        current_weight = entries[0].weight if entries else None

        progress = None
        if goal is not None and current_weight is not None:
            progress = GoalTracker.goal_progress(current_weight, goal)

        return {
            'goal': goal,
            'current_weight': current_weight,
            'progress': progress
        }

    @staticmethod
    def get_dashboard(user_id: int, time_range: str = 'all', today: Optional[date] = None,
                      repository: Optional[EntryRepository] = None) -> Dict[str, Any]:
        repo = WeightService._repo(repository)
        return {
            'stats': WeightService.get_stats(user_id, time_range, today, repo),
            'bmi': WeightService.get_bmi(user_id, repo),
            'goal': WeightService.get_goal(user_id, repo)
        }
