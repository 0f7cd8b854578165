from flask import current_app

from .base import (
    EntryRepository,
    RepositoryError,
    RepositoryUnavailable,
    EntryNotFoundError,
)
from .records import EntryRecord, ProfileRecord
from .sql_repository import SqlEntryRepository
from .json_repository import JsonFileEntryRepository


def get_entry_repository() -> EntryRepository:
    """Return the entry store configured for the running app (ENTRY_STORE)."""
    repository = current_app.extensions.get('weightlog_repository')
    if repository is not None:
        return repository

    store = current_app.config.get('ENTRY_STORE', 'sql')
    if store == 'sql':
        repository = SqlEntryRepository()
    elif store == 'json':
        repository = JsonFileEntryRepository(current_app.config['ENTRY_STORE_PATH'])
    else:
        raise ValueError(f"Unknown ENTRY_STORE '{store}'. Valid options: sql, json")

    current_app.extensions['weightlog_repository'] = repository
    return repository


__all__ = [
    'EntryRepository',
    'RepositoryError',
    'RepositoryUnavailable',
    'EntryNotFoundError',
    'EntryRecord',
    'ProfileRecord',
    'SqlEntryRepository',
    'JsonFileEntryRepository',
    'get_entry_repository',
]
