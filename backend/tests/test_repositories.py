from datetime import date, datetime

import pytest

from weightlog import db
from weightlog.models.user import User
from weightlog.models.weight_entry import WeightEntry
from weightlog.repositories import (
    EntryNotFoundError,
    JsonFileEntryRepository,
    RepositoryUnavailable,
    SqlEntryRepository,
)
from weightlog.repositories.records import newest_first_key


@pytest.fixture
def user_id(app):
    user = User(username='bob', email='bob@example.com')
    user.set_password('Secret123')
    db.session.add(user)
    db.session.commit()
    return user.id


@pytest.fixture(params=['sql', 'json'])
def repository(request, app, tmp_path):
    if request.param == 'sql':
        return SqlEntryRepository()
    return JsonFileEntryRepository(str(tmp_path / 'entries.json'))


def test_create_assigns_id_and_timestamps(repository, user_id):
    entry = repository.create_entry(user_id, 80.5, date(2024, 1, 3))

    assert entry.id
    assert entry.user_id == user_id
    assert entry.weight == 80.5
    assert entry.entry_date == date(2024, 1, 3)
    assert entry.created_at is not None
    assert entry.updated_at is None


def test_list_is_newest_date_first(repository, user_id):
    repository.create_entry(user_id, 76, date(2024, 1, 1))
    repository.create_entry(user_id, 80, date(2024, 1, 3))
    repository.create_entry(user_id, 78, date(2024, 1, 2))

    entries = repository.list_entries(user_id)

    assert [e.weight for e in entries] == [80, 78, 76]


def test_list_is_scoped_to_user(repository, user_id):
    repository.create_entry(user_id, 76, date(2024, 1, 1))
    repository.create_entry(user_id + 1, 90, date(2024, 1, 1))

    assert [e.weight for e in repository.list_entries(user_id)] == [76]


def test_same_day_entries_are_allowed(repository, user_id):
    repository.create_entry(user_id, 76, date(2024, 1, 1))
    repository.create_entry(user_id, 77, date(2024, 1, 1))

    assert len(repository.list_entries(user_id)) == 2


def test_update_entry(repository, user_id):
    entry = repository.create_entry(user_id, 76, date(2024, 1, 1))

    repository.update_entry(entry.id, {'weight': 75.5, 'entry_date': date(2024, 1, 2)})

    updated = repository.get_entry(entry.id)
    assert updated.weight == 75.5
    assert updated.entry_date == date(2024, 1, 2)
    assert updated.updated_at is not None
    assert updated.created_at == entry.created_at


def test_update_rejects_unknown_fields(repository, user_id):
    entry = repository.create_entry(user_id, 76, date(2024, 1, 1))
    with pytest.raises(ValueError, match='Unsupported fields'):
        repository.update_entry(entry.id, {'user_id': 99})


def test_update_and_delete_missing_entry(repository):
    with pytest.raises(EntryNotFoundError):
        repository.update_entry('12345', {'weight': 70})
    with pytest.raises(EntryNotFoundError):
        repository.delete_entry('12345')
    assert repository.get_entry('12345') is None


def test_delete_entry(repository, user_id):
    keep = repository.create_entry(user_id, 76, date(2024, 1, 1))
    drop = repository.create_entry(user_id, 77, date(2024, 1, 2))

    repository.delete_entry(drop.id)

    assert [e.id for e in repository.list_entries(user_id)] == [keep.id]


def test_profile_absent_until_first_write(repository, user_id):
    assert repository.get_profile(user_id) is None


def test_profile_merge_preserves_unspecified_fields(repository, user_id):
    repository.merge_profile(user_id, {'height': 175})
    repository.merge_profile(user_id, {'weight_goal': 72.5})
    repository.merge_profile(user_id, {'dark_mode': True})

    profile = repository.get_profile(user_id)
    assert profile.height == 175
    assert profile.weight_goal == 72.5
    assert profile.dark_mode is True
    assert profile.updated_at is not None


def test_profile_merge_explicit_none_clears_field(repository, user_id):
    repository.merge_profile(user_id, {'height': 175, 'weight_goal': 70})
    repository.merge_profile(user_id, {'weight_goal': None})

    profile = repository.get_profile(user_id)
    assert profile.weight_goal is None
    assert profile.height == 175


def test_json_store_persists_across_instances(tmp_path):
    path = str(tmp_path / 'entries.json')
    JsonFileEntryRepository(path).create_entry(1, 80, date(2024, 1, 1))

    entries = JsonFileEntryRepository(path).list_entries(1)
    assert [e.weight for e in entries] == [80]


def test_json_store_corrupt_file_is_unavailable(tmp_path):
    path = tmp_path / 'entries.json'
    path.write_text('{not json', encoding='utf-8')

    with pytest.raises(RepositoryUnavailable):
        JsonFileEntryRepository(str(path)).list_entries(1)


@pytest.mark.parametrize('content', [
    '[]',
    'null',
    '{"entries": {}}',
    '{"entries": ["not an entry"]}',
    '{"entries": [], "profiles": []}',
    '{"entries": [{"id": "a", "user_id": 1}]}',
    '{"entries": [{"id": "a", "user_id": 1, "weight": 80, "entry_date": "yesterday", '
    '"created_at": "2024-01-01T08:00:00"}]}',
])
def test_json_store_wrong_shape_is_unavailable(tmp_path, content):
    path = tmp_path / 'entries.json'
    path.write_text(content, encoding='utf-8')

    with pytest.raises(RepositoryUnavailable):
        JsonFileEntryRepository(str(path)).list_entries(1)


def test_json_store_malformed_profile_is_unavailable(tmp_path):
    path = tmp_path / 'entries.json'
    path.write_text('{"entries": [], "profiles": {"1": {"updated_at": "soon"}}}', encoding='utf-8')

    with pytest.raises(RepositoryUnavailable):
        JsonFileEntryRepository(str(path)).get_profile(1)


def test_same_day_ties_order_numeric_ids_as_numbers(app, user_id):
    repository = SqlEntryRepository()
    for weight in range(70, 81):
        repository.create_entry(user_id, weight, date(2024, 1, 1))
    db.session.query(WeightEntry).update({'created_at': datetime(2024, 1, 1, 8, 0)})
    db.session.commit()

    listed = repository.list_entries(user_id)

    assert listed == sorted(listed, key=newest_first_key, reverse=True)
    assert [e.weight for e in listed] == list(range(80, 69, -1))
