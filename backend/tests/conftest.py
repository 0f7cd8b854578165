from datetime import date, datetime

import pytest

from weightlog import create_app, db
from weightlog.repositories import EntryRecord, RepositoryUnavailable


@pytest.fixture
def app():
    app = create_app('testing')
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


def register_and_login(client, username='alice', email='alice@example.com', password='Secret123'):
    client.post('/api/auth/register', json={
        'username': username,
        'email': email,
        'password': password
    })
    response = client.post('/api/auth/login', json={'email': email, 'password': password})
    token = response.get_json()['access_token']
    return {'Authorization': f'Bearer {token}'}


@pytest.fixture
def auth_headers(client):
    return register_and_login(client)


def make_entry(entry_id, weight, entry_date, user_id=1, created_at=None):
    if isinstance(entry_date, str):
        entry_date = date.fromisoformat(entry_date)
    return EntryRecord(
        id=str(entry_id),
        user_id=user_id,
        weight=weight,
        entry_date=entry_date,
        created_at=created_at or datetime(2024, 1, 1, 8, 0, 0)
    )


@pytest.fixture
def sample_entries():
    # Newest first
    return [
        make_entry('3', 80, '2024-01-03'),
        make_entry('2', 78, '2024-01-02'),
        make_entry('1', 76, '2024-01-01'),
    ]


class UnavailableRepository:
    """Entry store whose every call fails."""

    def list_entries(self, user_id):
        raise RepositoryUnavailable("store offline")

    def get_entry(self, entry_id):
        raise RepositoryUnavailable("store offline")

    def create_entry(self, user_id, weight, entry_date):
        raise RepositoryUnavailable("store offline")

    def update_entry(self, entry_id, partial_fields):
        raise RepositoryUnavailable("store offline")

    def delete_entry(self, entry_id):
        raise RepositoryUnavailable("store offline")

    def get_profile(self, user_id):
        raise RepositoryUnavailable("store offline")

    def merge_profile(self, user_id, partial_fields):
        raise RepositoryUnavailable("store offline")


@pytest.fixture
def unavailable_repository():
    return UnavailableRepository()
