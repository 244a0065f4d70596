"""
Pytest fixtures for MyPOS backend tests.

Provides an application per test (fresh in-memory stores), a controllable
clock, a test client and authenticated headers for each role.
"""

from datetime import datetime, timedelta, timezone

import pytest

from mypos import create_app
from mypos.extensions import EXTENSION_KEY


FIXED_NOW = datetime(2026, 10, 18, 14, 30, tzinfo=timezone.utc)


class FakeClock:
    """Callable clock the stores read; tests move it explicitly."""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> datetime:
        self.now = self.now + timedelta(**kwargs)
        return self.now

    def set(self, now: datetime) -> None:
        self.now = now


@pytest.fixture(scope='function')
def clock():
    return FakeClock(FIXED_NOW)


@pytest.fixture(scope='function')
def app(clock):
    """Create application for testing."""
    app = create_app(
        {
            'TESTING': True,
            'BCRYPT_ROUNDS': 4,
            'SEED_DEMO_DATA': False,
        },
        clock=clock,
    )
    yield app


@pytest.fixture(scope='function')
def client(app):
    """Create test client."""
    return app.test_client()


@pytest.fixture(scope='function')
def stores(app):
    """The app's in-memory stores, for arranging and asserting state."""
    return app.extensions[EXTENSION_KEY]


def get_auth_token(client, username: str, password: str, role: str) -> str:
    """Helper to get auth token for a user."""
    response = client.post('/api/auth/login', json={
        'username': username,
        'password': password,
        'role': role,
    })
    assert response.status_code == 200, response.get_json()
    return response.get_json()['token']


def auth_headers(token: str) -> dict:
    """Helper to create Authorization headers."""
    return {'Authorization': f'Bearer {token}'}


@pytest.fixture(scope='function')
def admin_headers(client):
    return auth_headers(get_auth_token(client, 'admin', 'admin123', 'admin'))


@pytest.fixture(scope='function')
def cashier_headers(client):
    return auth_headers(get_auth_token(client, 'cashier', 'cashier123', 'cashier'))


@pytest.fixture(scope='function')
def kitchen_headers(client):
    return auth_headers(get_auth_token(client, 'kitchen', 'kitchen123', 'kitchen'))
