"""
Pytest fixtures for testing.
"""
from types import SimpleNamespace

import pytest

from careers import create_app
from careers.application.careers.companies import create_company
from careers.extensions import db as _db

ACCESS_CODE = "open-sesame"


class FakeTimer:
    """Stands in for threading.Timer; fires only when a test says so."""

    def __init__(self, delay, fn, args=()):
        self.delay = delay
        self.fn = fn
        self.args = args
        self.daemon = False
        self.started = False
        self.cancelled = False

    def start(self):
        self.started = True

    def cancel(self):
        self.cancelled = True

    def fire(self):
        self.fn(*self.args)


@pytest.fixture
def timers():
    """A timer factory that records every timer it creates."""
    created = []

    def factory(delay, fn, args=()):
        timer = FakeTimer(delay, fn, args)
        created.append(timer)
        return timer

    factory.created = created
    return factory


@pytest.fixture
def app(tmp_path):
    """
    App on the testing config with a fresh in-memory database.
    Uploads go to a per-test temporary directory.
    """
    app = create_app("testing", UPLOAD_FOLDER=str(tmp_path / "media"))

    with app.app_context():
        _db.create_all()

    yield app

    with app.app_context():
        _db.session.remove()
        _db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


def _make_company(app, slug, name):
    with app.app_context():
        company = create_company(slug=slug, name=name, access_code=ACCESS_CODE)
        return SimpleNamespace(id=company.id, slug=company.slug, name=company.name)


@pytest.fixture
def company(app):
    return _make_company(app, "acme", "Acme Robotics")


@pytest.fixture
def other_company(app):
    return _make_company(app, "globex", "Globex")


def login(client, slug, access_code=ACCESS_CODE):
    return client.post(
        "/api/v1/auth/login",
        json={"slug": slug, "access_code": access_code},
    )


@pytest.fixture
def token(client, company):
    response = login(client, company.slug)
    assert response.status_code == 200
    return response.get_json()["access_token"]


@pytest.fixture
def auth_headers(token):
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def other_headers(client, other_company):
    response = login(client, other_company.slug)
    return {"Authorization": f"Bearer {response.get_json()['access_token']}"}
