"""Pytest fixtures: every test gets its own store and app."""

import pytest
from fastapi.testclient import TestClient

from shortlink.config import Settings
from shortlink.main import create_app
from shortlink.store import URLStore


@pytest.fixture
def config():
    return Settings()


@pytest.fixture
def store():
    return URLStore()


@pytest.fixture
def app(store, config):
    return create_app(store=store, config=config)


@pytest.fixture
def client(app):
    return TestClient(app)
