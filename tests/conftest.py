"""
Test configuration and fixtures for the URL shortener.
This centralizes all test setup, making individual tests clean.
"""

import logging

import pytest
from fastapi.testclient import TestClient

from alias_shortener.app_factory import create_app
from alias_shortener.config import Settings
from alias_shortener.logging_config import ContextLogger
from alias_shortener.storage.strategies import SQLStorage

HTTP_USER = "myuser"
HTTP_PASSWORD = "mypass"


@pytest.fixture
def auth():
    """Valid basic auth credentials for the /url routes."""
    return (HTTP_USER, HTTP_PASSWORD)


@pytest.fixture
def settings(tmp_path):
    """Settings pointing at a throwaway SQLite file (no .env lookup)."""
    return Settings(
        _env_file=None,
        env="local",
        http_user=HTTP_USER,
        http_password=HTTP_PASSWORD,
        storage_path=str(tmp_path / "storage.db"),
    )


@pytest.fixture
def logger():
    """
    Test logger. It propagates to the root logger, so caplog sees
    everything the app logs.
    """
    return ContextLogger(logging.getLogger("url_shortener.tests"))


@pytest.fixture
def storage(settings):
    """Fresh SQL storage for each test."""
    storage = SQLStorage.from_path(settings.storage_path)
    try:
        yield storage
    finally:
        storage.close()


@pytest.fixture
def app(settings, logger, storage):
    app = create_app(settings, logger=logger, storage=storage)
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
def client(app):
    """
    Test client for the app.
    This is the main fixture that tests will use.
    """
    with TestClient(app) as test_client:
        yield test_client
