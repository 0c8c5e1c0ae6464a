"""Shared pytest fixtures for matchplay tests."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from matchplay.app import app
from matchplay.config import reset_settings_cache


@pytest.fixture(autouse=True)
def _fresh_settings():
    reset_settings_cache()
    yield
    reset_settings_cache()


@pytest.fixture
def client():
    with TestClient(app) as test_client:
        yield test_client
