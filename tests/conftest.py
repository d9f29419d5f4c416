"""Shared test fixtures for the task board tests."""

import os
import sys
import tempfile
from pathlib import Path

import pytest

# Ensure app.py at the repo root is importable, and keep its log file out of the tree
sys.path.insert(0, str(Path(__file__).parent.parent))
os.environ.setdefault("LOG_FILE", os.path.join(tempfile.gettempdir(), "taskboard-test.log"))

from app import create_app  # noqa: E402
from taskboard.store import TaskStore  # noqa: E402


@pytest.fixture
def store():
    return TaskStore()


@pytest.fixture
def app(store):
    flask_app = create_app(store=store)
    flask_app.config.update(TESTING=True)
    return flask_app


@pytest.fixture
def client(app):
    return app.test_client()
