# tests/conftest.py
import os
import pytest
from fastapi.testclient import TestClient

# Set environment variables for testing before the app is imported
os.environ["SECRET_KEY"] = "testing_secret_key_for_development_only"
os.environ["MESSAGE_STORE"] = "memory"
os.environ["MAIL_SUPPRESS_SEND"] = "1"

from main import app
from graph_messaging.db import get_store
from graph_messaging.services.email_service import get_notifier
from graph_messaging.store.memory import InMemoryMessageStore
from graph_messaging.utils.auth import create_access_token


class RecordingNotifier:
    """Stands in for the email notifier and keeps what it was asked to send."""

    def __init__(self, fail: bool = False):
        self.sent = []
        self.fail = fail

    async def dispatch(self, notification):
        if self.fail:
            raise RuntimeError("smtp unavailable")
        self.sent.append(notification)
        return True


@pytest.fixture
def store():
    return InMemoryMessageStore()


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def alice(store):
    return store.add_user(email="alice@example.com", username="alice")


@pytest.fixture
def bob(store):
    return store.add_user(email="bob@example.com", username="bob")


@pytest.fixture
def carol(store):
    return store.add_user(email="carol@example.com", username="carol")


@pytest.fixture
def client(store, notifier):
    app.dependency_overrides[get_store] = lambda: store
    app.dependency_overrides[get_notifier] = lambda: notifier
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers():
    def _headers(user_id: str) -> dict:
        return {"Authorization": f"Bearer {create_access_token(user_id)}"}
    return _headers
