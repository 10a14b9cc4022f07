"""
- Keep the app offline (no random.org) and out of dev-only behaviour
- Provide a fresh GameSession / ShutdownSignal per test
- Override the app's dependencies so routes use those objects
- Provide a client fixture (TestClient(app)) that already has the overrides applied
"""
import os
import random

import pytest
from fastapi.testclient import TestClient

os.environ.setdefault("APP_ENV", "test")
os.environ["EATBITE_USE_RANDOM_ORG"] = "0"

from eatbite.main import app, get_session, get_shutdown
from eatbite.shutdown import ShutdownSignal
from eatbite.store import GameSession

# Bot's secret in every test session unless a test builds its own
BOT_SECRET = "123"


class FirstPick(random.Random):
    """Bot always takes the first remaining candidate, so its guesses are predictable."""

    def randrange(self, *args, **kwargs):
        return 0


@pytest.fixture
def session() -> GameSession:
    """Session waiting for the player's secret, bot secret known, predictable bot."""
    return GameSession(bot_secret=BOT_SECRET, rng=FirstPick())


@pytest.fixture
def shutdown_signal() -> ShutdownSignal:
    return ShutdownSignal()


@pytest.fixture(autouse=True)
def override_dep(session, shutdown_signal):
    """Force the app to use this test's session and shutdown signal."""
    app.dependency_overrides[get_session] = lambda: session
    app.dependency_overrides[get_shutdown] = lambda: shutdown_signal
    yield
    app.dependency_overrides.clear()


@pytest.fixture
def client():
    # Talks to the FastAPI app in-process; no lifespan, so no real session is built
    return TestClient(app)
