import os
import sys
import tempfile

import pytest

# Ensure the project root (containing the `spot_server` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
PROJECT_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

# Keep test logs out of the working tree
os.environ.setdefault('LOG_DIR', tempfile.mkdtemp(prefix='spot-logs-'))

from spot_server import create_app  # noqa: E402
from spot_server.config import TestingConfig  # noqa: E402
from spot_server.models.game import MatchConfig  # noqa: E402
from spot_server.services.match_service import MatchEngine  # noqa: E402


class TestConfig(TestingConfig):
    SECRET_KEY = 'test-secret'
    IDENTITY_SECRET = 'test-identity-secret'
    HAND_SIZE = 6
    TURNS_TO_WIN = 2
    LOCKOUT_DURATION_MS = 2000
    MIN_PLAYERS = 2
    NOTIFY_UNLOCK = False


class UnlockNoticeConfig(TestConfig):
    LOCKOUT_DURATION_MS = 300
    MIN_PLAYERS = 1
    NOTIFY_UNLOCK = True


class FakeClock:
    """Millisecond clock driven by the test."""

    def __init__(self, start=1_000_000):
        self.now = start

    def __call__(self):
        return self.now

    def advance(self, ms):
        self.now += ms


@pytest.fixture()
def clock():
    return FakeClock()


@pytest.fixture()
def match_config():
    return MatchConfig(lockout_duration_ms=2000, turns_to_win=2, hand_size=6, min_players=1)


@pytest.fixture()
def engine(match_config, clock):
    return MatchEngine(match_config, clock=clock)


@pytest.fixture()
def snapshots(engine):
    """Every snapshot the engine emits, in order."""
    received = []
    engine.subscribe(received.append)
    return received


@pytest.fixture()
def flask_app(clock):
    engine = MatchEngine(MatchConfig.from_app_config(vars(TestConfig)), clock=clock)
    application, _ = create_app(TestConfig, engine=engine)
    yield application
    application.unsubscribe_broadcast()


@pytest.fixture()
def socketio(flask_app):
    return flask_app.socketio


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def issue_token(flask_app):
    """Issue an identity token for a device id."""
    def _issue(device_id, name=None):
        return flask_app.identity_service.issue_token(device_id, name)['token']
    return _issue


@pytest.fixture()
def sio_factory(flask_app, socketio, issue_token):
    """Create Socket.IO test clients identified by device id."""
    clients = []

    def _connect(device_id=None, name=None, **kwargs):
        if device_id is not None:
            kwargs.setdefault('auth', {'token': issue_token(device_id, name)})
        test_client = socketio.test_client(flask_app, **kwargs)
        clients.append(test_client)
        return test_client

    yield _connect

    for test_client in clients:
        try:
            if test_client.is_connected():
                test_client.disconnect()
        except RuntimeError:
            pass


@pytest.fixture()
def notifying_app():
    """App on the wall clock that announces when a lockout ends."""
    application, _ = create_app(UnlockNoticeConfig)
    yield application
    application.unsubscribe_broadcast()
