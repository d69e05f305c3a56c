import os
import sys

os.environ["TTT_ASYNC_MODE"] = "threading"
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import pytest

import app as app_module


@pytest.fixture(autouse=True)
def clear_rooms():
    app_module.games.clear()
    yield
    app_module.games.clear()


@pytest.fixture
def client():
    return app_module.socketio.test_client(app_module.app)
