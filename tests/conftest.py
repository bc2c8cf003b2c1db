import os
import sys

import pytest

# Ensure repository root importable early
ROOT_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT_DIR not in sys.path:
    sys.path.insert(0, ROOT_DIR)

from minecrawl import create_app  # noqa: E402
from minecrawl.routes.room_api import clear_sessions  # noqa: E402
from tests.room_test_utils import open_room  # noqa: E402


@pytest.fixture(scope="session")
def test_app():
    app = create_app()
    app.config.update({"TESTING": True})
    return app


@pytest.fixture(autouse=True)
def _push_app_context(test_app):
    ctx = test_app.app_context()
    ctx.push()
    try:
        yield
    finally:
        ctx.pop()


@pytest.fixture()
def client(test_app):
    clear_sessions()
    yield test_app.test_client()
    clear_sessions()


@pytest.fixture()
def blank_room():
    """9x9 room, entrance LEFT, no interior walls, no entities, interior hidden."""
    return open_room(9, 9)
