import random

import pytest
from fastapi.testclient import TestClient

from gameshow_app.core.gameshow_manager import GameshowManager
from gameshow_app.core.storage import InMemoryStore
from gameshow_app.core.team_codes import TeamCodeGenerator
from gameshow_app.server.api_server import create_api_app


@pytest.fixture()
def kv():
    return InMemoryStore()


@pytest.fixture()
def manager(kv):
    return GameshowManager(kv, code_generator=TeamCodeGenerator(rng=random.Random(1234)))


@pytest.fixture()
def client(manager):
    return TestClient(create_api_app(manager))
