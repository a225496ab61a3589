"""Shared fixtures: a small Sleeper player map and a mocked Sleeper API."""

import copy
import json

import httpx
import pytest

from src.roster_manager.state_persistence import UserDataStore
from src.roster_manager.storage import InMemoryStorageBackend
from src.sleeper_import.client import SleeperClient

SAMPLE_PLAYERS = {
    "4046": {
        "player_id": "4046", "first_name": "Patrick", "last_name": "Mahomes",
        "position": "QB", "team": "KC", "status": "Active", "age": 30,
        "fantasy_positions": ["QB"], "depth_chart_order": 1,
    },
    "4881": {
        "player_id": "4881", "first_name": "Lamar", "last_name": "Jackson",
        "position": "QB", "team": "BAL", "status": "Active", "age": 28,
        "fantasy_positions": ["QB"],
    },
    "4034": {
        "player_id": "4034", "first_name": "Christian", "last_name": "McCaffrey",
        "position": "RB", "team": "SF", "status": "Active", "age": 29,
        "injury_status": "Questionable", "injury_notes": "Achilles",
        "injury_start_date": "2025-09-01", "fantasy_positions": ["RB"],
    },
    "6794": {
        "player_id": "6794", "first_name": "Justin", "last_name": "Jefferson",
        "position": "WR", "team": "MIN", "status": "Active", "age": 26,
        "injury_status": None, "fantasy_positions": ["WR"],
    },
    "1466": {
        "player_id": "1466", "first_name": "Travis", "last_name": "Kelce",
        "position": "TE", "team": "KC", "status": "Active", "age": 36,
        "injury_status": "Healthy", "fantasy_positions": ["TE"],
    },
    "3678": {
        "player_id": "3678", "first_name": "Harrison", "last_name": "Butker",
        "position": "K", "team": "KC", "status": "Active",
        "fantasy_positions": ["K"],
    },
    "3232": {
        "player_id": "3232", "first_name": "Kyle", "last_name": "Juszczyk",
        "position": "FB", "team": "SF", "status": "Active",
        "fantasy_positions": ["RB"],
    },
    "7001": {
        "player_id": "7001", "first_name": "Fred", "last_name": "Warner",
        "position": "LB", "team": "SF", "status": "Active",
        "fantasy_positions": ["LB"],
    },
    "5001": {
        "player_id": "5001", "first_name": "Michael", "last_name": "Thomas",
        "position": "WR", "team": None, "status": "Active",
        "fantasy_positions": ["WR"],
    },
    "2001": {
        "player_id": "2001", "first_name": "Old", "last_name": "Timer",
        "position": "WR", "team": "NYJ", "status": "Inactive",
        "injury_status": "IR", "fantasy_positions": ["WR"],
    },
}


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def sample_players():
    return copy.deepcopy(SAMPLE_PLAYERS)


@pytest.fixture
def memory_store():
    return UserDataStore(InMemoryStorageBackend())


def _json_response(status, body):
    # A None body is sent as a literal ``null``, the way Sleeper answers unknown ids
    return httpx.Response(
        status,
        content=json.dumps(body).encode("utf-8"),
        headers={"Content-Type": "application/json"},
    )


class FakeSleeperAPI:
    """Routes mocked Sleeper requests by path (without the ``/v1`` prefix).

    A route value is either a JSON body or a ``(status_code, body)`` pair.
    Unrouted paths return 404.
    """

    def __init__(self, routes=None):
        self.routes = dict(routes or {})
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        path = request.url.path
        if path.startswith("/v1"):
            path = path[len("/v1"):]
        self.requests.append(path)

        if path not in self.routes:
            return _json_response(404, None)

        route = self.routes[path]
        if isinstance(route, Exception):
            raise route
        if isinstance(route, tuple):
            status, body = route
            return _json_response(status, body)
        return _json_response(200, route)

    def count(self, path: str) -> int:
        return self.requests.count(path)

    def client(self) -> SleeperClient:
        return SleeperClient(transport=httpx.MockTransport(self))


@pytest.fixture
def fake_api():
    return FakeSleeperAPI()
