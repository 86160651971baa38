"""Shared test fixtures for stcli test suite.

FakeGateway provides a test double for stcli.engine.gateway.Gateway,
allowing command tests without network access. Payload fixtures are
camelCase dicts shaped like real SpaceTraders API responses so the
model parsing runs in every command test too.
"""

from typing import Any
from unittest.mock import patch

import pytest

from stcli.engine.config import GameConfig
from stcli.engine.models import (
    AcceptedContract,
    Agent,
    Contract,
    Registration,
    Ship,
    ShipNav,
    Waypoint,
)
from stcli.engine.session import ClientConfiguration, SessionContext


class FakeGateway:
    """Test double for Gateway.

    Set ``results[<method name>]`` to the value to return, or to an
    exception instance to raise. Every call is recorded in ``calls`` as
    (method name, client configuration, extra args).
    """

    def __init__(self):
        self.results: dict[str, Any] = {}
        self.calls: list[tuple[str, ClientConfiguration, tuple]] = []

    async def _answer(self, name: str, cfg: ClientConfiguration, *args):
        self.calls.append((name, cfg, args))
        got = self.results[name]
        if isinstance(got, Exception):
            raise got

        return got

    async def server_status(self, cfg):
        return await self._answer("server_status", cfg)

    async def register(self, cfg, call_sign, faction):
        return await self._answer("register", cfg, call_sign, faction)

    async def get_my_agent(self, cfg):
        return await self._answer("get_my_agent", cfg)

    async def get_my_ships(self, cfg):
        return await self._answer("get_my_ships", cfg)

    async def get_ship_nav(self, cfg, symbol):
        return await self._answer("get_ship_nav", cfg, symbol)

    async def get_contracts(self, cfg):
        return await self._answer("get_contracts", cfg)

    async def get_contract(self, cfg, contract_id):
        return await self._answer("get_contract", cfg, contract_id)

    async def accept_contract(self, cfg, contract_id):
        return await self._answer("accept_contract", cfg, contract_id)

    async def get_system_waypoints(self, cfg, system):
        return await self._answer("get_system_waypoints", cfg, system)


# ── API payloads ──


@pytest.fixture
def agent_payload() -> dict:
    return {
        "accountId": "clx0abc123",
        "symbol": "BADGER",
        "headquarters": "X1-DF55-20250Z",
        "credits": 175000,
        "startingFaction": "COSMIC",
        "shipCount": 2,
    }


@pytest.fixture
def nav_payload() -> dict:
    return {
        "systemSymbol": "X1-DF55",
        "waypointSymbol": "X1-DF55-20250Z",
        "route": {
            "origin": {
                "symbol": "X1-DF55-20250Z",
                "type": "PLANET",
                "systemSymbol": "X1-DF55",
                "x": 10,
                "y": -4,
            },
            "destination": {
                "symbol": "X1-DF55-17335A",
                "type": "ASTEROID_FIELD",
                "systemSymbol": "X1-DF55",
                "x": -23,
                "y": 41,
            },
            "departureTime": "2026-10-19T10:00:00.000Z",
            "arrival": "2026-10-19T10:02:11.000Z",
        },
        "status": "IN_TRANSIT",
        "flightMode": "CRUISE",
    }


@pytest.fixture
def ship_payload(nav_payload) -> dict:
    return {
        "symbol": "BADGER-1",
        "registration": {"name": "BADGER-1", "factionSymbol": "COSMIC", "role": "COMMAND"},
        "nav": nav_payload,
        "frame": {"symbol": "FRAME_FRIGATE", "name": "Frigate"},
        "fuel": {"current": 300, "capacity": 400},
        "cargo": {"capacity": 40, "units": 12, "inventory": []},
    }


@pytest.fixture
def contract_payload() -> dict:
    return {
        "id": "cm0contract1",
        "factionSymbol": "COSMIC",
        "type": "PROCUREMENT",
        "terms": {
            "deadline": "2026-10-26T10:00:00.000Z",
            "payment": {"onAccepted": 4120, "onFulfilled": 26180},
            "deliver": [
                {
                    "tradeSymbol": "IRON_ORE",
                    "destinationSymbol": "X1-DF55-20250Z",
                    "unitsRequired": 55,
                    "unitsFulfilled": 0,
                }
            ],
        },
        "accepted": False,
        "fulfilled": False,
        "expiration": "2026-10-20T10:00:00.000Z",
        "deadlineToAccept": "2026-10-20T10:00:00.000Z",
    }


@pytest.fixture
def waypoint_payload() -> dict:
    return {
        "symbol": "X1-DF55-20250Z",
        "type": "PLANET",
        "systemSymbol": "X1-DF55",
        "x": 10,
        "y": -4,
        "orbitals": [{"symbol": "X1-DF55-20250Y"}, {"symbol": "X1-DF55-20250X"}],
        "traits": [
            {"symbol": "MARKETPLACE", "name": "Marketplace", "description": "..."},
            {"symbol": "SHIPYARD", "name": "Shipyard", "description": "..."},
        ],
        "faction": {"symbol": "COSMIC"},
    }


# ── Parsed records ──


@pytest.fixture
def agent(agent_payload) -> Agent:
    return Agent.from_json(agent_payload)


@pytest.fixture
def ship_nav(nav_payload) -> ShipNav:
    return ShipNav.from_json(nav_payload)


@pytest.fixture
def ship(ship_payload) -> Ship:
    return Ship.from_json(ship_payload)


@pytest.fixture
def contract(contract_payload) -> Contract:
    return Contract.from_json(contract_payload)


@pytest.fixture
def waypoint(waypoint_payload) -> Waypoint:
    return Waypoint.from_json(waypoint_payload)


@pytest.fixture
def registration(agent_payload) -> Registration:
    return Registration.from_json(
        {
            "token": "tkn123",
            "agent": agent_payload,
            "faction": {"symbol": "COSMIC", "name": "Cosmic Engineers"},
        }
    )


@pytest.fixture
def accepted(agent_payload, contract_payload) -> AcceptedContract:
    return AcceptedContract.from_json(
        {
            "agent": {**agent_payload, "credits": 179120},
            "contract": {**contract_payload, "accepted": True},
        }
    )


# ── App state ──


@pytest.fixture
def game_config() -> GameConfig:
    return GameConfig()


@pytest.fixture
def session(game_config) -> SessionContext:
    return SessionContext.from_config(game_config)


@pytest.fixture
def fake_gateway() -> FakeGateway:
    return FakeGateway()


@pytest.fixture
def config_path(tmp_path):
    return tmp_path / "spacetraders.json"


@pytest.fixture
def app(config_path, fake_gateway):
    """App wired to FakeGateway and a temp config path, with no config loaded yet."""
    with patch("stcli.cli.SpaceTradersCmdlineApp.setupLogging"):
        from stcli.cli import SpaceTradersCmdlineApp

        yield SpaceTradersCmdlineApp(configFile=config_path, gateway=fake_gateway)


@pytest.fixture
def loaded_app(app, session):
    """App with an in-memory default session (as if loadConfig() succeeded)."""
    app.session = session
    return app
