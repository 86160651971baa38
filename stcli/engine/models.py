"""Typed records for SpaceTraders API payloads.

Only the fields the client displays or stores are kept. Each record reads
the API's camelCase JSON through ``from_json``; a missing required key
raises ``KeyError`` which the gateway reports as a decode failure.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(slots=True, frozen=True)
class ServerStatus:
    """Result of GET on the API root. Any status code is a valid result here."""

    status_code: int
    text: str
    status: str = ""
    version: str = ""
    reset_date: str = ""

    @property
    def available(self) -> bool:
        return self.status_code == 200


@dataclass(slots=True, frozen=True)
class Agent:
    account_id: str
    symbol: str
    headquarters: str
    credits: int
    starting_faction: str = ""
    ship_count: int = 0

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> Agent:
        return cls(
            # only returned for your own agent
            account_id=data.get("accountId", ""),
            symbol=data["symbol"],
            headquarters=data["headquarters"],
            credits=data["credits"],
            starting_faction=data.get("startingFaction", ""),
            ship_count=data.get("shipCount", 0),
        )


@dataclass(slots=True, frozen=True)
class Registration:
    token: str
    agent: Agent
    faction_symbol: str
    faction_name: str = ""

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> Registration:
        faction = data["faction"]
        return cls(
            token=data["token"],
            agent=Agent.from_json(data["agent"]),
            faction_symbol=faction["symbol"],
            faction_name=faction.get("name", ""),
        )


@dataclass(slots=True, frozen=True)
class NavWaypoint:
    symbol: str
    type: str
    system_symbol: str
    x: int
    y: int

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> NavWaypoint:
        return cls(
            symbol=data["symbol"],
            type=data.get("type", ""),
            system_symbol=data.get("systemSymbol", ""),
            x=data.get("x", 0),
            y=data.get("y", 0),
        )


@dataclass(slots=True, frozen=True)
class ShipNav:
    system_symbol: str
    waypoint_symbol: str
    status: str
    flight_mode: str
    origin: NavWaypoint | None = None
    destination: NavWaypoint | None = None
    departure_time: str = ""
    arrival: str = ""

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> ShipNav:
        route = data.get("route") or {}
        origin = route.get("origin")
        destination = route.get("destination")
        return cls(
            system_symbol=data["systemSymbol"],
            waypoint_symbol=data["waypointSymbol"],
            status=data["status"],
            flight_mode=data.get("flightMode", ""),
            origin=NavWaypoint.from_json(origin) if origin else None,
            destination=NavWaypoint.from_json(destination) if destination else None,
            departure_time=route.get("departureTime", ""),
            arrival=route.get("arrival", ""),
        )


@dataclass(slots=True, frozen=True)
class Ship:
    symbol: str
    role: str
    frame: str
    nav: ShipNav
    fuel_current: int = 0
    fuel_capacity: int = 0
    cargo_units: int = 0
    cargo_capacity: int = 0

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> Ship:
        fuel = data.get("fuel") or {}
        cargo = data.get("cargo") or {}
        return cls(
            symbol=data["symbol"],
            role=data.get("registration", {}).get("role", ""),
            frame=data.get("frame", {}).get("name", ""),
            nav=ShipNav.from_json(data["nav"]),
            fuel_current=fuel.get("current", 0),
            fuel_capacity=fuel.get("capacity", 0),
            cargo_units=cargo.get("units", 0),
            cargo_capacity=cargo.get("capacity", 0),
        )


@dataclass(slots=True, frozen=True)
class ContractDelivery:
    trade_symbol: str
    destination_symbol: str
    units_required: int
    units_fulfilled: int

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> ContractDelivery:
        return cls(
            trade_symbol=data["tradeSymbol"],
            destination_symbol=data["destinationSymbol"],
            units_required=data["unitsRequired"],
            units_fulfilled=data["unitsFulfilled"],
        )


@dataclass(slots=True, frozen=True)
class Contract:
    id: str
    faction_symbol: str
    type: str
    accepted: bool
    fulfilled: bool
    deadline: str
    payment_on_accepted: int
    payment_on_fulfilled: int
    deadline_to_accept: str = ""
    deliver: tuple[ContractDelivery, ...] = field(default_factory=tuple)

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> Contract:
        terms = data["terms"]
        payment = terms["payment"]
        return cls(
            id=data["id"],
            faction_symbol=data["factionSymbol"],
            type=data["type"],
            accepted=data["accepted"],
            fulfilled=data["fulfilled"],
            deadline=terms["deadline"],
            payment_on_accepted=payment["onAccepted"],
            payment_on_fulfilled=payment["onFulfilled"],
            deadline_to_accept=data.get("deadlineToAccept", ""),
            deliver=tuple(
                ContractDelivery.from_json(d) for d in terms.get("deliver") or []
            ),
        )


@dataclass(slots=True, frozen=True)
class AcceptedContract:
    agent: Agent
    contract: Contract

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> AcceptedContract:
        return cls(
            agent=Agent.from_json(data["agent"]),
            contract=Contract.from_json(data["contract"]),
        )


@dataclass(slots=True, frozen=True)
class Waypoint:
    symbol: str
    type: str
    system_symbol: str
    x: int
    y: int
    orbitals: tuple[str, ...] = field(default_factory=tuple)
    traits: tuple[str, ...] = field(default_factory=tuple)
    faction_symbol: str = ""

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> Waypoint:
        return cls(
            symbol=data["symbol"],
            type=data["type"],
            system_symbol=data.get("systemSymbol", ""),
            x=data["x"],
            y=data["y"],
            orbitals=tuple(o["symbol"] for o in data.get("orbitals") or []),
            # prefer the readable name, fall back to the trait symbol
            traits=tuple(
                t.get("name") or t["symbol"] for t in data.get("traits") or []
            ),
            faction_symbol=(data.get("faction") or {}).get("symbol", ""),
        )
