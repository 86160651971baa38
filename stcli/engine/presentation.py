"""Formatting of successful API payloads into printable tables and messages.

Every ``*_frame`` function builds a DataFrame with a fixed header so an
empty result still renders its column names. ``render`` turns a frame into
a grid table; grid format keeps newline-joined cells (orbitals, traits)
aligned across their extra lines.
"""

from __future__ import annotations

from collections.abc import Sequence

import orjson
import pandas as pd

from stcli.engine.config import GameConfig
from stcli.engine.models import (
    AcceptedContract,
    Agent,
    Contract,
    NavWaypoint,
    Registration,
    ServerStatus,
    Ship,
    ShipNav,
    Waypoint,
)

AGENT_COLUMNS = ["Account ID", "Symbol", "Headquarters", "Credits", "Faction", "Ships"]

SHIP_COLUMNS = [
    "Symbol",
    "Role",
    "Frame",
    "System",
    "Waypoint",
    "Status",
    "Flight Mode",
    "Fuel",
    "Cargo",
]

NAV_COLUMNS = [
    "Ship",
    "System",
    "Waypoint",
    "Status",
    "Flight Mode",
    "Origin",
    "Destination",
    "Arrival",
]

CONTRACT_COLUMNS = [
    "ID",
    "Faction",
    "Type",
    "Accepted",
    "Fulfilled",
    "On Accepted",
    "On Fulfilled",
    "Deadline",
]

DELIVERY_COLUMNS = ["Trade Symbol", "Destination", "Required", "Fulfilled"]

WAYPOINT_COLUMNS = ["Symbol", "Type", "X", "Y", "Orbitals", "Traits"]


def credits(amount: int) -> str:
    return f"{amount:,}"


def yesno(val: bool) -> str:
    return "yes" if val else "no"


def render(frame: pd.DataFrame) -> str:
    # disable_numparse keeps our pre-formatted strings (credits, coordinates) untouched
    return frame.to_markdown(index=False, tablefmt="grid", disable_numparse=True)


def agent_frame(agent: Agent) -> pd.DataFrame:
    return pd.DataFrame(
        [
            [
                agent.account_id,
                agent.symbol,
                agent.headquarters,
                credits(agent.credits),
                agent.starting_faction,
                str(agent.ship_count),
            ]
        ],
        columns=AGENT_COLUMNS,
    )


def ships_frame(ships: Sequence[Ship]) -> pd.DataFrame:
    return pd.DataFrame(
        [
            [
                ship.symbol,
                ship.role,
                ship.frame,
                ship.nav.system_symbol,
                ship.nav.waypoint_symbol,
                ship.nav.status,
                ship.nav.flight_mode,
                f"{ship.fuel_current}/{ship.fuel_capacity}",
                f"{ship.cargo_units}/{ship.cargo_capacity}",
            ]
            for ship in ships
        ],
        columns=SHIP_COLUMNS,
    )


def _where(wp: NavWaypoint | None) -> str:
    if wp is None:
        return ""

    return f"{wp.symbol} ({wp.type})" if wp.type else wp.symbol


def nav_frame(symbol: str, nav: ShipNav) -> pd.DataFrame:
    return pd.DataFrame(
        [
            [
                symbol,
                nav.system_symbol,
                nav.waypoint_symbol,
                nav.status,
                nav.flight_mode,
                _where(nav.origin),
                _where(nav.destination),
                nav.arrival,
            ]
        ],
        columns=NAV_COLUMNS,
    )


def contracts_frame(contracts: Sequence[Contract]) -> pd.DataFrame:
    return pd.DataFrame(
        [
            [
                c.id,
                c.faction_symbol,
                c.type,
                yesno(c.accepted),
                yesno(c.fulfilled),
                credits(c.payment_on_accepted),
                credits(c.payment_on_fulfilled),
                c.deadline,
            ]
            for c in contracts
        ],
        columns=CONTRACT_COLUMNS,
    )


def delivery_frame(contract: Contract) -> pd.DataFrame:
    return pd.DataFrame(
        [
            [
                d.trade_symbol,
                d.destination_symbol,
                str(d.units_required),
                str(d.units_fulfilled),
            ]
            for d in contract.deliver
        ],
        columns=DELIVERY_COLUMNS,
    )


def waypoints_frame(waypoints: Sequence[Waypoint]) -> pd.DataFrame:
    return pd.DataFrame(
        [
            [
                wp.symbol,
                wp.type,
                str(wp.x),
                str(wp.y),
                "\n".join(wp.orbitals),
                "\n".join(wp.traits),
            ]
            for wp in waypoints
        ],
        columns=WAYPOINT_COLUMNS,
    )


def show_agent(agent: Agent) -> str:
    return render(agent_frame(agent))


def show_ships(ships: Sequence[Ship]) -> str:
    return render(ships_frame(ships))


def show_contracts(contracts: Sequence[Contract]) -> str:
    return render(contracts_frame(contracts))


def show_ship_nav(symbol: str, nav: ShipNav) -> str:
    return render(nav_frame(symbol, nav))


def show_waypoints(waypoints: Sequence[Waypoint]) -> str:
    return render(waypoints_frame(waypoints))


def show_contract(contract: Contract) -> str:
    accept_by = contract.deadline_to_accept or "n/a"
    summary = (
        f"Contract {contract.id} ({contract.type} for {contract.faction_symbol})\n"
        f"Accept by {accept_by}, deliver by {contract.deadline}\n"
        f"Payment: {credits(contract.payment_on_accepted)} on accept, "
        f"{credits(contract.payment_on_fulfilled)} on fulfill"
    )
    return summary + "\n" + render(delivery_frame(contract))


def show_server_status(status: ServerStatus) -> str:
    if not status.available:
        return f"Server returned {status.status_code} \n {status.text}"

    lines = ["Server is available"]
    if status.status:
        lines.append(status.status)

    if status.version:
        lines.append(f"Version {status.version}, last reset {status.reset_date or 'unknown'}")

    return "\n".join(lines)


def show_registration(reg: Registration) -> str:
    return f"Successfully registered. Got token ( this will be saved on exit ) {reg.token}"


def show_accepted(accepted: AcceptedContract) -> str:
    return (
        f"Accepted contract {accepted.contract.id}. "
        f"Credits now {credits(accepted.agent.credits)}"
    )


def show_config(config: GameConfig) -> str:
    return config.to_json().decode().rstrip("\n")
