"""Command: system_waypoints

Category: Systems
"""

from dataclasses import dataclass, field

from stcli.cmds.base import DArg, IOp, command
from stcli.engine import presentation
from stcli.engine.primitives import system_for_waypoint


@command(names=["system_waypoints"])
@dataclass
class IOpSystemWaypoints(IOp):
    """List waypoints in a system (defaults to your headquarters system)."""

    system: str | None = field(init=False)

    def argmap(self):
        return [
            DArg(
                "system",
                convert=str.upper,
                default=None,
                desc="System symbol (e.g. X1-DF55)",
            )
        ]

    async def run(self):
        system = self.system or system_for_waypoint(self.session.config.headquarters)
        if not system:
            return "No system given and no headquarters saved yet. Usage: system_waypoints <system>"

        return await self.invoke(
            f"list waypoints for system {system}",
            lambda: self.gateway.get_system_waypoints(self.api, system),
            presentation.show_waypoints,
        )
