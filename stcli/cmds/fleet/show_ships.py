"""Command: show_ships

Category: Fleet
"""

from dataclasses import dataclass

from stcli.cmds.base import IOp, command
from stcli.engine import presentation


@command(names=["show_ships"])
@dataclass
class IOpShowShips(IOp):
    """List every ship you own with location, fuel, and cargo."""

    def argmap(self):
        return []

    async def run(self):
        return await self.invoke(
            "list ships",
            lambda: self.gateway.get_my_ships(self.api),
            presentation.show_ships,
        )
