"""Command: check_server

Category: Server
"""

from dataclasses import dataclass

from stcli.cmds.base import IOp, command
from stcli.engine import presentation


@command(names=["check_server"])
@dataclass
class IOpCheckServer(IOp):
    """Check the server status."""

    def argmap(self):
        return []

    async def run(self):
        return await self.invoke(
            "check server status",
            lambda: self.gateway.server_status(self.api),
            presentation.show_server_status,
        )
