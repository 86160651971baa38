"""Command: get_agent

Category: Agent
"""

from dataclasses import dataclass

from stcli.cmds.base import IOp, command
from stcli.engine import presentation


@command(names=["get_agent"])
@dataclass
class IOpGetAgent(IOp):
    """Show your agent: account, headquarters, and credits."""

    def argmap(self):
        return []

    async def run(self):
        return await self.invoke(
            "get agent data",
            lambda: self.gateway.get_my_agent(self.api),
            presentation.show_agent,
        )
