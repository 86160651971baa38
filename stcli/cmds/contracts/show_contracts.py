"""Command: show_contracts

Category: Contracts
"""

from dataclasses import dataclass

from stcli.cmds.base import IOp, command
from stcli.engine import presentation


@command(names=["show_contracts"])
@dataclass
class IOpShowContracts(IOp):
    """List your contracts with payment and deadline."""

    def argmap(self):
        return []

    async def run(self):
        return await self.invoke(
            "list contracts",
            lambda: self.gateway.get_contracts(self.api),
            presentation.show_contracts,
        )
