"""Command: show_contract

Category: Contracts
"""

from dataclasses import dataclass, field

from stcli.cmds.base import DArg, IOp, command
from stcli.engine import presentation


@command(names=["show_contract"])
@dataclass
class IOpShowContract(IOp):
    """Show the delivery terms of one contract."""

    contract: str = field(init=False)

    def argmap(self):
        return [DArg("contract", desc="Contract ID")]

    async def run(self):
        return await self.invoke(
            f"get contract {self.contract}",
            lambda: self.gateway.get_contract(self.api, self.contract),
            presentation.show_contract,
        )
