"""Command: accept_contract

Category: Contracts
"""

from dataclasses import dataclass, field

from stcli.cmds.base import DArg, IOp, command
from stcli.engine import presentation


@command(names=["accept_contract"])
@dataclass
class IOpAcceptContract(IOp):
    """Accept a contract by ID (pays the on-accept amount immediately)."""

    contract: str = field(init=False)

    def argmap(self):
        return [DArg("contract", desc="Contract ID")]

    async def run(self):
        return await self.invoke(
            f"accept contract {self.contract}",
            lambda: self.gateway.accept_contract(self.api, self.contract),
            presentation.show_accepted,
        )
