"""Command: exit

Category: Session
"""

from dataclasses import dataclass

from stcli.cmds.base import IOp, command


@command(names=["exit"])
@dataclass
class IOpExit(IOp):
    """Save your config and exit."""

    def argmap(self):
        return []

    async def run(self):
        self.state.shutdown()
