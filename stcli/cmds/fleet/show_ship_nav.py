"""Command: show_ship_nav

Category: Fleet
"""

import functools
from dataclasses import dataclass, field

from stcli.cmds.base import DArg, IOp, command
from stcli.engine import presentation


@command(names=["show_ship_nav"])
@dataclass
class IOpShowShipNav(IOp):
    """Show navigation status and current route for one ship."""

    symbol: str = field(init=False)

    def argmap(self):
        return [DArg("symbol", desc="Ship symbol, as registered (e.g. BADGER-1)")]

    async def run(self):
        return await self.invoke(
            f"get navigation for ship {self.symbol}",
            lambda: self.gateway.get_ship_nav(self.api, self.symbol),
            functools.partial(presentation.show_ship_nav, self.symbol),
        )
