"""REPL command registry and dispatcher.

Importing this package imports every command module, which registers each
command class into ``COMMANDS`` via ``@command``.
"""

from collections import defaultdict
from typing import Any

from stcli.cmds.base import (
    COMMANDS,
    CommandArgumentError,
    CommandError,
    DArg,
    IOp,
    UnknownCommand,
    command,
)

# registration side effects
from stcli.cmds.server import check_server  # noqa: F401
from stcli.cmds.agent import get_agent, register  # noqa: F401
from stcli.cmds.fleet import show_ship_nav, show_ships  # noqa: F401
from stcli.cmds.contracts import accept_contract, show_contract, show_contracts  # noqa: F401
from stcli.cmds.systems import system_waypoints  # noqa: F401
from stcli.cmds.session import config, shutdown  # noqa: F401

# help output order
CATEGORIES = {
    "server": "Server",
    "agent": "Agent",
    "fleet": "Fleet",
    "contracts": "Contracts",
    "systems": "Systems",
    "session": "Session",
}

__all__ = [
    "COMMANDS",
    "CATEGORIES",
    "CommandArgumentError",
    "CommandError",
    "DArg",
    "Dispatch",
    "IOp",
    "UnknownCommand",
    "command",
]


class Dispatch:
    """Resolve command names to IOp classes and run them against the app state."""

    def __init__(self, ops: dict[str, type[IOp]] | None = None):
        self.ops = dict(COMMANDS if ops is None else ops)

    def names(self) -> list[str]:
        return sorted(self.ops)

    def category(self, name: str) -> str:
        # stcli.cmds.<category>.<module>
        pkg = self.ops[name].__module__.split(".")[-2]
        return CATEGORIES.get(pkg, "Other")

    def groups(self) -> dict[str, list[str]]:
        found = defaultdict(list)
        for name in self.names():
            found[self.category(name)].append(name)

        order = list(CATEGORIES.values()) + ["Other"]
        return {cat: found[cat] for cat in order if cat in found}

    def usage(self, name: str) -> str:
        args = self.ops[name]().argmap()
        return " ".join([name] + [darg.usage() for darg in args])

    def describe(self, name: str) -> str:
        doc = self.ops[name].__doc__ or ""
        return doc.strip().split("\n")[0]

    async def runop(self, name: str, args: str | None, state: Any) -> str | None:
        cls = self.ops.get(name)
        if cls is None:
            raise UnknownCommand(f"Unknown command: {name} (type ? for help)")

        op = cls(state=state)
        op.bind(args)
        return await op.run()
