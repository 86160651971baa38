"""Command: register

Category: Agent
"""

from dataclasses import dataclass, field

from loguru import logger

from stcli.cmds.base import DArg, IOp, command
from stcli.engine import presentation
from stcli.engine.models import Registration
from stcli.engine.primitives import CALL_SIGN_MAX, CALL_SIGN_MIN, DEFAULT_FACTION, FACTIONS


@command(names=["register"])
@dataclass
class IOpRegister(IOp):
    """Register as a new agent. The default faction is COSMIC, see the docs for all options.

    The token returned by the server is used immediately for every following
    command and is written to the config file on exit (or on save_config).
    """

    callsign: str = field(init=False)
    faction: str = field(init=False)

    def argmap(self):
        return [
            DArg("callsign", desc="Unique agent call sign (3-14 characters)"),
            DArg(
                "faction",
                convert=str.upper,
                default=DEFAULT_FACTION,
                verify=lambda x: x in FACTIONS,
                errmsg=f"Unknown faction. Choose one of: {', '.join(FACTIONS)}",
                desc="Starting faction",
            ),
        ]

    def registered(self, reg: Registration) -> str:
        self.session.apply_registration(
            reg.token,
            self.callsign,
            reg.faction_symbol,
            headquarters=reg.agent.headquarters,
        )
        logger.info(
            "[{}] Registered with {} (headquarters {})",
            self.callsign,
            reg.faction_symbol,
            reg.agent.headquarters,
        )
        return presentation.show_registration(reg)

    async def run(self):
        if not (CALL_SIGN_MIN <= len(self.callsign) <= CALL_SIGN_MAX):
            return f"Call sign must be {CALL_SIGN_MIN} to {CALL_SIGN_MAX} characters, got {self.callsign!r}"

        return await self.invoke(
            "register player",
            lambda: self.gateway.register(self.api, self.callsign, self.faction),
            self.registered,
        )
