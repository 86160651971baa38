"""Commands: dump_config, save_config, new_config

Category: Session
"""

from dataclasses import dataclass

from stcli.cmds.base import IOp, command
from stcli.engine import presentation


@command(names=["dump_config"])
@dataclass
class IOpDumpConfig(IOp):
    """Show current config."""

    def argmap(self):
        return []

    async def run(self):
        return presentation.show_config(self.session.config)


@command(names=["save_config"])
@dataclass
class IOpSaveConfig(IOp):
    """Save your config."""

    def argmap(self):
        return []

    async def run(self):
        self.state.saveConfig()
        return "Saved Config"


@command(names=["new_config"])
@dataclass
class IOpNewConfig(IOp):
    """Backup the existing config and create a new one.

    The current session is saved first, then the file is renamed with a UTC
    timestamp suffix and a default config takes its place. The running
    session switches to the new default config too (you will need to
    register again).
    """

    def argmap(self):
        return []

    async def run(self):
        confirmed = await self.state.qconfirm(
            "Are you sure you want to create a new config? (Existing config will be backed up)",
            default=False,
        )

        if confirmed is None:
            return "Failed to read prompt: no answer given"

        if not confirmed:
            return "Existing config unchanged"

        self.state.saveConfig()
        try:
            backup = self.state.rotateConfig()
        except FileExistsError as e:
            # two rotations within the same second
            return f"Failed to back up config: {e}"

        return f"Success (previous config saved to {backup})"
