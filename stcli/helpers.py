"""Process-level settings and interactive prompt helpers shared by the app and commands."""

from __future__ import annotations

import os

import questionary
from dotenv import dotenv_values

from stcli.engine.primitives import DEFAULT_CONFIG_FILE

ST_DEFAULT = dict(
    STCLI_CONFIG_FILE=DEFAULT_CONFIG_FILE,
    STCLI_LOGDIR="runlogs",
    STCLI_HISTORY="~/.stcli_history",
)

# precedence: defaults < .env.stcli < real environment
ST_CONFIG = {**ST_DEFAULT, **dotenv_values(".env.stcli"), **os.environ}  # type: ignore


async def confirm(msg: str, default: bool) -> bool | None:
    """Ask a yes/no question.

    Returns None if the user cancelled (CTRL-C) or closed input (CTRL-D)
    instead of answering.
    """
    try:
        # ask_async() converts CTRL-C into a None answer
        # See: https://questionary.readthedocs.io/en/stable/pages/advanced.html#keyboard-interrupts
        return await questionary.confirm(msg, default=default).ask_async()
    except EOFError:
        return None
