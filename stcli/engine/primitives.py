"""Pure types, constants, and utility functions: no external dependencies beyond stdlib."""

from __future__ import annotations

import re
from typing import Final

# Production API root. New config files point here.
DEFAULT_BASE_PATH: Final = "https://api.spacetraders.io/v2"

DEFAULT_TIMEOUT_SECS: Final = 5

DEFAULT_CONFIG_FILE: Final = "spacetraders.json"

# Backup suffix format for rotated config files (always UTC so names sort correctly)
BACKUP_TIMESTAMP_FORMAT: Final = "%Y%m%d%H%M%S"

# Starting factions accepted by POST /register.
# The server validates this too, but catching typos locally saves a round trip.
FACTIONS: Final = (
    "COSMIC",
    "VOID",
    "GALACTIC",
    "QUANTUM",
    "DOMINION",
    "ASTRO",
    "CORSAIRS",
    "OBSIDIAN",
    "AEGIS",
    "UNITED",
    "SOLITARY",
    "COBALT",
    "OMEGA",
    "ECHO",
    "LORDS",
    "CULT",
    "ANCIENTS",
    "SHADOW",
    "ETHEREAL",
)

DEFAULT_FACTION: Final = "COSMIC"

CALL_SIGN_MIN: Final = 3
CALL_SIGN_MAX: Final = 14

# Largest page size the list endpoints accept
PAGE_LIMIT: Final = 20


def system_for_waypoint(waypoint: str) -> str:
    """Return the system part of a waypoint symbol.

    Waypoint symbols are SECTOR-SYSTEM-WAYPOINT (e.g. X1-DF55-20250Z),
    so the system is the first two dash-separated parts.
    """
    sector, _, rest = waypoint.partition("-")
    system, _, _ = rest.partition("-")
    if not (sector and system):
        return ""

    return f"{sector}-{system}"


def split_commands(text):
    """A helper for splitting in-quote commands delimited by semicolons.

    We can't just split the whole string by semicolons because we have to respect the string boundaries
    if there are quoted elements, so we just get to iterate the entire string character by character. yay.
    """
    # Remove comments
    text = re.sub(r"\s+#.*", "", text).strip()

    commands = []
    current_command = ""
    in_quotes = False
    escape_next = False

    for char in text:
        if escape_next:
            current_command += char
            escape_next = False
        elif char == "\\":
            current_command += char
            escape_next = True
        elif char == '"':
            current_command += char
            in_quotes = not in_quotes
        elif char == ";" and not in_quotes:
            commands.append(current_command.strip())
            current_command = ""
        else:
            current_command += char

    if current_command:
        commands.append(current_command.strip())

    return commands
