"""stcli engine layer: config, session, API access, and formatting with no REPL dependency.

Modules
-------
primitives
    Constants and pure helpers (stdlib-only).
    - ``DEFAULT_BASE_PATH``, ``DEFAULT_TIMEOUT_SECS``, ``DEFAULT_CONFIG_FILE``, ``FACTIONS``
    - ``system_for_waypoint``: "X1-DF55-20250Z" -> "X1-DF55"
    - ``split_commands``: split a prompt line on unquoted semicolons

config
    ``GameConfig`` and the JSON config file lifecycle.
    - ``load``, ``save``, ``create_default_and_persist``, ``rotate``
    - ``ConfigNotFound`` / ``ConfigParseError`` (both ``ConfigError``)

session
    ``SessionContext`` owning the live ``GameConfig``; ``api_config`` derives the
    ``ClientConfiguration`` (base path, bearer token, timeout) on every access.

models
    Frozen dataclasses for API payloads (``Agent``, ``Ship``, ``ShipNav``,
    ``Contract``, ``Waypoint``, ...), each with ``from_json``.

gateway
    ``Gateway``: one async httpx call per API operation, raising ``GatewayError``
    (``ApiTransportError``, ``ApiResponseError``, ``ApiDecodeError``).

presentation
    Fixed-column DataFrames for each listing and the grid renderer.
"""

from stcli.engine.config import GameConfig
from stcli.engine.gateway import Gateway, GatewayError
from stcli.engine.session import ClientConfiguration, SessionContext

__all__ = [
    "GameConfig",
    "Gateway",
    "GatewayError",
    "ClientConfiguration",
    "SessionContext",
]
