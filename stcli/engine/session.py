"""Runtime session state derived from the persisted config."""
from __future__ import annotations

import dataclasses

from stcli.engine.config import GameConfig


@dataclasses.dataclass(slots=True, frozen=True)
class ClientConfiguration:
    """Connection parameters handed to every gateway call."""

    base_path: str
    bearer_token: str | None
    timeout: float | None


@dataclasses.dataclass(slots=True)
class SessionContext:
    """The loaded GameConfig plus the API client configuration derived from it.

    ``api_config`` is recomputed from ``config`` on every access, so a
    registration updating the token is picked up by the very next call
    without any restart or explicit refresh.
    """

    config: GameConfig

    @classmethod
    def from_config(cls, config: GameConfig) -> SessionContext:
        return cls(config=config)

    @property
    def api_config(self) -> ClientConfiguration:
        secs = self.config.request_timeout_secs
        return ClientConfiguration(
            base_path=self.config.base_path,
            bearer_token=self.config.access_token,
            timeout=float(secs) if secs > 0 else None,
        )

    def apply_registration(
        self,
        token: str,
        call_sign: str,
        faction: str,
        headquarters: str | None = None,
    ) -> None:
        self.config.access_token = token
        self.config.call_sign = call_sign
        self.config.faction = faction
        if headquarters is not None:
            self.config.headquarters = headquarters
