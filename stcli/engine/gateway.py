"""Async HTTP gateway for the SpaceTraders v2 API.

One method per logical operation. Every method takes the session's
``ClientConfiguration`` so a token change is visible to the very next call.
Each call opens its own short-lived ``httpx.AsyncClient``; there is no
connection reuse, retry, or rate limiting here.

Failures are raised as ``GatewayError`` subclasses and converted to
user-facing strings at the command boundary.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, TypeVar

import httpx
from loguru import logger

from stcli.engine.models import (
    AcceptedContract,
    Agent,
    Contract,
    Registration,
    ServerStatus,
    Ship,
    ShipNav,
    Waypoint,
)
from stcli.engine.primitives import PAGE_LIMIT
from stcli.engine.session import ClientConfiguration

T = TypeVar("T")


class GatewayError(Exception):
    """Base class for every failed remote call."""


class ApiTransportError(GatewayError):
    """The request never produced a response (DNS, refused connection, timeout, ...)."""


class ApiResponseError(GatewayError):
    """The server answered with a non-success status."""

    def __init__(self, status: int, message: str, code: int | None = None):
        self.status = status
        self.code = code
        self.message = message
        super().__init__(str(self))

    def __str__(self) -> str:
        if self.code is not None:
            return f"HTTP {self.status} (code {self.code}): {self.message}"

        return f"HTTP {self.status}: {self.message}"

    @classmethod
    def from_response(cls, resp: httpx.Response) -> ApiResponseError:
        # API errors look like: {"error": {"message": "...", "code": 4204, "data": {...}}}
        try:
            err = resp.json()["error"]
            return cls(resp.status_code, err["message"], err.get("code"))
        except (ValueError, KeyError, TypeError):
            return cls(resp.status_code, resp.text.strip() or resp.reason_phrase)


class ApiDecodeError(GatewayError):
    """The server answered successfully but the payload is not what we expected."""


def decode(build: Callable[[Any], T], data: Any) -> T:
    try:
        return build(data)
    except (KeyError, TypeError, AttributeError) as e:
        raise ApiDecodeError(f"Unexpected response payload ({type(e).__name__}: {e})") from e


class Gateway:
    def __init__(self, transport: httpx.AsyncBaseTransport | None = None) -> None:
        # tests inject an httpx.MockTransport here
        self.transport = transport

    def client(self, cfg: ClientConfiguration) -> httpx.AsyncClient:
        headers = {"Accept": "application/json"}
        if cfg.bearer_token:
            headers["Authorization"] = f"Bearer {cfg.bearer_token}"

        return httpx.AsyncClient(
            base_url=cfg.base_path,
            headers=headers,
            timeout=cfg.timeout,
            transport=self.transport,
        )

    async def _send(
        self,
        cfg: ClientConfiguration,
        method: str,
        path: str,
        **kwargs,
    ) -> httpx.Response:
        try:
            async with self.client(cfg) as client:
                resp = await client.request(method, path, **kwargs)
        except httpx.HTTPError as e:
            raise ApiTransportError(f"{type(e).__name__}: {e}") from e

        logger.debug("[{} {}] -> {}", method, resp.request.url, resp.status_code)
        return resp

    async def _request(
        self,
        cfg: ClientConfiguration,
        method: str,
        path: str,
        **kwargs,
    ) -> dict[str, Any]:
        resp = await self._send(cfg, method, path, **kwargs)
        if resp.is_error:
            raise ApiResponseError.from_response(resp)

        try:
            body = resp.json()
        except ValueError as e:
            raise ApiDecodeError(f"Response is not JSON: {resp.text[:200]!r}") from e

        if not isinstance(body, dict) or "data" not in body:
            raise ApiDecodeError(f"Response has no 'data' field: {resp.text[:200]!r}")

        return body

    async def _data(self, cfg: ClientConfiguration, method: str, path: str, **kwargs):
        return (await self._request(cfg, method, path, **kwargs))["data"]

    async def _paginate(self, cfg: ClientConfiguration, path: str) -> list[Any]:
        """Collect every page of a list endpoint.

        Stops when meta.total items were collected, when a page comes back
        empty, or when the response carries no pagination metadata at all.
        """
        collected: list[Any] = []
        page = 1
        while True:
            body = await self._request(
                cfg, "GET", path, params={"page": page, "limit": PAGE_LIMIT}
            )
            data = body["data"]
            if not isinstance(data, list):
                raise ApiDecodeError(f"Expected a list from {path}, got {type(data).__name__}")

            collected.extend(data)

            total = (body.get("meta") or {}).get("total")
            if not data or total is None or len(collected) >= total:
                return collected

            page += 1

    async def server_status(self, cfg: ClientConfiguration) -> ServerStatus:
        resp = await self._send(cfg, "GET", "/")

        status = version = reset = ""
        if resp.status_code == 200:
            try:
                found = resp.json()
                status = found.get("status", "")
                version = found.get("version", "")
                reset = found.get("resetDate", "")
            except (ValueError, AttributeError):
                pass

        return ServerStatus(
            status_code=resp.status_code,
            text=resp.text,
            status=status,
            version=version,
            reset_date=reset,
        )

    async def register(
        self, cfg: ClientConfiguration, call_sign: str, faction: str
    ) -> Registration:
        data = await self._data(
            cfg, "POST", "/register", json={"symbol": call_sign, "faction": faction}
        )
        return decode(Registration.from_json, data)

    async def get_my_agent(self, cfg: ClientConfiguration) -> Agent:
        return decode(Agent.from_json, await self._data(cfg, "GET", "/my/agent"))

    async def get_my_ships(self, cfg: ClientConfiguration) -> list[Ship]:
        found = await self._paginate(cfg, "/my/ships")
        return decode(lambda xs: [Ship.from_json(x) for x in xs], found)

    async def get_ship_nav(self, cfg: ClientConfiguration, symbol: str) -> ShipNav:
        data = await self._data(cfg, "GET", f"/my/ships/{symbol}/nav")
        return decode(ShipNav.from_json, data)

    async def get_contracts(self, cfg: ClientConfiguration) -> list[Contract]:
        found = await self._paginate(cfg, "/my/contracts")
        return decode(lambda xs: [Contract.from_json(x) for x in xs], found)

    async def get_contract(self, cfg: ClientConfiguration, contract_id: str) -> Contract:
        data = await self._data(cfg, "GET", f"/my/contracts/{contract_id}")
        return decode(Contract.from_json, data)

    async def accept_contract(
        self, cfg: ClientConfiguration, contract_id: str
    ) -> AcceptedContract:
        data = await self._data(cfg, "POST", f"/my/contracts/{contract_id}/accept")
        return decode(AcceptedContract.from_json, data)

    async def get_system_waypoints(
        self, cfg: ClientConfiguration, system: str
    ) -> list[Waypoint]:
        found = await self._paginate(cfg, f"/systems/{system}/waypoints")
        return decode(lambda xs: [Waypoint.from_json(x) for x in xs], found)
