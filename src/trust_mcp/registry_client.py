"""Async HTTP client for the trust registry.

One best-effort request per call: transport failures and gateway statuses
are raised as RegistryError subclasses, every other response (including
4xx) is returned for the caller to render.
"""

from __future__ import annotations

import logging
from typing import Any
from urllib.parse import quote

import httpx

from trust_mcp.config import RegistryConfig
from trust_mcp.models import RegistryResponse

logger = logging.getLogger(__name__)

GATEWAY_STATUSES = frozenset({502, 503, 504})

UNREACHABLE_MESSAGE = "Registry unreachable — check network or try again later"
OFFLINE_MESSAGE = "Registry is temporarily offline — try again later"


class RegistryError(Exception):
	"""Base class for failures talking to the registry."""


class RegistryUnreachableError(RegistryError):
	def __init__(self, message: str = UNREACHABLE_MESSAGE) -> None:
		super().__init__(message)


class RegistryOfflineError(RegistryError):
	def __init__(self, message: str = OFFLINE_MESSAGE) -> None:
		super().__init__(message)


def path_segment(value: str) -> str:
	"""Quote a caller-supplied value for use as a single URL path segment."""
	return quote(value, safe="")


def drop_none(data: dict[str, Any]) -> dict[str, Any]:
	return {k: v for k, v in data.items() if v is not None}


class RegistryClient:
	"""Thin wrapper over httpx.AsyncClient bound to the registry base URL."""

	def __init__(
		self,
		config: RegistryConfig,
		transport: httpx.AsyncBaseTransport | None = None,
	) -> None:
		self._config = config
		self._transport = transport
		self._client: httpx.AsyncClient | None = None

	@property
	def base_url(self) -> str:
		return self._config.base_url

	async def _ensure_client(self) -> httpx.AsyncClient:
		if self._client is None:
			self._client = httpx.AsyncClient(
				base_url=self.base_url,
				timeout=self._config.timeout,
				headers={"User-Agent": self._config.user_agent, "Accept": "application/json"},
				transport=self._transport,
			)
		return self._client

	async def get(self, path: str, params: dict[str, Any] | None = None) -> RegistryResponse:
		return await self._request("GET", path, params=drop_none(params or {}))

	async def post(self, path: str, payload: dict[str, Any]) -> RegistryResponse:
		return await self._request("POST", path, json=drop_none(payload))

	async def _request(self, method: str, path: str, **kwargs: Any) -> RegistryResponse:
		client = await self._ensure_client()
		logger.debug("%s %s%s", method, self.base_url, path)
		try:
			resp = await client.request(method, path, **kwargs)
		except (httpx.HTTPError, OSError) as exc:
			logger.warning("Registry request %s %s failed: %s", method, path, exc)
			raise RegistryUnreachableError() from exc

		if resp.status_code in GATEWAY_STATUSES:
			logger.warning("Registry returned %d for %s %s", resp.status_code, method, path)
			raise RegistryOfflineError()

		return RegistryResponse(status_code=resp.status_code, body=_json_object(resp))

	async def close(self) -> None:
		if self._client is not None:
			await self._client.aclose()
			self._client = None

	async def __aenter__(self) -> RegistryClient:
		await self._ensure_client()
		return self

	async def __aexit__(self, *exc: object) -> None:
		await self.close()


def _json_object(resp: httpx.Response) -> dict[str, Any]:
	try:
		data = resp.json()
	except ValueError:
		return {}
	return data if isinstance(data, dict) else {}
