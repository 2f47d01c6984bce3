"""Shared pytest fixtures and factory functions for trust-mcp tests."""

from __future__ import annotations

from typing import Any

import httpx
import pytest

from trust_mcp.config import RegistryConfig
from trust_mcp.dispatcher import Dispatcher
from trust_mcp.registry_client import RegistryClient

BASE_URL = "https://registry.test"


class FakeRegistry:
	"""Canned registry answers keyed by (method, path), recording every request."""

	def __init__(self) -> None:
		self.routes: dict[tuple[str, str], tuple[int, Any] | Exception] = {}
		self.requests: list[httpx.Request] = []

	def add(self, method: str, path: str, status: int = 200, json: Any = None) -> None:
		self.routes[(method, path)] = (status, {} if json is None else json)

	def fail(self, method: str, path: str, exc: Exception) -> None:
		self.routes[(method, path)] = exc

	def handler(self, request: httpx.Request) -> httpx.Response:
		self.requests.append(request)
		route = self.routes.get((request.method, request.url.path))
		if route is None:
			return httpx.Response(404, json={"error": "Not found"})
		if isinstance(route, Exception):
			raise route
		status, body = route
		if isinstance(body, str):
			return httpx.Response(status, text=body)
		return httpx.Response(status, json=body)

	def transport(self) -> httpx.MockTransport:
		return httpx.MockTransport(self.handler)

	def paths(self) -> list[str]:
		return [r.url.path for r in self.requests]


@pytest.fixture()
def registry() -> FakeRegistry:
	return FakeRegistry()


@pytest.fixture()
def client(registry: FakeRegistry) -> RegistryClient:
	return RegistryClient(RegistryConfig(url=BASE_URL + "/"), transport=registry.transport())


@pytest.fixture()
def dispatcher(client: RegistryClient) -> Dispatcher:
	return Dispatcher(client)


def make_agent(**overrides: Any) -> dict[str, Any]:
	"""Agent entry as /registry/agents returns it, overridable via kwargs."""
	defaults: dict[str, Any] = {
		"id": "a1b2c3",
		"name": "PaymentBot",
		"trust_score": 65,
	}
	defaults.update(overrides)
	return defaults


def make_trust(**overrides: Any) -> dict[str, Any]:
	"""A /v1/trust/{id} answer with a composite score."""
	defaults: dict[str, Any] = {
		"agent_id": "a1b2c3",
		"name": "PaymentBot",
		"trust_score": {"total": 65, "identity": 20, "reviews": 25, "evidence": 20},
	}
	defaults.update(overrides)
	return defaults
