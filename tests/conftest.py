"""Shared pytest fixtures: an in-memory backend served over httpx.MockTransport."""

import httpx
import pytest


class FakeBackend:
    """In-memory stand-in for the configuration backend, served over MockTransport."""

    def __init__(self):
        self.services = {
            "example": {
                "info": {"owner": "ops"},
                "schema": {
                    "timeout": {"title": "Timeout", "type": "integer", "description": "Seconds", "default": "30"},
                    "name": {"title": "Name", "type": "string", "description": "", "default": "svc"},
                },
                "config": {"v": {"value": "3"}, "timeout": {"value": "45"}},
                "clients": {
                    "i1": {"ts": 0, "v": "3", "c_hits": ["1", "4"]},
                },
            },
            "other": {"schema": {}, "config": {"v": {"value": "1"}}, "clients": {}},
        }
        self.puts = []
        self.fail = False
        self.gate = None

    async def handle(self, request: httpx.Request) -> httpx.Response:
        if self.fail:
            return httpx.Response(500, json={"error": "Could not retrieve configuration"})
        parts = request.url.path.strip("/").split("/")
        if parts == ["api", "1", "services"]:
            return httpx.Response(200, json={"services": list(self.services)})
        if len(parts) == 4:
            if self.gate is not None:
                await self.gate.wait()
            service = self.services.get(parts[3])
            if service is None:
                return httpx.Response(500, json={"error": "Could not retrieve service schema"})
            return httpx.Response(200, json=service)
        if len(parts) == 6 and request.method == "PUT":
            self.puts.append((parts[3], parts[5], request.content.decode()))
            return httpx.Response(200)
        return httpx.Response(404)


@pytest.fixture
def fake():
    return FakeBackend()


@pytest.fixture
def orch(fake):
    from ccdash.services.backend import BackendClient
    from ccdash.services.refresh import RefreshOrchestrator

    backend = BackendClient("http://backend", transport=httpx.MockTransport(fake.handle))
    return RefreshOrchestrator(backend)
