import httpx
import pytest

from finaid_data.config import Settings


class FakeUpstream:
    """Serves canned JSON by URL path and records every request."""

    def __init__(self) -> None:
        self.routes: dict[str, object] = {}
        self.requests: list[httpx.Request] = []

    def add(self, path: str, payload, status_code: int = 200) -> None:
        """payload is JSON data, or a callable(request) -> httpx.Response."""
        if callable(payload):
            self.routes[path] = payload
        else:
            self.routes[path] = lambda request: httpx.Response(status_code, json=payload)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self.routes.get(request.url.path)
        if route is None:
            return httpx.Response(404, text="no route")
        return route(request)

    def client(self) -> httpx.Client:
        return httpx.Client(transport=httpx.MockTransport(self.handler))

    def last_params(self) -> httpx.QueryParams:
        return self.requests[-1].url.params


class FakeClock:
    def __init__(self, now: float = 1_000_000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def upstream() -> FakeUpstream:
    return FakeUpstream()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def settings() -> Settings:
    return Settings(fred_api_key="fred-test-key", scorecard_api_key="scorecard-test-key")
