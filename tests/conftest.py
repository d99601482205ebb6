"""Shared fixtures: an ASGI client with the Neo4j session replaced, and a scripted fake session."""

from typing import Any, Dict, List, Optional

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from api.app import app
from api.core.database import get_async_session


class FakeResult:
    def __init__(self, records: List[Dict[str, Any]]):
        self._records = records

    async def data(self) -> List[Dict[str, Any]]:
        return list(self._records)

    async def single(self) -> Optional[Dict[str, Any]]:
        return self._records[0] if self._records else None

    async def consume(self) -> None:
        return None


class FakeSession:
    """Records every ``run`` call and replays queued results in order."""

    def __init__(self):
        self.calls: List[tuple] = []
        self._results: List[List[Dict[str, Any]]] = []
        self.error: Optional[Exception] = None

    def push(self, *records: Dict[str, Any]) -> None:
        self._results.append(list(records))

    async def run(self, query: str, params: Optional[Dict[str, Any]] = None) -> FakeResult:
        self.calls.append((query, params or {}))
        if self.error is not None:
            raise self.error
        return FakeResult(self._results.pop(0) if self._results else [])


@pytest.fixture
def fake_session() -> FakeSession:
    return FakeSession()


@pytest_asyncio.fixture
async def client(fake_session: FakeSession):
    async def _override_session():
        yield fake_session

    app.dependency_overrides[get_async_session] = _override_session
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()
