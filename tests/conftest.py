"""Pytest configuration and shared fixtures for consulcat tests.

``StubConsul`` stands in for the HTTP transport: it serves canned bodies by
path and records every ``get`` so tests can assert on what the catalog sent.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any

import pytest
from loguru import logger

from consulcat.core.errors import NotFoundError
from consulcat.core.parameters import Consistency


@dataclass(frozen=True, slots=True)
class RecordedGet:
    path: str
    params: dict[str, Any]


@dataclass(slots=True)
class StubConsul:
    """Recording transport serving canned response bodies by path."""

    responses: dict[str, bytes | str] = field(default_factory=dict)
    default_consistency: Consistency = Consistency.DEFAULT
    error: Exception | None = None
    calls: list[RecordedGet] = field(default_factory=list)

    async def get(self, path: str, **params: Any) -> bytes:
        self.calls.append(RecordedGet(path=path, params=dict(params)))
        if self.error is not None:
            raise self.error
        if path not in self.responses:
            raise NotFoundError(404, "no canned response", path)
        body = self.responses[path]
        return body.encode("utf-8") if isinstance(body, str) else body

    async def __aenter__(self) -> StubConsul:
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        return None


@pytest.fixture
def stub_consul() -> Callable[..., StubConsul]:
    """Factory for StubConsul instances."""

    def _make(
        responses: Mapping[str, bytes | str] | None = None, **kwargs: Any
    ) -> StubConsul:
        return StubConsul(responses=dict(responses or {}), **kwargs)

    return _make


@pytest.fixture(autouse=True)
def reset_logging():
    """Drop sinks a test installed so later tests start from loguru defaults."""
    yield
    logger.remove()
    logger.disable("consulcat")
