"""Shared fixtures for unit tests."""

from typing import Any
from unittest.mock import AsyncMock

import pytest

from domain.services.todo_service import TodoService


class FakeUnitOfWork:
    """Fake Unit of Work with a mocked todo repository."""

    def __init__(self) -> None:
        self.todos = AsyncMock()
        self.committed = False
        self.rolled_back = False

    async def commit(self) -> None:
        self.committed = True

    async def rollback(self) -> None:
        self.rolled_back = True

    async def __aenter__(self) -> "FakeUnitOfWork":
        return self

    async def __aexit__(self, *args: Any) -> None:
        pass


@pytest.fixture
def uow() -> FakeUnitOfWork:
    """Create a fresh FakeUnitOfWork."""
    return FakeUnitOfWork()


@pytest.fixture
def service(uow: FakeUnitOfWork) -> TodoService:
    """Create service backed by the fake UoW."""
    return TodoService(lambda: uow)
