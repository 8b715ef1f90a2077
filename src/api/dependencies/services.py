"""Dependency injection factories for the API."""

from functools import lru_cache
from typing import Callable

from domain.services.todo_service import TodoService
from infrastructure.database.session import async_session_factory
from infrastructure.database.sqlalchemy_uow import SQLAlchemyUnitOfWork


def get_uow_factory() -> Callable[[], SQLAlchemyUnitOfWork]:
    """Factory for creating Unit of Work instances."""

    def factory() -> SQLAlchemyUnitOfWork:
        return SQLAlchemyUnitOfWork(async_session_factory)

    return factory


@lru_cache
def get_todo_service() -> TodoService:
    """Get Todo service instance."""
    return TodoService(get_uow_factory())
