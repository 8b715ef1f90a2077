"""SQLAlchemy implementation of Todo repository."""

from collections.abc import Awaitable, Callable
from functools import wraps
from typing import ParamSpec, TypeVar
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from core.exceptions import StorageError
from domain.entities.todo import Todo
from infrastructure.database.models import TodoModel

P = ParamSpec("P")
R = TypeVar("R")


def _storage_errors(
    func: Callable[P, Awaitable[R]],
) -> Callable[P, Awaitable[R]]:
    """Translate driver/ORM failures into StorageError."""

    @wraps(func)
    async def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
        try:
            return await func(*args, **kwargs)
        except SQLAlchemyError as e:
            raise StorageError(func.__name__) from e

    return wrapper


class SQLAlchemyTodoRepository:
    """SQLAlchemy implementation of ITodoRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    @_storage_errors
    async def get(self, id: UUID) -> Todo | None:
        """Get a todo by ID."""
        stmt = select(TodoModel).where(TodoModel.id == id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    @_storage_errors
    async def list_all(self) -> list[Todo]:
        """Get all todos, oldest first."""
        stmt = select(TodoModel).order_by(TodoModel.created_at, TodoModel.id)
        result = await self._session.execute(stmt)
        return [self._to_entity(model) for model in result.scalars()]

    @_storage_errors
    async def create(self, todo: Todo) -> Todo:
        """Create a new todo."""
        model = self._to_model(todo)
        self._session.add(model)
        await self._session.flush()
        await self._session.refresh(model)
        return self._to_entity(model)

    @_storage_errors
    async def update(self, todo: Todo) -> Todo:
        """Update an existing todo."""
        stmt = select(TodoModel).where(TodoModel.id == todo.id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if not model:
            raise ValueError(f"Todo {todo.id} not found")

        model.task = todo.task
        model.completed = todo.completed
        model.priority = todo.priority
        model.description = todo.description
        model.due_date = todo.due_date
        model.tags = list(todo.tags)
        model.assigned_to = todo.assigned_to
        model.category = todo.category
        model.updated_at = todo.updated_at

        await self._session.flush()
        return self._to_entity(model)

    @_storage_errors
    async def delete(self, id: UUID) -> bool:
        """Delete a todo by ID."""
        stmt = select(TodoModel).where(TodoModel.id == id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if not model:
            return False

        await self._session.delete(model)
        await self._session.flush()
        return True

    def _to_entity(self, model: TodoModel) -> Todo:
        """Convert ORM model to domain entity."""
        return Todo(
            id=model.id,
            task=model.task,
            completed=model.completed,
            priority=model.priority,
            description=model.description,
            due_date=model.due_date,
            tags=list(model.tags or []),
            assigned_to=model.assigned_to,
            category=model.category,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    def _to_model(self, entity: Todo) -> TodoModel:
        """Convert domain entity to ORM model."""
        return TodoModel(
            id=entity.id,
            task=entity.task,
            completed=entity.completed,
            priority=entity.priority,
            description=entity.description,
            due_date=entity.due_date,
            tags=list(entity.tags),
            assigned_to=entity.assigned_to,
            category=entity.category,
            created_at=entity.created_at,
            updated_at=entity.updated_at,
        )
