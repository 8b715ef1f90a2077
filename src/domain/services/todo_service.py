"""Todo service layer with business logic."""

from collections.abc import Callable
from datetime import date
from typing import Any
from uuid import UUID

import structlog

from core.exceptions import TodoNotFoundError, ValidationError
from domain.entities.todo import DEFAULT_PRIORITY, MUTABLE_FIELDS, REQUIRED_FIELDS, Todo
from domain.repositories.unit_of_work import IUnitOfWork

logger = structlog.get_logger()


class TodoService:
    """Service layer for Todo business logic."""

    def __init__(self, uow_factory: Callable[[], IUnitOfWork]) -> None:
        self._uow_factory = uow_factory

    async def list_all(self) -> list[Todo]:
        """Get every todo."""
        async with self._uow_factory() as uow:
            return await uow.todos.list_all()  # type: ignore[no-any-return]

    async def create(
        self,
        task: str,
        priority: int | None = None,
        description: str | None = None,
        due_date: date | None = None,
        tags: list[str] | None = None,
        assigned_to: str | None = None,
        category: str | None = None,
    ) -> Todo:
        """Create a new todo. Omitted fields take their defaults."""
        todo = Todo(
            task=_require_task(task),
            priority=priority if priority is not None else DEFAULT_PRIORITY,
            description=description,
            due_date=due_date,
            tags=list(tags) if tags is not None else [],
            assigned_to=assigned_to,
            category=category,
        )

        async with self._uow_factory() as uow:
            created = await uow.todos.create(todo)
            await uow.commit()

        logger.info("todo_created", todo_id=str(created.id))
        return created  # type: ignore[no-any-return]

    async def update(self, todo_id: UUID, changes: dict[str, Any]) -> Todo:
        """Apply a partial update.

        Only keys present in ``changes`` are written. ``None`` clears a
        nullable field and is rejected for the required ones.
        """
        unknown = set(changes) - MUTABLE_FIELDS
        if unknown:
            raise ValidationError(f"Unknown fields: {', '.join(sorted(unknown))}")

        for name in REQUIRED_FIELDS & set(changes):
            if changes[name] is None:
                raise ValidationError(f"{name} cannot be null", field=name)

        if "task" in changes:
            changes = {**changes, "task": _require_task(changes["task"])}
        if "tags" in changes:
            changes = {**changes, "tags": list(changes["tags"])}

        async with self._uow_factory() as uow:
            todo = await uow.todos.get(todo_id)

            if not todo:
                raise TodoNotFoundError(str(todo_id))

            for name, value in changes.items():
                setattr(todo, name, value)
            todo.touch()

            updated = await uow.todos.update(todo)
            await uow.commit()

        logger.info("todo_updated", todo_id=str(todo_id), fields=sorted(changes))
        return updated  # type: ignore[no-any-return]

    async def delete(self, todo_id: UUID) -> bool:
        """Hard-delete a todo."""
        async with self._uow_factory() as uow:
            todo = await uow.todos.get(todo_id)

            if not todo:
                raise TodoNotFoundError(str(todo_id))

            deleted = await uow.todos.delete(todo_id)
            await uow.commit()

        logger.info("todo_deleted", todo_id=str(todo_id))
        return deleted  # type: ignore[no-any-return]


def _require_task(task: str) -> str:
    if not task or not task.strip():
        raise ValidationError("task must not be empty", field="task")
    return task
