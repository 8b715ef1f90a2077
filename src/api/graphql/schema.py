"""GraphQL schema: the ``todos`` query and the todo mutations."""

from datetime import date, datetime
from typing import Any, Optional
from uuid import UUID

import strawberry
import structlog
from graphql import GraphQLError
from strawberry.extensions import MaskErrors
from strawberry.types import ExecutionContext, Info

from api.graphql.types import TodoType
from core.config import settings
from core.exceptions import AppException, TodoNotFoundError, ValidationError
from domain.services.todo_service import TodoService

logger = structlog.get_logger()


def parse_due_date(value: str | None) -> date | None:
    """Parse a transmitted due date. Blank means no due date.

    Accepts ``YYYY-MM-DD`` or a full ISO datetime, of which only the
    date part is kept.
    """
    if value is None or not value.strip():
        return None
    text = value.strip()
    try:
        return date.fromisoformat(text)
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(text).date()
    except ValueError as e:
        raise ValidationError(f"Invalid dueDate: {value}", field="dueDate") from e


def parse_todo_id(value: str) -> UUID:
    """An id that is not a UUID cannot match any record."""
    try:
        return UUID(str(value))
    except ValueError as e:
        raise TodoNotFoundError(str(value)) from e


def _service(info: Info) -> TodoService:
    return info.context["todo_service"]  # type: ignore[no-any-return]


@strawberry.type
class Query:
    @strawberry.field(description="All todos in store order.")
    async def todos(self, info: Info) -> list[TodoType]:
        todos = await _service(info).list_all()
        return [TodoType.from_entity(todo) for todo in todos]


@strawberry.type
class Mutation:
    @strawberry.mutation
    async def add_todo(
        self,
        info: Info,
        task: str,
        priority: Optional[int] = None,
        description: Optional[str] = None,
        due_date: Optional[str] = None,
        tags: Optional[list[str]] = None,
        assigned_to: Optional[str] = None,
        category: Optional[str] = None,
    ) -> Optional[TodoType]:
        todo = await _service(info).create(
            task=task,
            priority=priority,
            description=description,
            due_date=parse_due_date(due_date),
            tags=tags,
            assigned_to=assigned_to,
            category=category,
        )
        return TodoType.from_entity(todo)

    @strawberry.mutation(description="Partial update: only supplied arguments change.")
    async def update_todo(
        self,
        info: Info,
        id: strawberry.ID,
        task: Optional[str] = strawberry.UNSET,
        completed: Optional[bool] = strawberry.UNSET,
        priority: Optional[int] = strawberry.UNSET,
        description: Optional[str] = strawberry.UNSET,
        due_date: Optional[str] = strawberry.UNSET,
        tags: Optional[list[str]] = strawberry.UNSET,
        assigned_to: Optional[str] = strawberry.UNSET,
        category: Optional[str] = strawberry.UNSET,
    ) -> Optional[TodoType]:
        supplied = {
            "task": task,
            "completed": completed,
            "priority": priority,
            "description": description,
            "due_date": due_date,
            "tags": tags,
            "assigned_to": assigned_to,
            "category": category,
        }
        changes: dict[str, Any] = {
            name: value for name, value in supplied.items() if value is not strawberry.UNSET
        }
        if "due_date" in changes:
            changes["due_date"] = parse_due_date(changes["due_date"])

        todo = await _service(info).update(parse_todo_id(id), changes)
        return TodoType.from_entity(todo)

    @strawberry.mutation
    async def delete_todo(self, info: Info, id: strawberry.ID) -> Optional[bool]:
        return await _service(info).delete(parse_todo_id(id))


def _should_mask_error(error: GraphQLError) -> bool:
    original = error.original_error
    if original is None or isinstance(original, AppException):
        return False
    return settings.is_production


class TodoSchema(strawberry.Schema):
    """Schema that reports resolver errors through structlog."""

    def process_errors(
        self,
        errors: list[GraphQLError],
        execution_context: Optional[ExecutionContext] = None,
    ) -> None:
        for error in errors:
            original = error.original_error
            if original is None:
                logger.info("graphql_request_error", message=error.message)
            elif isinstance(original, AppException):
                log = logger.error if original.status_code >= 500 else logger.warning
                log(
                    "app_exception",
                    error_code=original.error_code.value,
                    message=original.message,
                    path=error.path,
                )
            else:
                logger.error(
                    "unhandled_exception",
                    error=str(original),
                    error_type=type(original).__name__,
                    path=error.path,
                    exc_info=original,
                )


def mask_errors() -> MaskErrors:
    """A fresh extension per request; ``MaskErrors`` keeps per-request state."""
    return MaskErrors(
        should_mask_error=_should_mask_error,
        error_message="An unexpected error occurred",
    )


schema = TodoSchema(
    query=Query,
    mutation=Mutation,
    extensions=[mask_errors],
)
