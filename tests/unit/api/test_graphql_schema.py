"""Unit tests for the GraphQL resolvers, executed against the schema."""

from datetime import date, datetime
from typing import Any
from uuid import uuid4

import pytest
from strawberry.extensions import MaskErrors

from api.graphql.schema import parse_due_date, parse_todo_id, schema
from core.config import settings
from core.exceptions import StorageError, TodoNotFoundError, ValidationError
from domain.entities.todo import Todo
from domain.services.todo_service import TodoService


def _echo(todo: Todo) -> Todo:
    return todo


async def _execute(service: TodoService, query: str, **variables: Any) -> Any:
    return await schema.execute(
        query,
        variable_values=variables,
        context_value={"todo_service": service},
    )


class TestParseDueDate:
    def test_plain_date(self) -> None:
        assert parse_due_date("2025-06-30") == date(2025, 6, 30)

    def test_datetime_keeps_date_part(self) -> None:
        assert parse_due_date("2025-06-30T15:45:00Z") == date(2025, 6, 30)

    @pytest.mark.parametrize("value", [None, "", "   "])
    def test_blank_is_none(self, value: str | None) -> None:
        assert parse_due_date(value) is None

    def test_garbage_rejected(self) -> None:
        with pytest.raises(ValidationError):
            parse_due_date("next tuesday")


class TestParseTodoId:
    def test_valid_uuid(self) -> None:
        todo_id = uuid4()
        assert parse_todo_id(str(todo_id)) == todo_id

    def test_invalid_uuid_is_not_found(self) -> None:
        with pytest.raises(TodoNotFoundError):
            parse_todo_id("42")


class TestTodosQuery:
    @pytest.mark.asyncio
    async def test_serializes_fields(self, service: TodoService, uow) -> None:
        todo = Todo(
            task="Plan trip",
            due_date=date(2025, 7, 1),
            tags=["travel"],
            created_at=datetime(2025, 1, 2, 3, 4, 5),
            updated_at=datetime(2025, 1, 2, 3, 4, 5),
        )
        uow.todos.list_all.return_value = [todo]

        result = await _execute(
            service, "{ todos { id task dueDate tags createdAt updatedAt priority } }"
        )

        assert result.errors is None
        assert result.data == {
            "todos": [
                {
                    "id": str(todo.id),
                    "task": "Plan trip",
                    "dueDate": "2025-07-01",
                    "tags": ["travel"],
                    "createdAt": "2025-01-02T03:04:05",
                    "updatedAt": "2025-01-02T03:04:05",
                    "priority": 1,
                }
            ]
        }


class TestUpdateTodoMutation:
    @pytest.mark.asyncio
    async def test_only_supplied_arguments_are_applied(self, service: TodoService, uow) -> None:
        todo = Todo(task="Original", description="keep me", priority=2)
        uow.todos.get.return_value = todo
        uow.todos.update.side_effect = _echo

        result = await _execute(
            service,
            "mutation ($id: ID!) { updateTodo(id: $id, completed: true) "
            "{ completed task description priority } }",
            id=str(todo.id),
        )

        assert result.errors is None
        assert result.data["updateTodo"] == {
            "completed": True,
            "task": "Original",
            "description": "keep me",
            "priority": 2,
        }

    @pytest.mark.asyncio
    async def test_explicit_null_clears_field(self, service: TodoService, uow) -> None:
        todo = Todo(task="Original", category="errands")
        uow.todos.get.return_value = todo
        uow.todos.update.side_effect = _echo

        result = await _execute(
            service,
            "mutation ($id: ID!) { updateTodo(id: $id, category: null) { category } }",
            id=str(todo.id),
        )

        assert result.errors is None
        assert result.data["updateTodo"] == {"category": None}

    @pytest.mark.asyncio
    async def test_due_date_is_parsed(self, service: TodoService, uow) -> None:
        todo = Todo(task="Original")
        uow.todos.get.return_value = todo
        uow.todos.update.side_effect = _echo

        result = await _execute(
            service,
            'mutation ($id: ID!) { updateTodo(id: $id, dueDate: "2025-12-24") { dueDate } }',
            id=str(todo.id),
        )

        assert result.errors is None
        assert todo.due_date == date(2025, 12, 24)

    @pytest.mark.asyncio
    async def test_not_found_reports_message(self, service: TodoService, uow) -> None:
        uow.todos.get.return_value = None
        missing = uuid4()

        result = await _execute(
            service,
            "mutation ($id: ID!) { updateTodo(id: $id, task: \"x\") { id } }",
            id=str(missing),
        )

        assert result.data == {"updateTodo": None}
        assert result.errors is not None
        assert result.errors[0].message == f"Todo not found: {missing}"


class TestErrorMasking:
    def test_each_request_builds_its_own_mask_extension(self) -> None:
        first = [ext for ext in schema.get_extensions() if isinstance(ext, MaskErrors)]
        second = [ext for ext in schema.get_extensions() if isinstance(ext, MaskErrors)]

        assert len(first) == len(second) == 1
        assert first[0] is not second[0]

    @pytest.mark.asyncio
    async def test_unexpected_error_masked_in_production(
        self, service: TodoService, uow, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setattr(settings, "app_env", "production")
        uow.todos.list_all.side_effect = RuntimeError("password=hunter2")

        result = await _execute(service, "{ todos { id } }")

        assert result.errors is not None
        assert result.errors[0].message == "An unexpected error occurred"

    @pytest.mark.asyncio
    async def test_unexpected_error_visible_outside_production(
        self, service: TodoService, uow, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setattr(settings, "app_env", "development")
        uow.todos.list_all.side_effect = RuntimeError("boom")

        result = await _execute(service, "{ todos { id } }")

        assert result.errors is not None
        assert result.errors[0].message == "boom"

    @pytest.mark.asyncio
    async def test_storage_error_message_kept_in_production(
        self, service: TodoService, uow, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setattr(settings, "app_env", "production")
        uow.todos.list_all.side_effect = StorageError("list_all")

        result = await _execute(service, "{ todos { id } }")

        assert result.errors is not None
        assert result.errors[0].message == "Todo storage operation failed: list_all"
