"""Unit tests for the todo form state."""

import pytest

from web.form import FormError, TodoForm, format_tags, parse_tags


class TestTags:
    def test_comma_separated_to_list(self) -> None:
        assert parse_tags("a,b,c") == ["a", "b", "c"]

    def test_strips_and_drops_blanks(self) -> None:
        assert parse_tags(" a , ,b,") == ["a", "b"]

    def test_empty_input_is_empty_list(self) -> None:
        assert parse_tags("") == []

    def test_format_round_trips(self) -> None:
        assert parse_tags(format_tags(["a", "b", "c"])) == ["a", "b", "c"]


class TestTodoForm:
    def test_new_form_builds_add_todo(self) -> None:
        form = TodoForm.from_submission(task="Buy milk", tags="home,shopping")

        operation, variables = form.build_mutation()

        assert operation == "addTodo"
        assert variables == {
            "task": "Buy milk",
            "priority": 1,
            "description": None,
            "dueDate": None,
            "tags": ["home", "shopping"],
            "assignedTo": None,
            "category": None,
        }

    def test_edit_mode_builds_update_todo(self) -> None:
        form = TodoForm.from_submission(task="Buy milk", priority="3", todo_id="abc")

        operation, variables = form.build_mutation()

        assert form.is_editing
        assert operation == "updateTodo"
        assert variables["id"] == "abc"
        assert variables["priority"] == 3

    def test_bad_priority_is_form_error(self) -> None:
        form = TodoForm.from_submission(task="x", priority="high")

        with pytest.raises(FormError):
            form.build_mutation()

    def test_load_fills_fields_from_api_record(self) -> None:
        form = TodoForm()

        form.load(
            {
                "id": "t-1",
                "task": "Call plumber",
                "priority": 2,
                "description": None,
                "dueDate": "2025-05-01",
                "tags": ["home", "repairs"],
                "assignedTo": "alex",
                "category": None,
            }
        )

        assert form.editing_id == "t-1"
        assert form.priority == "2"
        assert form.description == ""
        assert form.due_date == "2025-05-01"
        assert form.tags == "home,repairs"
        assert form.assigned_to == "alex"
        assert form.category == ""

    def test_reset_leaves_edit_mode(self) -> None:
        form = TodoForm.from_submission(task="x", priority="5", tags="a", todo_id="abc")

        form.reset()

        assert form == TodoForm()
        assert not form.is_editing
