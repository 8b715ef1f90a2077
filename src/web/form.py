"""Todo form state for the web UI."""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, fields
from typing import Any

DEFAULT_PRIORITY = "1"


class FormError(ValueError):
    """The submitted form cannot be turned into a request."""


def parse_tags(text: str) -> list[str]:
    """Split comma-separated tag input, dropping blank entries."""
    return [tag.strip() for tag in text.split(",") if tag.strip()]


def format_tags(tags: Iterable[str]) -> str:
    """Join tags back into the comma-separated input format."""
    return ",".join(tags)


def _blank_to_none(value: str) -> str | None:
    value = value.strip()
    return value or None


@dataclass
class TodoForm:
    """Values of the todo form plus the edit-mode toggle.

    Every field holds the raw input text so a rejected submission can be
    re-rendered exactly as typed.
    """

    task: str = ""
    priority: str = DEFAULT_PRIORITY
    description: str = ""
    due_date: str = ""
    tags: str = ""
    assigned_to: str = ""
    category: str = ""
    editing_id: str | None = None

    @classmethod
    def from_submission(
        cls,
        task: str = "",
        priority: str = DEFAULT_PRIORITY,
        description: str = "",
        due_date: str = "",
        tags: str = "",
        assigned_to: str = "",
        category: str = "",
        todo_id: str = "",
    ) -> "TodoForm":
        return cls(
            task=task,
            priority=priority,
            description=description,
            due_date=due_date,
            tags=tags,
            assigned_to=assigned_to,
            category=category,
            editing_id=todo_id or None,
        )

    @property
    def is_editing(self) -> bool:
        return self.editing_id is not None

    def reset(self) -> None:
        """Return to an empty add form."""
        for f in fields(self):
            setattr(self, f.name, f.default)

    def load(self, todo: Mapping[str, Any]) -> None:
        """Switch to edit mode for a todo as returned by the API."""
        self.editing_id = str(todo["id"])
        self.task = todo["task"]
        self.priority = str(todo.get("priority", DEFAULT_PRIORITY))
        self.description = todo.get("description") or ""
        self.due_date = todo.get("dueDate") or ""
        self.tags = format_tags(todo.get("tags") or [])
        self.assigned_to = todo.get("assignedTo") or ""
        self.category = todo.get("category") or ""

    def to_variables(self) -> dict[str, Any]:
        """GraphQL variables for the seven editable fields."""
        try:
            priority = int(self.priority.strip() or DEFAULT_PRIORITY)
        except ValueError as e:
            raise FormError(f"Priority must be a whole number, got {self.priority!r}") from e

        return {
            "task": self.task.strip(),
            "priority": priority,
            "description": _blank_to_none(self.description),
            "dueDate": _blank_to_none(self.due_date),
            "tags": parse_tags(self.tags),
            "assignedTo": _blank_to_none(self.assigned_to),
            "category": _blank_to_none(self.category),
        }

    def build_mutation(self) -> tuple[str, dict[str, Any]]:
        """Pick ``addTodo`` or ``updateTodo`` and its variables."""
        variables = self.to_variables()
        if self.is_editing:
            return "updateTodo", {"id": self.editing_id, **variables}
        return "addTodo", variables
