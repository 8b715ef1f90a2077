"""GraphQL object types."""

import strawberry

from domain.entities.todo import Todo


@strawberry.type(name="Todo")
class TodoType:
    """A todo as exposed over GraphQL. Dates travel as ISO-8601 strings."""

    id: strawberry.ID
    task: str
    completed: bool
    priority: int
    description: str | None
    due_date: str | None
    created_at: str
    updated_at: str
    tags: list[str]
    assigned_to: str | None
    category: str | None

    @classmethod
    def from_entity(cls, todo: Todo) -> "TodoType":
        return cls(
            id=strawberry.ID(str(todo.id)),
            task=todo.task,
            completed=todo.completed,
            priority=todo.priority,
            description=todo.description,
            due_date=todo.due_date.isoformat() if todo.due_date else None,
            created_at=todo.created_at.isoformat(),
            updated_at=todo.updated_at.isoformat(),
            tags=list(todo.tags),
            assigned_to=todo.assigned_to,
            category=todo.category,
        )
