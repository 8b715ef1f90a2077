"""Todo domain entity."""

from dataclasses import dataclass, field
from datetime import date, datetime
from uuid import UUID, uuid4

DEFAULT_PRIORITY = 1

# Fields a caller may change through a partial update.
MUTABLE_FIELDS = frozenset(
    {
        "task",
        "completed",
        "priority",
        "description",
        "due_date",
        "tags",
        "assigned_to",
        "category",
    }
)

# Mutable fields that cannot be cleared to None.
REQUIRED_FIELDS = frozenset({"task", "completed", "priority", "tags"})


@dataclass
class Todo:
    """Domain entity for a Todo."""

    task: str
    id: UUID = field(default_factory=uuid4)
    completed: bool = False
    priority: int = DEFAULT_PRIORITY
    description: str | None = None
    due_date: date | None = None
    tags: list[str] = field(default_factory=list)
    assigned_to: str | None = None
    category: str | None = None
    created_at: datetime = field(default_factory=datetime.utcnow)
    updated_at: datetime = field(default_factory=datetime.utcnow)

    def touch(self) -> None:
        """Refresh the modification timestamp."""
        self.updated_at = max(datetime.utcnow(), self.created_at)

    def __post_init__(self) -> None:
        """Ensure updated_at is always at least as recent as created_at."""
        if self.updated_at < self.created_at:
            self.updated_at = self.created_at
