"""GraphQL client used by the web UI, with a local ``todos`` cache."""

from typing import Any

import httpx
import structlog
from fastapi import FastAPI

from core.config import settings

logger = structlog.get_logger()

TODO_FIELDS = (
    "id task completed priority description dueDate tags assignedTo category createdAt updatedAt"
)

TODOS_QUERY = f"query Todos {{ todos {{ {TODO_FIELDS} }} }}"

MUTATIONS: dict[str, str] = {
    "addTodo": f"""
        mutation AddTodo(
            $task: String!, $priority: Int, $description: String, $dueDate: String,
            $tags: [String!], $assignedTo: String, $category: String
        ) {{
            addTodo(
                task: $task, priority: $priority, description: $description,
                dueDate: $dueDate, tags: $tags, assignedTo: $assignedTo, category: $category
            ) {{ {TODO_FIELDS} }}
        }}
    """,
    "updateTodo": f"""
        mutation UpdateTodo(
            $id: ID!, $task: String, $completed: Boolean, $priority: Int,
            $description: String, $dueDate: String, $tags: [String!],
            $assignedTo: String, $category: String
        ) {{
            updateTodo(
                id: $id, task: $task, completed: $completed, priority: $priority,
                description: $description, dueDate: $dueDate, tags: $tags,
                assignedTo: $assignedTo, category: $category
            ) {{ {TODO_FIELDS} }}
        }}
    """,
    "deleteTodo": """
        mutation DeleteTodo($id: ID!) { deleteTodo(id: $id) }
    """,
}


class TodoApiError(Exception):
    """The API call failed; the message is suitable for display."""


class TodoApiClient:
    """Issue todo queries and mutations over HTTP.

    The ``todos`` result is cached until a mutation succeeds. The web UI
    builds one client per request, so the cache lasts one page render.
    Variables omitted from an ``updateTodo`` call are not sent, so the
    server leaves those fields alone.
    """

    def __init__(self, http: httpx.AsyncClient, path: str | None = None) -> None:
        self._http = http
        self._path = path or settings.graphql_path
        self._todos: list[dict[str, Any]] | None = None

    async def execute(
        self, document: str, variables: dict[str, Any] | None = None
    ) -> dict[str, Any]:
        """Send one GraphQL document and return its ``data``."""
        try:
            response = await self._http.post(
                self._path,
                json={"query": document, "variables": variables or {}},
            )
        except httpx.HTTPError as e:
            logger.warning("todo_api_unreachable", error=str(e))
            raise TodoApiError(f"Could not reach the todo API: {e}") from e

        try:
            payload = response.json()
        except ValueError as e:
            raise TodoApiError(
                f"Unexpected response from the todo API (HTTP {response.status_code})"
            ) from e

        if not isinstance(payload, dict):
            raise TodoApiError("Unexpected response from the todo API")

        errors = payload.get("errors")
        if errors:
            raise TodoApiError("; ".join(e.get("message", "Unknown error") for e in errors))

        if response.is_error:
            raise TodoApiError(payload.get("message") or f"HTTP {response.status_code}")

        return payload.get("data") or {}

    @property
    def has_cached_todos(self) -> bool:
        return self._todos is not None

    def invalidate(self) -> None:
        """Drop the cached ``todos`` result."""
        self._todos = None

    async def list_todos(self) -> list[dict[str, Any]]:
        if self._todos is None:
            data = await self.execute(TODOS_QUERY)
            self._todos = list(data.get("todos") or [])
        return self._todos

    async def mutate(self, operation: str, variables: dict[str, Any]) -> Any:
        """Run a named mutation and invalidate the cache on success."""
        try:
            document = MUTATIONS[operation]
        except KeyError:
            raise ValueError(f"Unknown mutation: {operation}") from None

        data = await self.execute(document, variables)
        self.invalidate()
        return data.get(operation)

    async def set_completed(self, todo_id: str, completed: bool) -> Any:
        return await self.mutate("updateTodo", {"id": todo_id, "completed": completed})

    async def delete_todo(self, todo_id: str) -> Any:
        return await self.mutate("deleteTodo", {"id": todo_id})

    async def aclose(self) -> None:
        await self._http.aclose()


def build_http_client(
    app: FastAPI, client_address: tuple[str, int] | None = None
) -> httpx.AsyncClient:
    """HTTP client pointed at ``api_base_url``, or at ``app`` in-process.

    In-process requests report ``client_address`` as their ASGI client, so
    the API sees the browser rather than the loopback transport.
    """
    if settings.api_base_url:
        return httpx.AsyncClient(
            base_url=settings.api_base_url,
            timeout=settings.api_timeout_seconds,
        )
    if client_address is None:
        transport = httpx.ASGITransport(app=app)
    else:
        transport = httpx.ASGITransport(app=app, client=client_address)
    return httpx.AsyncClient(
        transport=transport,
        base_url="http://todo-api",
        timeout=settings.api_timeout_seconds,
    )
