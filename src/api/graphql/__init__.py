"""GraphQL router configuration."""

from typing import Any

from fastapi import Depends
from strawberry.fastapi import GraphQLRouter

from api.dependencies.services import get_todo_service
from api.graphql.schema import schema
from core.config import settings
from domain.services.todo_service import TodoService


async def get_context(
    todo_service: TodoService = Depends(get_todo_service),
) -> dict[str, Any]:
    """Resolver context. Resolved through FastAPI so overrides apply."""
    return {"todo_service": todo_service}


def create_graphql_router() -> GraphQLRouter:
    """Build the GraphQL endpoint; GraphiQL is only served in debug mode."""
    return GraphQLRouter(
        schema,
        context_getter=get_context,
        graphql_ide="graphiql" if settings.debug else None,
    )
