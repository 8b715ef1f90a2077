"""Server-rendered todo list page."""

from collections.abc import AsyncIterator
from pathlib import Path
from typing import Any

import structlog
from fastapi import APIRouter, Depends, Form, Query, Request, status
from fastapi.responses import HTMLResponse, RedirectResponse, Response
from fastapi.templating import Jinja2Templates

from web.client import TodoApiClient, TodoApiError, build_http_client
from web.form import DEFAULT_PRIORITY, FormError, TodoForm

logger = structlog.get_logger()

router = APIRouter(tags=["ui"], include_in_schema=False)

templates = Jinja2Templates(directory=str(Path(__file__).parent / "templates"))


async def get_todo_client(request: Request) -> AsyncIterator[TodoApiClient]:
    """A client for this request only, closed once the response is done.

    In-process calls carry the browser's address to the GraphQL route.
    """
    address = (request.client.host, request.client.port) if request.client else None
    client = TodoApiClient(build_http_client(request.app, address))
    try:
        yield client
    finally:
        await client.aclose()


async def _render(
    request: Request,
    client: TodoApiClient,
    form: TodoForm,
    error: str | None = None,
    status_code: int = status.HTTP_200_OK,
) -> Response:
    todos: list[dict[str, Any]] = []
    load_error = None
    try:
        todos = await client.list_todos()
    except TodoApiError as e:
        logger.warning("todo_list_failed", error=str(e))
        load_error = "Error loading todos."

    return templates.TemplateResponse(
        request,
        "todos.html",
        {
            "todos": todos,
            "form": form,
            "error": error,
            "load_error": load_error,
        },
        status_code=status_code,
    )


def _back_to_list() -> RedirectResponse:
    return RedirectResponse("/", status_code=status.HTTP_303_SEE_OTHER)


@router.get("/", response_class=HTMLResponse)
async def todo_page(
    request: Request,
    edit: str | None = Query(None, description="Id of the todo to load into the form"),
    client: TodoApiClient = Depends(get_todo_client),
) -> Response:
    """List todos; ``?edit=<id>`` switches the form to edit mode."""
    form = TodoForm()
    if not edit:
        return await _render(request, client, form)

    try:
        todos = await client.list_todos()
    except TodoApiError:
        return await _render(request, client, form)

    match = next((todo for todo in todos if todo["id"] == edit), None)
    if match is None:
        return await _render(
            request, client, form, f"Todo not found: {edit}", status.HTTP_404_NOT_FOUND
        )
    form.load(match)
    return await _render(request, client, form)


@router.post("/todos")
async def save_todo(
    request: Request,
    task: str = Form(""),
    priority: str = Form(DEFAULT_PRIORITY),
    description: str = Form(""),
    due_date: str = Form(""),
    tags: str = Form(""),
    assigned_to: str = Form(""),
    category: str = Form(""),
    todo_id: str = Form(""),
    client: TodoApiClient = Depends(get_todo_client),
) -> Response:
    """Add a todo, or update one when the form is in edit mode."""
    form = TodoForm.from_submission(
        task=task,
        priority=priority,
        description=description,
        due_date=due_date,
        tags=tags,
        assigned_to=assigned_to,
        category=category,
        todo_id=todo_id,
    )
    try:
        operation, variables = form.build_mutation()
        await client.mutate(operation, variables)
    except (FormError, TodoApiError) as e:
        logger.info("todo_save_failed", error=str(e), editing=form.is_editing)
        return await _render(request, client, form, str(e), status.HTTP_400_BAD_REQUEST)
    return _back_to_list()


@router.post("/todos/{todo_id}/toggle")
async def toggle_todo(
    request: Request,
    todo_id: str,
    completed: str = Form(...),
    client: TodoApiClient = Depends(get_todo_client),
) -> Response:
    """Set the completed flag to the submitted value."""
    try:
        await client.set_completed(todo_id, completed.lower() == "true")
    except TodoApiError as e:
        logger.info("todo_toggle_failed", todo_id=todo_id, error=str(e))
        return await _render(request, client, TodoForm(), str(e), status.HTTP_400_BAD_REQUEST)
    return _back_to_list()


@router.post("/todos/{todo_id}/delete")
async def delete_todo(
    request: Request,
    todo_id: str,
    client: TodoApiClient = Depends(get_todo_client),
) -> Response:
    try:
        await client.delete_todo(todo_id)
    except TodoApiError as e:
        logger.info("todo_delete_failed", todo_id=todo_id, error=str(e))
        return await _render(request, client, TodoForm(), str(e), status.HTTP_400_BAD_REQUEST)
    return _back_to_list()
