"""
Taskflow HTTP API

FastAPI application serving the task endpoints and a health check.
All routes go through TaskService, so listing, validation and statistics
behave exactly as they do for the MCP tools.
"""

import json
import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response
from pydantic import BaseModel

from taskflow.config import TaskflowConfig, get_config
from taskflow.errors import FieldError, TaskNotFoundError, ValidationError
from taskflow.services import TaskService
from taskflow.store import TaskStore, create_store

logger = logging.getLogger(__name__)

NO_CACHE_HEADERS = {"Cache-Control": "no-cache, no-store, must-revalidate"}


class InvalidRequestBodyError(ValueError):
    """Request body is not a JSON object."""

    code = "INVALID_REQUEST_BODY"


class HealthResponse(BaseModel):
    status: str
    timestamp: datetime
    version: str
    environment: str


def error_response(
    status_code: int,
    code: str,
    message: str,
    errors: Optional[List[FieldError]] = None,
    details: Optional[Dict[str, Any]] = None,
) -> JSONResponse:
    """Build the failure envelope shared by every route."""
    error: Dict[str, Any] = {"code": code, "message": message}
    if errors:
        error["details"] = {"errors": [e.message for e in errors]}
        error["validation"] = [e.to_dict() for e in errors]
    elif details:
        error["details"] = details
    return JSONResponse({"success": False, "error": error}, status_code=status_code)


def get_service(request: Request) -> TaskService:
    """Dependency returning the service bound to this application."""
    return request.app.state.service


async def read_json_object(request: Request) -> dict:
    """Parse the request body, insisting on a JSON object."""
    try:
        body = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise InvalidRequestBodyError(f"Invalid JSON data: {e}") from e
    if not isinstance(body, dict):
        raise InvalidRequestBodyError("Request body must be a JSON object")
    return body


def _require(task, task_id: str):
    if task is None:
        raise TaskNotFoundError(task_id)
    return task


def register_exception_handlers(app: FastAPI) -> None:
    """Map service exceptions onto structured error responses."""

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        return error_response(400, exc.code, exc.summary, errors=exc.errors)

    @app.exception_handler(InvalidRequestBodyError)
    async def handle_invalid_body(request: Request, exc: InvalidRequestBodyError):
        return error_response(400, exc.code, str(exc))

    @app.exception_handler(TaskNotFoundError)
    async def handle_not_found(request: Request, exc: TaskNotFoundError):
        return error_response(404, exc.code, str(exc), details={"id": exc.task_id})

    @app.exception_handler(Exception)
    async def handle_unexpected(request: Request, exc: Exception):
        logger.exception(f"Unhandled error in {request.method} {request.url.path}")
        return error_response(
            500,
            "INTERNAL_SERVER_ERROR",
            "An unexpected error occurred",
            details={"timestamp": datetime.now(timezone.utc).isoformat()},
        )


def register_routes(app: FastAPI) -> None:
    """Register the task and health routes."""

    # =========================================================================
    # HEALTH
    # =========================================================================

    @app.get("/api/health", response_model=HealthResponse, tags=["health"])
    async def health(request: Request):
        config: TaskflowConfig = request.app.state.config
        return HealthResponse(
            status="ok",
            timestamp=datetime.now(timezone.utc),
            version=config.version,
            environment=config.environment,
        )

    @app.head("/api/health", tags=["health"])
    async def health_head():
        return Response(status_code=200)

    # =========================================================================
    # COLLECTION
    # =========================================================================

    @app.get("/api/tasks", tags=["tasks"])
    async def list_tasks(request: Request, service: TaskService = Depends(get_service)):
        result = await service.query(dict(request.query_params))
        meta = {
            "total": result.stats.total,
            "filteredCount": result.filtered_count,
            "page": result.page,
            "limit": result.limit or len(result.items),
            "totalPages": result.total_pages,
            "hasNext": result.has_next,
            "hasPrev": result.has_prev,
            "stats": result.stats.to_dict(),
        }
        return JSONResponse(
            {"success": True, "data": [t.to_dict() for t in result.items], "meta": meta},
            headers=NO_CACHE_HEADERS,
        )

    @app.post("/api/tasks", status_code=201, tags=["tasks"])
    async def create_task(request: Request, service: TaskService = Depends(get_service)):
        body = await read_json_object(request)
        task = await service.create(body)
        return JSONResponse({"success": True, "data": task.to_dict()}, status_code=201)

    @app.delete("/api/tasks", tags=["tasks"])
    async def clear_tasks(service: TaskService = Depends(get_service)):
        count = await service.clear()
        return {"success": True, "data": {"deleted": count}, "message": "All tasks deleted"}

    # =========================================================================
    # SINGLE TASK
    # =========================================================================

    @app.get("/api/tasks/{task_id}", tags=["tasks"])
    async def get_task(task_id: str, service: TaskService = Depends(get_service)):
        task = _require(await service.get(task_id), task_id)
        return {"success": True, "data": task.to_dict()}

    @app.put("/api/tasks/{task_id}", tags=["tasks"])
    async def update_task(
        task_id: str,
        request: Request,
        service: TaskService = Depends(get_service),
    ):
        body = await read_json_object(request)
        task = _require(await service.update(task_id, body), task_id)
        return {"success": True, "data": task.to_dict()}

    @app.patch("/api/tasks/{task_id}/toggle", tags=["tasks"])
    async def toggle_task(task_id: str, service: TaskService = Depends(get_service)):
        task = _require(await service.toggle(task_id), task_id)
        return {"success": True, "data": task.to_dict()}

    @app.delete("/api/tasks/{task_id}", tags=["tasks"])
    async def delete_task(task_id: str, service: TaskService = Depends(get_service)):
        if not await service.delete(task_id):
            raise TaskNotFoundError(task_id)
        return {"success": True, "data": {"id": task_id, "message": "Task deleted"}}


def create_app(
    config: Optional[TaskflowConfig] = None,
    store: Optional[TaskStore] = None,
) -> FastAPI:
    """
    Create the Taskflow FastAPI application.

    Args:
        config: Optional TaskflowConfig. If not provided, loads from default location.
        store: Optional TaskStore. If not provided, a fresh store is created
            (seeded per config). The store lives as long as the application.

    Returns:
        Configured FastAPI app
    """
    config = config or get_config()
    store = store if store is not None else create_store(config)

    app = FastAPI(title="Taskflow API", version=config.version)
    app.state.config = config
    app.state.service = TaskService(store)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.server.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)
    register_routes(app)

    logger.info(f"Taskflow API created ({config.environment}, {len(store)} task(s) in store)")
    return app
