from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Tuple

import orjson
from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from pydantic import BaseModel, Field
from starlette.datastructures import UploadFile

from ...api import ApiState, call_api, get_api_functions, get_api_state, use_api_state
from ...api.models import LoginRequest, StatusMessage
from ...api.serializers import serialize_activities, serialize_activity
from ...bootstrap import configure_logging
from ...config import AppSettings, get_settings
from ...data import UploadedFile
from ...domain import NotFoundError, StorageError, ValidationError
from ..auth import Credentials

logger = logging.getLogger(__name__)

ATTACHMENTS_FIELD = "attachments"
_FORM_TYPES = ("multipart/form-data", "application/x-www-form-urlencoded")


class ApiCallRequest(BaseModel):
    arguments: Dict[str, Any] = Field(default_factory=dict)


def _api_state() -> ApiState:
    return get_api_state()


def _status(success: bool, message: Optional[str] = None) -> Dict[str, Any]:
    return StatusMessage(success=success, message=message).model_dump(exclude_none=True)


def _failure(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(_status(False, message), status_code=status_code)


async def _read_payload(request: Request) -> Tuple[Dict[str, Any], List[UploadedFile]]:
    """Decode a JSON, url-encoded or multipart body into fields and raw files."""

    content_type = request.headers.get("content-type", "")
    if content_type.startswith(_FORM_TYPES):
        form = await request.form()
        fields: Dict[str, Any] = {}
        uploads: List[UploadedFile] = []
        for key, value in form.multi_items():
            if isinstance(value, UploadFile):
                if key == ATTACHMENTS_FIELD:
                    uploads.append(
                        UploadedFile(
                            original_name=value.filename or "",
                            content=await value.read(),
                            mime_type=value.content_type,
                        )
                    )
                continue
            fields[key] = value
        return fields, uploads

    body = await request.body()
    if not body.strip():
        return {}, []
    try:
        payload = orjson.loads(body)
    except orjson.JSONDecodeError as exc:
        raise ValidationError("Request body is not valid JSON") from exc
    if not isinstance(payload, dict):
        raise ValidationError("Request body must be a JSON object")
    return payload, []


def create_app(state: Optional[ApiState] = None, *, settings: Optional[AppSettings] = None) -> FastAPI:
    if state is not None:
        use_api_state(state)
    resolved = settings or (state.context.settings if state is not None else get_settings())

    app = FastAPI(title="PLGA Calendar API", version="0.1.0")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(resolved.server.cors_origins),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(ValidationError)
    async def _validation_error(request: Request, exc: ValidationError) -> JSONResponse:
        logger.info("Rejected %s %s: %s", request.method, request.url.path, exc)
        return _failure(400, str(exc))

    @app.exception_handler(NotFoundError)
    async def _not_found(request: Request, exc: NotFoundError) -> JSONResponse:
        return _failure(404, str(exc))

    @app.exception_handler(StorageError)
    async def _storage_error(request: Request, exc: StorageError) -> JSONResponse:
        logger.error("Storage failure on %s %s: %s", request.method, request.url.path, exc)
        return _failure(500, str(exc))

    @app.get("/api/health")
    async def health() -> Dict[str, str]:
        return {"status": "ok"}

    @app.post("/api/login")
    async def login(request: Request, api: ApiState = Depends(_api_state)) -> JSONResponse:
        fields, _ = await _read_payload(request)
        body = LoginRequest(
            username=str(fields.get("username") or ""),
            password=str(fields.get("password") or ""),
        )
        assert api.context.auth is not None
        if api.context.auth.verify(Credentials(username=body.username, password=body.password)):
            return JSONResponse(_status(True, "Login successful"))
        return _failure(401, "Invalid username or password")

    @app.post("/api/activities", status_code=201)
    async def create_activity(request: Request, api: ApiState = Depends(_api_state)) -> Dict[str, Any]:
        fields, uploads = await _read_payload(request)
        stored = await run_in_threadpool(api.activities.store_uploads, uploads)
        activity = await run_in_threadpool(api.activities.create_activity, fields, stored)
        return serialize_activity(activity)

    @app.get("/api/activities")
    def list_activities(month: Optional[str] = None, api: ApiState = Depends(_api_state)) -> List[Dict[str, Any]]:
        return serialize_activities(api.activities.query_by_month(month))

    @app.get("/api/activities/day")
    def list_activities_for_day(date: Optional[str] = None, api: ApiState = Depends(_api_state)) -> List[Dict[str, Any]]:
        return serialize_activities(api.activities.query_by_day(date))

    @app.delete("/api/activities/{activity_id}")
    def delete_activity(activity_id: str, api: ApiState = Depends(_api_state)) -> Dict[str, Any]:
        api.activities.delete_activity(activity_id)
        return _status(True)

    @app.get("/api/functions")
    async def list_api_functions() -> JSONResponse:
        functions = [func.describe() for func in get_api_functions()]
        return JSONResponse({"functions": functions})

    @app.post("/api/functions/{function_name}")
    def invoke_api_function(function_name: str, request: ApiCallRequest) -> JSONResponse:
        try:
            result = call_api(function_name, **request.arguments)
        except KeyError as exc:
            logger.warning("API function not found: %s", function_name)
            raise HTTPException(status_code=404, detail=str(exc)) from exc
        except TypeError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        logger.debug("API function %s executed successfully", function_name)
        return JSONResponse({"name": function_name, "result": result})

    resolved.uploads.upload_dir.mkdir(parents=True, exist_ok=True)
    app.mount(
        resolved.uploads.url_prefix,
        StaticFiles(directory=str(resolved.uploads.upload_dir)),
        name="uploads",
    )
    if resolved.server.public_dir.is_dir():
        app.mount("/", StaticFiles(directory=str(resolved.server.public_dir), html=True), name="public")

    return app


def run_local_server(host: Optional[str] = None, port: Optional[int] = None) -> None:
    import asyncio

    from hypercorn.asyncio import serve
    from hypercorn.config import Config

    configure_logging()
    settings = get_settings()
    config = Config()
    config.bind = [f"{host or settings.server.host}:{port or settings.server.port}"]
    logger.info("Serving PLGA Calendar API on %s", config.bind[0])
    asyncio.run(serve(create_app(settings=settings), config))
