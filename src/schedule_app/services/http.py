from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict, Optional

import orjson
from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from hypercorn.asyncio import serve
from hypercorn.config import Config
from pydantic import BaseModel, Field

from ..api import api_state, call_api, get_api_functions
from ..domain import (
    AuthenticationError,
    BackendNotConfiguredError,
    EntryNotFoundError,
    EntryStoreError,
    EntryValidationError,
    SessionMissingError,
)

logger = logging.getLogger(__name__)


class OrjsonResponse(JSONResponse):
    def render(self, content: Any) -> bytes:
        return orjson.dumps(content, option=orjson.OPT_NON_STR_KEYS)


class ApiCallRequest(BaseModel):
    arguments: Dict[str, Any] = Field(default_factory=dict)


class Credentials(BaseModel):
    email: str
    password: str


def _status_for(exc: Exception) -> int:
    if isinstance(exc, (KeyError, EntryNotFoundError)):
        return 404
    if isinstance(exc, (AuthenticationError, SessionMissingError)):
        return 401
    if isinstance(exc, BackendNotConfiguredError):
        return 503
    if isinstance(exc, EntryStoreError):
        return 502
    return 400


# Only pages served from this machine may call the API; the session is process-wide.
LOCAL_ORIGINS = ["http://127.0.0.1", "http://localhost"]

app = FastAPI(title="Schedule App Local API", version="1.0.0", default_response_class=OrjsonResponse)
app.add_middleware(
    CORSMiddleware,
    allow_origins=LOCAL_ORIGINS,
    allow_credentials=False,
    allow_methods=["GET", "POST", "DELETE"],
    allow_headers=["Content-Type"],
)


@app.get("/api/functions")
async def list_api_functions(category: Optional[str] = None) -> OrjsonResponse:
    return OrjsonResponse({"functions": [func.describe() for func in get_api_functions(category)]})


@app.post("/api/functions/{function_name}")
def invoke_api_function(function_name: str, request: ApiCallRequest) -> OrjsonResponse:
    try:
        result = call_api(function_name, **request.arguments)
    except KeyError as exc:
        logger.warning("API function not found: %s", function_name)
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except (EntryValidationError, TypeError, ValueError) as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except (EntryStoreError, AuthenticationError, BackendNotConfiguredError, SessionMissingError) as exc:
        logger.exception("API function %s failed", function_name)
        raise HTTPException(status_code=_status_for(exc), detail=str(exc)) from exc
    logger.debug("API function %s executed successfully", function_name)
    return OrjsonResponse({"name": function_name, "result": result})


@app.post("/api/session")
def sign_in(credentials: Credentials) -> OrjsonResponse:
    try:
        user = api_state.auth.sign_in(credentials.email, credentials.password)
    except (AuthenticationError, BackendNotConfiguredError) as exc:
        raise HTTPException(status_code=_status_for(exc), detail=str(exc)) from exc
    return OrjsonResponse({"user": {"id": user.id, "email": user.email}})


@app.delete("/api/session")
def sign_out() -> OrjsonResponse:
    try:
        api_state.auth.sign_out()
    except AuthenticationError as exc:
        raise HTTPException(status_code=_status_for(exc), detail=str(exc)) from exc
    return OrjsonResponse({"user": None})


def run_local_server(host: str = "127.0.0.1", port: int = 8000) -> None:
    config = Config()
    config.bind = [f"{host}:{port}"]
    logger.info("Serving schedule API on %s:%s", host, port)
    asyncio.run(serve(app, config))
