"""Utilities for composing the validation server from reusable services."""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Callable, Iterable

from fastmcp import FastMCP
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from validation_result import ValidationResult

logger = logging.getLogger("uvicorn.error")


@dataclass
class ServiceDefinition:
    """Describe a service that can register tools and routes on a FastMCP instance."""

    name: str
    description: str
    register: Callable[[FastMCP], None]


def log_interaction(action: str, input_data: Any, output_data: Any) -> None:
    """Emit a structured log entry via the standard uvicorn logger (JSON Lines)."""

    entry = {
        "timestamp": datetime.now(timezone.utc).replace(tzinfo=None).isoformat() + "Z",
        "action": action,
        "input": input_data,
        "output": output_data,
    }

    try:
        serialized = json.dumps(entry, ensure_ascii=False)
    except TypeError:
        sanitized_entry = {
            "timestamp": entry["timestamp"],
            "action": entry["action"],
            "input": json.loads(json.dumps(entry["input"], default=str)),
            "output": json.loads(json.dumps(entry["output"], default=str)),
        }
        serialized = json.dumps(sanitized_entry, ensure_ascii=False)

    logger.info(serialized)


def create_mcp_server(
    services: Iterable[ServiceDefinition],
    *,
    app_name: str = "nz-validation",
    json_response: bool = True,
):
    """Create an MCP server instance and register all provided services."""

    mcp = FastMCP(app_name)

    for service in services:
        service.register(mcp)

    app = mcp.http_app(json_response=json_response)
    return mcp, app


async def extract_parameter(request: Request, name: str) -> str:
    """
    Read ``name`` from the query string, falling back to the JSON body on POST.

    Returns an empty string when the parameter is absent or the body is not
    a JSON object.
    """

    value: Any = request.query_params.get(name) or ""

    if not value and request.method == "POST":
        try:
            body = await request.json()
        except (json.JSONDecodeError, UnicodeDecodeError):
            body = None
        if isinstance(body, dict):
            value = body.get(name) or ""

    return value if isinstance(value, str) else str(value)


def register_validation_route(
    mcp: FastMCP,
    path: str,
    *,
    parameter: str,
    action: str,
    validator: Callable[[str], ValidationResult],
) -> None:
    """Expose ``validator`` as a GET/POST JSON endpoint on the server."""

    @mcp.custom_route(path, methods=["GET", "POST"])
    async def validation_endpoint(request: Request) -> Response:
        value = await extract_parameter(request, parameter)

        if not value:
            payload = {"isValid": False, "error": f"Missing required parameter: {parameter}"}
            log_interaction(action, {"url": str(request.url)}, {"status_code": 400, **payload})
            return JSONResponse(payload, status_code=400)

        try:
            payload = validator(value).to_payload()
        except Exception as exc:
            log_interaction(
                f"{action}_error",
                {parameter: value},
                {"error": str(exc), "type": exc.__class__.__name__},
            )
            raise

        log_interaction(action, {parameter: value}, payload)
        return JSONResponse(payload, status_code=200)


def _describe_body(request_body: bytes) -> dict[str, Any]:
    """Summarize a request body for logging: JSON-RPC method and param names, or field names."""

    try:
        payload = json.loads(request_body.decode("utf-8"))
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        return {"body_parse_error": str(exc)}

    if not isinstance(payload, dict):
        return {"body_type": type(payload).__name__}

    if "jsonrpc" in payload:
        described: dict[str, Any] = {"jsonrpc_method": payload.get("method")}
        if isinstance(payload.get("params"), dict):
            described["param_keys"] = sorted(payload["params"].keys())
        return described

    return {"body_keys": sorted(payload.keys())}


def attach_request_logger(app, *, action: str = "http_request") -> None:
    """Attach middleware that logs each HTTP request with its response status.

    Validation routes log the names of the query and body fields they were
    given; MCP calls log the JSON-RPC method and its parameter names.
    """

    class RequestLoggerMiddleware(BaseHTTPMiddleware):
        def __init__(self, app):
            super().__init__(app)
            self.action = action

        async def dispatch(
            self, request: Request, call_next: RequestResponseEndpoint
        ) -> Response:
            request_body = await request.body()
            request_info: dict[str, Any] = {
                "method": request.method,
                "path": request.url.path,
                "query_keys": sorted(request.query_params.keys()),
                "client": request.client.host if request.client else None,
            }
            if request_body:
                request_info.update(_describe_body(request_body))

            response: Response | None = None
            try:
                response = await call_next(request)
                return response
            except Exception as exc:
                log_interaction(
                    f"{self.action}_error",
                    request_info,
                    {"error": str(exc), "type": exc.__class__.__name__},
                )
                raise
            finally:
                if response is not None:
                    log_interaction(self.action, request_info, {"status_code": response.status_code})

    app.add_middleware(RequestLoggerMiddleware)
