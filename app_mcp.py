"""Composable MCP server hosting the NZ validation services."""
from __future__ import annotations

import os

import uvicorn

from mcp_framework import ServiceDefinition, attach_request_logger, create_mcp_server, log_interaction
from services import register_bank_account_service, register_ird_number_service

APP_NAME = os.getenv("NZ_VALIDATION_APP_NAME", "nz-validation")
HOST = os.getenv("NZ_VALIDATION_HOST", "127.0.0.1")
PORT = int(os.getenv("NZ_VALIDATION_PORT", "8000"))
LOG_LEVEL = os.getenv("NZ_VALIDATION_LOG_LEVEL", "info")

services = [
    ServiceDefinition(
        name="nz_bank_account",
        description="Validate NZ bank account numbers against branch ranges and checksums.",
        register=register_bank_account_service,
    ),
    ServiceDefinition(
        name="nz_ird_number",
        description="Validate NZ IRD numbers against range and mod-11 check digit rules.",
        register=register_ird_number_service,
    ),
]

mcp, http_app = create_mcp_server(services, app_name=APP_NAME, json_response=True)
attach_request_logger(http_app)

log_interaction("startup", {"services": [service.name for service in services]}, {"app": APP_NAME})


if __name__ == "__main__":
    # MCP endpoint is served at /mcp, validation endpoints under /api/
    uvicorn.run(http_app, host=HOST, port=PORT, log_level=LOG_LEVEL.lower())
