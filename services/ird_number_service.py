"""NZ IRD number validation service for MCP."""
from __future__ import annotations

from typing import Any

from fastmcp import FastMCP

from ird_utils import validate_nz_ird_number
from mcp_framework import log_interaction, register_validation_route


def register_ird_number_service(mcp: FastMCP) -> None:
    """Register the IRD number tool and its HTTP endpoint."""

    @mcp.tool()
    def nz_ird_number_check(ird_number: str) -> dict[str, Any]:
        """Validate a New Zealand IRD (tax) number of 8 or 9 digits."""

        try:
            result = validate_nz_ird_number(ird_number).to_payload()
        except Exception as exc:
            log_interaction(
                "nz_ird_number_check_error",
                {"ird_number": ird_number},
                {"error": str(exc), "type": exc.__class__.__name__},
            )
            raise

        log_interaction("nz_ird_number_check", {"ird_number": ird_number}, result)
        return result

    register_validation_route(
        mcp,
        "/api/ValidateNZIRDNumber",
        parameter="irdNumber",
        action="validate_nz_ird_number",
        validator=validate_nz_ird_number,
    )
