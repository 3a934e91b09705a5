"""NZ bank account validation service for MCP."""
from __future__ import annotations

from typing import Any

from fastmcp import FastMCP

from bank_account_utils import validate_nz_bank_account
from mcp_framework import log_interaction, register_validation_route


def register_bank_account_service(mcp: FastMCP) -> None:
    """Register the bank account tool and its HTTP endpoint."""

    @mcp.tool()
    def nz_bank_account_check(account_number: str) -> dict[str, Any]:
        """
        Validate a New Zealand bank account number.

        Args:
            account_number: account as XX-XXXX-XXXXXXX-XXX (dashes or spaces)

        Returns:
            {isValid, error?}
        """

        try:
            result = validate_nz_bank_account(account_number).to_payload()
        except Exception as exc:
            log_interaction(
                "nz_bank_account_check_error",
                {"account_number": account_number},
                {"error": str(exc), "type": exc.__class__.__name__},
            )
            raise

        log_interaction("nz_bank_account_check", {"account_number": account_number}, result)
        return result

    register_validation_route(
        mcp,
        "/api/ValidateNZBankAccount",
        parameter="accountNumber",
        action="validate_nz_bank_account",
        validator=validate_nz_bank_account,
    )
