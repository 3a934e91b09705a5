"""Reusable MCP services."""

from .bank_account_service import register_bank_account_service
from .ird_number_service import register_ird_number_service

__all__ = ["register_bank_account_service", "register_ird_number_service"]
