# ird_utils.py
from __future__ import annotations

import re
from typing import Sequence

from validation_result import ValidationResult

# Primary weights for the IRD check digit
WEIGHTS_PRIMARY = (3, 2, 7, 6, 5, 4, 3, 2)
# Secondary weights, used when the primary weights give a check digit of 10
WEIGHTS_SECONDARY = (7, 4, 3, 2, 5, 2, 7, 6)

MIN_IRD_NUMBER = 10_000_000
MAX_IRD_NUMBER = 150_000_000


def normalize_ird(ird_number: str) -> str:
    """Remove whitespace and dashes."""
    return re.sub(r"[\s-]", "", ird_number)


def calculate_check_digit(digits: Sequence[int], weights: Sequence[int]) -> int:
    """
    Compute the mod-11 check digit of the eight base digits.
    A result of 10 means the weight set cannot produce a usable digit.
    """
    remainder = sum(digit * weight for digit, weight in zip(digits, weights)) % 11
    if remainder == 0:
        return 0
    return 11 - remainder


def validate_nz_ird_number(ird_number: str) -> ValidationResult:
    """
    Validate a NZ IRD number (8 or 9 digits, dashes and spaces allowed).
    """
    cleaned = normalize_ird(ird_number)

    if not re.fullmatch(r"[0-9]+", cleaned):
        return ValidationResult.fail("IRD number must contain only digits")

    if len(cleaned) not in (8, 9):
        return ValidationResult.fail("IRD number must be 8 or 9 digits")

    if not MIN_IRD_NUMBER <= int(cleaned) <= MAX_IRD_NUMBER:
        return ValidationResult.fail(
            f"IRD number out of valid range ({MIN_IRD_NUMBER:,} - {MAX_IRD_NUMBER:,})"
        )

    padded = cleaned.zfill(9)
    base_digits = [int(ch) for ch in padded[:8]]
    actual_check_digit = int(padded[8])

    check_digit = calculate_check_digit(base_digits, WEIGHTS_PRIMARY)
    if check_digit == 10:
        check_digit = calculate_check_digit(base_digits, WEIGHTS_SECONDARY)
        if check_digit == 10:
            return ValidationResult.fail(
                "IRD number failed checksum validation (check digit would be 10)"
            )

    if check_digit != actual_check_digit:
        return ValidationResult.fail(
            "IRD number failed checksum validation "
            f"(expected check digit: {check_digit}, got: {actual_check_digit})"
        )

    return ValidationResult.ok()
