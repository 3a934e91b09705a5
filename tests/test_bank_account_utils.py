import pytest

from bank_account_utils import (
    ALGORITHMS,
    BANK_BRANCH_RANGES,
    Algorithm,
    apply_algorithm,
    normalize_account,
    select_algorithm,
    split_account_parts,
    sum_digits,
    validate_bank_branch,
    validate_nz_bank_account,
)


@pytest.mark.parametrize(
    "account",
    [
        "01-0902-0068389-00",   # A
        "01-0001-0100003-00",   # A
        "01-0001-0990008-00",   # B
        "08-6501-10010000-0000",  # D
        "09-0000-00011000-0020",  # E
        "25-2500-31000000-0000",  # F
        "26-2600-13000000-0000",  # G
        "31-2800-1234567-000",  # X
    ],
)
def test_valid_accounts(account):
    result = validate_nz_bank_account(account)
    assert result.is_valid
    assert result.error is None


def test_space_separated_matches_dashes():
    dashed = validate_nz_bank_account("01-0902-0068389-00")
    spaced = validate_nz_bank_account("01 0902 0068389 00")
    assert spaced.is_valid
    assert spaced == dashed


def test_dash_parts_are_trimmed():
    assert validate_nz_bank_account(" 01 - 0902 - 0068389 - 00 ").is_valid


@pytest.mark.parametrize(
    "account, message",
    [
        ("01-0123-0123456", "format"),
        ("01 0123 0123456 00 00", "format"),
        ("1-0123-0123456-00", "Bank code must be 2 digits"),
        ("01-01234-0123456-00", "Branch must be 4 digits or less"),
        ("01-0123-012345-00", "Account base must be 7-8 digits"),
        ("01-0123-012345678-00", "Account base must be 7-8 digits"),
        ("01-0123-0123456-00000", "Account suffix must be 4 digits or less"),
        ("01-0902-006838A-00", "must contain only digits"),
        ("99-0123-0123456-00", "Invalid bank code"),
        ("ab-0123-0123456-00", "Invalid bank code: ab"),
        ("01-9999-0123456-00", "not valid for bank"),
        ("01--0068389-00", "not valid for bank"),
        ("01-0001-0100002-00", "failed checksum validation"),
    ],
)
def test_invalid_accounts(account, message):
    result = validate_nz_bank_account(account)
    assert not result.is_valid
    assert message in result.error


def test_structural_checks_short_circuit_in_order():
    result = validate_nz_bank_account("1-01234-012345-00000")
    assert result.error == "Bank code must be 2 digits"


def test_empty_suffix_is_padded():
    assert validate_nz_bank_account("01-0902-0068389-").is_valid


def test_checksum_is_sensitive_to_base_digits():
    for digit in "012345678":
        result = validate_nz_bank_account(f"01-0902-006838{digit}-00")
        assert not result.is_valid
        assert result.error == "Account number failed checksum validation"


def test_revalidation_is_idempotent():
    results = {validate_nz_bank_account("01-0001-0100002-00") for _ in range(3)}
    assert len(results) == 1


def test_split_account_parts():
    assert split_account_parts("01-0902-0068389-00") == ["01", "0902", "0068389", "00"]
    assert split_account_parts("01  0902\t0068389 00") == ["01", "0902", "0068389", "00"]
    assert split_account_parts("01-0902 -0068389") == ["01", "0902", "0068389"]


def test_validate_bank_branch():
    assert validate_bank_branch("09", "0000").is_valid
    assert validate_bank_branch("11", "6600").is_valid
    assert not validate_bank_branch("11", "6550").is_valid
    assert validate_bank_branch("03", "1999").is_valid
    assert validate_bank_branch("77", "0001").error == "Invalid bank code: 77"
    assert validate_bank_branch("01", "1200").error == "Branch 1200 is not valid for bank 01"


def test_normalize_account_is_18_digits():
    assert normalize_account("01", "902", "68389", "0") == "010902000683890000"
    assert len(normalize_account("01", "1", "1234567", "")) == 18


@pytest.mark.parametrize(
    "bank, base, expected",
    [
        ("01", "00068389", Algorithm.A),
        ("38", "00989999", Algorithm.A),
        ("01", "00990000", Algorithm.B),
        ("30", "99999999", Algorithm.B),
        ("08", "00000000", Algorithm.D),
        ("09", "00000000", Algorithm.E),
        ("25", "00000000", Algorithm.F),
        ("33", "99999999", Algorithm.F),
        ("29", "00000000", Algorithm.G),
        ("31", "00000000", Algorithm.X),
        ("99", "00000000", None),
    ],
)
def test_select_algorithm(bank, base, expected):
    assert select_algorithm(bank, base) is expected


def test_every_known_bank_has_an_algorithm():
    for bank in BANK_BRANCH_RANGES:
        assert select_algorithm(bank, "00000000") is not None


def test_weight_vectors_cover_full_account():
    for algorithm, config in ALGORITHMS.items():
        if algorithm is Algorithm.X:
            assert config.weights == ()
        else:
            assert len(config.weights) == 18


def test_sum_digits():
    assert sum_digits(0) == 0
    assert sum_digits(7) == 7
    assert sum_digits(45) == 9
    assert sum_digits(14) == 5


def test_add_digits_applies_to_large_products():
    # E: 9 * 5 = 45 -> 9, plus suffix digit 2 -> 11
    assert apply_algorithm("090000000900000020", Algorithm.E)
    assert validate_nz_bank_account("09-0000-00090000-0020").is_valid
    # G: 2 * 7 = 14 -> 5, plus 5 * 1 -> 10
    assert apply_algorithm("262600502000000000", Algorithm.G)
    assert validate_nz_bank_account("26-2600-50200000-0000").is_valid


def test_algorithm_x_always_passes():
    assert apply_algorithm("999999999999999999", Algorithm.X)


def test_non_ascii_branch_digits_are_out_of_range():
    assert validate_bank_branch("01", "²").error == "Branch ² is not valid for bank 01"
    assert not validate_bank_branch("01", "０９０２").is_valid
    assert not validate_bank_branch("01", "").is_valid
