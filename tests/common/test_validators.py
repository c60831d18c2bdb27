from __future__ import annotations

import pytest

from src.user_directory.user_directory.common.validators import (
    optional_int,
    optional_str,
    parse_byte_size,
    parse_positive_int,
    require_bool,
    require_non_empty,
)
from src.user_directory.user_directory.core.exceptions import BadInputError


def test_require_non_empty_strips():
    assert require_non_empty("  alice ", "required") == "alice"
    for bad in ("", "   ", None, 5):
        with pytest.raises(BadInputError, match="required"):
            require_non_empty(bad, "required")


@pytest.mark.parametrize("raw,expected", [("1", 1), (" 42 ", 42), (7, 7)])
def test_parse_positive_int(raw, expected):
    assert parse_positive_int(raw, "bad") == expected


@pytest.mark.parametrize("raw", ["0", "-1", "abc", "1.5", "", None, True])
def test_parse_positive_int_rejects(raw):
    with pytest.raises(BadInputError, match="bad"):
        parse_positive_int(raw, "bad")


def test_optional_int():
    assert optional_int(None, "employeeId") is None
    assert optional_int(3, "employeeId") == 3
    with pytest.raises(BadInputError):
        optional_int(True, "employeeId")
    with pytest.raises(BadInputError):
        optional_int("3", "employeeId")


def test_optional_str():
    assert optional_str(None, "email") is None
    assert optional_str("  ", "email") is None
    assert optional_str(" a@x.io ", "email") == "a@x.io"
    with pytest.raises(BadInputError):
        optional_str(12, "email")


def test_require_bool():
    assert require_bool(False, "isActive") is False
    with pytest.raises(BadInputError):
        require_bool("false", "isActive")


@pytest.mark.parametrize(
    "raw,expected", [("10kb", 10240), ("1MB", 1048576), ("2048", 2048), (512, 512), ("64b", 64)]
)
def test_parse_byte_size(raw, expected):
    assert parse_byte_size(raw) == expected


@pytest.mark.parametrize("raw", ["ten kb", "10tb", "kb"])
def test_parse_byte_size_rejects(raw):
    with pytest.raises(ValueError):
        parse_byte_size(raw)
