# tests/test_primitives.py
from __future__ import annotations

import pytest

from fileseen.rules.primitives import fits_int64, is_blank, is_disposition_code, is_uuid, is_whole_number


def test_is_uuid_accepts_canonical_forms_in_either_case():
    assert is_uuid("123e4567-e89b-12d3-a456-426614174000")
    assert is_uuid("123E4567-E89B-12D3-A456-426614174000")


@pytest.mark.parametrize(
    "value",
    [
        "invalid-uuid",
        "",
        "123e4567e89b12d3a456426614174000",
        "{123e4567-e89b-12d3-a456-426614174000}",
        "123e4567-e89b-12d3-a456-42661417400",
        "123e4567-e89b-12d3-a456-426614174000\n",
        "g23e4567-e89b-12d3-a456-426614174000",
    ],
)
def test_is_uuid_rejects_other_shapes(value: str):
    assert not is_uuid(value)


def test_is_uuid_never_raises_on_non_strings():
    assert not is_uuid(1000)  # type: ignore[arg-type]


def test_whole_number_only_looks_for_a_dot():
    assert is_whole_number("100000")
    assert is_whole_number("-5")
    assert is_whole_number("1e5")
    assert not is_whole_number("1.0")
    assert not is_whole_number("0.5")


@pytest.mark.parametrize("code, ok", [("1", True), ("2", True), ("3", True), ("0", False), ("4", False), ("-1", False)])
def test_disposition_codes(code: str, ok: bool):
    assert is_disposition_code(code) is ok


@pytest.mark.parametrize("code", ["1.0", "1e0", "", "one", "0x1"])
def test_disposition_code_is_false_not_an_error_for_non_integers(code: str):
    assert is_disposition_code(code) is False


def test_fits_int64_bounds():
    assert fits_int64("9223372036854775807")
    assert fits_int64("-9223372036854775808")
    assert not fits_int64("9223372036854775808")
    assert not fits_int64("-9223372036854775809")


def test_fits_int64_exponent_forms():
    assert fits_int64("1e5")
    assert fits_int64("15E-1") is False
    assert not fits_int64("1e-1")
    assert not fits_int64("1e400")
    assert not fits_int64("1e999999999")


def test_is_blank():
    assert is_blank("")
    assert is_blank(" \t ")
    assert not is_blank(" x ")


@pytest.mark.parametrize("s", ["\u00a0", " \u00a0 ", "\u2007", "\u202f", "\u0085"])
def test_no_break_spaces_are_not_blank(s):
    assert not is_blank(s)
