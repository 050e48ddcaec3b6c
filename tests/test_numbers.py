# File: tests/test_numbers.py
import math

import pytest

from follower_scout.extractor.numbers import to_number


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("12.5K", 12_500),
        ("1.2M", 1_200_000),
        ("3,400", 3_400),
        ("48213", 48_213),
        ("4.5m", 4_500_000),
        ("1,234.5k", 1_234_500),
        ("12.3K followers", 12_300),
        ("0", 0),
    ],
)
def test_to_number_strings(raw, expected):
    assert to_number(raw) == expected


@pytest.mark.parametrize("raw", ["3,400", "1.000.000", "12.5", "007", "9,9,9"])
def test_unsuffixed_strings_keep_digits_only(raw):
    digits = "".join(ch for ch in raw if ch.isdigit())
    assert to_number(raw) == int(digits)


@pytest.mark.parametrize("raw", ["abc", "", "   ", "..,", "K", None, {}, [], True, False])
def test_unparseable_is_none_not_zero(raw):
    assert to_number(raw) is None


def test_native_numbers():
    assert to_number(48213) == 48213
    assert to_number(0) == 0
    assert to_number(12.6) == 13
    assert to_number(math.inf) is None
    assert to_number(math.nan) is None
    assert to_number(-5) is None


def test_rounding_is_half_up():
    assert to_number("2.5K") == 2_500
    assert to_number(0.5) == 1


def test_malformed_suffix_falls_back_to_digits():
    # "1.2.3" is not a float, the digits are still there
    assert to_number("1.2.3K") == 123


def test_oversized_suffixed_mantissa_is_none():
    assert to_number("9" * 400 + "K") is None
    assert to_number("9" * 400 + ".5M") is None


def test_oversized_plain_digits_are_none():
    assert to_number("1" * 5000) is None


@pytest.mark.parametrize("raw", ["١٢٣", "١٢٣K", "４５６"])
def test_non_ascii_digits_are_not_counts(raw):
    assert to_number(raw) is None
