"""Tests for macro string conversion."""

import pytest

from calorie_counter.services.macros import extract_amount


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("10g", 10.0),
        ("abc", 0.0),
        ("", 0.0),
        ("12.5g protein", 12.5),
        ("~ .5 g", 0.5),
        ("450 kcal", 450.0),
        ("1-2g", 1.0),
    ],
)
def test_extract_amount(raw: str, expected: float) -> None:
    assert extract_amount(raw) == expected
