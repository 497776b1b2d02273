"""Conversion of free-form macro strings into numbers."""

import re

_NUMBER_PATTERN = re.compile(r"[0-9]*\.?[0-9]+")


def extract_amount(raw: str) -> float:
    """Return the first number found in ``raw``, or 0.0 when there is none."""
    match = _NUMBER_PATTERN.search(raw or "")
    if match is None:
        return 0.0
    return float(match.group())
