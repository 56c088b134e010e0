import math

import pytest
from core.models.sample import Sample, to_finite_or_none


@pytest.mark.parametrize("value,expected", [
    (5, 5.0),
    (2.5, 2.5),
    ("7", 7.0),
    (0, 0.0),
])
def test_to_finite_or_none_numbers(value, expected) -> None:
    assert to_finite_or_none(value) == expected


@pytest.mark.parametrize("value", [None, math.nan, math.inf, -math.inf, "x", True, [1]])
def test_to_finite_or_none_absent(value) -> None:
    assert to_finite_or_none(value) is None


def test_sample_normalizes_optional_fields() -> None:
    sample = Sample(1000, math.nan, math.inf)
    assert sample.accuracy_meters is None
    assert sample.speed_kmh is None


def test_sample_is_immutable() -> None:
    sample = Sample(1000, 5.0, 10.0)
    with pytest.raises(AttributeError):
        sample.accuracy_meters = 1.0
