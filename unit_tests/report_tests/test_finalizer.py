import math

from report.finalizer import (
    NO_DATA,
    UNDEFINED,
    Unavailable,
    average,
    delivery_probability,
    format_stat,
    int_median,
    median,
    overhead_ratio,
    response_probability,
)


def test_delivery_probability_undefined_without_created_messages():
    assert delivery_probability(0, 0) is UNDEFINED
    assert delivery_probability(3, 4) == 0.75


def test_overhead_ratio_undefined_without_deliveries():
    assert overhead_ratio(10, 0) is UNDEFINED
    assert overhead_ratio(10, 4) == 1.5


def test_response_probability_defaults_to_zero():
    assert response_probability(0, 0) == 0.0
    assert not isinstance(response_probability(0, 0), Unavailable)
    assert response_probability(1, 4) == 0.25


def test_average():
    assert average([]) is NO_DATA
    assert average([1.0, 2.0, 6.0]) == 3.0


def test_median_real_and_integer_conventions():
    assert median([1, 2, 3, 4]) == 2.5
    assert median([3.0, 1.0, 2.0]) == 2.0
    assert median([]) is NO_DATA
    assert int_median([1, 1, 2]) == 1
    assert int_median([2, 1, 1]) == 1
    assert int_median([]) == 0


def test_unavailable_markers_are_falsy_and_print_nan():
    assert not UNDEFINED
    assert not NO_DATA
    assert str(UNDEFINED) == "NaN"
    assert UNDEFINED is not NO_DATA


def test_format_stat():
    assert format_stat(UNDEFINED) == "NaN"
    assert format_stat(0.5) == "0.5000"
    assert format_stat(0.123456, precision=2) == "0.12"
    assert format_stat(3) == "3"
    assert format_stat(math.inf) == "inf"
