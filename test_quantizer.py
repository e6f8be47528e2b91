#!/usr/bin/env python3
"""Tests for the uWave acceleration quantizer."""

import pytest

from accel_gestures.errors import InvalidQuantizationParameter, InvalidSample
from accel_gestures.gestures.quantizer import (
    average_windows,
    points_to_gesture,
    quantize,
    quantize_value,
)
from accel_gestures.utils.gesture_utils import Point


@pytest.mark.parametrize("value, expected", [
    (128, 16),
    (80, 16),
    (129, 0),
    (79, 40),
    (40, 25),
    (39, 9),
    (4, 1),
    (3, 0),
    (0, 0),
    (-3, 0),
    (-4, -1),
    (-5, -1),
    (-10, -2),
    (-11, -15),
    (-15, -15),
    (-19, -15),
    (-20, -15),
    (-21, -5),
    (-39, -9),
    (-40, 0),
    (-79, 0),
    (-80, 0),
    (-81, -16),
    (-128, -16),
    (-129, 0),
])
def test_quantize_value_bands(value, expected):
    assert quantize_value(value) == expected


def test_window_count_matches_raw_length():
    for length in range(1, 10):
        raw = [Point(i, 0, 0) for i in range(length)]
        assert len(quantize(raw)) == length


def test_last_windows_are_truncated():
    raw = [Point(x, 0, 0) for x in (0, 4, 8, 12, 16)]

    averaged = average_windows(raw)

    assert averaged[:, 0].tolist() == [6, 10, 12, 14, 16]
    assert [p.x for p in quantize(raw)] == [1, 2, 3, 3, 4]


def test_move_step_skips_window_starts():
    raw = [Point(x, 0, 0) for x in (0, 4, 8, 12, 16)]

    quantized = quantize(raw, window_size=4, move_step=2)

    assert len(quantized) == 3
    assert [p.x for p in quantized] == [1, 3, 4]


def test_window_mean_truncates_toward_zero():
    # mean -39.5 truncates to -39 (linear band); flooring would give -40 (dead zone)
    raw = [Point(-39, 0, 0), Point(-40, 0, 0)]

    averaged = average_windows(raw, window_size=2)

    assert averaged[0].tolist() == [-39, 0, 0]
    assert quantize(raw, window_size=2)[0] == Point(-9, 0, 0)


def test_axes_are_quantized_independently():
    raw = [Point(100, -100, 20)] * 4

    assert quantize(raw) == [Point(16, -16, 5)] * 4


def test_empty_gesture_yields_empty_output():
    assert quantize([]) == []
    assert points_to_gesture([]) == []


def test_accepts_tuples_and_dicts():
    raw_tuples = [(10, 10, 10)] * 8
    raw_dicts = [{'x': 10, 'y': 10, 'z': 10}] * 8

    expected = [Point(2, 2, 2)] * 8
    assert quantize(raw_tuples) == expected
    assert quantize(raw_dicts) == expected


def test_float_samples_produce_integer_levels():
    raw = [Point(10.5, -12.25, 99.9)] * 3

    quantized = quantize(raw)

    assert quantized == [Point(2, -15, 16)] * 3
    assert all(isinstance(v, int) for p in quantized for v in p)


@pytest.mark.parametrize("window_size, move_step", [(0, 1), (4, 0), (-1, 1), (2.5, 1)])
def test_invalid_parameters_raise(window_size, move_step):
    with pytest.raises(InvalidQuantizationParameter):
        quantize([Point(0, 0, 0)], window_size=window_size, move_step=move_step)


def test_malformed_sample_reports_index():
    with pytest.raises(InvalidSample) as excinfo:
        quantize([Point(0, 0, 0), (1, 2)])

    assert excinfo.value.index == 1
