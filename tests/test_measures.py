from __future__ import annotations

from datetime import timedelta

import pytest

from custom_components.netatmo_rain_sensor.measures import PollWindow, aggregate


@pytest.mark.parametrize(
    ("measures", "expected"),
    [
        ([], False),
        ([[]], False),
        ([[0, 0, 0]], False),
        ([[0, 0, 3.2]], True),
        ([[0.0], [0.0, 0.1]], True),
        ([[0, None, 0]], False),
        ([[[0], [0.3]]], True),
        ([[-1.0, 0]], False),
    ],
)
def test_aggregate_any_positive_sample(measures, expected) -> None:
    assert aggregate(measures) is expected


def test_aggregate_matches_flattened_any() -> None:
    groups = [[0, 0.2, 0], [], [0, 0], [1.5]]
    flat = [sample for group in groups for sample in group]

    assert aggregate(groups) == any(sample > 0 for sample in flat)


def test_aggregate_does_not_mutate_input() -> None:
    groups = [[0, 1.0], [0]]

    aggregate(groups)

    assert groups == [[0, 1.0], [0]]


def test_trailing_window_ends_now() -> None:
    window = PollWindow.trailing(1_700_000_000.7, timedelta(minutes=30))

    assert window.end == 1_700_000_000
    assert window.begin == 1_700_000_000 - 1800
    assert window.begin < window.end
