from __future__ import annotations

import logging

import pytest

from pandora_client.batching import batch_points
from pandora_client.exceptions import InvalidArgument
from pandora_client.points import Point


def _point(value: str, max_size: int = 1024) -> Point:
    p = Point(max_size=max_size)
    p.append("v", value)
    return p


def test_batches_respect_byte_budget_and_order():
    # each point is "v=xxxx" -> 6 + 1 = 7 bytes
    points = [_point(f"{i:04d}") for i in range(5)]
    batches = list(batch_points(points, max_bytes=15))
    assert [len(b) for b in batches] == [2, 2, 1]
    flat = [p for b in batches for p in b]
    assert flat == points
    assert all(sum(p.byte_size() for p in b) <= 15 for b in batches)


def test_single_point_larger_than_budget_gets_own_batch():
    big = _point("x" * 50)
    small = _point("y")
    batches = list(batch_points([small, big, small], max_bytes=10))
    assert [len(b) for b in batches] == [1, 1, 1]
    assert batches[1][0] is big


def test_skips_empty_and_oversized_points(caplog):
    oversized = _point("z" * 20, max_size=10)
    ok = _point("a")
    with caplog.at_level(logging.WARNING, logger="pandora_client.batching"):
        batches = list(batch_points([Point(), oversized, ok]))
    assert batches == [[ok]]
    assert "skipping point #1" in caplog.text


def test_no_points_no_batches():
    assert list(batch_points([])) == []


def test_rejects_non_positive_budget():
    with pytest.raises(InvalidArgument):
        list(batch_points([_point("a")], max_bytes=0))
