"""Tests for coordinate clustering."""

from __future__ import annotations

import pytest

from positioned_table_extractor.clustering import cluster_values


def test_cluster_merges_nearby_values():
    assert cluster_values([10, 11, 12, 50, 51], 3) == pytest.approx([11, 50.5])


def test_cluster_is_order_independent():
    assert cluster_values([51, 12, 50, 10, 11], 3) == pytest.approx([11, 50.5])


def test_cluster_chains_through_last_member():
    """Each value is compared with the previous member, not the group start."""
    assert cluster_values([0, 3, 6, 9], 3) == pytest.approx([4.5])


def test_cluster_empty_input():
    assert cluster_values([], 3) == []
