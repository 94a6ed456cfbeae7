"""Shared scan builders for the row navigator tests."""

import pytest

from row_nav.scan import RangeScan

# Power of two, so (N - 1) * INCREMENT is exact and N comes out exact
INCREMENT = 0.0625


def scan_frame(n=100, fill=5.0, overrides=None, timestamp=0.0):
    """Recorded scan frame (sensor logger layout) with `n` samples."""
    ranges = [fill] * n
    for index, value in (overrides or {}).items():
        ranges[index] = value
    return {
        'timestamp': timestamp,
        'ranges': ranges,
        'angle_min': 0.0,
        'angle_max': (n - 1) * INCREMENT,
        'angle_increment': INCREMENT,
        'range_min': 0.05,
        'range_max': 12.0,
    }


@pytest.fixture
def make_scan():
    """make_scan(n=100, fill=5.0, overrides={index: value}) -> RangeScan"""
    def _make(n=100, fill=5.0, overrides=None):
        return RangeScan.from_dict(scan_frame(n, fill, overrides))
    return _make


@pytest.fixture
def make_frame():
    return scan_frame
