"""
LiDAR scan geometry: sample count, validity and index bands.

Band boundaries use integer division on the sample count, so for N=100 the
left third is [0, 33), the right third [66, 100) and the middle half
[25, 75).
"""

import math
from dataclasses import dataclass
from typing import Any, Dict, Sequence, Tuple

import numpy as np


class InvalidScanError(ValueError):
    """Scan geometry or sample data that cannot be navigated on."""


def sample_count(angle_min: float, angle_max: float, angle_increment: float) -> int:
    """
    Number of samples covering the field of view, truncated toward zero.

    Raises:
        InvalidScanError: if the angles are not finite numbers, the increment is
            not positive, or the field of view overflows
    """
    try:
        lo, hi, inc = float(angle_min), float(angle_max), float(angle_increment)
    except (OverflowError, TypeError, ValueError) as e:
        raise InvalidScanError(f"malformed scan angles: {e}") from e
    if not all(math.isfinite(a) for a in (lo, hi, inc)):
        raise InvalidScanError(
            f"non-finite scan angles: min={angle_min} max={angle_max} inc={angle_increment}")
    if inc <= 0:
        raise InvalidScanError(f"angle_increment must be positive, got {angle_increment}")

    span = (hi - lo) / inc
    if not math.isfinite(span):
        raise InvalidScanError(
            f"scan geometry overflows: min={angle_min} max={angle_max} inc={angle_increment}")
    return int(1 + span)


def is_valid(sample: float) -> bool:
    """A sample is a real return only if it is positive (NaN is not)."""
    return sample > 0


def valid_mask(samples: np.ndarray) -> np.ndarray:
    """Vectorized is_valid."""
    with np.errstate(invalid='ignore'):
        return samples > 0


def left_third(n: int) -> Tuple[int, int]:
    return (0, n // 3)


def middle_third(n: int) -> Tuple[int, int]:
    return (n // 3, (2 * n) // 3)


def right_third(n: int) -> Tuple[int, int]:
    return ((2 * n) // 3, n)


def middle_half(n: int) -> Tuple[int, int]:
    return (n // 4, (3 * n) // 4)


@dataclass(frozen=True, eq=False)
class RangeScan:
    """
    One planar range scan.

    Only the first `n` samples are used; extra trailing samples in the raw
    message are ignored. Construct through `RangeScan.create` (or one of the
    `from_*` helpers) to get validation.
    """
    angle_min: float
    angle_max: float
    angle_increment: float
    ranges: np.ndarray
    n: int

    @classmethod
    def create(cls, angle_min: float, angle_max: float, angle_increment: float,
               ranges: Sequence[float]) -> 'RangeScan':
        """
        Validate scan geometry and build a scan.

        Args:
            angle_min, angle_max, angle_increment: Field of view (radians)
            ranges: Distance samples (meters), index 0 at angle_min

        Returns:
            RangeScan with `n` samples

        Raises:
            InvalidScanError: N <= 1, bad angles, or fewer samples than N
        """
        n = sample_count(angle_min, angle_max, angle_increment)
        if n <= 1:
            raise InvalidScanError(f"degenerate scan: N={n}")

        try:
            samples = np.asarray(ranges, dtype=float).ravel()
        except (TypeError, ValueError) as e:
            raise InvalidScanError(f"non-numeric range samples: {e}") from e
        if samples.size < n:
            raise InvalidScanError(f"scan has {samples.size} samples, geometry needs {n}")

        samples = samples[:n].copy()
        samples.setflags(write=False)
        return cls(float(angle_min), float(angle_max), float(angle_increment), samples, n)

    @classmethod
    def from_msg(cls, msg) -> 'RangeScan':
        """Build from a sensor_msgs/LaserScan message."""
        return cls.create(msg.angle_min, msg.angle_max, msg.angle_increment, msg.ranges)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'RangeScan':
        """Build from a recorded scan frame (sensor logger JSON layout)."""
        try:
            return cls.create(data['angle_min'], data['angle_max'],
                              data['angle_increment'], data['ranges'])
        except KeyError as e:
            raise InvalidScanError(f"scan frame missing field {e}") from e
        except TypeError as e:
            raise InvalidScanError(f"malformed scan frame: {e}") from e

    @property
    def center(self) -> int:
        return self.n // 2

    def __len__(self):
        return self.n

    def __getitem__(self, index: int) -> float:
        return float(self.ranges[index])

    def band(self, bounds: Tuple[int, int]) -> np.ndarray:
        """Samples in [start, end)."""
        start, end = bounds
        return self.ranges[start:end]
