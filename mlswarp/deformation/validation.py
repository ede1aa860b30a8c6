"""
Input checks for control point sets and query points.

Malformed inputs are rejected here, before any weights are computed, so they
never show up downstream as NaN/Inf coordinates.
"""

import numpy as np
import math
from typing import Tuple
import warnings

from mlswarp.core.exceptions import InvalidInputError, DegenerateGeometryError
from mlswarp.geometry import Point


def as_point_array(points, name: str = 'points') -> np.ndarray:
    """
    Convert a sequence of (x, y) pairs to a float64 array.

    Args:
        points: Sequence of (x, y) pairs or (N, 2) array
        name: Argument name used in error messages

    Returns:
        (N, 2) float64 array
    """
    if isinstance(points, (list, tuple)):
        points = [pt.to_tuple() if isinstance(pt, Point) else pt for pt in points]

    try:
        arr = np.array(points, dtype=np.float64)
    except (TypeError, ValueError) as e:
        raise InvalidInputError(f"{name} must be a sequence of (x, y) pairs: {e}") from e

    if arr.size == 0:
        arr = arr.reshape(0, 2)

    if arr.ndim != 2 or arr.shape[1] != 2:
        raise InvalidInputError(f"{name} must have shape (N, 2), got {arr.shape}")

    if not np.all(np.isfinite(arr)):
        raise InvalidInputError(f"{name} contains NaN or Inf coordinates")

    return arr


def validate_controls(controls_p,
                      controls_q,
                      warn_duplicates: bool = True,
                      ) -> Tuple[np.ndarray, np.ndarray]:
    """
    Validate a control correspondence set.

    Args:
        controls_p: (N, 2) source control points
        controls_q: (N, 2) target control points, paired with controls_p by index
        warn_duplicates: Warn when a source point repeats with a different target

    Returns:
        controls_p: (N, 2) float64 array
        controls_q: (N, 2) float64 array
    """
    p = as_point_array(controls_p, 'controls_p')
    q = as_point_array(controls_q, 'controls_q')

    if len(p) != len(q):
        raise InvalidInputError(
            f"controls_p and controls_q must have the same length, got {len(p)} and {len(q)}"
        )
    if len(p) == 0:
        raise InvalidInputError("At least one control point is required")

    # With every source point in one place the weighted covariance is zero
    # for any query point.
    if len(p) > 1 and np.all(p == p[0]):
        raise DegenerateGeometryError(
            f"All {len(p)} source control points coincide at {tuple(p[0].tolist())}"
        )

    if warn_duplicates:
        _warn_conflicting_duplicates(p, q)

    return p, q


def _warn_conflicting_duplicates(p: np.ndarray, q: np.ndarray) -> None:
    first_target = {}
    for i, (src, dst) in enumerate(zip(map(tuple, p.tolist()), map(tuple, q.tolist()))):
        if src not in first_target:
            first_target[src] = (i, dst)
            continue
        j, kept = first_target[src]
        if kept != dst:
            warnings.warn(
                f"Source control point {src} appears at indices {j} and {i} with different "
                f"targets; only index {j} is used when a query coincides with it"
            )


def validate_point(point, name: str = 'point') -> Point:
    """
    Validate a single query point.

    Args:
        point: (x, y) pair
        name: Argument name used in error messages

    Returns:
        Point
    """
    if isinstance(point, Point):
        point = point.to_tuple()

    arr = as_point_array([point], name)
    return Point.from_tuple(arr[0])


def _as_tolerance(value, name: str) -> float:
    try:
        value = float(value)
    except (TypeError, ValueError) as e:
        raise InvalidInputError(f"{name} must be a number, got {value!r}") from e

    if not math.isfinite(value) or value < 0:
        raise InvalidInputError(f"{name} must be a finite non-negative number, got {value}")
    return value


def validate_tolerances(proximity_threshold, det_tolerance) -> Tuple[float, float]:
    """
    Check the numeric knobs of the deformation.

    Args:
        proximity_threshold: Snap radius, anything float() accepts
        det_tolerance: Conditioning floor, anything float() accepts

    Returns:
        proximity_threshold: float
        det_tolerance: float
    """
    return (
        _as_tolerance(proximity_threshold, 'proximity_threshold'),
        _as_tolerance(det_tolerance, 'det_tolerance'),
    )
