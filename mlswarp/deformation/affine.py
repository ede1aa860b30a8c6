"""
Affine Moving Least Squares deformation.

Each query point v gets its own best-fit affine map, estimated by weighted
least squares over the control correspondences with weights 1 / |p_i - v|^2
(Schaefer et al., "Image Deformation Using Moving Least Squares", 2006).
"""

import numpy as np
from typing import Dict, Any, List, Optional, Sequence, Tuple

from mlswarp.core.config import DeformationConfig
from mlswarp.core.exceptions import DegenerateGeometryError
from mlswarp.deformation.validation import validate_controls, validate_point, validate_tolerances
from mlswarp.geometry import Mat2, Point


def _to_points(arr: np.ndarray) -> List[Point]:
    return [Point(x, y) for x, y in arr.tolist()]


def _sqr_distances(ps: Sequence[Point], v: Point) -> np.ndarray:
    return np.array([(p - v).sqr_norm() for p in ps], dtype=np.float64)


def _weights(sqr_dist: np.ndarray) -> np.ndarray:
    # Infinite where v sits on a control point
    with np.errstate(divide='ignore', over='ignore'):
        return 1.0 / sqr_dist


def _coincident_index(weights: np.ndarray) -> int:
    """First index with an infinite weight, or the heaviest one if the sum merely overflowed."""
    infinite = np.flatnonzero(np.isinf(weights))
    if len(infinite) > 0:
        return int(infinite[0])
    return int(np.argmax(weights))


def _weighted_estimator(ps: Sequence[Point],
                        qs: Sequence[Point],
                        weights: Sequence[float],
                        ) -> Tuple[Point, Point, Mat2, Mat2]:
    """
    Weighted centroids and the two 2x2 moment matrices.

    Weights are rescaled so the largest is 1. The centroids and
    inv(mp) @ mq do not change, and w * q cannot overflow for large targets.

    Args:
        ps: Source control points
        qs: Target control points
        weights: Finite, non-negative per-control weights, at least one > 0

    Returns:
        p_star: Weighted centroid of ps
        q_star: Weighted centroid of qs
        mp: sum_i w_i * p_hat_i p_hat_i^T
        mq: sum_i w_i * p_hat_i q_hat_i^T
    """
    w_max = max(weights)
    weights = [w / w_max for w in weights]
    inv_w_sum = 1.0 / sum(weights)

    p_star = inv_w_sum * sum((w * p for w, p in zip(weights, ps)), Point.zero())
    q_star = inv_w_sum * sum((w * q for w, q in zip(weights, qs)), Point.zero())

    mp = Mat2.zero()
    mq = Mat2.zero()
    for w, p, q in zip(weights, ps, qs):
        p_hat = p - p_star
        q_hat = q - q_star
        mp = mp + w * p_hat.outer(p_hat)
        mq = mq + w * p_hat.outer(q_hat)

    return p_star, q_star, mp, mq


def _conditioning(mp: Mat2) -> float:
    """
    4 * det(mp) / trace(mp)^2, in [0, 1] for a covariance matrix.

    Equals 4 * l1 * l2 / (l1 + l2)^2 over the eigenvalues, so it does not
    change under rotation or scaling: 1 for isotropic spread, 0 for collinear points.
    """
    trace = mp.m11 + mp.m22
    if not mp.is_finite() or not trace > 0:
        return 0.0
    return 4.0 * mp.det() / (trace * trace)


def _deform(ps: Sequence[Point],
            qs: Sequence[Point],
            v: Point,
            proximity_threshold: float,
            det_tolerance: float,
            ) -> Point:
    sqr_dist = _sqr_distances(ps, v)
    w_all = _weights(sqr_dist)
    w_sum = float(np.sum(w_all))

    if np.isinf(w_sum):
        return qs[_coincident_index(w_all)]

    if proximity_threshold > 0:
        nearest = int(np.argmin(sqr_dist))
        if sqr_dist[nearest] <= proximity_threshold ** 2:
            return qs[nearest]

    if not w_sum > 0:
        raise DegenerateGeometryError(
            f"Query point {v.to_tuple()} is too far from every control point; all weights underflow"
        )

    p_star, q_star, mp, mq = _weighted_estimator(ps, qs, w_all.tolist())

    ratio = _conditioning(mp)
    if ratio <= det_tolerance:
        raise DegenerateGeometryError(
            f"Weighted covariance of the control points is singular at {v.to_tuple()} "
            f"(det={mp.det():.3e}, conditioning={ratio:.3e}); "
            f"control points may be coincident or collinear"
        )

    m = mp.inv() @ mq

    return (v - p_star) @ m + q_star


def deform_affine(controls_p,
                  controls_q,
                  point,
                  proximity_threshold: float = 0.0,
                  det_tolerance: float = 1e-10,
                  ) -> Point:
    """
    Move a point according to the affine MLS deformation of the control points.

    Args:
        controls_p: (N, 2) source control points (p in the paper)
        controls_q: (N, 2) displaced control points (q in the paper)
        point: (x, y) query point (v in the paper)
        proximity_threshold: If the nearest source control point is within this
            distance of the query, its target is returned directly (0 = only on
            exact coincidence)
        det_tolerance: Minimum 4 * det(Mp) / trace(Mp)^2 below which the local
            estimator is considered singular

    Returns:
        Deformed position of the query point

    Raises:
        InvalidInputError: Malformed or mismatched control points, bad query
        DegenerateGeometryError: Control points too degenerate to fit an affine map
    """
    proximity_threshold, det_tolerance = validate_tolerances(proximity_threshold, det_tolerance)
    p, q = validate_controls(controls_p, controls_q)
    v = validate_point(point)

    return _deform(_to_points(p), _to_points(q), v, proximity_threshold, det_tolerance)


def estimator_diagnostics(controls_p,
                          controls_q,
                          point,
                          det_tolerance: float = 1e-10,
                          ) -> Dict[str, Any]:
    """
    Describe the weighted estimator for one query point without raising on degeneracy.

    Args:
        controls_p: (N, 2) source control points
        controls_q: (N, 2) target control points
        point: (x, y) query point
        det_tolerance: Tolerance used for the 'degenerate' flag

    Returns:
        Dictionary of properties
    """
    _, det_tolerance = validate_tolerances(0.0, det_tolerance)
    p, q = validate_controls(controls_p, controls_q, warn_duplicates=False)
    v = validate_point(point)
    ps, qs = _to_points(p), _to_points(q)

    w_all = _weights(_sqr_distances(ps, v))
    w_sum = float(np.sum(w_all))

    info = {
        'num_controls': len(ps),
        'weight_sum': w_sum,
        'coincident_index': None,
    }

    if np.isinf(w_sum):
        info['coincident_index'] = _coincident_index(w_all)
        info['degenerate'] = False
        return info

    if not w_sum > 0:
        info['degenerate'] = True
        return info

    p_star, q_star, mp, mq = _weighted_estimator(ps, qs, w_all.tolist())
    ratio = _conditioning(mp)

    info.update({
        'p_star': p_star.to_tuple(),
        'q_star': q_star.to_tuple(),
        'det': float(mp.det()),
        'conditioning': float(ratio),
        'degenerate': bool(ratio <= det_tolerance),
    })

    return info


class AffineMLS:
    """
    Affine MLS deformer bound to one control correspondence set.

    The control points are validated once; each call maps a single query
    point and keeps nothing from it.
    """

    def __init__(self,
                 controls_p,
                 controls_q,
                 config: Optional[DeformationConfig] = None,
                 ):
        """
        Initialize deformer.

        Args:
            controls_p: (N, 2) source control points
            controls_q: (N, 2) target control points
            config: Deformation configuration (uses default if None)
        """
        if config is None:
            config = DeformationConfig()

        self.config = config
        self._proximity_threshold, self._det_tolerance = validate_tolerances(
            config.proximity_threshold, config.det_tolerance,
        )

        self.controls_p, self.controls_q = validate_controls(
            controls_p, controls_q, warn_duplicates=config.warn_duplicates,
        )
        self.controls_p.flags.writeable = False
        self.controls_q.flags.writeable = False

        self._ps = _to_points(self.controls_p)
        self._qs = _to_points(self.controls_q)

        if self.config.verbose:
            lo = self.controls_p.min(axis=0)
            hi = self.controls_p.max(axis=0)
            print(f"AffineMLS: {len(self)} control points, "
                  f"x in [{lo[0]:.3g}, {hi[0]:.3g}], y in [{lo[1]:.3g}, {hi[1]:.3g}]")

    def __len__(self) -> int:
        return len(self._ps)

    def deform(self, point) -> Point:
        """
        Deform one query point.

        Args:
            point: (x, y) query point

        Returns:
            Deformed position
        """
        return _deform(
            self._ps,
            self._qs,
            validate_point(point),
            self._proximity_threshold,
            self._det_tolerance,
        )

    def __call__(self, point) -> Point:
        """Alias for deform."""
        return self.deform(point)
