"""
mlswarp Quickstart Example

This script demonstrates per-point affine MLS deformation of a small grid.
"""

import numpy as np

from mlswarp import AffineMLS, DeformationConfig, DegenerateGeometryError


def main():
    print("="*60)
    print("mlswarp Quickstart Example")
    print("="*60)

    # 1. Configuration
    print("\n[1] Configuration...")
    config = DeformationConfig()
    config.proximity_threshold = 0.0  # Only exact hits return a target directly
    config.verbose = True

    # 2. Control points: corners stay, the center is pulled up and right
    print("\n[2] Building deformer...")
    controls_p = np.array([[0, 0], [10, 0], [0, 10], [10, 10], [5, 5]], dtype=np.float64)
    controls_q = controls_p.copy()
    controls_q[4] = [6.5, 6.0]

    deformer = AffineMLS(controls_p, controls_q, config)

    # 3. Deform a coarse grid, one query at a time
    print("\n[3] Deforming grid points:")
    for x in np.linspace(0, 10, 5):
        for y in np.linspace(0, 10, 5):
            moved = deformer((x, y))
            print(f"    ({x:5.2f}, {y:5.2f}) -> ({moved.x:6.3f}, {moved.y:6.3f})")

    # 4. Degenerate control sets are reported, not returned as NaN
    print("\n[4] Collinear control points:")
    try:
        AffineMLS([[0, 0], [1, 1], [2, 2]], [[0, 0], [1, 1], [2, 2]])((0.0, 1.0))
    except DegenerateGeometryError as e:
        print(f"    {e}")

    print("\n" + "="*60)
    print("Done!")
    print("="*60)


if __name__ == '__main__':
    main()
