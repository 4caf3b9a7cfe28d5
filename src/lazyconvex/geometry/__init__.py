"""Geometry helpers for lazyconvex.

This package provides the scalar/vector arithmetic, contract checks and the
planar convex hull routine that the lazy set types are built on.

Key Components:
    - Vectors: dot products, component-wise arithmetic, SingleEntryVector
    - Validators: dimension, index and boundedness checks
    - Planar hull: monotone-chain convex hull of 2D points

Example:
    from fractions import Fraction
    from lazyconvex.geometry import planar_convex_hull

    points = [(Fraction(0), Fraction(0)), (Fraction(1), Fraction(0)),
              (Fraction(1, 2), Fraction(1, 4)), (Fraction(0), Fraction(1))]
    planar_convex_hull(points)  # exact: the interior point is dropped
"""

from lazyconvex.geometry.planar_hull import planar_convex_hull
from lazyconvex.geometry.validators import (
    check_bounded,
    check_dimension,
    check_direction,
    check_index,
    check_same_dimension,
)
from lazyconvex.geometry.vectors import (
    Scalar,
    SingleEntryVector,
    Vector,
    add,
    cross2,
    det2,
    dot,
    is_zero,
    midpoint,
    negate,
    scale,
    sign,
    sub,
    unit_vector,
)

__all__ = [
    "Scalar",
    "SingleEntryVector",
    "Vector",
    "add",
    "check_bounded",
    "check_dimension",
    "check_direction",
    "check_index",
    "check_same_dimension",
    "cross2",
    "det2",
    "dot",
    "is_zero",
    "midpoint",
    "negate",
    "planar_convex_hull",
    "scale",
    "sign",
    "sub",
    "unit_vector",
]
