"""Convex hull of a finite set of points in the plane.

The hull is built with Andrew's monotone chain: points are sorted
lexicographically, then a lower and an upper chain are grown by scanning the
sorted points and discarding the last chain point whenever the last three
points fail to make a strict counter-clockwise turn.

The only numeric primitive is the sign of a 2D cross product, evaluated in
the scalar type of the input, so rational inputs give exact hulls and no
tolerance is involved.
"""

from __future__ import annotations

from collections.abc import Iterable

from lazyconvex.geometry.validators import check_dimension
from lazyconvex.geometry.vectors import Scalar, Vector, cross2
from lazyconvex.utils.logging import get_logger

logger = get_logger(__name__)

Point2D = tuple[Scalar, Scalar]


def planar_convex_hull(
    points: Iterable[Vector],
    algorithm: str = "monotone_chain",
) -> list[Point2D]:
    """Compute the convex hull of a finite collection of 2D points.

    Args:
        points: Points in the plane, in any order, possibly with duplicates
            or collinear points.
        algorithm: Hull algorithm; only "monotone_chain" is available.

    Returns:
        The hull vertices in counter-clockwise order, starting at the
        lexicographically smallest point. Duplicates and points that are not
        extreme (including those in the interior of an edge) are removed.
        Degenerate inputs return the minimal point set: ``[]`` for no points,
        ``[p]`` for a single distinct point and the two end points if all
        points are collinear.

    Raises:
        DimensionMismatchError: If a point is not two-dimensional.
        ValueError: If ``algorithm`` is unknown.

    Example:
        >>> planar_convex_hull([(0, 0), (2, 0), (1, 1), (1, 0), (0, 2)])
        [(0, 0), (2, 0), (0, 2)]
    """
    if algorithm != "monotone_chain":
        raise ValueError(f"unknown convex hull algorithm: {algorithm!r}")

    pts: list[Point2D] = []
    for p in points:
        check_dimension(len(p), 2, "planar_convex_hull")
        pts.append((p[0], p[1]))

    return _monotone_chain(pts)


def _monotone_chain(points: list[Point2D]) -> list[Point2D]:
    pts = sorted(points)

    # Drop duplicates; equal points are adjacent after sorting
    unique: list[Point2D] = []
    for p in pts:
        if not unique or p != unique[-1]:
            unique.append(p)

    if len(unique) <= 1:
        return unique

    lower = _half_chain(unique)
    upper = _half_chain(reversed(unique))

    # The last point of each chain is the first point of the other one
    hull = lower[:-1] + upper[:-1]
    logger.debug("planar_hull_computed", n_points=len(points), n_vertices=len(hull))
    return hull


def _half_chain(points: Iterable[Point2D]) -> list[Point2D]:
    chain: list[Point2D] = []
    for p in points:
        while len(chain) >= 2 and cross2(chain[-2], chain[-1], p) <= 0:
            chain.pop()
        chain.append(p)
    return chain
