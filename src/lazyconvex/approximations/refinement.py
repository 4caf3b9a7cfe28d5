"""Epsilon-close polygonal overapproximation of planar convex sets.

The refiner maintains a counter-clockwise ring of directions with their
support vectors. Between two neighboring directions ``d1, d2`` the set lies
inside the triangle formed by the chord ``p1 p2`` of the support vectors and
the corner ``q`` where the two support lines meet; the distance from ``q`` to
the chord bounds the local Hausdorff error. Pieces whose error exceeds
``epsilon`` are split by inserting the direction ``d1 + d2``.

All comparisons are done on squared quantities, so rational inputs are
refined exactly and no square root is taken.
"""

from __future__ import annotations

import math
from typing import Protocol

from lazyconvex.config import settings
from lazyconvex.exceptions import RefinementLimitError
from lazyconvex.geometry.vectors import Scalar, Vector, add, det2, dot, sub
from lazyconvex.sets.polyhedra import HalfSpace
from lazyconvex.sets.protocol import LazySet
from lazyconvex.utils.logging import get_logger

logger = get_logger(__name__)

# East, north, west, south
_INITIAL_DIRECTIONS: tuple[tuple[int, int], ...] = ((1, 0), (0, 1), (-1, 0), (0, -1))

_Piece = tuple[Vector, Vector, Vector, Vector]


class PolygonRefiner(Protocol):
    """Protocol for epsilon-close polygon approximation of planar sets.

    Implementations return half-spaces whose intersection contains ``S`` and
    lies within Hausdorff distance ``epsilon`` of it.
    """

    def refine(self, S: LazySet, epsilon: Scalar) -> list[HalfSpace]:
        """Return the constraints of an epsilon-close outer polygon of ``S``."""
        ...


class SupportDirectionRefiner:
    """Refine support directions until every piece is epsilon-close.

    Attributes:
        max_directions: Upper bound on the number of directions queried.
    """

    def __init__(self, max_directions: int | None = None) -> None:
        self.max_directions = (
            max_directions
            if max_directions is not None
            else settings.REFINEMENT_MAX_DIRECTIONS
        )

    def refine(self, S: LazySet, epsilon: Scalar) -> list[HalfSpace]:
        """Return counter-clockwise constraints of an epsilon-close polygon.

        Args:
            S: Bounded two-dimensional set providing support vectors.
            epsilon: Positive Hausdorff distance bound.

        Raises:
            ValueError: If ``epsilon`` is not positive.
            RefinementLimitError: If more than ``max_directions`` directions
                would be needed.
        """
        if not epsilon > 0:
            raise ValueError(f"epsilon must be positive, got {epsilon}")

        directions: list[Vector] = list(_INITIAL_DIRECTIONS)
        points = [S.support_vector(d) for d in directions]
        n_directions = len(directions)

        # Pieces are processed in counter-clockwise order
        stack: list[_Piece] = [
            (directions[k], points[k], directions[(k + 1) % 4], points[(k + 1) % 4])
            for k in reversed(range(4))
        ]
        constraints: list[HalfSpace] = []
        while stack:
            d1, p1, d2, p2 = stack.pop()
            if _piece_is_close(d1, p1, d2, p2, epsilon):
                constraints.append(HalfSpace(tuple(d1), dot(d1, p1)))
                continue
            if n_directions >= self.max_directions:
                raise RefinementLimitError(self.max_directions, epsilon)
            dm = add(d1, d2)
            pm = S.support_vector(dm)
            n_directions += 1
            stack.append((dm, pm, d2, p2))
            stack.append((d1, p1, dm, pm))

        logger.debug(
            "polygon_refined",
            epsilon=float(epsilon),
            n_constraints=len(constraints),
        )
        return constraints


def _piece_is_close(
    d1: Vector, p1: Vector, d2: Vector, p2: Vector, epsilon: Scalar
) -> bool:
    chord = sub(p2, p1)
    chord_sq = dot(chord, chord)
    if chord_sq == 0:
        # Both support lines pass through the same point, a vertex of S
        return True
    if math.isinf(epsilon):
        return True
    corner = _support_lines_corner(d1, dot(d1, p1), d2, dot(d2, p2))
    cross = det2(chord, sub(corner, p1))
    return cross * cross <= epsilon * epsilon * chord_sq


def _support_lines_corner(
    d1: Vector, b1: Scalar, d2: Vector, b2: Scalar
) -> tuple[Scalar, Scalar]:
    # d1 and d2 are less than pi apart, so the determinant is positive
    det = det2(d1, d2)
    return (
        (b1 * d2[1] - d1[1] * b2) / det,
        (d1[0] * b2 - b1 * d2[0]) / det,
    )
