"""Overapproximation of lazy sets by concrete bounded representations.

Every conversion here is sound: the result contains the input set. Results
are computed purely from support queries, so they apply to any combination
of lazy sets. The ``upper_bound`` flag replaces the exact support function
by ``support_function_upper_bound`` wherever it is consulted, trading
tightness for speed while staying sound.

Conversions:
    - box_approximation: axis-aligned Hyperrectangle
    - overapproximate_polygon: HPolygon, box-shaped or epsilon-close
    - overapproximate_template: HPolytope with given facet directions
    - overapproximate_zonotope_hull: Zonotope enclosing CH of two zonotopes
    - overapproximate_interval: Interval of a one-dimensional set
    - overapproximate_intersection: HPolytope enclosing X ∩ P
    - overapproximate: dispatch on the requested target
"""

from __future__ import annotations

import math
from collections.abc import Callable, Iterable
from numbers import Real
from typing import Any

from lazyconvex.approximations.directions import Directions
from lazyconvex.approximations.refinement import PolygonRefiner, SupportDirectionRefiner
from lazyconvex.exceptions import OrderMismatchError
from lazyconvex.geometry.validators import check_bounded, check_dimension
from lazyconvex.geometry.vectors import Scalar, Vector, add, sub, unit_vector
from lazyconvex.sets.convex_hull import ConvexHull
from lazyconvex.sets.intersection import Intersection
from lazyconvex.sets.polyhedra import HalfSpace, HPolygon, HPolytope
from lazyconvex.sets.primitives import EmptySet, Hyperrectangle, Interval, Zonotope
from lazyconvex.sets.protocol import LazySet
from lazyconvex.utils.logging import get_logger

logger = get_logger(__name__)

SupportOracle = Callable[[LazySet, Vector], Scalar]

# Directions of the box-shaped polygon, counter-clockwise
DIR_EAST = (1, 0)
DIR_NORTH = (0, 1)
DIR_WEST = (-1, 0)
DIR_SOUTH = (0, -1)


def _oracle(upper_bound: bool) -> SupportOracle:
    if upper_bound:
        return lambda S, d: S.support_function_upper_bound(d)
    return lambda S, d: S.support_function(d)


def box_approximation(
    S: LazySet, *, upper_bound: bool = False
) -> Hyperrectangle | EmptySet:
    """Return the smallest axis-aligned box containing ``S``.

    Args:
        S: Set to approximate.
        upper_bound: Use the faster, possibly looser support oracle.

    Returns:
        A Hyperrectangle, ``S`` itself if it is an EmptySet, or an EmptySet
        of the same dimension if the support queries show ``S`` is empty.

    Raises:
        UnboundedSetError: If ``S`` is unbounded.
    """
    if isinstance(S, EmptySet):
        return S
    check_bounded(S, "box_approximation")
    rho = _oracle(upper_bound)

    n = S.dim()
    center: list[Scalar] = []
    radius: list[Scalar] = []
    for i in range(n):
        high = rho(S, unit_vector(i, n, 1))
        low = -rho(S, unit_vector(i, n, -1))
        if high < low:
            logger.debug("box_approximation_empty", dimension=n, axis=i)
            return EmptySet(n)
        center.append((high + low) / 2)
        radius.append((high - low) / 2)

    logger.debug("box_approximation", dimension=n, upper_bound=upper_bound)
    return Hyperrectangle(center=tuple(center), radius=tuple(radius))


def overapproximate_polygon(
    S: LazySet,
    epsilon: Scalar = math.inf,
    *,
    refiner: PolygonRefiner | None = None,
) -> HPolygon:
    """Overapproximate a two-dimensional set by a polygon.

    With ``epsilon = inf`` the result is the bounding box written as four
    constraints (east, north, west, south). Otherwise the refiner returns a
    polygon within Hausdorff distance ``epsilon`` of ``S``. The refiner needs
    support vectors, so intersections only get the bounding box.

    Raises:
        DimensionMismatchError: If ``S`` is not two-dimensional.
        UnboundedSetError: If ``S`` is unbounded.
        TypeError: If a finite ``epsilon`` is asked for an Intersection.
    """
    check_dimension(S.dim(), 2, "overapproximate_polygon")
    check_bounded(S, "overapproximate_polygon")

    if math.isinf(epsilon):
        constraints = []
        for direction in (DIR_EAST, DIR_NORTH, DIR_WEST, DIR_SOUTH):
            constraints.append(HalfSpace(direction, S.support_function(direction)))
        return HPolygon(tuple(constraints))

    if isinstance(S, Intersection):
        raise TypeError(
            "epsilon-close polygons need support vectors, which intersections "
            "do not provide; use a template target instead"
        )
    refiner = refiner or SupportDirectionRefiner()
    return HPolygon(tuple(refiner.refine(S, epsilon)))


def overapproximate_template(
    S: LazySet,
    directions: Iterable[Vector],
    *,
    upper_bound: bool = False,
) -> HPolytope:
    """Overapproximate ``S`` by the polytope ``∩_d {x : d·x <= ρ(d, S)}``.

    Adding directions can only shrink the result.
    """
    rho = _oracle(upper_bound)
    constraints = [HalfSpace(tuple(d), rho(S, d)) for d in directions]
    logger.debug(
        "template_approximation", n_directions=len(constraints), upper_bound=upper_bound
    )
    return HPolytope(tuple(constraints), dimension=S.dim())


def overapproximate_zonotope_hull(ch: ConvexHull) -> Zonotope:
    """Enclose the convex hull of two zonotopes of equal order in a zonotope.

    For ``Z_j = <c_j, g_j1, ..., g_jp>`` the result is

        1/2 <c_1 + c_2, g_11 + g_21, ..., g_1p + g_2p,
             c_1 - c_2, g_11 - g_21, ..., g_1p - g_2p>

    (Girard, HSCC 2005). It is sound but in general not the minimal
    enclosing zonotope.

    Raises:
        TypeError: If the operands are not zonotopes.
        OrderMismatchError: If the zonotopes differ in order.
    """
    Z1, Z2 = ch.X, ch.Y
    if not isinstance(Z1, Zonotope) or not isinstance(Z2, Zonotope):
        raise TypeError("expected the convex hull of two zonotopes")
    if Z1.order != Z2.order:
        raise OrderMismatchError(Z1.order, Z2.order, "overapproximate_zonotope_hull")

    center = tuple(x / 2 for x in add(Z1.center, Z2.center))
    sums = [tuple(x / 2 for x in add(g1, g2)) for g1, g2 in zip(Z1.generators, Z2.generators)]
    diffs = [tuple(x / 2 for x in sub(g1, g2)) for g1, g2 in zip(Z1.generators, Z2.generators)]
    shift = tuple(x / 2 for x in sub(Z1.center, Z2.center))
    return Zonotope(center=center, generators=(*sums, shift, *diffs))


def overapproximate_interval(S: LazySet) -> Interval:
    """Return the interval hull of a one-dimensional set.

    Raises:
        DimensionMismatchError: If ``S`` is not one-dimensional.
    """
    check_dimension(S.dim(), 1, "overapproximate_interval")
    low = -S.support_function((-1,))
    high = S.support_function((1,))
    return Interval(low, high)


def overapproximate_intersection(
    cap: Intersection,
    directions: Iterable[Vector],
    *,
    upper_bound: bool = False,
) -> HPolytope:
    """Overapproximate ``X ∩ P`` for compact ``X`` and polytope ``P``.

    For every template direction ``d`` the bound ``min_i ρ(d, X ∩ H_i)`` over
    the constraints ``H_i`` of ``P`` is used as the offset of a half-space
    with normal ``d`` (Frehse and Ray, flowpipe-guard intersection with
    support functions).

    This is a relaxation: the result can be non-empty even when ``X ∩ P`` is
    empty, because each constraint is intersected with ``X`` separately.

    Raises:
        TypeError: If neither operand of ``cap`` is an HPolytope.
        UnboundedSetError: If the other operand is unbounded.
    """
    split = cap.polytope_split()
    if split is None:
        raise TypeError("expected the intersection of a set with an HPolytope")
    X, P = split
    check_bounded(X, "overapproximate_intersection")

    pieces: list[LazySet] = [Intersection(X, H) for H in P.constraints_list()]
    if not pieces:
        pieces = [X]
    rho = _oracle(upper_bound)

    constraints = [
        HalfSpace(tuple(d), min(rho(piece, d) for piece in pieces)) for d in directions
    ]
    logger.debug(
        "intersection_approximation",
        n_constraints=len(P.constraints),
        n_directions=len(constraints),
        upper_bound=upper_bound,
    )
    return HPolytope(tuple(constraints), dimension=cap.dim())


def overapproximate(
    S: LazySet,
    target: Any = Hyperrectangle,
    *,
    upper_bound: bool = False,
    refiner: PolygonRefiner | None = None,
) -> LazySet:
    """Overapproximate ``S`` by the representation named by ``target``.

    Args:
        S: Set to approximate.
        target: One of
            - a set type: ``Hyperrectangle`` (default), ``HPolygon``,
              ``Interval`` or ``Zonotope``; if ``S`` already has exactly this
              type it is returned unchanged;
            - a number: the tolerance of an epsilon-close HPolygon;
            - a ``Directions`` instance or an iterable of directions: a
              template polytope (or the intersection refinement when ``S`` is
              an Intersection with a polytope).
        upper_bound: Use the faster, possibly looser support oracle.
        refiner: Polygon refiner for epsilon-close polygons.

    Raises:
        TypeError: If ``target`` is not a supported representation.
    """
    if isinstance(target, type):
        if type(S) is target:
            return S
        if target is Hyperrectangle:
            return box_approximation(S, upper_bound=upper_bound)
        if target is HPolygon:
            return overapproximate_polygon(S, refiner=refiner)
        if target is Interval:
            return overapproximate_interval(S)
        if target is Zonotope:
            if not isinstance(S, ConvexHull):
                raise TypeError("zonotope overapproximation needs a ConvexHull of zonotopes")
            return overapproximate_zonotope_hull(S)
        raise TypeError(f"cannot overapproximate with {target.__name__}")

    if isinstance(target, Real) and not isinstance(target, bool):
        return overapproximate_polygon(S, target, refiner=refiner)

    if isinstance(target, Directions | Iterable):
        if isinstance(S, Intersection) and S.polytope_split() is not None:
            return overapproximate_intersection(S, target, upper_bound=upper_bound)
        return overapproximate_template(S, target, upper_bound=upper_bound)

    raise TypeError(f"unsupported overapproximation target: {target!r}")
