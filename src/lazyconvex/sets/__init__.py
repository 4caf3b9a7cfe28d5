"""Lazy convex sets for lazyconvex.

Every set implements the support-function protocol (``LazySet``): it knows
its dimension, answers support vector and support function queries and
reports whether it is bounded. Combinators compose sets through these
queries alone, without enumerating points or constraints.

Key Components:
    - Protocol: LazySet abstract base
    - Primitives: EmptySet, Singleton, Interval, Hyperrectangle, Ball1,
      Ball2, Zonotope
    - Polyhedra: HalfSpace, HPolytope, HPolygon, Line
    - Combinators: ConvexHull, ConvexHullArray, UnionSet, UnionSetArray,
      SymmetricIntervalHull, Intersection

Example:
    from lazyconvex.sets import Ball1, hull

    b1 = Ball1(center=(0, 0), radius=1)
    b2 = Ball1(center=(1, 2), radius=1)
    ch = hull(b1, b2)
    ch.support_vector((1, 0))  # (2, 2)
"""

from lazyconvex.sets.arrays import SetArray
from lazyconvex.sets.convex_hull import CH, ConvexHull, ConvexHullArray, hull
from lazyconvex.sets.intersection import Intersection
from lazyconvex.sets.interval_hull import SymmetricIntervalHull, symmetric_interval_hull
from lazyconvex.sets.polyhedra import HalfSpace, HPolygon, HPolytope, Line
from lazyconvex.sets.primitives import (
    Ball1,
    Ball2,
    EmptySet,
    Hyperrectangle,
    Interval,
    Singleton,
    Zonotope,
)
from lazyconvex.sets.protocol import LazySet
from lazyconvex.sets.union import UnionSet, UnionSetArray, union

__all__ = [
    "CH",
    "Ball1",
    "Ball2",
    "ConvexHull",
    "ConvexHullArray",
    "EmptySet",
    "HPolygon",
    "HPolytope",
    "HalfSpace",
    "Hyperrectangle",
    "Intersection",
    "Interval",
    "LazySet",
    "Line",
    "SetArray",
    "Singleton",
    "SymmetricIntervalHull",
    "UnionSet",
    "UnionSetArray",
    "Zonotope",
    "hull",
    "symmetric_interval_hull",
    "union",
]
