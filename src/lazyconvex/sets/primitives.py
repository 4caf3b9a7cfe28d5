"""Primitive convex sets implementing the support-function protocol.

These are the leaves of combinator trees: the empty set, points, intervals,
boxes, norm balls and zonotopes. All are immutable frozen dataclasses whose
equality is structural. Coordinates are stored as tuples in the scalar type
they were given in, so ``Fraction`` inputs stay exact.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass, field
from itertools import product

from lazyconvex.exceptions import DimensionMismatchError, EmptySetError
from lazyconvex.geometry.validators import check_direction
from lazyconvex.geometry.vectors import Scalar, Vector, add, dot, sign
from lazyconvex.sets.protocol import LazySet


def _freeze(obj: object, name: str, value: Vector) -> None:
    object.__setattr__(obj, name, tuple(value))


@dataclass(frozen=True)
class EmptySet(LazySet):
    """The empty set of a given ambient dimension.

    Its support function is -inf in every direction; it has no support
    vector. It is the identity element of convex hull composition.
    """

    dimension: int

    def dim(self) -> int:
        return self.dimension

    def support_vector(self, d: Vector) -> tuple[Scalar, ...]:
        check_direction(d, self.dimension, "EmptySet")
        raise EmptySetError("the empty set has no support vector", "EmptySet")

    def support_function(self, d: Vector) -> Scalar:
        check_direction(d, self.dimension, "EmptySet")
        return -math.inf

    def is_bounded(self) -> bool:
        return True

    def is_empty(self) -> bool:
        return True


@dataclass(frozen=True)
class Singleton(LazySet):
    """A set containing exactly one point."""

    element: tuple[Scalar, ...]

    def __post_init__(self) -> None:
        _freeze(self, "element", self.element)

    def dim(self) -> int:
        return len(self.element)

    def support_vector(self, d: Vector) -> tuple[Scalar, ...]:
        check_direction(d, self.dim(), "Singleton")
        return self.element

    def is_bounded(self) -> bool:
        return True


@dataclass(frozen=True)
class Interval(LazySet):
    """A closed one-dimensional interval ``[low, high]``.

    Attributes:
        low: Lower end point.
        high: Upper end point, ``high >= low``.
    """

    low: Scalar
    high: Scalar

    def __post_init__(self) -> None:
        if self.high < self.low:
            raise ValueError(
                f"interval bounds must satisfy low <= high, got [{self.low}, {self.high}]"
            )

    def dim(self) -> int:
        return 1

    def support_vector(self, d: Vector) -> tuple[Scalar, ...]:
        check_direction(d, 1, "Interval")
        return (self.low,) if d[0] < 0 else (self.high,)

    def support_function(self, d: Vector) -> Scalar:
        check_direction(d, 1, "Interval")
        return d[0] * self.low if d[0] < 0 else d[0] * self.high

    def is_bounded(self) -> bool:
        return True


@dataclass(frozen=True)
class Hyperrectangle(LazySet):
    """An axis-aligned box given by its center and per-axis radius.

    Attributes:
        center: Center of the box.
        radius: Non-negative half-width along each axis.
    """

    center: tuple[Scalar, ...]
    radius: tuple[Scalar, ...]

    def __post_init__(self) -> None:
        _freeze(self, "center", self.center)
        _freeze(self, "radius", self.radius)
        if len(self.center) != len(self.radius):
            raise DimensionMismatchError(
                "center and radius must have the same length",
                "Hyperrectangle",
                expected=len(self.center),
                actual=len(self.radius),
            )
        if any(r < 0 for r in self.radius):
            raise ValueError(f"box radius must be non-negative, got {self.radius}")

    @classmethod
    def from_bounds(cls, low: Vector, high: Vector) -> Hyperrectangle:
        """Create a box from its lower and upper corners."""
        center = tuple((h + lo) / 2 for lo, h in zip(low, high, strict=True))
        radius = tuple((h - lo) / 2 for lo, h in zip(low, high, strict=True))
        return cls(center=center, radius=radius)

    def dim(self) -> int:
        return len(self.center)

    def low(self) -> tuple[Scalar, ...]:
        return tuple(c - r for c, r in zip(self.center, self.radius))

    def high(self) -> tuple[Scalar, ...]:
        return tuple(c + r for c, r in zip(self.center, self.radius))

    def support_vector(self, d: Vector) -> tuple[Scalar, ...]:
        check_direction(d, self.dim(), "Hyperrectangle")
        return tuple(
            c + sign(di) * r for c, r, di in zip(self.center, self.radius, d)
        )

    def support_function(self, d: Vector) -> Scalar:
        check_direction(d, self.dim(), "Hyperrectangle")
        return dot(d, self.center) + sum(
            (abs(di) * r for di, r in zip(d, self.radius)), 0
        )

    def is_bounded(self) -> bool:
        return True

    def vertices(self) -> list[tuple[Scalar, ...]]:
        """Enumerate the ``2^n`` corners (with repetitions for flat axes)."""
        return [
            tuple(c + s * r for c, r, s in zip(self.center, self.radius, signs))
            for signs in product((-1, 1), repeat=self.dim())
        ]


@dataclass(frozen=True)
class Ball1(LazySet):
    """A ball in the 1-norm (a cross-polytope): ``{x : ‖x - c‖₁ <= r}``."""

    center: tuple[Scalar, ...]
    radius: Scalar

    def __post_init__(self) -> None:
        _freeze(self, "center", self.center)
        if self.radius < 0:
            raise ValueError(f"ball radius must be non-negative, got {self.radius}")

    def dim(self) -> int:
        return len(self.center)

    def support_vector(self, d: Vector) -> tuple[Scalar, ...]:
        # The maximizer is the vertex along the axis of largest |d_i|
        check_direction(d, self.dim(), "Ball1")
        best = 0
        for i in range(1, len(d)):
            if abs(d[i]) > abs(d[best]):
                best = i
        return tuple(
            c + sign(d[i]) * self.radius if i == best else c
            for i, c in enumerate(self.center)
        )

    def support_function(self, d: Vector) -> Scalar:
        check_direction(d, self.dim(), "Ball1")
        return dot(d, self.center) + self.radius * max(abs(x) for x in d)

    def is_bounded(self) -> bool:
        return True


@dataclass(frozen=True)
class Ball2(LazySet):
    """A Euclidean ball ``{x : ‖x - c‖₂ <= r}``.

    Support queries need a square root, so results are floating point even
    for rational inputs.
    """

    center: tuple[Scalar, ...]
    radius: Scalar

    def __post_init__(self) -> None:
        _freeze(self, "center", self.center)
        if self.radius < 0:
            raise ValueError(f"ball radius must be non-negative, got {self.radius}")

    def dim(self) -> int:
        return len(self.center)

    def support_vector(self, d: Vector) -> tuple[Scalar, ...]:
        check_direction(d, self.dim(), "Ball2")
        norm = math.sqrt(dot(d, d))
        if norm == 0:
            return self.center
        factor = float(self.radius) / norm
        return tuple(c + factor * di for c, di in zip(self.center, d))

    def support_function(self, d: Vector) -> Scalar:
        check_direction(d, self.dim(), "Ball2")
        return dot(d, self.center) + float(self.radius) * math.sqrt(dot(d, d))

    def is_bounded(self) -> bool:
        return True


@dataclass(frozen=True)
class Zonotope(LazySet):
    """A zonotope: a center plus the Minkowski sum of generator segments.

    ``Z = {c + sum(a_k * g_k) : a_k in [-1, 1]}``.

    Attributes:
        center: Center vector.
        generators: Generator vectors, each of the center's length.
    """

    center: tuple[Scalar, ...]
    generators: tuple[tuple[Scalar, ...], ...] = field(default=())

    def __post_init__(self) -> None:
        _freeze(self, "center", self.center)
        object.__setattr__(
            self, "generators", tuple(tuple(g) for g in self.generators)
        )
        for g in self.generators:
            if len(g) != len(self.center):
                raise DimensionMismatchError(
                    "generators must have the dimension of the center",
                    "Zonotope",
                    expected=len(self.center),
                    actual=len(g),
                )

    @property
    def order(self) -> int:
        """Number of generators."""
        return len(self.generators)

    def dim(self) -> int:
        return len(self.center)

    def support_vector(self, d: Vector) -> tuple[Scalar, ...]:
        check_direction(d, self.dim(), "Zonotope")
        point: Sequence[Scalar] = self.center
        for g in self.generators:
            s = sign(dot(d, g))
            if s:
                point = add(point, tuple(s * x for x in g))
        return tuple(point)

    def support_function(self, d: Vector) -> Scalar:
        check_direction(d, self.dim(), "Zonotope")
        return dot(d, self.center) + sum(
            (abs(dot(d, g)) for g in self.generators), 0
        )

    def is_bounded(self) -> bool:
        return True

    def vertices(self) -> list[tuple[Scalar, ...]]:
        """Return the ``2^p`` sign combinations of the generators.

        This is a superset of the vertex set (it includes points that are not
        extreme); it is meant for small zonotopes.
        """
        points = set()
        for signs in product((-1, 1), repeat=self.order):
            point: Sequence[Scalar] = self.center
            for s, g in zip(signs, self.generators):
                point = add(point, tuple(s * x for x in g))
            points.add(tuple(point))
        return sorted(points)
