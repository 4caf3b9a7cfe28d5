"""Scalar and vector helpers for lazy set computations.

Vectors are plain sequences of scalars and results are returned as tuples.
Scalars may be ``int``, ``float`` or ``fractions.Fraction``; every helper
uses only the arithmetic and ordering of the scalar type itself, so exact
rational inputs produce exact rational outputs.
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field
from fractions import Fraction
from typing import overload

Scalar = int | float | Fraction
Vector = Sequence[Scalar]


def dot(a: Vector, b: Vector) -> Scalar:
    """Return the dot product of two vectors of equal length."""
    if isinstance(a, SingleEntryVector):
        return a.value * b[a.index]
    if isinstance(b, SingleEntryVector):
        return b.value * a[b.index]
    return sum((x * y for x, y in zip(a, b, strict=True)), 0)


def add(a: Vector, b: Vector) -> tuple[Scalar, ...]:
    """Component-wise sum."""
    return tuple(x + y for x, y in zip(a, b, strict=True))


def sub(a: Vector, b: Vector) -> tuple[Scalar, ...]:
    """Component-wise difference ``a - b``."""
    return tuple(x - y for x, y in zip(a, b, strict=True))


def scale(a: Vector, factor: Scalar) -> tuple[Scalar, ...]:
    return tuple(factor * x for x in a)


def negate(a: Vector) -> tuple[Scalar, ...]:
    return tuple(-x for x in a)


def midpoint(a: Vector, b: Vector) -> tuple[Scalar, ...]:
    return tuple((x + y) / 2 for x, y in zip(a, b, strict=True))


def sign(x: Scalar) -> int:
    """Return -1, 0 or 1 according to the sign of ``x``."""
    return (x > 0) - (x < 0)


def is_zero(a: Vector) -> bool:
    return all(x == 0 for x in a)


def cross2(o: Vector, a: Vector, b: Vector) -> Scalar:
    """Return the z-component of ``(a - o) x (b - o)`` for 2D points.

    Positive for a counter-clockwise turn o -> a -> b, negative for a
    clockwise turn and zero when the points are collinear.
    """
    return (a[0] - o[0]) * (b[1] - o[1]) - (a[1] - o[1]) * (b[0] - o[0])


def det2(a: Vector, b: Vector) -> Scalar:
    """Return ``a[0] * b[1] - a[1] * b[0]``."""
    return a[0] * b[1] - a[1] * b[0]


def unit_vector(index: int, n: int, value: Scalar = 1) -> SingleEntryVector:
    """Return ``value`` times the ``index``-th standard basis vector of R^n."""
    return SingleEntryVector(index=index, n=n, value=value)


@dataclass(frozen=True, eq=False)
class SingleEntryVector(Sequence[Scalar]):
    """A vector of length ``n`` whose only non-zero entry is at ``index``.

    Behaves as an ordinary read-only sequence, and compares equal to any
    sequence with the same entries. Sets with a cheaper axis-aligned
    support query can detect this type and skip building a dense vector.

    Attributes:
        index: Position of the non-zero entry (0-based).
        n: Length of the vector.
        value: Value of the entry at ``index``.
    """

    # Sequence defines an index() method; an explicit field keeps dataclass
    # from taking it as the default.
    index: int = field()
    n: int
    value: Scalar

    def __post_init__(self) -> None:
        if not 0 <= self.index < self.n:
            raise ValueError(
                f"index {self.index} out of range for a vector of length {self.n}"
            )

    def __len__(self) -> int:
        return self.n

    @overload
    def __getitem__(self, i: int) -> Scalar: ...

    @overload
    def __getitem__(self, i: slice) -> tuple[Scalar, ...]: ...

    def __getitem__(self, i: int | slice) -> Scalar | tuple[Scalar, ...]:
        if isinstance(i, slice):
            return tuple(self)[i]
        if i < 0:
            i += self.n
        if not 0 <= i < self.n:
            raise IndexError(i)
        return self.value if i == self.index else 0

    def __iter__(self) -> Iterator[Scalar]:
        for i in range(self.n):
            yield self.value if i == self.index else 0

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Sequence) and not isinstance(other, str):
            return len(other) == self.n and all(
                x == y for x, y in zip(self, other)
            )
        return NotImplemented

    def __hash__(self) -> int:
        return hash(tuple(self))

    def __neg__(self) -> SingleEntryVector:
        return SingleEntryVector(index=self.index, n=self.n, value=-self.value)
