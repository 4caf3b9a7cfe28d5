"""Template direction families for polyhedral overapproximation.

A template is a finite set of directions; overapproximating a set along a
template yields the outer polytope whose facet normals are exactly those
directions. Richer templates give tighter results. Entries are integers so
they combine exactly with any scalar type.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from itertools import combinations, product

from lazyconvex.geometry.validators import check_direction
from lazyconvex.geometry.vectors import Scalar, SingleEntryVector, Vector, unit_vector


class Directions:
    """Base class of template direction sets.

    Subclasses provide ``dim`` and ``_generate``; iteration order is fixed.
    """

    n: int

    def dim(self) -> int:
        return self.n

    def _generate(self) -> Iterator[Vector]:
        raise NotImplementedError

    def __iter__(self) -> Iterator[Vector]:
        return self._generate()

    def __len__(self) -> int:
        return sum(1 for _ in self._generate())


def _box(n: int) -> Iterator[SingleEntryVector]:
    for i in range(n):
        yield unit_vector(i, n, 1)
        yield unit_vector(i, n, -1)


@dataclass(frozen=True)
class BoxDirections(Directions):
    """The ``2n`` directions ``±e_i``; yields the bounding box."""

    n: int

    def _generate(self) -> Iterator[Vector]:
        return _box(self.n)

    def __len__(self) -> int:
        return 2 * self.n


@dataclass(frozen=True)
class OctDirections(Directions):
    """Box directions plus ``±e_i ± e_j`` for every pair ``i < j``.

    In two dimensions this yields an octagon.
    """

    n: int

    def _generate(self) -> Iterator[Vector]:
        yield from _box(self.n)
        for i, j in combinations(range(self.n), 2):
            for si, sj in product((1, -1), repeat=2):
                d = [0] * self.n
                d[i], d[j] = si, sj
                yield tuple(d)

    def __len__(self) -> int:
        return 2 * self.n * self.n


@dataclass(frozen=True)
class BoxDiagDirections(Directions):
    """Box directions plus all ``2^n`` diagonals ``(±1, ..., ±1)``.

    For ``n == 1`` the diagonals coincide with the box directions and are
    not repeated.
    """

    n: int

    def _generate(self) -> Iterator[Vector]:
        yield from _box(self.n)
        if self.n > 1:
            yield from product((1, -1), repeat=self.n)

    def __len__(self) -> int:
        return 2 * self.n if self.n == 1 else 2 * self.n + 2**self.n


@dataclass(frozen=True)
class CustomDirections(Directions):
    """A user-supplied, ordered set of directions.

    Raises:
        DimensionMismatchError: If the directions differ in length.
        ValueError: If no direction is given.
    """

    directions: tuple[tuple[Scalar, ...], ...] = field(default=())

    def __init__(self, directions: Iterable[Vector]) -> None:
        dirs = tuple(tuple(d) for d in directions)
        if not dirs:
            raise ValueError("at least one direction is required")
        for d in dirs:
            check_direction(d, len(dirs[0]), "CustomDirections")
        object.__setattr__(self, "directions", dirs)

    @property
    def n(self) -> int:  # type: ignore[override]
        return len(self.directions[0])

    def _generate(self) -> Iterator[Vector]:
        return iter(self.directions)

    def __len__(self) -> int:
        return len(self.directions)
