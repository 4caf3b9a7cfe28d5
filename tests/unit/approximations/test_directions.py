"""Unit tests for template direction families."""

from __future__ import annotations

import pytest

from lazyconvex.approximations import (
    BoxDiagDirections,
    BoxDirections,
    CustomDirections,
    Directions,
    OctDirections,
)
from lazyconvex.exceptions import DimensionMismatchError


class TestBoxDirections:
    """Tests for BoxDirections."""

    def test_directions(self) -> None:
        """Test the ±e_i directions in axis order."""
        assert [tuple(d) for d in BoxDirections(2)] == [(1, 0), (-1, 0), (0, 1), (0, -1)]

    def test_len_and_dim(self) -> None:
        """Test the number of directions and their dimension."""
        box = BoxDirections(3)
        assert len(box) == 6
        assert box.dim() == 3
        assert len(list(box)) == 6


class TestOctDirections:
    """Tests for OctDirections."""

    def test_octagon(self) -> None:
        """Test the eight directions of the planar octagon."""
        dirs = {tuple(d) for d in OctDirections(2)}
        assert dirs == {
            (1, 0), (-1, 0), (0, 1), (0, -1),
            (1, 1), (1, -1), (-1, 1), (-1, -1),
        }

    @pytest.mark.parametrize("n", [1, 2, 3, 4])
    def test_len(self, n: int) -> None:
        """Test that 2n^2 distinct directions are generated."""
        oct_dirs = OctDirections(n)
        generated = [tuple(d) for d in oct_dirs]
        assert len(oct_dirs) == len(generated) == 2 * n * n
        assert len(set(generated)) == len(generated)


class TestBoxDiagDirections:
    """Tests for BoxDiagDirections."""

    @pytest.mark.parametrize(("n", "expected"), [(1, 2), (2, 8), (3, 14)])
    def test_len(self, n: int, expected: int) -> None:
        """Test box plus diagonal counts, without repeats in one dimension."""
        dirs = BoxDiagDirections(n)
        generated = [tuple(d) for d in dirs]
        assert len(dirs) == len(generated) == expected
        assert len(set(generated)) == expected

    def test_contains_diagonals(self) -> None:
        """Test all sign patterns are included."""
        dirs = {tuple(d) for d in BoxDiagDirections(2)}
        assert {(1, 1), (1, -1), (-1, 1), (-1, -1)} <= dirs


class TestCustomDirections:
    """Tests for CustomDirections."""

    def test_order_is_kept(self) -> None:
        """Test the user's directions are iterated in order."""
        dirs = CustomDirections([(1, 2), (-3, 0)])
        assert list(dirs) == [(1, 2), (-3, 0)]
        assert len(dirs) == 2
        assert dirs.n == 2
        assert dirs.dim() == 2
        assert isinstance(dirs, Directions)

    def test_requires_directions(self) -> None:
        """Test that at least one direction is needed."""
        with pytest.raises(ValueError, match="at least one"):
            CustomDirections([])

    def test_dimension_mismatch(self) -> None:
        """Test that directions must share a length."""
        with pytest.raises(DimensionMismatchError):
            CustomDirections([(1, 0), (1, 0, 0)])
