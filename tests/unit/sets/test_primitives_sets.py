"""Unit tests for primitive lazy sets."""

from __future__ import annotations

import math
from fractions import Fraction

import pytest
from hypothesis import given
from hypothesis import strategies as st

from lazyconvex.exceptions import DimensionMismatchError, EmptySetError
from lazyconvex.geometry import dot, unit_vector
from lazyconvex.sets import (
    Ball1,
    Ball2,
    EmptySet,
    Hyperrectangle,
    Interval,
    LazySet,
    Singleton,
    Zonotope,
)

small_ints = st.integers(min_value=-20, max_value=20)
directions_2d = st.tuples(small_ints, small_ints)


class TestEmptySet:
    """Tests for EmptySet."""

    def test_support_function_is_minus_infinity(self) -> None:
        """Test that every direction gives -inf."""
        assert EmptySet(2).support_function((1, 0)) == -math.inf

    def test_no_support_vector(self) -> None:
        """Test that a support vector query fails."""
        with pytest.raises(EmptySetError):
            EmptySet(2).support_vector((1, 0))

    def test_direction_length_checked(self) -> None:
        """Test that a direction of the wrong length is rejected first."""
        with pytest.raises(DimensionMismatchError):
            EmptySet(2).support_function((1, 0, 0))

    def test_properties(self) -> None:
        """Test dimension, boundedness and emptiness."""
        empty = EmptySet(3)
        assert empty.dim() == 3
        assert empty.is_bounded()
        assert empty.is_empty()

    def test_structural_equality(self) -> None:
        """Test that empty sets of the same dimension are equal."""
        assert EmptySet(2) == EmptySet(2)
        assert EmptySet(2) != EmptySet(3)


class TestSingleton:
    """Tests for Singleton."""

    def test_support_vector_is_element(self) -> None:
        """Test that every direction returns the element."""
        s = Singleton([1, 2])
        assert s.element == (1, 2)
        assert s.support_vector((-3, 5)) == (1, 2)
        assert s.support_function((-3, 5)) == 7
        assert not s.is_empty()


class TestInterval:
    """Tests for Interval."""

    def test_support_vector(self) -> None:
        """Test both directions pick the matching end point."""
        interval = Interval(Fraction(-1, 2), Fraction(3, 2))
        assert interval.support_vector((2,)) == (Fraction(3, 2),)
        assert interval.support_vector((-2,)) == (Fraction(-1, 2),)

    def test_support_function(self) -> None:
        """Test the support function in both directions."""
        interval = Interval(-1, 3)
        assert interval.support_function((2,)) == 6
        assert interval.support_function((-2,)) == 2

    def test_zero_direction_returns_an_element(self) -> None:
        """Test that the zero direction gives a point of the interval."""
        (x,) = Interval(-1, 3).support_vector((0,))
        assert -1 <= x <= 3

    def test_invalid_bounds(self) -> None:
        """Test that reversed bounds are rejected."""
        with pytest.raises(ValueError, match="low <= high"):
            Interval(2, 1)

    def test_one_dimensional(self) -> None:
        """Test that only one-dimensional directions are accepted."""
        with pytest.raises(DimensionMismatchError):
            Interval(0, 1).support_vector((1, 0))


class TestHyperrectangle:
    """Tests for Hyperrectangle."""

    def test_support_vector(self) -> None:
        """Test corners are chosen by the sign of each entry."""
        box = Hyperrectangle(center=(1, 2), radius=(3, 4))
        assert box.support_vector((1, -1)) == (4, -2)
        assert box.support_function((1, -1)) == 6

    def test_zero_direction_returns_center(self) -> None:
        """Test that the zero direction gives the center."""
        box = Hyperrectangle(center=(1, 2), radius=(3, 4))
        assert box.support_vector((0, 0)) == (1, 2)

    def test_from_bounds(self) -> None:
        """Test construction from lower and upper corners."""
        box = Hyperrectangle.from_bounds((Fraction(0), Fraction(-2)), (Fraction(1), Fraction(2)))
        assert box.center == (Fraction(1, 2), Fraction(0))
        assert box.radius == (Fraction(1, 2), Fraction(2))
        assert box.low() == (0, -2)
        assert box.high() == (1, 2)

    def test_vertices(self) -> None:
        """Test that all corners are enumerated."""
        box = Hyperrectangle(center=(0, 0), radius=(1, 2))
        assert set(box.vertices()) == {(-1, -2), (-1, 2), (1, -2), (1, 2)}

    def test_negative_radius(self) -> None:
        """Test that a negative radius is rejected."""
        with pytest.raises(ValueError, match="non-negative"):
            Hyperrectangle(center=(0, 0), radius=(1, -1))

    def test_length_mismatch(self) -> None:
        """Test that center and radius must agree in length."""
        with pytest.raises(DimensionMismatchError):
            Hyperrectangle(center=(0, 0), radius=(1,))


class TestBalls:
    """Tests for Ball1 and Ball2."""

    def test_ball1_support_vector(self, unit_balls: tuple[Ball1, Ball1]) -> None:
        """Test the vertex along the dominant axis is returned."""
        _, shifted = unit_balls
        assert shifted.support_vector((1, 0)) == (2, 2)
        assert shifted.support_vector((0, -1)) == (1, 1)
        assert shifted.support_vector((1, -3)) == (1, 1)

    def test_ball1_support_vector_accepts_single_entry_vector(self) -> None:
        """Test that sparse axis directions are handled like dense ones."""
        ball = Ball1(center=(1, 2), radius=1)
        assert ball.support_vector(unit_vector(1, 2, -1)) == (1, 1)

    def test_ball1_support_function(self) -> None:
        """Test the closed form ``d·c + r·max|d_i|``."""
        ball = Ball1(center=(1, 2), radius=2)
        assert ball.support_function((1, -3)) == 1 - 6 + 6

    def test_ball2_support(self) -> None:
        """Test the Euclidean support function and vector."""
        ball = Ball2(center=(0, 0), radius=1)
        assert ball.support_function((3, 4)) == pytest.approx(5.0)
        assert ball.support_vector((3, 4)) == pytest.approx((0.6, 0.8))
        assert ball.support_vector((0, 0)) == (0, 0)

    def test_negative_radius(self) -> None:
        """Test that balls need a non-negative radius."""
        with pytest.raises(ValueError):
            Ball1(center=(0,), radius=-1)
        with pytest.raises(ValueError):
            Ball2(center=(0,), radius=-1)


class TestZonotope:
    """Tests for Zonotope."""

    def test_square(self) -> None:
        """Test a zonotope with the two unit generators is a square."""
        z = Zonotope(center=(0, 0), generators=((1, 0), (0, 1)))
        assert z.order == 2
        assert z.support_vector((1, -1)) == (1, -1)
        assert z.support_function((1, 1)) == 2
        assert set(z.vertices()) == {(-1, -1), (-1, 1), (1, -1), (1, 1)}

    def test_without_generators(self) -> None:
        """Test that a zonotope without generators is its center."""
        z = Zonotope(center=(3, 4))
        assert z.order == 0
        assert z.support_vector((1, 1)) == (3, 4)

    def test_generator_dimension(self) -> None:
        """Test that generators must match the center's dimension."""
        with pytest.raises(DimensionMismatchError):
            Zonotope(center=(0, 0), generators=((1, 0, 0),))


class TestSupportConsistency:
    """Property-based checks of the support-function protocol."""

    @pytest.mark.parametrize(
        "lazy_set",
        [
            Singleton((Fraction(1, 3), Fraction(-2))),
            Hyperrectangle(center=(Fraction(1), Fraction(2)), radius=(Fraction(1, 2), Fraction(3))),
            Ball1(center=(Fraction(-1), Fraction(1, 5)), radius=Fraction(7, 3)),
            Zonotope(
                center=(Fraction(0), Fraction(1)),
                generators=((Fraction(1), Fraction(1)), (Fraction(-1, 2), Fraction(2))),
            ),
        ],
        ids=["singleton", "hyperrectangle", "ball1", "zonotope"],
    )
    @given(d=directions_2d)
    def test_support_function_matches_support_vector(
        self, lazy_set: LazySet, d: tuple[int, int]
    ) -> None:
        """Test that ρ(d) equals d·σ(d) exactly on rational sets."""
        assert lazy_set.support_function(d) == dot(d, lazy_set.support_vector(d))

    @given(d=directions_2d, other=directions_2d)
    def test_support_vector_is_maximal(
        self, d: tuple[int, int], other: tuple[int, int]
    ) -> None:
        """Test that the support vector dominates every other support point."""
        z = Zonotope(center=(0, 0), generators=((2, 1), (-1, 1), (0, 3)))
        best = z.support_vector(d)
        assert dot(d, z.support_vector(other)) <= dot(d, best)
