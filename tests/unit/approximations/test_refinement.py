"""Unit tests for epsilon-close polygon refinement."""

from __future__ import annotations

import math
from fractions import Fraction

import pytest

from lazyconvex.approximations import PolygonRefiner, SupportDirectionRefiner
from lazyconvex.config import settings
from lazyconvex.exceptions import RefinementLimitError
from lazyconvex.sets import Ball1, Ball2, HalfSpace, HPolygon, Hyperrectangle, LazySet


class TestSupportDirectionRefiner:
    """Tests for SupportDirectionRefiner."""

    @pytest.mark.parametrize("epsilon", [0.1, 0.01, 0.001])
    def test_disk_is_epsilon_close(self, epsilon: float) -> None:
        """Test every polygon vertex lies within epsilon of the unit disk."""
        disk = Ball2(center=(0, 0), radius=1)
        constraints = SupportDirectionRefiner().refine(disk, epsilon)
        polygon = HPolygon(tuple(constraints))

        assert polygon.is_bounded()
        for x, y in polygon.vertices():
            assert math.hypot(x, y) <= 1 + epsilon + 1e-12

    @pytest.mark.parametrize("d", [(1, 0), (3, 1), (-1, 2), (-2, -5), (1, -1)])
    def test_support_function_gap(self, d: tuple[int, int]) -> None:
        """Test ρ(d, S) <= ρ(d, P) <= ρ(d, S) + epsilon·‖d‖."""
        epsilon = 0.01
        disk = Ball2(center=(0, 0), radius=1)
        polygon = HPolygon(tuple(SupportDirectionRefiner().refine(disk, epsilon)))
        exact = disk.support_function(d)
        outer = polygon.support_function(d)
        assert exact - 1e-12 <= outer <= exact + epsilon * math.hypot(*d) + 1e-12

    def test_constraints_touch_the_set(self) -> None:
        """Test each constraint is a supporting half-space of the set."""
        disk = Ball2(center=(1, -2), radius=Fraction(1, 2))
        for c in SupportDirectionRefiner().refine(disk, 0.05):
            assert c.offset == pytest.approx(disk.support_function(c.normal))

    def test_counter_clockwise_order(self) -> None:
        """Test constraint normals turn counter-clockwise starting east."""
        constraints = SupportDirectionRefiner().refine(Ball2(center=(0, 0), radius=1), 0.1)
        normals = [c.normal for c in constraints]
        assert normals[0] == (1, 0)
        angles = [math.atan2(n[1], n[0]) % (2 * math.pi) for n in normals]
        assert angles == sorted(angles)

    def test_tighter_tolerance_needs_more_directions(self) -> None:
        """Test that shrinking epsilon refines further."""
        disk = Ball2(center=(0, 0), radius=1)
        refiner = SupportDirectionRefiner()
        assert len(refiner.refine(disk, 0.001)) > len(refiner.refine(disk, 0.1))

    def test_polygon_is_recovered_exactly(self) -> None:
        """Test a rational polygon is reproduced without error."""
        diamond = Ball1(center=(Fraction(0), Fraction(0)), radius=Fraction(1))
        constraints = SupportDirectionRefiner().refine(diamond, Fraction(1, 100))
        vertices = set(HPolygon(tuple(constraints)).vertices())
        assert vertices == {(1, 0), (0, 1), (-1, 0), (0, -1)}

    def test_box_needs_only_corner_directions(self) -> None:
        """Test a box is closed once its corners are supported."""
        box = Hyperrectangle(center=(0, 0), radius=(1, 1))
        constraints = SupportDirectionRefiner().refine(box, 0.5)
        assert len(constraints) == 8
        assert set(HPolygon(tuple(constraints)).vertices()) == {
            (1, 1), (-1, 1), (-1, -1), (1, -1),
        }

    def test_direction_budget(self) -> None:
        """Test the refiner stops when its direction budget is spent."""
        with pytest.raises(RefinementLimitError) as exc_info:
            SupportDirectionRefiner(max_directions=8).refine(
                Ball2(center=(0, 0), radius=1), 1e-6
            )
        assert exc_info.value.limit == 8

    def test_default_budget_from_settings(self) -> None:
        """Test the default budget comes from the settings."""
        assert SupportDirectionRefiner().max_directions == settings.REFINEMENT_MAX_DIRECTIONS

    @pytest.mark.parametrize("epsilon", [0, -1])
    def test_non_positive_epsilon(self, epsilon: float) -> None:
        """Test that epsilon must be positive."""
        with pytest.raises(ValueError, match="positive"):
            SupportDirectionRefiner().refine(Ball2(center=(0, 0), radius=1), epsilon)


class TestPolygonRefinerProtocol:
    """Tests for plugging custom refiners into the protocol."""

    def test_structural_typing(self) -> None:
        """Test that any object with a matching refine method is a refiner."""

        class BoxRefiner:
            def refine(self, S: LazySet, epsilon: float) -> list[HalfSpace]:
                return [
                    HalfSpace(d, S.support_function(d))
                    for d in ((1, 0), (0, 1), (-1, 0), (0, -1))
                ]

        refiner: PolygonRefiner = BoxRefiner()
        constraints = refiner.refine(Ball1(center=(0, 0), radius=1), 0.1)
        assert [c.offset for c in constraints] == [1, 1, 1, 1]
