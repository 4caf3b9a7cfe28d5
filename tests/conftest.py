"""Shared pytest fixtures and configuration."""

from collections.abc import Iterator
from dataclasses import dataclass, field
from fractions import Fraction

import pytest

from lazyconvex.config import Settings
from lazyconvex.geometry.vectors import Scalar, Vector
from lazyconvex.sets import Ball1, LazySet
from lazyconvex.utils.logging import clear_correlation_context, configure_logging


@pytest.fixture(autouse=True)
def reset_logging_context() -> Iterator[None]:
    """Reset correlation context between tests."""
    clear_correlation_context()
    yield
    clear_correlation_context()


@pytest.fixture
def test_settings() -> Settings:
    """Create a Settings instance with test-safe defaults."""
    return Settings(
        _env_file=None,  # type: ignore[call-arg]
        LOG_LEVEL="DEBUG",
        LOG_FORMAT="console",
    )


@pytest.fixture
def configure_test_logging() -> Iterator[None]:
    """Configure logging for tests with console output."""
    configure_logging(level="DEBUG", log_format="console")
    yield


@pytest.fixture(params=[float, Fraction], ids=["float", "fraction"])
def scalar(request: pytest.FixtureRequest) -> type:
    """Scalar type under test: floating point or exact rational."""
    return request.param


@dataclass(eq=False)
class CountingSet(LazySet):
    """Wrap a set and count the support vector queries it receives."""

    inner: LazySet
    calls: list[tuple[Scalar, ...]] = field(default_factory=list)

    def dim(self) -> int:
        return self.inner.dim()

    def support_vector(self, d: Vector) -> tuple[Scalar, ...]:
        self.calls.append(tuple(d))
        return self.inner.support_vector(d)

    def is_bounded(self) -> bool:
        return self.inner.is_bounded()


@pytest.fixture
def counting_set() -> type[CountingSet]:
    """Factory for sets that record the support vector queries they receive."""
    return CountingSet


@pytest.fixture
def unit_balls() -> tuple[Ball1, Ball1]:
    """Two unit 1-norm balls centered at (0, 0) and (1, 2)."""
    return Ball1(center=(0, 0), radius=1), Ball1(center=(1, 2), radius=1)
