"""Custom exceptions for lazy set operations.

Every contract violation in the kernel fails fast with one of these
exceptions. Computations are pure, so a failing call fails identically when
repeated with the same input.
"""

from __future__ import annotations


class LazySetError(Exception):
    """Base exception for all lazy set errors."""

    def __init__(self, message: str, operation: str | None = None) -> None:
        """Initialize the error with optional operation context.

        Args:
            message: Human-readable error description.
            operation: Name of the operation that failed (e.g. "ConvexHull").
        """
        self.message = message
        self.operation = operation
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format error message with operation context if available."""
        if self.operation:
            return f"{self.message} (operation: {self.operation})"
        return self.message


class DimensionMismatchError(LazySetError, ValueError):
    """Raised when operands or a direction disagree on the ambient dimension.

    This error is raised when:
    - Two sets of different dimension are combined
    - A direction's length differs from the set's dimension
    - An operation is restricted to a fixed dimension (1-D, 2-D)
    """

    def __init__(
        self,
        message: str,
        operation: str | None = None,
        *,
        expected: int | None = None,
        actual: int | None = None,
    ) -> None:
        """Initialize dimension error with the disagreeing dimensions.

        Args:
            message: Human-readable error description.
            operation: Name of the operation that failed.
            expected: Dimension required by the operation.
            actual: Dimension that was supplied.
        """
        self.expected = expected
        self.actual = actual
        super().__init__(message, operation)

    def _format_message(self) -> str:
        parts = [self.message]
        if self.operation:
            parts.append(f"operation={self.operation}")
        if self.expected is not None:
            parts.append(f"expected={self.expected}")
        if self.actual is not None:
            parts.append(f"actual={self.actual}")

        if len(parts) == 1:
            return parts[0]
        return f"{parts[0]} ({', '.join(parts[1:])})"


class UnboundedSetError(LazySetError):
    """Raised when a bounded set is required but the set is unbounded.

    This error is raised when:
    - A symmetric interval hull wraps an unbounded set
    - A box, polygon or intersection overapproximation is requested for an
      unbounded set
    - A support vector does not exist because the set is unbounded in the
      requested direction
    """


class OrderMismatchError(LazySetError, ValueError):
    """Raised when two zonotopes must have the same order but do not."""

    def __init__(self, left: int, right: int, operation: str | None = None) -> None:
        self.left = left
        self.right = right
        super().__init__(
            f"zonotopes must have the same order, got {left} and {right}",
            operation,
        )


class InvalidIndexError(LazySetError, IndexError):
    """Raised when an axis index lies outside [0, dimension)."""

    def __init__(self, index: int, dimension: int, operation: str | None = None) -> None:
        self.index = index
        self.dimension = dimension
        super().__init__(
            f"index {index} is out of range for a {dimension}-dimensional set",
            operation,
        )


class EmptySetError(LazySetError):
    """Raised when a query has no answer on the empty set.

    The support function of the empty set is -inf, but there is no support
    vector, and an empty array combinator carries no intrinsic dimension.
    """


class RefinementLimitError(LazySetError):
    """Raised when polygon refinement exceeds its direction budget."""

    def __init__(self, limit: int, epsilon: object) -> None:
        self.limit = limit
        self.epsilon = epsilon
        super().__init__(
            f"polygon refinement did not reach tolerance {epsilon} "
            f"within {limit} directions",
            "overapproximate_polygon",
        )
