"""
Error Hierarchy for the Line-of-Sight Engine.

Every failure the engine raises derives from `GeodesicError` so callers
can report "cannot compute" conditions with a single handler. Argument
errors also derive from `ValueError`, matching how the rest of the code
base signals bad input.
"""


class GeodesicError(Exception):
    """Base class for all engine errors."""


class InvalidArgumentError(GeodesicError, ValueError):
    """A parameter violates its contract (segment counts < 1, samples < 3, ...)."""


class DegenerateInputError(GeodesicError, ValueError):
    """Input points admit no unique geodesic or bearing.

    Raised for exactly antipodal pairs (infinitely many great circles)
    and for coincident pairs (no direction at all).
    """

    def __init__(self, message: str, points: tuple = ()):
        super().__init__(message)
        self.points = points

    @property
    def user_message(self) -> str:
        """Short text suitable for showing to an end user."""
        return "cannot compute a unique path between the selected points"


class ProjectionError(GeodesicError, RuntimeError):
    """The projection service could not transform a coordinate."""


class GeometryValidationError(GeodesicError):
    """A generated geometry failed a consistency check in strict mode."""
