"""
Validation Framework for the Line-of-Sight Engine.

This module provides consistency checks for generated geometry.
"""

from validation.geometry_checks import (
    ValidationResult,
    GeometryConsistencyChecker,
)

__all__ = [
    "ValidationResult",
    "GeometryConsistencyChecker",
]
