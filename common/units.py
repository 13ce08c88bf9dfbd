"""
Unit Registry for Distance Handling.

This module provides a centralized unit system using the `pint` library so
that distances entering the engine (sphere radius, tick lengths, marker
spacings) carry explicit units, and distance labels are produced by real
unit conversions rather than ad-hoc powers of ten.

Example Usage
-------------
>>> from common.units import Q_, convert_length
>>> convert_length(1500, 'm', 'km')
1.5
>>> Q_(2, 'km').to('m')
<Quantity(2000.0, 'meter')>
"""

from typing import Union

import pint
from pint import UnitRegistry as PintUnitRegistry

# Create the global unit registry
ureg = PintUnitRegistry()

# Convenience alias for creating quantities
Q_ = ureg.Quantity

# Thousands of kilometers, as used in distance labels
ureg.define("thousand_kilometer = 1e6 * meter")


def convert_length(value: float, from_unit: str, to_unit: str) -> float:
    """Convert a bare length between units.

    Parameters
    ----------
    value : float
        Magnitude in `from_unit`.
    from_unit, to_unit : str
        Pint unit strings (e.g. 'm', 'km', 'thousand_kilometer').

    Returns
    -------
    float
        Magnitude in `to_unit`.

    Raises
    ------
    pint.DimensionalityError
        If either unit is not a length.
    """
    return float(Q_(value, from_unit).to(to_unit).magnitude)


def to_meters(value: Union[float, pint.Quantity]) -> float:
    """Return a length in meters, accepting quantities or bare meters."""
    if isinstance(value, pint.Quantity):
        return float(value.to("meter").magnitude)
    return float(value)
