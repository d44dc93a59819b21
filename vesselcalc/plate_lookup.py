"""
Lookup module for standard shell plate thicknesses.
Rounds a required thickness up to the nearest standard plate.
"""

import bisect
import math

# Standard plate thicknesses: mm (SI) and inches (US)
PLATE_SCHEDULE = {
    'SI': [6, 8, 10, 12, 14, 16, 18, 20, 22, 25, 28, 32],
    'US': [0.25, 0.3125, 0.375, 0.5, 0.625, 0.75, 1.0],
}


def round_up_to_standard(thickness, units='SI'):
    """
    Return the smallest standard plate >= thickness.

    Thicknesses beyond the table are returned unchanged.
    """
    if not math.isfinite(thickness):
        return thickness
    units = getattr(units, 'value', units)
    plates = PLATE_SCHEDULE[units]
    idx = bisect.bisect_left(plates, thickness)
    if idx >= len(plates):
        return thickness
    return plates[idx]


def suggest_adopted_thicknesses(result):
    """Suggest a standard plate per course from a ShellCalcResult."""
    return [round_up_to_standard(course.t_required, result.units) for course in result.results]
