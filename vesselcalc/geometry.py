"""
Shell geometry helpers for tank input preparation.

Parses course/thickness lists, generates course tables from a shell
height, fills default liquid heights per design case and collects
geometry warnings.
"""

import re
from typing import Dict, List, Optional, Sequence

from .design_cases import DesignCase, parse_case

SUM_TOLERANCE = 1e-6


def parse_float_list(text: str) -> List[float]:
    """
    Parse a comma, semicolon or whitespace separated list of numbers.

    Args:
        text: List specification like '2.4, 2.4, 2.4' or '10 8 6'

    Returns:
        List of floats in the given order

    Raises:
        ValueError: If the text is empty or an entry is not a number
    """
    if not text or not isinstance(text, str):
        raise ValueError("Number list cannot be empty")

    parts = [p for p in re.split(r'[,;\s]+', text.strip()) if p]
    if not parts:
        raise ValueError("Number list cannot be empty")

    try:
        return [float(p) for p in parts]
    except ValueError as e:
        raise ValueError(f"Invalid number list '{text}': {e}")


def generate_courses(shell_height: float, num_courses: int, typical_height: float) -> List[float]:
    """
    Build a course table bottom to top: n-1 typical courses plus a
    closing course that makes up the shell height.

    Raises:
        ValueError: If any input is non-positive or the last course would be
            empty
    """
    if not (shell_height > 0):
        raise ValueError("Shell height must be positive")
    if not (typical_height > 0):
        raise ValueError("Typical course height must be positive")
    if int(num_courses) != num_courses or num_courses < 1:
        raise ValueError("Number of courses must be a positive integer")

    num_courses = int(num_courses)
    last = shell_height - typical_height * (num_courses - 1)
    if not (last > 0):
        raise ValueError(
            f"{num_courses} courses of {typical_height} exceed the shell height {shell_height}"
        )

    return [typical_height] * (num_courses - 1) + [last]


def default_liquid_heights(shell_height: float,
                           existing: Optional[Dict[DesignCase, float]] = None) -> Dict[DesignCase, float]:
    """
    Default liquid height per case: operating at 90% of the shell,
    hydrotest full, empty and other cases at zero. Entries already in
    `existing` are kept; None entries count as blank and get the default.
    """
    defaults = {case: 0.0 for case in DesignCase}
    defaults[DesignCase.OPERATING] = max(0.0, 0.9 * shell_height)
    defaults[DesignCase.HYDROTEST] = shell_height

    if existing:
        for key, value in existing.items():
            if value is not None:
                defaults[parse_case(key)] = value

    return defaults


def geometry_warnings(shell_height: float, courses: Sequence[float],
                      liquid_heights: Dict[DesignCase, float],
                      length_unit: str = "m") -> List[str]:
    """Return non-blocking warnings about the course table and liquid levels."""
    warnings = []

    total = sum(courses)
    if courses and abs(total - shell_height) > SUM_TOLERANCE:
        warnings.append(
            f"Total course height ({total:.3f} {length_unit}) does not match "
            f"the shell height ({shell_height:.3f} {length_unit})."
        )

    for key, height in liquid_heights.items():
        case = parse_case(key)
        if height > shell_height + SUM_TOLERANCE:
            warnings.append(f"Liquid height for {case.title} is above the shell height. Check the input.")

    return warnings

