"""
Course-by-course shell thickness for vertical cylindrical tanks.

API 650 uses the one-foot method: the hydrostatic head for each course is
taken 0.3 m (1 ft) above its bottom seam. API 620 uses a thin-wall hoop
stress basis with internal pressure added to the liquid head.

Every active design case is evaluated for every course; the case giving
the largest required thickness governs that course.
"""

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Sequence

from .design_cases import DesignCase, parse_case


class Units(Enum):
    SI = "SI"  # m, mm, MPa, kPa
    US = "US"  # ft, in, psi


class Standard(Enum):
    API_650 = "API_650"
    API_620 = "API_620"


class ShellStatus(Enum):
    OK = "OK"
    NOT_OK = "NOT OK"


class ShellValidationError(ValueError):
    """Raised when a shell input is outside its valid range."""


# One-foot method evaluation point above each bottom seam (m or ft)
ONE_FOOT_OFFSET = {Units.SI: 0.3, Units.US: 1.0}

# API 650 design formula constants (mm output / inch output)
API650_CONSTANT = {Units.SI: 4.9, Units.US: 2.6}

# Hydrostatic head of water per unit height (kPa/m or psi/ft)
WATER_HEAD = {Units.SI: 9.80665, Units.US: 0.433}

MIN_CONTROL_TOLERANCE = {Units.SI: 1e-6, Units.US: 1e-9}

METHOD_LABELS = {
    Standard.API_650: "API 650 One-Foot Method",
    Standard.API_620: "API 620 Hoop Stress Basis",
}


@dataclass(frozen=True)
class ShellCaseInput:
    case: DesignCase
    liquid_height: float  # SI: m, US: ft

    def __post_init__(self):
        object.__setattr__(self, "case", parse_case(self.case))


@dataclass(frozen=True)
class ShellCalcInput:
    """Validated shell inputs. Thicknesses in mm (SI) or in (US)."""
    units: Units
    standard: Standard
    diameter: float
    courses: Sequence[float]  # bottom to top
    specific_gravity: float
    corrosion_allowance: float
    design_pressure: float  # kPa(g) or psi(g); API 620 only
    allowable_stress_design: float  # MPa or psi
    allowable_stress_test: float
    joint_efficiency: float
    min_nominal_thickness: float  # excluding CA
    adopted_thicknesses: Sequence[float]  # including CA
    active_cases: Sequence[ShellCaseInput]

    def __post_init__(self):
        object.__setattr__(self, "units", Units(self.units))
        object.__setattr__(self, "standard", Standard(self.standard))
        object.__setattr__(self, "courses", tuple(self.courses))
        object.__setattr__(self, "adopted_thicknesses", tuple(self.adopted_thicknesses))
        object.__setattr__(self, "active_cases", tuple(self.active_cases))

    @property
    def min_thickness_floor(self) -> float:
        return self.min_nominal_thickness + self.corrosion_allowance


@dataclass(frozen=True)
class CourseResult:
    course_no: int
    course_height: float
    bottom_elevation: float
    calc_by_case: Dict[DesignCase, float]  # formula + CA, before the floor
    required_by_case: Dict[DesignCase, float]  # after the floor
    governing_case: DesignCase
    t_calc_governing: float
    t_required: float
    is_min_controlled: bool
    t_adopted: float
    utilization: float
    status: ShellStatus


@dataclass(frozen=True)
class ShellCalcResult:
    units: Units
    standard: Standard
    method: str
    course_count: int
    min_thickness_floor: float
    results: List[CourseResult] = field(default_factory=list)
    notes: List[str] = field(default_factory=list)


def validate_shell_input(shell_input: ShellCalcInput) -> None:
    """
    Check numeric ranges before any per-course work.

    Raises:
        ShellValidationError: On the first range violation found
    """
    e = shell_input.joint_efficiency
    if not (0 < e <= 1):
        raise ShellValidationError("Joint efficiency (E) must be in the range (0, 1].")

    if len(shell_input.adopted_thicknesses) != len(shell_input.courses):
        raise ShellValidationError(
            "Number of adopted thicknesses must equal the number of courses "
            f"({len(shell_input.adopted_thicknesses)} != {len(shell_input.courses)})."
        )

    if not shell_input.courses:
        raise ShellValidationError("At least one shell course is required.")
    if any(not (h > 0) for h in shell_input.courses):
        raise ShellValidationError("All course heights must be positive.")

    if not (shell_input.diameter > 0):
        raise ShellValidationError("Tank diameter must be positive.")
    if not (shell_input.specific_gravity > 0):
        raise ShellValidationError("Specific gravity must be positive.")
    if not (shell_input.corrosion_allowance >= 0):
        raise ShellValidationError("Corrosion allowance must be non-negative.")
    if not (shell_input.min_nominal_thickness >= 0):
        raise ShellValidationError("Minimum nominal thickness must be non-negative.")
    if not (shell_input.allowable_stress_design > 0):
        raise ShellValidationError("Allowable design stress must be positive.")
    if not (shell_input.allowable_stress_test > 0):
        raise ShellValidationError("Allowable hydrotest stress must be positive.")

    if not shell_input.active_cases:
        raise ShellValidationError("At least one design case must be active.")


def case_thickness(shell_input: ShellCalcInput, case: DesignCase, head: float) -> float:
    """
    Calculated thickness (formula + CA) for one case at an effective head.

    Returns +inf for API 620 when S*E - 0.6*P <= 0 (stress exceeded).
    """
    units = shell_input.units
    ca = shell_input.corrosion_allowance
    e = shell_input.joint_efficiency

    if case.uses_test_condition:
        g = 1.0
        s = shell_input.allowable_stress_test
    else:
        g = shell_input.specific_gravity
        s = shell_input.allowable_stress_design

    if shell_input.standard is Standard.API_650:
        # t = C * D * (H - offset) * G / (S * E) + CA
        return (API650_CONSTANT[units] * shell_input.diameter * head * g) / (s * e) + ca

    p_hydro = WATER_HEAD[units] * g * head
    p_int = max(0.0, shell_input.design_pressure) if case.includes_internal_pressure else 0.0
    p_total = p_int + p_hydro

    if units is Units.SI:
        pressure = p_total / 1000  # kPa -> MPa
        radius = shell_input.diameter * 1000 / 2  # m -> mm
    else:
        pressure = p_total
        radius = shell_input.diameter * 6  # ft -> in, halved

    denom = s * e - 0.6 * pressure
    if denom <= 0:
        return math.inf
    return (pressure * radius) / denom + ca


def _notes_for(standard: Standard) -> List[str]:
    if standard is Standard.API_650:
        return [
            "API 650: One-Foot Method (head evaluated 0.3 m / 1 ft above the bottom seam of each course).",
            "t_required = max(t_calc, minNominalThickness + CA). When t_calc is below the minimum, "
            "the required thickness plateaus at the floor.",
        ]
    return [
        "API 620: thin-walled cylinder hoop stress basis (P_total = P_internal + P_hydrostatic).",
        "External pressure / vacuum buckling is not checked here.",
    ]


def run_shell_thickness(shell_input: ShellCalcInput) -> ShellCalcResult:
    """
    Evaluate every course against every active design case.

    Args:
        shell_input: Tank geometry, service, material and case data

    Returns:
        ShellCalcResult with one CourseResult per course, bottom to top

    Raises:
        ShellValidationError: If any input is out of range
    """
    validate_shell_input(shell_input)

    units = shell_input.units
    offset = ONE_FOOT_OFFSET[units]
    floor = shell_input.min_thickness_floor
    eps = MIN_CONTROL_TOLERANCE[units]
    courses = shell_input.courses

    results = []
    for i, course_height in enumerate(courses):
        bottom_elevation = sum(courses[:i])

        calc_by_case = {}
        required_by_case = {}
        governing_case = shell_input.active_cases[0].case
        governing_req = -math.inf
        governing_calc = 0.0

        for active in shell_input.active_cases:
            depth_above_seam = max(0.0, active.liquid_height - bottom_elevation)
            head = max(0.0, depth_above_seam - offset)

            t_calc = case_thickness(shell_input, active.case, head)
            t_req = max(t_calc, floor)

            calc_by_case[active.case] = t_calc
            required_by_case[active.case] = t_req

            # >= so a later case with an equal value takes over
            if t_req >= governing_req:
                governing_req = t_req
                governing_calc = t_calc
                governing_case = active.case

        t_adopted = shell_input.adopted_thicknesses[i]
        utilization = governing_req / t_adopted if t_adopted > 0 else math.inf
        status = ShellStatus.OK if t_adopted >= governing_req else ShellStatus.NOT_OK
        is_min_controlled = governing_req <= floor + eps and governing_calc < floor - eps

        results.append(CourseResult(
            course_no=i + 1,
            course_height=course_height,
            bottom_elevation=bottom_elevation,
            calc_by_case=calc_by_case,
            required_by_case=required_by_case,
            governing_case=governing_case,
            t_calc_governing=governing_calc,
            t_required=governing_req,
            is_min_controlled=is_min_controlled,
            t_adopted=t_adopted,
            utilization=utilization,
            status=status,
        ))

    return ShellCalcResult(
        units=units,
        standard=shell_input.standard,
        method=METHOD_LABELS[shell_input.standard],
        course_count=len(courses),
        min_thickness_floor=floor,
        results=results,
        notes=_notes_for(shell_input.standard),
    )
