"""
Result tables, CSV export and design checks for the calculators.
"""

import math
from typing import Dict, List, Optional

import pandas as pd

from .heat_exchanger import CalculationResult, FluidProperties
from .shell_thickness import ShellCalcResult, ShellStatus, Units

CSV_COLUMNS = ['Course', 'Governing case', 't_calc', 't_required', 't_adopted', 'Utilization', 'Status']
DEVIATION_LIMIT_PERCENT = 30.0
PA_PER_BAR = 1e5


def format_number(value, digits: int = 2) -> str:
    """Fixed-decimal text, or '-' for non-finite values."""
    if value is None or not math.isfinite(value):
        return "-"
    return f"{value:.{digits}f}"


def thickness_unit(units) -> str:
    return "in" if Units(units) is Units.US else "mm"


def length_unit(units) -> str:
    return "ft" if Units(units) is Units.US else "m"


def shell_results_dataframe(result: ShellCalcResult) -> pd.DataFrame:
    """One row per course with raw numeric values."""
    rows = []
    for course in result.results:
        rows.append({
            'Course': course.course_no,
            'Height': course.course_height,
            'Bottom Elevation': course.bottom_elevation,
            'Governing Case': course.governing_case.value,
            't_calc': course.t_calc_governing,
            't_required': course.t_required,
            't_adopted': course.t_adopted,
            'Utilization': course.utilization,
            'Status': course.status.value,
            'Min Controlled': course.is_min_controlled,
        })
    columns = ['Course', 'Height', 'Bottom Elevation', 'Governing Case', 't_calc',
               't_required', 't_adopted', 'Utilization', 'Status', 'Min Controlled']
    return pd.DataFrame(rows, columns=columns)


def shell_display_dataframe(result: ShellCalcResult) -> pd.DataFrame:
    """Course table formatted for display, with units in the headers."""
    unit = thickness_unit(result.units)
    df = shell_results_dataframe(result)

    out = pd.DataFrame({
        'Course': df['Course'],
        'Governing Case': df['Governing Case'],
        f't_calc ({unit})': df['t_calc'].apply(format_number),
        f't_required ({unit})': [
            format_number(t) + (" (min thickness)" if floored else "")
            for t, floored in zip(df['t_required'], df['Min Controlled'])
        ],
        f't_adopted ({unit})': df['t_adopted'].apply(format_number),
        'Utilization': df['Utilization'].apply(lambda x: format_number(x, 3)),
        'Status': df['Status'],
    })
    return out


def shell_results_csv(result: ShellCalcResult) -> str:
    """
    CSV export, one row per course.

    Thickness and utilization fields use 4 decimals; non-finite values
    are written as '-'.
    """
    df = shell_results_dataframe(result)
    out = pd.DataFrame({
        'Course': df['Course'],
        'Governing case': df['Governing Case'],
        't_calc': df['t_calc'].apply(lambda x: format_number(x, 4)),
        't_required': df['t_required'].apply(lambda x: format_number(x, 4)),
        't_adopted': df['t_adopted'].apply(lambda x: format_number(x, 4)),
        'Utilization': df['Utilization'].apply(lambda x: format_number(x, 4)),
        'Status': df['Status'],
    }, columns=CSV_COLUMNS)
    return out.to_csv(index=False, lineterminator="\n")


def min_floor_note(result: ShellCalcResult) -> Optional[str]:
    """Explain a flat t_required column when every course sits on the floor."""
    floor = result.min_thickness_floor
    if not result.results or not math.isfinite(floor):
        return None

    all_floored = all(abs(c.t_required - floor) < 1e-6 for c in result.results)
    if not all_floored:
        return None

    unit = thickness_unit(result.units)
    return (
        "Every course is on the minimum thickness floor: "
        f"t_required = max(t_calc, minNominal + CA) = {format_number(floor)} {unit}."
    )


def shell_summary(result: ShellCalcResult) -> Dict:
    """Overall status for the tank shell."""
    failing = [c.course_no for c in result.results if c.status is ShellStatus.NOT_OK]
    utilizations = [c.utilization for c in result.results]
    return {
        'method': result.method,
        'course_count': result.course_count,
        'min_thickness_floor': result.min_thickness_floor,
        'max_utilization': max(utilizations) if utilizations else math.nan,
        'failing_courses': failing,
        'all_ok': not failing,
    }


def hx_summary_dataframe(result: CalculationResult) -> pd.DataFrame:
    """Parameter / value / unit table for the exchanger result."""
    rows = [
        ("Heat Load", result.heat_load / 1000, "kW"),
        ("Cold Flowrate", result.cold_flowrate, "kg/s"),
        ("LMTD", result.lmtd, "°C"),
        ("Correction Factor F", result.f_corr, "-"),
        ("Mean Temperature Difference", result.tm, "°C"),
        ("Area Required", result.area_required, "m²"),
        ("Area per Tube", result.area_one_tube, "m²"),
        ("Number of Tubes", result.num_tubes, "-"),
        ("Area Considered", result.area_considered, "m²"),
        ("Bundle Diameter", result.bundle_diameter, "m"),
        ("Bundle Clearance", result.bundle_clearance, "m"),
        ("Shell Diameter", result.shell_diameter, "m"),
        ("Tube Velocity", result.tube_side.velocity, "m/s"),
        ("Tube Reynolds", result.tube_side.re, "-"),
        ("Tube Prandtl", result.tube_side.pr, "-"),
        ("Tube hi", result.tube_side.hi, "W/m²·K"),
        ("Tube ΔP", result.tube_side.pressure_drop / 1000, "kPa"),
        ("Shell Velocity", result.shell_side.velocity, "m/s"),
        ("Shell Reynolds", result.shell_side.re, "-"),
        ("Shell Prandtl", result.shell_side.pr, "-"),
        ("Shell hs", result.shell_side.hs, "W/m²·K"),
        ("Shell ΔP", result.shell_side.pressure_drop / 1000, "kPa"),
        ("Overall Uo", result.overall_uo, "W/m²·K"),
        ("Deviation", result.deviation, "%"),
    ]
    return pd.DataFrame(rows, columns=['Parameter', 'Value', 'Unit'])


def bell_delaware_dataframe(result: CalculationResult) -> pd.DataFrame:
    bd = result.bell_delaware
    rows = [
        ("Jc (baffle cut)", bd.jc),
        ("Jl (leakage)", bd.jl),
        ("Jb (bypass)", bd.jb),
        ("Js (unequal spacing)", bd.js),
        ("Jr (laminar)", bd.jr),
        ("ΔP cross-flow (Pa)", bd.dp_cross),
        ("ΔP window (Pa)", bd.dp_window),
        ("ΔP leakage (Pa)", bd.dp_leak),
        ("ΔP bypass (Pa)", bd.dp_bypass),
        ("ΔP end zones (Pa)", bd.dp_end),
    ]
    return pd.DataFrame(rows, columns=['Factor', 'Value'])


def hx_design_checks(result: CalculationResult, hot: FluidProperties,
                     cold: FluidProperties) -> Dict:
    """
    Acceptance checks on the sized exchanger.

    The hot stream is on the shell side and the cold stream in the tubes;
    allowable pressure drops are given in bar.
    """
    shell_allow = hot.allowable_dp * PA_PER_BAR
    tube_allow = cold.allowable_dp * PA_PER_BAR
    warnings: List[str] = []

    deviation_ok = abs(result.deviation) < DEVIATION_LIMIT_PERCENT
    shell_dp_ok = result.shell_side.pressure_drop <= shell_allow
    tube_dp_ok = result.tube_side.pressure_drop <= tube_allow

    if not deviation_ok:
        warnings.append(
            f"U deviation {format_number(result.deviation)}% is outside ±{DEVIATION_LIMIT_PERCENT:.0f}%, "
            "redesign recommended"
        )
    if not shell_dp_ok:
        warnings.append(
            f"Shell-side ΔP {format_number(result.shell_side.pressure_drop / 1000)} kPa exceeds "
            f"the allowable {format_number(shell_allow / 1000)} kPa"
        )
    if not tube_dp_ok:
        warnings.append(
            f"Tube-side ΔP {format_number(result.tube_side.pressure_drop / 1000)} kPa exceeds "
            f"the allowable {format_number(tube_allow / 1000)} kPa"
        )

    return {
        'deviation_ok': deviation_ok,
        'shell_dp_ok': shell_dp_ok,
        'tube_dp_ok': tube_dp_ok,
        'acceptable': deviation_ok and shell_dp_ok and tube_dp_ok,
        'warnings': warnings,
    }
