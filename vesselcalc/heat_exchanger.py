"""
Shell-and-tube heat exchanger sizing (Kern method with Bell-Delaware
correction factors), SI units.

The hot stream is on the shell side and the cold stream in the tubes.
Degenerate inputs (zero temperature differences, zero viscosity, ...)
are not rejected: the arithmetic runs on numpy floats so they surface as
inf/nan in the result for the caller to check.
"""

from dataclasses import dataclass
from enum import Enum

import numpy as np

from .hx_tables import (
    BAFFLE_CUT_OPTIONS,
    LD_OPTIONS,
    SHELL_JF,
    SHELL_JH,
    TUBE_JF,
    TUBE_JH,
    get_bundle_clearance,
    get_pitch_constants,
)
from .interpolation import lookup_table, nearest_bucket

TUBESHEET_THICKNESS = 0.005  # m, each end
LEAKAGE_RATIO = 0.04  # shell-to-baffle leakage area ratio
BYPASS_RATIO = 0.05  # bundle bypass area ratio
WINDOW_LOSS_COEFFICIENT = 0.5
WINDOW_VELOCITY_FACTOR = 1.2


class PitchType(Enum):
    TRIANGULAR = "triangular"
    SQUARE = "square"


class ShellType(Enum):
    FIXED = "Fixed"
    SPLIT_RING = "Split-ring"
    PULL_THROUGH = "Pull-through"


@dataclass
class FluidProperties:
    label: str
    mass_flow: float  # kg/s
    temp_in: float  # °C
    temp_out: float  # °C
    allowable_dp: float  # bar
    fouling_resistance: float  # m²·K/W
    cp: float  # J/kg·K
    mu: float  # Pa·s
    k: float  # W/m·K
    rho: float  # kg/m³


@dataclass
class TubeSpecs:
    outer_diameter: float  # m
    inner_diameter: float  # m
    length: float  # m
    thickness: float  # m
    material: str
    material_conductivity: float  # W/m·K
    pitch_type: PitchType
    pitch_ratio: float  # pt = ratio * do

    def __post_init__(self):
        self.pitch_type = PitchType(self.pitch_type)


@dataclass
class ShellSpecs:
    type: ShellType
    passes: int
    tube_passes: int
    baffle_ratio: float  # baffle spacing / shell diameter
    baffle_cut: float  # percent

    def __post_init__(self):
        self.type = ShellType(self.type)


@dataclass
class TubeSideResult:
    velocity: float
    re: float
    pr: float
    hi: float
    pressure_drop: float


@dataclass
class ShellSideResult:
    velocity: float
    re: float
    pr: float
    hs: float
    pressure_drop: float


@dataclass
class BellDelawareResult:
    jc: float
    jl: float
    jb: float
    js: float
    jr: float
    dp_cross: float
    dp_window: float
    dp_leak: float
    dp_bypass: float
    dp_end: float


@dataclass
class CalculationResult:
    heat_load: float  # W
    cold_flowrate: float  # kg/s, back-calculated from the duty
    lmtd: float
    f_corr: float
    tm: float
    area_required: float
    area_one_tube: float
    num_tubes: float
    area_considered: float
    bundle_diameter: float
    bundle_clearance: float
    shell_diameter: float
    tube_side: TubeSideResult
    shell_side: ShellSideResult
    overall_uo: float
    deviation: float  # %
    bell_delaware: BellDelawareResult


def calculate_lmtd(th_in: float, th_out: float, tc_in: float, tc_out: float) -> float:
    """
    Counter-current log mean temperature difference.

    Returns 0 on a temperature cross (either terminal difference <= 0).
    """
    dt1 = np.float64(th_in) - tc_out
    dt2 = np.float64(th_out) - tc_in
    if dt1 <= 0 or dt2 <= 0:
        return 0.0
    if abs(dt1 - dt2) < 1e-6:
        return float(dt1)
    with np.errstate(all='ignore'):
        return float((dt1 - dt2) / np.log(dt1 / dt2))


def calculate_f(th_in: float, th_out: float, tc_in: float, tc_out: float, shell_passes: int) -> float:
    """
    LMTD correction factor for one shell pass and an even number of tube
    passes (Bowman form).

    Returns 1 when shell_passes is 0.
    """
    if shell_passes == 0:
        return 1.0

    with np.errstate(all='ignore'):
        r = (np.float64(th_in) - th_out) / (np.float64(tc_out) - tc_in)
        p = (np.float64(tc_out) - tc_in) / (np.float64(th_in) - tc_in)
        root = np.sqrt(r * r + 1)

        if abs(r - 1) < 1e-4:
            # R -> 1 limit of the general expression
            num = p * np.sqrt(2) / (1 - p)
            den = np.log((2 - p * (2 - np.sqrt(2))) / (2 - p * (2 + np.sqrt(2))))
            return float(num / den)

        s = root / (r - 1)
        num = s * np.log((1 - p) / (1 - p * r))
        den = np.log((2 - p * (r + 1 - root)) / (2 - p * (r + 1 + root)))
        return float(num / den)


def _velocity_head(rho, velocity):
    return rho * velocity ** 2 / 2


def perform_calculation(
    hot: FluidProperties,
    cold: FluidProperties,
    tube: TubeSpecs,
    shell: ShellSpecs,
    u_assume: float,
) -> CalculationResult:
    """
    Size the exchanger for the hot-side duty at an assumed overall U.

    Args:
        hot: Shell-side stream
        cold: Tube-side stream
        tube: Tube geometry and material
        shell: Shell head type, passes and baffle configuration
        u_assume: Assumed overall coefficient, W/m²·K

    Returns:
        CalculationResult with thermal, geometric and hydraulic results
    """
    d_o = np.float64(tube.outer_diameter)
    d_i = np.float64(tube.inner_diameter)
    length = np.float64(tube.length)

    with np.errstate(all='ignore'):
        heat_load = np.float64(hot.mass_flow) * hot.cp * abs(hot.temp_in - hot.temp_out)
        cold_flowrate = heat_load / (np.float64(cold.cp) * abs(cold.temp_in - cold.temp_out))

        lmtd = calculate_lmtd(hot.temp_in, hot.temp_out, cold.temp_in, cold.temp_out)
        f_corr = calculate_f(hot.temp_in, hot.temp_out, cold.temp_in, cold.temp_out, shell.passes)
        tm = np.float64(f_corr) * lmtd

        area_required = heat_load / (np.float64(u_assume) * tm)
        area_one_tube = np.pi * d_o * (length - 2 * TUBESHEET_THICKNESS)
        num_tubes = np.ceil(area_required / area_one_tube)
        area_considered = num_tubes * area_one_tube

        # Bundle and shell
        k1, n1 = get_pitch_constants(tube.pitch_type.value, shell.tube_passes)
        bundle_diameter = d_o * np.power(num_tubes / k1, 1 / n1)
        clearance = get_bundle_clearance(float(bundle_diameter), shell.type.value)
        shell_diameter = bundle_diameter + clearance

        # Tube side
        tube_cs_area = np.pi * d_i ** 2 / 4
        tubes_per_pass = num_tubes / np.float64(shell.tube_passes)
        total_flow_area = tubes_per_pass * tube_cs_area
        tube_velocity = cold.mass_flow / (np.float64(cold.rho) * total_flow_area)
        tube_re = cold.rho * tube_velocity * d_i / np.float64(cold.mu)
        tube_pr = cold.cp * np.float64(cold.mu) / cold.k

        ld_match = nearest_bucket(float(length / d_i), LD_OPTIONS)
        tube_jh = lookup_table(float(tube_re), TUBE_JH, ld_match)
        hi = tube_jh * tube_re * np.power(tube_pr, 0.33) * (cold.k / d_i)

        # Shell side, ideal cross-flow
        pt = tube.pitch_ratio * d_o
        baffle_spacing = shell_diameter * shell.baffle_ratio
        shell_cross_flow_area = shell_diameter * baffle_spacing * (pt - d_o) / pt
        if tube.pitch_type is PitchType.TRIANGULAR:
            de = (1.1 * pt ** 2 - 0.917 * d_o ** 2) / d_o
        else:
            de = (1.27 * pt ** 2 - d_o ** 2) / d_o

        shell_velocity = hot.mass_flow / (np.float64(hot.rho) * shell_cross_flow_area)
        shell_re = hot.rho * shell_velocity * de / np.float64(hot.mu)
        shell_pr = hot.cp * np.float64(hot.mu) / hot.k

        cut_match = nearest_bucket(shell.baffle_cut, BAFFLE_CUT_OPTIONS)
        shell_jh = lookup_table(float(shell_re), SHELL_JH, cut_match)
        hs_ideal = shell_jh * shell_re * np.power(shell_pr, 0.33) * (hot.k / de)

        # Bell-Delaware corrections
        theta_c = 2 * np.arccos(1 - 2 * (np.float64(shell.baffle_cut) / 100))
        fc = 1 - (theta_c - np.sin(theta_c)) / np.pi
        jc = 0.55 + 0.72 * fc
        jl = 0.44 + 0.56 * np.exp(-1.33 * LEAKAGE_RATIO)
        jb = np.exp(-1.25 * BYPASS_RATIO)
        js = 1.0
        jr = 1.0 if shell_re > 100 else np.power(10 / shell_re, 0.1)

        hs = hs_ideal * jc * jl * jb * js * jr

        # Overall coefficient referred to the outside area
        inv_uo = (
            1 / hs
            + hot.fouling_resistance
            + d_o * np.log(d_o / d_i) / (2 * np.float64(tube.material_conductivity))
            + (d_o / d_i) * (cold.fouling_resistance + 1 / hi)
        )
        overall_uo = 1 / inv_uo
        deviation = (overall_uo - u_assume) / np.float64(u_assume) * 100

        # Tube-side pressure drop with 2.5 velocity heads of end losses per pass
        tube_jf = lookup_table(float(tube_re), TUBE_JF)
        tube_dp = (
            (shell.tube_passes / 2)
            * (8 * tube_jf * (length / d_i) + 2.5)
            * _velocity_head(cold.rho, tube_velocity)
        )

        # Shell-side pressure drop
        shell_jf = lookup_table(float(shell_re), SHELL_JF, cut_match)
        n_cross = length / baffle_spacing
        dp_cross = n_cross * shell_jf * _velocity_head(hot.rho, shell_velocity)

        n_windows = np.ceil(length / baffle_spacing) - 1
        window_velocity = shell_velocity * WINDOW_VELOCITY_FACTOR
        dp_window = n_windows * WINDOW_LOSS_COEFFICIENT * _velocity_head(hot.rho, window_velocity)

        dp_leak = dp_cross * ((1 - jl) / jl)
        dp_bypass = dp_cross * ((1 - jb) / jb)
        dp_end = 2 * _velocity_head(hot.rho, shell_velocity)

        shell_dp = dp_cross + dp_window + dp_leak + dp_bypass + dp_end

    return CalculationResult(
        heat_load=float(heat_load),
        cold_flowrate=float(cold_flowrate),
        lmtd=float(lmtd),
        f_corr=float(f_corr),
        tm=float(tm),
        area_required=float(area_required),
        area_one_tube=float(area_one_tube),
        num_tubes=float(num_tubes),
        area_considered=float(area_considered),
        bundle_diameter=float(bundle_diameter),
        bundle_clearance=float(clearance),
        shell_diameter=float(shell_diameter),
        tube_side=TubeSideResult(
            velocity=float(tube_velocity),
            re=float(tube_re),
            pr=float(tube_pr),
            hi=float(hi),
            pressure_drop=float(tube_dp),
        ),
        shell_side=ShellSideResult(
            velocity=float(shell_velocity),
            re=float(shell_re),
            pr=float(shell_pr),
            hs=float(hs),
            pressure_drop=float(shell_dp),
        ),
        overall_uo=float(overall_uo),
        deviation=float(deviation),
        bell_delaware=BellDelawareResult(
            jc=float(jc),
            jl=float(jl),
            jb=float(jb),
            js=float(js),
            jr=float(jr),
            dp_cross=float(dp_cross),
            dp_window=float(dp_window),
            dp_leak=float(dp_leak),
            dp_bypass=float(dp_bypass),
            dp_end=float(dp_end),
        ),
    )
