"""
Static reference data for shell-and-tube exchanger sizing (SI).

Sources are the usual Kern / Bell-Delaware design charts, digitised at
fixed Reynolds numbers. Rows are sorted by Reynolds number.
"""

from typing import Dict, NamedTuple, Tuple

# Bundle diameter correlation D_b = do * (Nt / k1) ** (1 / n1), keyed by tube passes
TRIANGULAR_PITCH = {
    1: (0.319, 2.142),
    2: (0.249, 2.207),
    4: (0.175, 2.285),
    6: (0.0743, 2.499),
    8: (0.0365, 2.675),
}

SQUARE_PITCH = {
    1: (0.215, 2.207),
    2: (0.156, 2.291),
    4: (0.158, 2.263),
    6: (0.0402, 2.617),
    8: (0.0331, 2.643),
}

DEFAULT_TUBE_PASSES = 8


class ClearanceRow(NamedTuple):
    dia: float  # bundle diameter, m
    fixed: float  # mm, fixed tubesheet / U-tube
    split: float  # mm, split-ring floating head
    pull: float  # mm, pull-through floating head


BUNDLE_CLEARANCE: Tuple[ClearanceRow, ...] = (
    ClearanceRow(0.2, 10.0, 50.0, 88.0),
    ClearanceRow(0.3, 11.0, 55.0, 88.7),
    ClearanceRow(0.4, 12.0, 60.0, 89.4),
    ClearanceRow(0.5, 13.0, 65.0, 90.1),
    ClearanceRow(0.6, 14.0, 70.0, 90.8),
    ClearanceRow(0.7, 15.0, 75.0, 91.5),
    ClearanceRow(0.8, 16.0, 80.0, 92.2),
    ClearanceRow(0.9, 17.0, 85.0, 92.9),
    ClearanceRow(1.0, 18.0, 90.0, 93.6),
    ClearanceRow(1.1, 19.0, 95.0, 94.3),
    ClearanceRow(1.2, 20.0, 100.0, 95.0),
)

# Tube-side heat transfer factor, keyed by L/D ratio
LD_OPTIONS = (24, 48, 120, 240, 500)

TUBE_JH = (
    (10, {24: 1.389e-01, 48: 1.103e-01, 120: 8.124e-02, 240: 6.448e-02, 500: 5.049e-02}),
    (20, {24: 8.752e-02, 48: 6.946e-02, 120: 5.118e-02, 240: 4.062e-02, 500: 3.181e-02}),
    (50, {24: 4.751e-02, 48: 3.771e-02, 120: 2.778e-02, 240: 2.205e-02, 500: 1.727e-02}),
    (100, {24: 2.993e-02, 48: 2.376e-02, 120: 1.750e-02, 240: 1.389e-02, 500: 1.088e-02}),
    (200, {24: 1.885e-02, 48: 1.497e-02, 120: 1.103e-02, 240: 8.752e-03, 500: 6.852e-03}),
    (500, {24: 1.024e-02, 48: 8.124e-03, 120: 5.986e-03, 240: 4.751e-03, 500: 3.720e-03}),
    (1000, {24: 6.448e-03, 48: 5.118e-03, 120: 3.771e-03, 240: 2.993e-03, 500: 2.343e-03}),
    (2000, {24: 4.062e-03, 48: 3.224e-03, 120: 2.376e-03, 240: 1.885e-03, 500: 1.476e-03}),
    (5000, {24: 4.049e-03, 48: 3.587e-03, 120: 3.091e-03, 240: 2.778e-03, 500: 2.488e-03}),
    (10000, {24: 4.039e-03, 48: 3.888e-03, 120: 3.773e-03, 240: 3.724e-03, 500: 3.692e-03}),
    (20000, {24: 3.516e-03, 48: 3.385e-03, 120: 3.285e-03, 240: 3.242e-03, 500: 3.214e-03}),
    (50000, {24: 2.928e-03, 48: 2.818e-03, 120: 2.735e-03, 240: 2.699e-03, 500: 2.676e-03}),
    (100000, {24: 2.549e-03, 48: 2.453e-03, 120: 2.381e-03, 240: 2.350e-03, 500: 2.330e-03}),
    (200000, {24: 2.219e-03, 48: 2.136e-03, 120: 2.072e-03, 240: 2.045e-03, 500: 2.028e-03}),
    (500000, {24: 1.847e-03, 48: 1.778e-03, 120: 1.725e-03, 240: 1.703e-03, 500: 1.689e-03}),
    (1000000, {24: 1.608e-03, 48: 1.548e-03, 120: 1.502e-03, 240: 1.483e-03, 500: 1.470e-03}),
)

# Tube-side friction factor (laminar 8/Re, Blasius-type above transition)
TUBE_JF = (
    (10, 8.000e-01),
    (20, 4.000e-01),
    (50, 1.600e-01),
    (100, 8.000e-02),
    (200, 4.000e-02),
    (500, 1.600e-02),
    (1000, 8.000e-03),
    (2000, 4.000e-03),
    (5000, 4.500e-03),
    (10000, 3.645e-03),
    (20000, 3.173e-03),
    (50000, 2.642e-03),
    (100000, 2.300e-03),
    (200000, 2.002e-03),
    (500000, 1.667e-03),
    (1000000, 1.451e-03),
)

# Shell-side factors, keyed by baffle cut (%)
BAFFLE_CUT_OPTIONS = (15, 25, 35, 45)

SHELL_JH = (
    (10, {15: 1.405e-01, 25: 1.277e-01, 35: 1.150e-01, 45: 1.047e-01}),
    (20, {15: 1.029e-01, 25: 9.351e-02, 35: 8.416e-02, 45: 7.667e-02}),
    (50, {15: 6.810e-02, 25: 6.191e-02, 35: 5.572e-02, 45: 5.077e-02}),
    (100, {15: 4.985e-02, 25: 4.532e-02, 35: 4.079e-02, 45: 3.716e-02}),
    (200, {15: 3.649e-02, 25: 3.318e-02, 35: 2.986e-02, 45: 2.721e-02}),
    (500, {15: 2.416e-02, 25: 2.197e-02, 35: 1.977e-02, 45: 1.801e-02}),
    (1000, {15: 1.769e-02, 25: 1.608e-02, 35: 1.447e-02, 45: 1.319e-02}),
    (2000, {15: 1.295e-02, 25: 1.177e-02, 35: 1.059e-02, 45: 9.653e-03}),
    (5000, {15: 8.574e-03, 25: 7.794e-03, 35: 7.015e-03, 45: 6.391e-03}),
    (10000, {15: 6.276e-03, 25: 5.706e-03, 35: 5.135e-03, 45: 4.679e-03}),
    (20000, {15: 4.594e-03, 25: 4.177e-03, 35: 3.759e-03, 45: 3.425e-03}),
    (50000, {15: 3.042e-03, 25: 2.765e-03, 35: 2.489e-03, 45: 2.268e-03}),
    (100000, {15: 2.227e-03, 25: 2.024e-03, 35: 1.822e-03, 45: 1.660e-03}),
    (200000, {15: 1.630e-03, 25: 1.482e-03, 35: 1.334e-03, 45: 1.215e-03}),
    (500000, {15: 1.079e-03, 25: 9.812e-04, 35: 8.831e-04, 45: 8.046e-04}),
    (1000000, {15: 7.901e-04, 25: 7.183e-04, 35: 6.465e-04, 45: 5.890e-04}),
)

SHELL_JF = (
    (10, {15: 2.280e+00, 25: 1.900e+00, 35: 1.615e+00, 45: 1.425e+00}),
    (20, {15: 1.140e+00, 25: 9.500e-01, 35: 8.075e-01, 45: 7.125e-01}),
    (50, {15: 4.560e-01, 25: 3.800e-01, 35: 3.230e-01, 45: 2.850e-01}),
    (100, {15: 2.280e-01, 25: 1.900e-01, 35: 1.615e-01, 45: 1.425e-01}),
    (200, {15: 1.140e-01, 25: 9.500e-02, 35: 8.075e-02, 45: 7.125e-02}),
    (500, {15: 9.349e-02, 25: 7.791e-02, 35: 6.622e-02, 45: 5.843e-02}),
    (1000, {15: 8.139e-02, 25: 6.782e-02, 35: 5.765e-02, 45: 5.087e-02}),
    (2000, {15: 7.085e-02, 25: 5.904e-02, 35: 5.019e-02, 45: 4.428e-02}),
    (5000, {15: 5.899e-02, 25: 4.916e-02, 35: 4.178e-02, 45: 3.687e-02}),
    (10000, {15: 5.135e-02, 25: 4.279e-02, 35: 3.637e-02, 45: 3.209e-02}),
    (20000, {15: 4.470e-02, 25: 3.725e-02, 35: 3.166e-02, 45: 2.794e-02}),
    (50000, {15: 3.722e-02, 25: 3.101e-02, 35: 2.636e-02, 45: 2.326e-02}),
    (100000, {15: 3.240e-02, 25: 2.700e-02, 35: 2.295e-02, 45: 2.025e-02}),
    (200000, {15: 2.821e-02, 25: 2.350e-02, 35: 1.998e-02, 45: 1.763e-02}),
    (500000, {15: 2.348e-02, 25: 1.957e-02, 35: 1.663e-02, 45: 1.468e-02}),
    (1000000, {15: 2.044e-02, 25: 1.704e-02, 35: 1.448e-02, 45: 1.278e-02}),
)

# Typical fouling resistances, m²·K/W
FOULING_FACTORS: Dict[str, float] = {
    'cooling_water': 0.0002,
    'river_water': 0.0003,
    'sea_water': 0.0002,
    'boiler_feedwater': 0.0001,
    'steam': 0.0001,
    'light_hydrocarbon': 0.0002,
    'heavy_hydrocarbon': 0.0004,
    'fuel_oil': 0.0009,
    'process_gas': 0.0002,
}


def get_pitch_constants(pitch_type: str, tube_passes: int) -> Tuple[float, float]:
    """Return (k1, n1) for the pitch pattern, falling back to the 8-pass row."""
    table = TRIANGULAR_PITCH if pitch_type == "triangular" else SQUARE_PITCH
    return table.get(tube_passes, table[DEFAULT_TUBE_PASSES])


def get_bundle_clearance(bundle_diameter: float, shell_type: str) -> float:
    """
    Bundle-to-shell diametral clearance in metres.

    Picks the first row whose diameter is >= the bundle diameter, or the
    last row when the bundle is larger than the table.
    """
    rows = sorted(BUNDLE_CLEARANCE, key=lambda r: r.dia)
    ref = next((r for r in rows if r.dia >= bundle_diameter), rows[-1])
    if shell_type == "Fixed":
        return ref.fixed / 1000
    if shell_type == "Split-ring":
        return ref.split / 1000
    return ref.pull / 1000


def get_fouling_options():
    """Return list of available fouling service keys."""
    return list(FOULING_FACTORS.keys())


def get_fouling_resistance(service: str) -> float:
    if service not in FOULING_FACTORS:
        raise ValueError(f"Unknown fouling service: {service}")
    return FOULING_FACTORS[service]
