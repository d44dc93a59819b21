"""
Fluid property presets for the heat exchanger calculator (SI units).
"""

# Representative properties at typical exchanger bulk temperatures
FLUID_PROPERTIES = {
    'water': {
        'name': 'Water',
        'cp': 4180.0,  # J/kg·K
        'mu': 0.0008,  # Pa·s
        'k': 0.6,  # W/m·K
        'rho': 1000.0,  # kg/m³
    },
    'light_oil': {
        'name': 'Light Hydrocarbon Oil',
        'cp': 2200.0,
        'mu': 0.001,
        'k': 0.15,
        'rho': 800.0,
    },
    'kerosene': {
        'name': 'Kerosene',
        'cp': 2470.0,
        'mu': 0.00045,
        'k': 0.13,
        'rho': 730.0,
    },
    'glycol_30': {
        'name': '30% Ethylene Glycol',
        'cp': 3700.0,
        'mu': 0.0021,
        'k': 0.48,
        'rho': 1040.0,
    },
    'crude_oil': {
        'name': 'Crude Oil',
        'cp': 2000.0,
        'mu': 0.005,
        'k': 0.13,
        'rho': 850.0,
    },
}


def get_fluid_options():
    """Return list of available fluid types."""
    return list(FLUID_PROPERTIES.keys())


def get_fluid_properties(fluid_type):
    """Return (cp, mu, k, rho) for the specified fluid type."""
    if fluid_type not in FLUID_PROPERTIES:
        raise ValueError(f"Unknown fluid type: {fluid_type}")

    props = FLUID_PROPERTIES[fluid_type]
    return props['cp'], props['mu'], props['k'], props['rho']


def get_fluid_name(fluid_type):
    """Return the display name for a fluid type."""
    return FLUID_PROPERTIES.get(fluid_type, {}).get('name', fluid_type)
