"""
Tank design cases and the per-case rules the shell formulas depend on.
"""

from enum import Enum
from typing import List


class DesignCase(Enum):
    OPERATING = "operating"
    HYDROTEST = "hydrotest"
    EMPTY_WIND = "empty_wind"
    EMPTY_SEISMIC = "empty_seismic"
    VACUUM = "vacuum"
    STEAMOUT = "steamout"

    @property
    def title(self) -> str:
        return CASE_TITLES[self]

    @property
    def uses_test_condition(self) -> bool:
        """Hydrotest is filled with water (G = 1.0) and checked at test stress."""
        return self is DesignCase.HYDROTEST

    @property
    def includes_internal_pressure(self) -> bool:
        """Whether the design gauge pressure acts on top of the liquid head."""
        return self not in (
            DesignCase.HYDROTEST,
            DesignCase.EMPTY_WIND,
            DesignCase.EMPTY_SEISMIC,
        )


CASE_TITLES = {
    DesignCase.OPERATING: "Operating",
    DesignCase.HYDROTEST: "Hydrotest",
    DesignCase.EMPTY_WIND: "Empty + Wind",
    DesignCase.EMPTY_SEISMIC: "Empty + Seismic",
    DesignCase.VACUUM: "Vacuum",
    DesignCase.STEAMOUT: "Steam-out",
}


def get_case_options() -> List[str]:
    """Return the case keys in canonical order."""
    return [case.value for case in DesignCase]


def parse_case(key) -> DesignCase:
    """Return the DesignCase for a key such as 'hydrotest'."""
    if isinstance(key, DesignCase):
        return key
    try:
        return DesignCase(str(key).strip().lower())
    except ValueError:
        raise ValueError(f"Unknown design case: {key}")
