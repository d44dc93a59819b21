"""
Tank project request object.

A project is a JSON-compatible mapping with the camelCase keys written by
the tank wizard (units, recommendedStandard, envelope, designCases,
service, geometry, materials) plus a schema "version". This module cleans
such a mapping and turns it into a ShellCalcInput; the calculation engine
itself never sees storage.
"""

import json
import math
from datetime import datetime, timezone
from typing import Dict, List, Optional

from .design_cases import DesignCase
from .shell_thickness import ShellCalcInput, ShellCaseInput, Standard

PROJECT_VERSION = 1

DEFAULT_CORROSION_ALLOWANCE = {'SI': 2.0, 'US': 0.125}
DEFAULT_MIN_THICKNESS = {'SI': 6.0, 'US': 0.25}
SUPPORTED_STANDARDS = [s.value for s in Standard]


def sanitize_number(value, fallback=0.0) -> float:
    """Return value as a finite float, or fallback."""
    try:
        n = float(value)
    except (TypeError, ValueError):
        return fallback
    return n if math.isfinite(n) else fallback


def _positive_list(values) -> List[float]:
    if not isinstance(values, list):
        return []
    return [x for x in (sanitize_number(v, 0.0) for v in values) if x > 0]


def _mapping(value) -> Dict:
    return value if isinstance(value, dict) else {}


def sanitize_project(raw) -> Optional[Dict]:
    """
    Clean a raw project mapping.

    Returns:
        A new project dict, or None when raw is not a mapping or has no
        project name
    """
    if not isinstance(raw, dict):
        return None
    if not str(raw.get('projectName') or '').strip():
        return None

    units = 'US' if raw.get('units') == 'US' else 'SI'
    envelope = _mapping(raw.get('envelope'))
    standard = raw.get('recommendedStandard') or 'API_650'

    project = {
        'version': PROJECT_VERSION,
        'id': str(raw.get('id') or f"draft-{int(datetime.now(timezone.utc).timestamp() * 1000)}"),
        'projectName': str(raw['projectName']).strip(),
        'location': str(raw['location']) if raw.get('location') else None,
        'units': units,
        'recommendedStandard': standard,
        'envelope': {
            'designPressure': sanitize_number(envelope.get('designPressure'), 0.0),
            'designVacuum': sanitize_number(envelope.get('designVacuum'), 0.0),
        },
        'designCases': None,
        'service': None,
        'geometry': None,
        'materials': None,
    }

    cases = raw.get('designCases')
    if isinstance(cases, dict):
        project['designCases'] = {case.value: bool(cases.get(case.value)) for case in DesignCase}

    service = raw.get('service')
    if isinstance(service, dict):
        heights_raw = _mapping(service.get('liquidHeights'))
        project['service'] = {
            'storedProduct': str(service['storedProduct']) if service.get('storedProduct') else None,
            'specificGravity': sanitize_number(service.get('specificGravity'), 1.0),
            'corrosionAllowance': sanitize_number(
                service.get('corrosionAllowance'), DEFAULT_CORROSION_ALLOWANCE[units]
            ),
            'liquidHeights': {
                case.value: sanitize_number(heights_raw[case.value], 0.0)
                for case in DesignCase if case.value in heights_raw
            },
        }

    geometry = raw.get('geometry')
    if isinstance(geometry, dict):
        project['geometry'] = {
            'diameter': sanitize_number(geometry.get('diameter'), 0.0),
            'shellHeight': sanitize_number(geometry.get('shellHeight'), 0.0),
            'courses': _positive_list(geometry.get('courses')),
        }

    materials = raw.get('materials')
    if isinstance(materials, dict):
        design_stress = sanitize_number(materials.get('allowableStressDesign'), 0.0)
        thicknesses = materials.get('courseNominalThickness')
        if thicknesses is None:
            thicknesses = materials.get('adoptedThicknesses')
        project['materials'] = {
            'allowableStressDesign': design_stress,
            'allowableStressTest': sanitize_number(materials.get('allowableStressTest'), design_stress),
            'jointEfficiency': sanitize_number(materials.get('jointEfficiency'), 1.0),
            'minNominalThickness': sanitize_number(
                materials.get('minNominalThickness'), DEFAULT_MIN_THICKNESS[units]
            ),
            'courseNominalThickness': _positive_list(thicknesses),
        }

    return project


def get_active_cases(project: Dict) -> List[DesignCase]:
    """Enabled design cases in canonical order; operating alone if none are set."""
    flags = project.get('designCases')
    if not flags:
        return [DesignCase.OPERATING]
    return [case for case in DesignCase if flags.get(case.value)]


def build_shell_input(project: Dict) -> Optional[ShellCalcInput]:
    """
    Build the shell engine input from a sanitized project.

    Returns:
        ShellCalcInput, or None when geometry, service or materials data is
        missing or the thickness list does not match the course list
    """
    geometry = project.get('geometry') or {}
    service = project.get('service') or {}
    materials = project.get('materials')

    if not geometry.get('diameter'):
        return None
    if not geometry.get('courses'):
        return None
    if not service.get('specificGravity'):
        return None
    if service.get('corrosionAllowance') is None:
        return None
    if not materials:
        return None
    standard = project.get('recommendedStandard') or 'API_650'
    if standard not in SUPPORTED_STANDARDS:
        return None

    adopted = materials.get('courseNominalThickness') or []
    if len(adopted) != len(geometry['courses']):
        return None

    heights = service.get('liquidHeights') or {}
    active_cases = [
        ShellCaseInput(case=case, liquid_height=heights.get(case.value, 0.0))
        for case in get_active_cases(project)
    ]

    return ShellCalcInput(
        units=project.get('units', 'SI'),
        standard=standard,
        diameter=geometry['diameter'],
        courses=geometry['courses'],
        specific_gravity=service['specificGravity'],
        corrosion_allowance=service['corrosionAllowance'],
        design_pressure=(project.get('envelope') or {}).get('designPressure', 0.0),
        allowable_stress_design=materials['allowableStressDesign'],
        allowable_stress_test=materials['allowableStressTest'],
        joint_efficiency=materials['jointEfficiency'],
        min_nominal_thickness=materials['minNominalThickness'],
        adopted_thicknesses=adopted,
        active_cases=active_cases,
    )


def load_project(path: str) -> Optional[Dict]:
    """Read and sanitize a project JSON file; None if it is unreadable."""
    try:
        with open(path, 'r', encoding='utf-8') as f:
            raw = json.load(f)
    except (OSError, ValueError):
        # ValueError covers both JSONDecodeError and UnicodeDecodeError
        return None
    return sanitize_project(raw)


def save_project(project: Dict, path: str) -> None:
    """Write a project to JSON, stamping updatedAt."""
    record = dict(project)
    record['version'] = PROJECT_VERSION
    record['updatedAt'] = datetime.now(timezone.utc).isoformat()
    with open(path, 'w', encoding='utf-8') as f:
        json.dump(record, f, indent=2)
