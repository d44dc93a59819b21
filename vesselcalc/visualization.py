"""
Visualization module for tank shell and heat exchanger results using Plotly.

Features:
- Thickness profile per course (required vs adopted vs floor)
- Utilization bar chart with the 1.0 limit
- Shell-side pressure drop breakdown (Bell-Delaware components)
"""

import math
from typing import List

import plotly.graph_objects as go

from .heat_exchanger import CalculationResult
from .shell_thickness import ShellCalcResult, ShellStatus, Units


def _finite_or_none(values: List[float]) -> List:
    # Plotly leaves a gap for None; inf would break the axis range
    return [v if math.isfinite(v) else None for v in values]


def thickness_profile_figure(result: ShellCalcResult) -> go.Figure:
    """
    Create a per-course thickness chart.

    Args:
        result: Shell thickness result

    Returns:
        Plotly Figure object
    """
    unit = "in" if result.units is Units.US else "mm"
    labels = [f"Course {c.course_no}" for c in result.results]

    fig = go.Figure()

    fig.add_trace(go.Bar(
        x=labels,
        y=_finite_or_none([c.t_required for c in result.results]),
        name='t_required',
        marker_color='steelblue',
        hovertemplate=f'%{{x}}<br>Required: %{{y:.2f}} {unit}<extra></extra>'
    ))

    fig.add_trace(go.Bar(
        x=labels,
        y=_finite_or_none([c.t_adopted for c in result.results]),
        name='t_adopted',
        marker_color=['seagreen' if c.status is ShellStatus.OK else 'crimson' for c in result.results],
        hovertemplate=f'%{{x}}<br>Adopted: %{{y:.2f}} {unit}<extra></extra>'
    ))

    if math.isfinite(result.min_thickness_floor):
        fig.add_hline(y=result.min_thickness_floor, line_dash="dash", line_color="orange",
                      annotation_text=f"Min thickness floor ({result.min_thickness_floor:.2f} {unit})",
                      annotation_position="right")

    fig.update_layout(
        template='plotly_white',
        title=f'Shell Thickness by Course<br>{result.method}',
        xaxis_title='Course (bottom to top)',
        yaxis_title=f'Thickness ({unit})',
        barmode='group',
        showlegend=True,
        height=450
    )

    return fig


def utilization_figure(result: ShellCalcResult) -> go.Figure:
    """Create a utilization (t_required / t_adopted) bar chart per course."""
    labels = [f"Course {c.course_no}" for c in result.results]
    values = _finite_or_none([c.utilization for c in result.results])

    fig = go.Figure()
    fig.add_trace(go.Bar(
        x=labels,
        y=values,
        name='Utilization',
        marker_color=['seagreen' if c.status is ShellStatus.OK else 'crimson' for c in result.results],
        hovertemplate='%{x}<br>Utilization: %{y:.3f}<extra></extra>'
    ))

    fig.add_hline(y=1.0, line_dash="dash", line_color="red",
                  annotation_text="Limit (1.0)", annotation_position="right")

    fig.update_layout(
        template='plotly_white',
        title='Course Utilization',
        xaxis_title='Course (bottom to top)',
        yaxis_title='t_required / t_adopted',
        showlegend=False,
        height=400
    )

    return fig


def shell_dp_breakdown_figure(result: CalculationResult) -> go.Figure:
    """Create a bar chart of the shell-side pressure drop components in kPa."""
    bd = result.bell_delaware
    components = {
        'Cross-flow': bd.dp_cross,
        'Window': bd.dp_window,
        'Leakage': bd.dp_leak,
        'Bypass': bd.dp_bypass,
        'End zones': bd.dp_end,
    }

    fig = go.Figure()
    fig.add_trace(go.Bar(
        x=list(components.keys()),
        y=_finite_or_none([v / 1000 for v in components.values()]),
        name='ΔP',
        marker_color='steelblue',
        hovertemplate='%{x}<br>ΔP: %{y:.2f} kPa<extra></extra>'
    ))

    fig.update_layout(
        template='plotly_white',
        title=f'Shell-Side Pressure Drop Breakdown<br>Total: {result.shell_side.pressure_drop / 1000:.2f} kPa',
        xaxis_title='Component',
        yaxis_title='Pressure Drop (kPa)',
        showlegend=False,
        height=400
    )

    return fig
