#!/usr/bin/env python3
"""
Gradio web app for Vessel Calc.

Features:
- Tank shell wizard: course table, design cases, API 650 / API 620
- Governing case and min thickness floor per course, CSV download
- Shell-and-tube heat exchanger sizing with Bell-Delaware breakdown
- Plotly interactive charts

Run locally:
  python gradio_app.py

Run with a public share link:
  python gradio_app.py --share
"""
import argparse
import os
import tempfile
from typing import List, Tuple

import gradio as gr
import pandas as pd

from main import default_hx_inputs
from vesselcalc.design_cases import DesignCase, get_case_options, parse_case
from vesselcalc.fluid_properties import get_fluid_name, get_fluid_options, get_fluid_properties
from vesselcalc.geometry import default_liquid_heights, generate_courses, geometry_warnings, parse_float_list
from vesselcalc.heat_exchanger import FluidProperties, ShellSpecs, ShellType, TubeSpecs, perform_calculation
from vesselcalc.hx_tables import get_fouling_options, get_fouling_resistance
from vesselcalc.plate_lookup import suggest_adopted_thicknesses
from vesselcalc.reporting import (
    bell_delaware_dataframe,
    format_number,
    hx_design_checks,
    hx_summary_dataframe,
    length_unit,
    min_floor_note,
    shell_display_dataframe,
    shell_results_csv,
    shell_summary,
    thickness_unit,
)
from vesselcalc.shell_thickness import ShellCalcInput, ShellCaseInput, run_shell_thickness
from vesselcalc.visualization import shell_dp_breakdown_figure, thickness_profile_figure, utilization_figure

CASE_KEYS = get_case_options()


def _warnings_markdown(warnings: List[str]) -> str:
    if not warnings:
        return ""
    return "\n".join(["\n### ⚠️ Warnings"] + [f"- {w}" for w in warnings])


def _as_float(value) -> float:
    """Cleared number fields arrive as None; treat them as NaN so range checks reject them."""
    return float('nan') if value is None else float(value)


def compute_shell_results(
    units: str,
    standard: str,
    diameter: float,
    shell_height: float,
    courses_text: str,
    adopted_text: str,
    specific_gravity: float,
    corrosion_allowance: float,
    design_pressure: float,
    allowable_stress_design: float,
    allowable_stress_test: float,
    joint_efficiency: float,
    min_nominal_thickness: float,
    active_case_keys: List[str],
    liquid_heights: List[float],
) -> Tuple:
    """Run the shell engine and build the summary, table, CSV file and charts."""
    warnings = []
    empty = (pd.DataFrame(), None, None, None)

    try:
        courses = parse_float_list(courses_text)
        adopted = parse_float_list(adopted_text)
    except ValueError as e:
        return (_warnings_markdown([str(e)]),) + empty

    heights = dict(zip(CASE_KEYS, liquid_heights))
    active = [
        ShellCaseInput(case=key, liquid_height=float(heights.get(key) or 0.0))
        for key in CASE_KEYS if key in (active_case_keys or [])
    ]

    active_heights = {c.case: c.liquid_height for c in active}
    if shell_height:
        warnings.extend(geometry_warnings(shell_height, courses, active_heights, length_unit(units)))

    try:
        shell_input = ShellCalcInput(
            units=units,
            standard=standard,
            diameter=_as_float(diameter),
            courses=courses,
            specific_gravity=_as_float(specific_gravity),
            corrosion_allowance=_as_float(corrosion_allowance),
            design_pressure=design_pressure or 0.0,
            allowable_stress_design=_as_float(allowable_stress_design),
            allowable_stress_test=_as_float(allowable_stress_test),
            joint_efficiency=_as_float(joint_efficiency),
            min_nominal_thickness=_as_float(min_nominal_thickness),
            adopted_thicknesses=adopted,
            active_cases=active,
        )
        result = run_shell_thickness(shell_input)
    except ValueError as e:
        warnings.append(str(e))
        return (_warnings_markdown(warnings),) + empty

    unit = thickness_unit(result.units)
    summary = shell_summary(result)

    summary_parts = [
        f"### {result.method}",
        f"- **Courses**: {result.course_count}",
        f"- **Min thickness floor**: {format_number(result.min_thickness_floor)} {unit}",
        f"- **Max utilization**: {format_number(summary['max_utilization'], 3)}",
        f"- **Status**: {'✅ All courses OK' if summary['all_ok'] else '❌ Courses NOT OK: ' + ', '.join(map(str, summary['failing_courses']))}",
    ]
    if not summary['all_ok']:
        suggested = suggest_adopted_thicknesses(result)
        summary_parts.append(
            "- **Suggested standard plates**: " + ", ".join(format_number(t) for t in suggested) + f" {unit}"
        )

    note = min_floor_note(result)
    if note:
        summary_parts.append(f"\n> {note}")

    summary_parts.append("\n### Notes")
    summary_parts.extend(f"- {line}" for line in result.notes)
    summary_md = "\n".join(summary_parts) + _warnings_markdown(warnings)

    csv_file = tempfile.NamedTemporaryFile(
        mode='w', suffix='.csv', prefix='shell_courses_', delete=False, encoding='utf-8', newline=''
    )
    with csv_file:
        csv_file.write(shell_results_csv(result))

    return (
        summary_md,
        shell_display_dataframe(result),
        csv_file.name,
        thickness_profile_figure(result),
        utilization_figure(result),
    )


def compute_hx_results(
    hot_fluid: str, hot_flow: float, hot_in: float, hot_out: float, hot_dp: float, hot_fouling: str,
    cold_fluid: str, cold_flow: float, cold_in: float, cold_out: float, cold_dp: float, cold_fouling: str,
    tube_od_mm: float, tube_id_mm: float, tube_length: float, tube_k: float,
    pitch_type: str, pitch_ratio: float,
    shell_type: str, shell_passes: int, tube_passes: int, baffle_ratio: float, baffle_cut: float,
    u_assume: float,
) -> Tuple:
    """Run the exchanger engine and build the summary, tables and chart."""
    hot_flow, hot_in, hot_out, hot_dp = map(_as_float, (hot_flow, hot_in, hot_out, hot_dp))
    cold_flow, cold_in, cold_out, cold_dp = map(_as_float, (cold_flow, cold_in, cold_out, cold_dp))
    tube_od_mm, tube_id_mm, tube_length, tube_k, pitch_ratio = map(
        _as_float, (tube_od_mm, tube_id_mm, tube_length, tube_k, pitch_ratio)
    )
    baffle_ratio, baffle_cut, u_assume = map(_as_float, (baffle_ratio, baffle_cut, u_assume))
    try:
        hot_cp, hot_mu, hot_k, hot_rho = get_fluid_properties(hot_fluid)
        cold_cp, cold_mu, cold_k, cold_rho = get_fluid_properties(cold_fluid)

        hot = FluidProperties(
            label=get_fluid_name(hot_fluid), mass_flow=hot_flow, temp_in=hot_in, temp_out=hot_out,
            allowable_dp=hot_dp, fouling_resistance=get_fouling_resistance(hot_fouling),
            cp=hot_cp, mu=hot_mu, k=hot_k, rho=hot_rho,
        )
        cold = FluidProperties(
            label=get_fluid_name(cold_fluid), mass_flow=cold_flow, temp_in=cold_in, temp_out=cold_out,
            allowable_dp=cold_dp, fouling_resistance=get_fouling_resistance(cold_fouling),
            cp=cold_cp, mu=cold_mu, k=cold_k, rho=cold_rho,
        )
        tube = TubeSpecs(
            outer_diameter=tube_od_mm / 1000, inner_diameter=tube_id_mm / 1000, length=tube_length,
            thickness=(tube_od_mm - tube_id_mm) / 2000, material="Custom",
            material_conductivity=tube_k, pitch_type=pitch_type, pitch_ratio=pitch_ratio,
        )
        shell = ShellSpecs(
            type=shell_type, passes=int(_as_float(shell_passes)), tube_passes=int(tube_passes),
            baffle_ratio=baffle_ratio, baffle_cut=baffle_cut,
        )
    except ValueError as e:
        return _warnings_markdown([str(e)]), pd.DataFrame(), pd.DataFrame(), None

    result = perform_calculation(hot, cold, tube, shell, u_assume)
    checks = hx_design_checks(result, hot, cold)

    summary_parts = [
        "### Heat Exchanger Summary",
        f"- **Heat Load**: {format_number(result.heat_load / 1000, 1)} kW",
        f"- **Hot (shell side)**: {hot.label}, {hot_in}→{hot_out} °C",
        f"- **Cold (tube side)**: {cold.label}, {cold_in}→{cold_out} °C, "
        f"{format_number(result.cold_flowrate, 3)} kg/s required",
        f"- **Tubes**: {format_number(result.num_tubes, 0)} in a {format_number(result.shell_diameter, 3)} m shell",
        f"- **Uo**: {format_number(result.overall_uo, 1)} W/m²·K vs assumed {u_assume} "
        f"({format_number(result.deviation, 1)}%)",
        f"- **Status**: {'✅ Design acceptable' if checks['acceptable'] else '❌ Check warnings'}",
    ]

    summary_md = "\n".join(summary_parts) + _warnings_markdown(checks['warnings'])

    summary_df = hx_summary_dataframe(result)
    summary_df['Value'] = summary_df['Value'].apply(lambda x: format_number(x, 3))
    bd_df = bell_delaware_dataframe(result)
    bd_df['Value'] = bd_df['Value'].apply(lambda x: format_number(x, 3))

    return summary_md, summary_df, bd_df, shell_dp_breakdown_figure(result)


def update_default_heights(shell_height: float, *current_heights) -> List:
    """Fill blank liquid heights when the shell height changes; typed values stay."""
    heights = default_liquid_heights(shell_height or 0.0, dict(zip(CASE_KEYS, current_heights)))
    return [gr.update(value=heights[parse_case(key)]) for key in CASE_KEYS]


def fill_courses(shell_height: float, num_courses: float, typical_height: float):
    try:
        courses = generate_courses(shell_height, int(num_courses), typical_height)
    except ValueError as e:
        gr.Warning(str(e))
        return gr.update(), gr.update()
    return gr.update(value=", ".join(f"{h:g}" for h in courses)), gr.update(value=", ".join(["10"] * len(courses)))


def build_interface():
    """Build the tank shell and heat exchanger tabs."""
    fluid_keys = get_fluid_options()
    fouling_keys = get_fouling_options()
    hot, cold, tube, shell, u_default = default_hx_inputs()
    initial_heights = default_liquid_heights(12.0)

    with gr.Blocks(title="Vessel Calc", theme=gr.themes.Default()) as demo:
        gr.Markdown("# 🛢️ Vessel Calc")
        gr.Markdown(
            "Storage tank shell thickness (API 650 one-foot method / API 620 hoop stress) "
            "and shell-and-tube heat exchanger sizing."
        )

        with gr.Tab("Tank Shell"):
            with gr.Row():
                with gr.Column(scale=1):
                    gr.Markdown("## 📐 Geometry")
                    units = gr.Radio(choices=["SI", "US"], value="SI", label="Units")
                    standard = gr.Dropdown(choices=["API_650", "API_620"], value="API_650", label="Standard")
                    diameter = gr.Number(label="Diameter (m / ft)", value=30.0)
                    shell_height = gr.Number(label="Shell Height (m / ft)", value=12.0)

                    with gr.Row():
                        num_courses = gr.Number(label="Courses", value=5, precision=0)
                        typical_height = gr.Number(label="Typical Course Height", value=2.4)
                    generate_btn = gr.Button("Generate Courses")

                    courses_text = gr.Textbox(label="Course Heights, bottom to top", value="2.4, 2.4, 2.4, 2.4, 2.4")
                    adopted_text = gr.Textbox(label="Adopted Thicknesses incl. CA (mm / in)", value="10, 10, 10, 10, 10")

                    gr.Markdown("## 🧪 Service & Materials")
                    specific_gravity = gr.Number(label="Specific Gravity", value=1.0)
                    corrosion = gr.Number(label="Corrosion Allowance (mm / in)", value=2.0)
                    design_pressure = gr.Number(label="Design Pressure (kPa(g) / psi(g), API 620)", value=0.0)
                    stress_design = gr.Number(label="Allowable Design Stress Sd (MPa / psi)", value=160.0)
                    stress_test = gr.Number(label="Allowable Hydrotest Stress St (MPa / psi)", value=171.0)
                    joint_eff = gr.Number(label="Joint Efficiency E", value=1.0)
                    min_nominal = gr.Number(label="Min Nominal Thickness excl. CA (mm / in)", value=6.0)

                    gr.Markdown("## 📋 Design Cases")
                    active_cases = gr.CheckboxGroup(
                        choices=[(case.title, case.value) for case in DesignCase],
                        value=[DesignCase.OPERATING.value, DesignCase.HYDROTEST.value],
                        label="Active Cases",
                    )
                    height_inputs = [
                        gr.Number(label=f"Liquid Height: {case.title}", value=initial_heights[case])
                        for case in DesignCase
                    ]

                    shell_btn = gr.Button("🚀 Calculate Shell", variant="primary", size="lg")

                with gr.Column(scale=2):
                    shell_summary_md = gr.Markdown()
                    course_table = gr.Dataframe(label="Course Results", interactive=False)
                    csv_download = gr.File(label="Course Results CSV")
                    with gr.Row():
                        thickness_chart = gr.Plot(label="Thickness Profile")
                        util_chart = gr.Plot(label="Utilization")

            generate_btn.click(
                fn=fill_courses,
                inputs=[shell_height, num_courses, typical_height],
                outputs=[courses_text, adopted_text],
            )
            shell_height.change(fn=update_default_heights, inputs=[shell_height] + height_inputs,
                                outputs=height_inputs)

            def _on_run_shell(*values):
                fixed, heights = values[:14], values[14:]
                return compute_shell_results(*fixed, list(heights))

            shell_btn.click(
                fn=_on_run_shell,
                inputs=[
                    units, standard, diameter, shell_height, courses_text, adopted_text,
                    specific_gravity, corrosion, design_pressure, stress_design, stress_test,
                    joint_eff, min_nominal, active_cases,
                ] + height_inputs,
                outputs=[shell_summary_md, course_table, csv_download, thickness_chart, util_chart],
            )

        with gr.Tab("Heat Exchanger"):
            fluid_choices = [(get_fluid_name(k), k) for k in fluid_keys]
            with gr.Row():
                with gr.Column(scale=1):
                    gr.Markdown("## 🔥 Hot Stream (shell side)")
                    hot_fluid = gr.Dropdown(choices=fluid_choices, value="light_oil", label="Fluid")
                    hot_flow = gr.Number(label="Mass Flow (kg/s)", value=hot.mass_flow)
                    hot_in = gr.Number(label="Inlet (°C)", value=hot.temp_in)
                    hot_out = gr.Number(label="Outlet (°C)", value=hot.temp_out)
                    hot_dp = gr.Number(label="Allowable ΔP (bar)", value=hot.allowable_dp)
                    hot_fouling = gr.Dropdown(choices=fouling_keys, value="light_hydrocarbon", label="Fouling Service")

                    gr.Markdown("## ❄️ Cold Stream (tube side)")
                    cold_fluid = gr.Dropdown(choices=fluid_choices, value="water", label="Fluid")
                    cold_flow = gr.Number(label="Mass Flow (kg/s)", value=cold.mass_flow)
                    cold_in = gr.Number(label="Inlet (°C)", value=cold.temp_in)
                    cold_out = gr.Number(label="Outlet (°C)", value=cold.temp_out)
                    cold_dp = gr.Number(label="Allowable ΔP (bar)", value=cold.allowable_dp)
                    cold_fouling = gr.Dropdown(choices=fouling_keys, value="cooling_water", label="Fouling Service")

                    gr.Markdown("## ⚙️ Geometry")
                    tube_od = gr.Number(label="Tube OD (mm)", value=tube.outer_diameter * 1000)
                    tube_id = gr.Number(label="Tube ID (mm)", value=tube.inner_diameter * 1000)
                    tube_length = gr.Number(label="Tube Length (m)", value=tube.length)
                    tube_k = gr.Number(label="Tube Conductivity (W/m·K)", value=tube.material_conductivity)
                    pitch_type = gr.Dropdown(choices=["triangular", "square"], value="triangular", label="Pitch")
                    pitch_ratio = gr.Number(label="Pitch Ratio (pt / do)", value=tube.pitch_ratio)
                    shell_type = gr.Dropdown(choices=[t.value for t in ShellType], value=shell.type.value,
                                             label="Head Type")
                    shell_passes = gr.Number(label="Shell Passes", value=shell.passes, precision=0)
                    tube_passes = gr.Dropdown(choices=[1, 2, 4, 6, 8], value=shell.tube_passes, label="Tube Passes")
                    baffle_ratio = gr.Slider(minimum=0.2, maximum=1.0, step=0.05, value=shell.baffle_ratio,
                                             label="Baffle Spacing / Shell Diameter")
                    baffle_cut = gr.Slider(minimum=15, maximum=45, step=1, value=shell.baffle_cut,
                                           label="Baffle Cut (%)")
                    u_assume = gr.Number(label="Assumed U (W/m²·K)", value=u_default)

                    hx_btn = gr.Button("🚀 Size Exchanger", variant="primary", size="lg")

                with gr.Column(scale=2):
                    hx_summary_md = gr.Markdown()
                    with gr.Row():
                        hx_table = gr.Dataframe(label="Results", interactive=False)
                        bd_table = gr.Dataframe(label="Bell-Delaware Factors", interactive=False)
                    dp_chart = gr.Plot(label="Shell-Side ΔP Breakdown")

            hx_btn.click(
                fn=compute_hx_results,
                inputs=[
                    hot_fluid, hot_flow, hot_in, hot_out, hot_dp, hot_fouling,
                    cold_fluid, cold_flow, cold_in, cold_out, cold_dp, cold_fouling,
                    tube_od, tube_id, tube_length, tube_k, pitch_type, pitch_ratio,
                    shell_type, shell_passes, tube_passes, baffle_ratio, baffle_cut, u_assume,
                ],
                outputs=[hx_summary_md, hx_table, bd_table, dp_chart],
            )

    return demo


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Vessel Calc web interface")
    parser.add_argument("--share", action="store_true", help="Create a public share link")
    args = parser.parse_args()

    port = int(os.getenv("PORT", "7860"))
    print(f"🚀 Starting Vessel Calc on port {port}")
    build_interface().launch(server_name="0.0.0.0", server_port=port, share=args.share)
