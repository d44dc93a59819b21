#!/usr/bin/env python3
"""
Vessel Calc - Tank Shell and Heat Exchanger CLI Calculator

Features:
- API 650 / API 620 course-by-course shell thickness from a project file
- Quick shell check from typed inputs
- Shell-and-tube heat exchanger quick sizing (Kern + Bell-Delaware)
- CSV export of course results

Usage:
  python main.py                         # interactive menu
  python main.py --project tank.json     # run a saved project
  python main.py --project tank.json --csv shell.csv
  python main.py --project tank.json --save tank-clean.json
  python main.py --hx                    # exchanger sizing with default inputs
"""

import argparse
import sys
from typing import Dict, List, Optional, Tuple

from vesselcalc.design_cases import DesignCase
from vesselcalc.fluid_properties import get_fluid_name, get_fluid_options, get_fluid_properties
from vesselcalc.geometry import (
    default_liquid_heights,
    generate_courses,
    geometry_warnings,
    parse_float_list,
)
from vesselcalc.heat_exchanger import (
    FluidProperties,
    ShellSpecs,
    TubeSpecs,
    perform_calculation,
)
from vesselcalc.plate_lookup import suggest_adopted_thicknesses
from vesselcalc.project import build_shell_input, load_project, save_project
from vesselcalc.reporting import (
    format_number,
    hx_design_checks,
    min_floor_note,
    shell_results_csv,
    shell_summary,
    thickness_unit,
)
from vesselcalc.shell_thickness import ShellCalcInput, ShellCaseInput, run_shell_thickness


def default_hx_inputs() -> Tuple[FluidProperties, FluidProperties, TubeSpecs, ShellSpecs, float]:
    """Reference exchanger: light oil cooled by water, 10 kg/s from 100 to 60 °C."""
    hot = FluidProperties(
        label="Light Hydrocarbon Oil", mass_flow=10.0, temp_in=100.0, temp_out=60.0,
        allowable_dp=0.7, fouling_resistance=0.0002,
        cp=2200.0, mu=0.001, k=0.15, rho=800.0,
    )
    cold = FluidProperties(
        label="Water", mass_flow=10.526, temp_in=30.0, temp_out=50.0,
        allowable_dp=0.7, fouling_resistance=0.0002,
        cp=4180.0, mu=0.0008, k=0.6, rho=1000.0,
    )
    tube = TubeSpecs(
        outer_diameter=0.02, inner_diameter=0.016, length=4.88, thickness=0.002,
        material="Carbon Steel", material_conductivity=50.0,
        pitch_type="triangular", pitch_ratio=1.25,
    )
    shell = ShellSpecs(type="Fixed", passes=1, tube_passes=2, baffle_ratio=0.4, baffle_cut=25.0)
    return hot, cold, tube, shell, 500.0


def display_welcome():
    """Display welcome message and features."""
    print("="*70)
    print("🛢️  VESSEL CALC")
    print("="*70)
    print("Storage tank shell thickness and heat exchanger sizing tool")
    print("\nFeatures:")
    print("• API 650 one-foot method / API 620 hoop stress shell courses")
    print("• Governing design case per course with minimum thickness floor")
    print("• Shell-and-tube exchanger sizing with Bell-Delaware corrections")
    print("• CSV export of course results")
    print("="*70)


def get_menu_choice() -> int:
    """Get main menu selection from user."""
    print("\n🔧 CALCULATION OPTIONS:")
    print("1. Tank Shell from Project File")
    print("2. Quick Tank Shell Check")
    print("3. Heat Exchanger Quick Sizing")
    print("4. Web Interface Help")
    print("5. Exit")

    while True:
        try:
            choice = input("\nSelect option [1-5]: ").strip()
            if choice in ['1', '2', '3', '4', '5']:
                return int(choice)
            else:
                print("Please enter 1, 2, 3, 4, or 5")
        except (ValueError, KeyboardInterrupt):
            print("\nOperation cancelled by user.")
            sys.exit(0)


def prompt_float(label: str, default: Optional[float] = None, minimum: Optional[float] = None) -> float:
    """Prompt until a valid number is entered."""
    suffix = f" [default {default}]" if default is not None else ""
    while True:
        raw = input(f"{label}{suffix}: ").strip()
        if not raw and default is not None:
            return default
        try:
            value = float(raw)
        except ValueError:
            print("Please enter a valid number.")
            continue
        if minimum is not None and value < minimum:
            print(f"Value must be at least {minimum}.")
            continue
        return value


def prompt_list(label: str, default: Optional[str] = None) -> List[float]:
    suffix = f" [default {default}]" if default else ""
    while True:
        raw = input(f"{label}{suffix}: ").strip() or (default or "")
        try:
            return parse_float_list(raw)
        except ValueError as e:
            print(f"❌ {e}")


def print_shell_results(result, csv_path: Optional[str] = None):
    """Print the course table, notes and status summary."""
    unit = thickness_unit(result.units)

    print("\n" + "="*78)
    print(f"📊 SHELL THICKNESS RESULTS - {result.method}")
    print("="*78)
    print(f"{'Course':<8} {'Governing':<18} {'t_calc':<10} {'t_req':<16} {'t_adopt':<10} {'Util':<8} {'Status'}")
    print("-" * 78)

    for course in result.results:
        t_req = format_number(course.t_required)
        if course.is_min_controlled:
            t_req += " (min)"
        print(
            f"{course.course_no:<8} {course.governing_case.title:<18} "
            f"{format_number(course.t_calc_governing):<10} {t_req:<16} "
            f"{format_number(course.t_adopted):<10} {format_number(course.utilization, 3):<8} "
            f"{course.status.value}"
        )

    print(f"\nThicknesses in {unit}. Min thickness floor: {format_number(result.min_thickness_floor)} {unit}")

    note = min_floor_note(result)
    if note:
        print(f"ℹ️  {note}")
    for line in result.notes:
        print(f"• {line}")

    summary = shell_summary(result)
    if summary['all_ok']:
        print(f"\n✅ All {summary['course_count']} courses OK "
              f"(max utilization {format_number(summary['max_utilization'], 3)})")
    else:
        failing = ", ".join(str(n) for n in summary['failing_courses'])
        print(f"\n⚠️  Courses NOT OK: {failing}")
        suggested = suggest_adopted_thicknesses(result)
        print("   Suggested standard plates: " + ", ".join(format_number(t) for t in suggested) + f" {unit}")

    if csv_path:
        with open(csv_path, 'w', encoding='utf-8', newline='') as f:
            f.write(shell_results_csv(result))
        print(f"✅ Course results written to {csv_path}")


def run_project_file(path: str, csv_path: Optional[str] = None, save_path: Optional[str] = None) -> bool:
    """Run the shell engine on a saved project. Returns True on success."""
    project = load_project(path)
    if project is None:
        print(f"❌ Could not read a valid project from {path}")
        return False

    shell_input = build_shell_input(project)
    if shell_input is None:
        print("❌ Project is missing geometry, service or material data, "
              "or the thickness list does not match the courses.")
        return False

    print(f"\n🛢️  Project: {project['projectName']} ({project['units']}, {project['recommendedStandard']})")

    geometry = project['geometry']
    heights = {case.case: case.liquid_height for case in shell_input.active_cases}
    length_unit = "ft" if project['units'] == 'US' else "m"
    if geometry['shellHeight'] > 0:
        for warning in geometry_warnings(geometry['shellHeight'], geometry['courses'], heights, length_unit):
            print(f"⚠️  {warning}")

    try:
        result = run_shell_thickness(shell_input)
    except ValueError as e:
        print(f"❌ {e}")
        return False

    print_shell_results(result, csv_path)

    if save_path:
        try:
            save_project(project, save_path)
        except OSError as e:
            print(f"❌ Could not write project to {save_path}: {e}")
            return False
        print(f"✅ Cleaned project written to {save_path}")
    return True


def get_quick_shell_inputs() -> Dict:
    """Get SI inputs for a quick API 650 shell check."""
    print("\n⚡ TANK INPUTS (SI, API 650):")

    diameter = prompt_float("Tank diameter (m)", 30.0, minimum=0.1)
    shell_height = prompt_float("Shell height (m)", 12.0, minimum=0.1)

    while True:
        num_courses = int(prompt_float("Number of courses", 5, minimum=1))
        typical = prompt_float("Typical course height (m)", 2.4, minimum=0.1)
        try:
            courses = generate_courses(shell_height, num_courses, typical)
            print("✅ Courses: " + ", ".join(f"{h:.3f}" for h in courses) + " m")
            break
        except ValueError as e:
            print(f"❌ {e}")

    specific_gravity = prompt_float("Specific gravity", 1.0, minimum=0.01)
    corrosion = prompt_float("Corrosion allowance (mm)", 2.0, minimum=0)
    min_nominal = prompt_float("Minimum nominal thickness (mm)", 6.0, minimum=0)
    stress_design = prompt_float("Allowable design stress Sd (MPa)", 160.0, minimum=1)
    stress_test = prompt_float("Allowable hydrotest stress St (MPa)", 171.0, minimum=1)
    joint_eff = prompt_float("Joint efficiency E", 1.0, minimum=0)

    while True:
        adopted = prompt_list("Adopted thicknesses bottom to top (mm)", ", ".join(["10"] * len(courses)))
        if len(adopted) == len(courses):
            break
        print(f"❌ Enter exactly {len(courses)} thicknesses.")

    return {
        'diameter': diameter,
        'shell_height': shell_height,
        'courses': courses,
        'specific_gravity': specific_gravity,
        'corrosion_allowance': corrosion,
        'min_nominal_thickness': min_nominal,
        'allowable_stress_design': stress_design,
        'allowable_stress_test': stress_test,
        'joint_efficiency': joint_eff,
        'adopted_thicknesses': adopted,
    }


def run_quick_shell():
    """Run the quick operating + hydrotest shell check."""
    print("\n🚀 QUICK TANK SHELL CHECK")
    inputs = get_quick_shell_inputs()

    heights = default_liquid_heights(inputs['shell_height'])
    active = [
        ShellCaseInput(DesignCase.OPERATING, heights[DesignCase.OPERATING]),
        ShellCaseInput(DesignCase.HYDROTEST, heights[DesignCase.HYDROTEST]),
    ]

    try:
        shell_input = ShellCalcInput(
            units="SI",
            standard="API_650",
            diameter=inputs['diameter'],
            courses=inputs['courses'],
            specific_gravity=inputs['specific_gravity'],
            corrosion_allowance=inputs['corrosion_allowance'],
            design_pressure=0.0,
            allowable_stress_design=inputs['allowable_stress_design'],
            allowable_stress_test=inputs['allowable_stress_test'],
            joint_efficiency=inputs['joint_efficiency'],
            min_nominal_thickness=inputs['min_nominal_thickness'],
            adopted_thicknesses=inputs['adopted_thicknesses'],
            active_cases=active,
        )
        result = run_shell_thickness(shell_input)
    except ValueError as e:
        print(f"❌ {e}")
        return

    print_shell_results(result)


def get_fluid_selection(role: str, default_idx: int) -> Tuple[str, float, float, float, float]:
    """Get fluid selection and properties."""
    print(f"\n💧 {role.upper()} FLUID:")
    fluid_options = get_fluid_options()

    for i, fluid_type in enumerate(fluid_options, 1):
        print(f"{i}. {get_fluid_name(fluid_type)}")

    while True:
        try:
            choice = input(f"Select fluid type [default {default_idx}]: ").strip() or str(default_idx)
            fluid_idx = int(choice) - 1
            if 0 <= fluid_idx < len(fluid_options):
                selected_fluid = fluid_options[fluid_idx]
                cp, mu, k, rho = get_fluid_properties(selected_fluid)
                print(f"✅ Using {get_fluid_name(selected_fluid)} "
                      f"(cp={cp} J/kg·K, μ={mu:.2e} Pa·s, k={k} W/m·K, ρ={rho} kg/m³)")
                return selected_fluid, cp, mu, k, rho
            else:
                print("Invalid selection. Please try again.")
        except ValueError:
            print("Please enter a valid number.")


def print_hx_results(result, hot: FluidProperties, cold: FluidProperties):
    print("\n" + "="*60)
    print("📊 HEAT EXCHANGER RESULTS")
    print("="*60)
    print(f"Heat Load: {format_number(result.heat_load / 1000, 1)} kW")
    print(f"Cold Flowrate: {format_number(result.cold_flowrate, 3)} kg/s")
    print(f"LMTD: {format_number(result.lmtd)} °C   F: {format_number(result.f_corr, 3)}   "
          f"Tm: {format_number(result.tm)} °C")
    print(f"Area Required: {format_number(result.area_required)} m²  "
          f"Tubes: {format_number(result.num_tubes, 0)}  Area: {format_number(result.area_considered)} m²")
    print(f"Bundle: {format_number(result.bundle_diameter, 3)} m  "
          f"Shell: {format_number(result.shell_diameter, 3)} m")

    print("\n🔧 Tube Side:")
    print(f"Velocity: {format_number(result.tube_side.velocity)} m/s  Re: {format_number(result.tube_side.re, 0)}  "
          f"hi: {format_number(result.tube_side.hi, 0)} W/m²·K  ΔP: {format_number(result.tube_side.pressure_drop / 1000)} kPa")
    print("\n🔧 Shell Side:")
    print(f"Velocity: {format_number(result.shell_side.velocity)} m/s  Re: {format_number(result.shell_side.re, 0)}  "
          f"hs: {format_number(result.shell_side.hs, 0)} W/m²·K  ΔP: {format_number(result.shell_side.pressure_drop / 1000)} kPa")

    print(f"\nOverall Uo: {format_number(result.overall_uo, 1)} W/m²·K  "
          f"Deviation: {format_number(result.deviation, 1)}%")

    checks = hx_design_checks(result, hot, cold)
    if checks['acceptable']:
        print("\n✅ Design acceptable")
    else:
        print("\n⚠️  DESIGN WARNINGS:")
        for warning in checks['warnings']:
            print(f"   {warning}")


def run_hx_sizing(interactive: bool = True):
    """Run heat exchanger sizing, optionally prompting for stream data."""
    print("\n🔥 HEAT EXCHANGER QUICK SIZING")
    hot, cold, tube, shell, u_assume = default_hx_inputs()

    if interactive:
        fluid_key, cp, mu, k, rho = get_fluid_selection("Hot (shell side)", 2)
        hot.label, hot.cp, hot.mu, hot.k, hot.rho = get_fluid_name(fluid_key), cp, mu, k, rho
        hot.mass_flow = prompt_float("Hot mass flow (kg/s)", hot.mass_flow, minimum=0)
        hot.temp_in = prompt_float("Hot inlet (°C)", hot.temp_in)
        hot.temp_out = prompt_float("Hot outlet (°C)", hot.temp_out)

        fluid_key, cp, mu, k, rho = get_fluid_selection("Cold (tube side)", 1)
        cold.label, cold.cp, cold.mu, cold.k, cold.rho = get_fluid_name(fluid_key), cp, mu, k, rho
        cold.temp_in = prompt_float("Cold inlet (°C)", cold.temp_in)
        cold.temp_out = prompt_float("Cold outlet (°C)", cold.temp_out)
        cold.mass_flow = prompt_float("Cold mass flow (kg/s)", cold.mass_flow, minimum=0)

        u_assume = prompt_float("Assumed U (W/m²·K)", u_assume, minimum=1)

    result = perform_calculation(hot, cold, tube, shell, u_assume)
    print_hx_results(result, hot, cold)


def show_web_interface_help():
    """Show information about the web interfaces."""
    print("\n🌐 WEB INTERFACE")
    print("="*50)
    print("For the tank wizard and interactive charts, use the web interface:")
    print()
    print("🚀 START WEB INTERFACE:")
    print("   python gradio_app.py            (tank shell + heat exchanger)")
    print("   streamlit run app.py            (heat exchanger quick calculator)")
    print()
    print("📊 WEB-ONLY FEATURES:")
    print("   • Thickness profile and utilization charts")
    print("   • Shell-side pressure drop breakdown")
    print("   • CSV download of course results")
    print()
    print("☁️  Port is taken from $PORT (default 7860); add --share for a public link.")


def main_calculator():
    """Main calculator flow control."""
    display_welcome()

    while True:
        choice = get_menu_choice()

        if choice == 1:
            path = input("Project file (JSON): ").strip()
            csv_path = input("CSV output file [leave blank to skip]: ").strip() or None
            run_project_file(path, csv_path)
        elif choice == 2:
            run_quick_shell()
        elif choice == 3:
            run_hx_sizing()
        elif choice == 4:
            show_web_interface_help()
        elif choice == 5:
            print("\n👋 Thank you for using Vessel Calc!")
            sys.exit(0)

        if input("\nRun another calculation? [Y/n]: ").lower() in ['n', 'no']:
            print("\n👋 Thank you for using Vessel Calc!")
            break


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Vessel Calc - tank shell and heat exchanger sizing")
    parser.add_argument("--project", metavar="FILE", help="Run the shell calculation for a saved project JSON")
    parser.add_argument("--csv", metavar="FILE", help="Write the course results to a CSV file (with --project)")
    parser.add_argument("--save", metavar="FILE", help="Write the cleaned project JSON after a successful run (with --project)")
    parser.add_argument("--hx", action="store_true", help="Size the reference heat exchanger and exit")
    return parser.parse_args(argv)


if __name__ == "__main__":
    args = parse_args()
    try:
        if args.project:
            sys.exit(0 if run_project_file(args.project, args.csv, args.save) else 1)
        elif args.hx:
            run_hx_sizing(interactive=False)
        else:
            main_calculator()
    except KeyboardInterrupt:
        print("\n\n🛑 Operation cancelled by user.")
        sys.exit(0)
