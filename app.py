#!/usr/bin/env python3
"""
Streamlit web application for the Vessel Calc heat exchanger quick calculator.
Provides an interactive interface for shell-and-tube sizing and the U convergence sweep.
"""

import numpy as np
import pandas as pd
import plotly.graph_objects as go
import streamlit as st

from main import default_hx_inputs
from vesselcalc.fluid_properties import get_fluid_name, get_fluid_options, get_fluid_properties
from vesselcalc.heat_exchanger import FluidProperties, ShellSpecs, ShellType, TubeSpecs, perform_calculation
from vesselcalc.hx_tables import get_fouling_options, get_fouling_resistance
from vesselcalc.reporting import bell_delaware_dataframe, format_number, hx_design_checks, hx_summary_dataframe
from vesselcalc.visualization import shell_dp_breakdown_figure

# Page configuration
st.set_page_config(
    page_title="Heat Exchanger Quick Calculator",
    page_icon="🔥",
    layout="wide",
    initial_sidebar_state="expanded"
)


def stream_inputs(title: str, defaults: FluidProperties, default_fluid: str, default_fouling: str,
                  key: str) -> FluidProperties:
    """Sidebar block for one stream."""
    st.subheader(title)
    fluid_options = get_fluid_options()
    fluid_names = [get_fluid_name(f) for f in fluid_options]

    selected_name = st.selectbox(
        "Fluid Type", fluid_names, index=fluid_options.index(default_fluid), key=f"{key}_fluid"
    )
    fluid = fluid_options[fluid_names.index(selected_name)]
    cp, mu, k, rho = get_fluid_properties(fluid)

    mass_flow = st.number_input("Mass Flow (kg/s)", min_value=0.0, value=defaults.mass_flow,
                                step=0.1, key=f"{key}_flow")
    temp_in = st.number_input("Inlet (°C)", value=defaults.temp_in, step=1.0, key=f"{key}_in")
    temp_out = st.number_input("Outlet (°C)", value=defaults.temp_out, step=1.0, key=f"{key}_out")
    allowable_dp = st.number_input("Allowable ΔP (bar)", min_value=0.0, value=defaults.allowable_dp,
                                   step=0.1, key=f"{key}_dp")

    fouling_options = get_fouling_options()
    fouling = st.selectbox("Fouling Service", fouling_options,
                           index=fouling_options.index(default_fouling), key=f"{key}_fouling")

    return FluidProperties(
        label=selected_name, mass_flow=mass_flow, temp_in=temp_in, temp_out=temp_out,
        allowable_dp=allowable_dp, fouling_resistance=get_fouling_resistance(fouling),
        cp=cp, mu=mu, k=k, rho=rho,
    )


def create_u_sweep_chart(hot, cold, tube, shell, u_assume):
    """Calculated Uo against the assumed U; the design converges where they cross."""
    u_values = np.linspace(max(50.0, u_assume * 0.3), u_assume * 2.0, 40)
    uo_values = [perform_calculation(hot, cold, tube, shell, float(u)).overall_uo for u in u_values]

    fig = go.Figure()
    fig.add_trace(go.Scatter(
        x=u_values,
        y=uo_values,
        mode='lines',
        name='Calculated Uo',
        line=dict(color='blue', width=3)
    ))
    fig.add_trace(go.Scatter(
        x=u_values,
        y=u_values,
        mode='lines',
        name='Uo = U assumed',
        line=dict(color='gray', dash='dash')
    ))
    fig.add_vline(x=u_assume, line_dash="dot", line_color="orange",
                  annotation_text=f"Assumed {u_assume:.0f}")

    fig.update_layout(
        title='Calculated vs Assumed Overall Coefficient',
        xaxis_title='Assumed U (W/m²·K)',
        yaxis_title='Calculated Uo (W/m²·K)',
        showlegend=True,
        height=450
    )

    return fig


def main():
    """Main Streamlit application."""
    hot_default, cold_default, tube_default, shell_default, u_default = default_hx_inputs()

    st.title("🔥 Heat Exchanger Quick Calculator")
    st.markdown("**Shell-and-tube sizing with Kern correlations and Bell-Delaware corrections (SI units)**")
    st.divider()

    with st.sidebar:
        st.header("⚙️ Process Streams")
        hot = stream_inputs("🔥 Hot Stream (shell side)", hot_default, "light_oil", "light_hydrocarbon", "hot")
        cold = stream_inputs("❄️ Cold Stream (tube side)", cold_default, "water", "cooling_water", "cold")

        st.header("📐 Geometry")
        tube_od = st.number_input("Tube OD (mm)", min_value=5.0, value=tube_default.outer_diameter * 1000, step=1.0)
        tube_id = st.number_input("Tube ID (mm)", min_value=1.0, value=tube_default.inner_diameter * 1000, step=1.0)
        tube_length = st.number_input("Tube Length (m)", min_value=0.5, value=tube_default.length, step=0.1)
        tube_k = st.number_input("Tube Conductivity (W/m·K)", min_value=1.0,
                                 value=tube_default.material_conductivity, step=1.0)
        pitch_type = st.selectbox("Pitch Pattern", ["triangular", "square"])
        pitch_ratio = st.number_input("Pitch Ratio (pt / do)", min_value=1.1, value=tube_default.pitch_ratio, step=0.05)

        shell_type = st.selectbox("Head Type", [t.value for t in ShellType])
        shell_passes = st.number_input("Shell Passes", min_value=0, max_value=2, value=shell_default.passes, step=1)
        tube_passes = st.selectbox("Tube Passes", [1, 2, 4, 6, 8], index=1)
        baffle_ratio = st.slider("Baffle Spacing / Shell Diameter", 0.2, 1.0, shell_default.baffle_ratio, 0.05)
        baffle_cut = st.slider("Baffle Cut (%)", 15, 45, int(shell_default.baffle_cut), 1)

        u_assume = st.number_input("Assumed U (W/m²·K)", min_value=10.0, value=u_default, step=10.0)

        st.divider()
        run_sizing = st.button("🚀 Size Exchanger", type="primary", use_container_width=True)

    if run_sizing:
        tube = TubeSpecs(
            outer_diameter=tube_od / 1000, inner_diameter=tube_id / 1000, length=tube_length,
            thickness=(tube_od - tube_id) / 2000, material="Custom",
            material_conductivity=tube_k, pitch_type=pitch_type, pitch_ratio=pitch_ratio,
        )
        shell = ShellSpecs(
            type=shell_type, passes=int(shell_passes), tube_passes=int(tube_passes),
            baffle_ratio=baffle_ratio, baffle_cut=float(baffle_cut),
        )

        with st.spinner("Sizing exchanger..."):
            result = perform_calculation(hot, cold, tube, shell, u_assume)
            checks = hx_design_checks(result, hot, cold)

        st.header("🔧 Sizing Results")

        col1, col2, col3, col4 = st.columns(4)
        with col1:
            st.metric("Heat Load", f"{format_number(result.heat_load / 1000, 1)} kW")
            st.metric("Cold Flow Needed", f"{format_number(result.cold_flowrate, 3)} kg/s")
        with col2:
            st.metric("Tubes", format_number(result.num_tubes, 0))
            st.metric("Shell Diameter", f"{format_number(result.shell_diameter, 3)} m")
        with col3:
            st.metric("Tube ΔP", f"{format_number(result.tube_side.pressure_drop / 1000)} kPa")
            st.metric("Shell ΔP", f"{format_number(result.shell_side.pressure_drop / 1000)} kPa")
        with col4:
            st.metric("Uo", f"{format_number(result.overall_uo, 1)} W/m²·K")
            st.metric("Deviation", f"{format_number(result.deviation, 1)}%")

        if checks['acceptable']:
            st.success("✅ Design acceptable: U within ±30% and both pressure drops within allowable.")
        else:
            for warning in checks['warnings']:
                st.warning(f"⚠️ {warning}")

        col1, col2 = st.columns(2)
        with col1:
            st.subheader("Detailed Results")
            summary_df = hx_summary_dataframe(result)
            summary_df['Value'] = summary_df['Value'].apply(lambda x: format_number(x, 3))
            st.dataframe(summary_df, use_container_width=True, hide_index=True)
        with col2:
            st.subheader("Bell-Delaware Factors")
            bd_df = bell_delaware_dataframe(result)
            bd_df['Value'] = bd_df['Value'].apply(lambda x: format_number(x, 3))
            st.dataframe(bd_df, use_container_width=True, hide_index=True)

        st.header("📈 Design Charts")
        tab1, tab2 = st.tabs(["Shell-Side ΔP Breakdown", "U Convergence"])

        with tab1:
            st.plotly_chart(shell_dp_breakdown_figure(result), use_container_width=True)

        with tab2:
            st.plotly_chart(create_u_sweep_chart(hot, cold, tube, shell, u_assume), use_container_width=True)
            st.caption("Re-run with an assumed U near the crossing point to converge the design.")

        inputs_df = pd.DataFrame([
            {'Stream': 'Hot (shell)', 'Fluid': hot.label, 'Flow (kg/s)': hot.mass_flow,
             'In (°C)': hot.temp_in, 'Out (°C)': hot.temp_out, 'Rf (m²·K/W)': hot.fouling_resistance},
            {'Stream': 'Cold (tube)', 'Fluid': cold.label, 'Flow (kg/s)': cold.mass_flow,
             'In (°C)': cold.temp_in, 'Out (°C)': cold.temp_out, 'Rf (m²·K/W)': cold.fouling_resistance},
        ])
        with st.expander("Input Summary"):
            st.dataframe(inputs_df, use_container_width=True, hide_index=True)

    else:
        st.info("👈 Configure the streams and geometry in the sidebar and click 'Size Exchanger' to begin.")

        st.header("📋 About This Tool")
        st.markdown("""
        **🔧 Method:**
        - Duty from the hot stream, cold flow back-calculated from the cold temperature rise
        - Counter-current LMTD with the 1-shell-pass correction factor F
        - Tube count from the required area, bundle diameter from the pitch constants
        - Tube-side coefficient from J-factor tables by Reynolds number and L/D
        - Shell-side ideal coefficient corrected by Jc, Jl, Jb, Js, Jr

        **📈 Checks:**
        - Calculated Uo within ±30% of the assumed U
        - Tube-side and shell-side ΔP within the allowable values
        """)


if __name__ == "__main__":
    main()
