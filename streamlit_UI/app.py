"""Streamlit front-end for the Hunllef fight simulator."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Any

import altair as alt
import pandas as pd
import streamlit as st

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from hunllef_core import (
    ARMOUR_TIERS,
    DEFAULT_OPTIONS,
    LEVEL_NAMES,
    PRAYER_LABELS,
    PRAYERS,
    PRESETS_FILENAME,
    WEAPON_LABELS,
    WEAPON_TIERS,
    WEAPONS,
    ConfigurationError,
    FightSimulationResult,
    SimulationSummary,
    histogram_frame,
    load_presets,
    quantile_table,
    run_fight_simulation,
    run_fish_sweep,
    sweep_frame,
    ticks_to_clock,
)

PRESET_CUSTOM_LABEL = "Custom"
PRESET_PATH = Path(__file__).resolve().parent / PRESETS_FILENAME
PRESETS = load_presets(PRESET_PATH)
LEVEL_LABELS = {
    "attack": "Attack",
    "strength": "Strength",
    "defence": "Defence",
    "ranged": "Ranged",
    "magic": "Magic",
    "prayer": "Prayer",
    "hp": "Hitpoints",
}


def option_key(name: str) -> str:
    return f"opt_{name}"


def reset_results() -> None:
    """Clear cached results so the UI reflects new inputs."""

    st.session_state.sim_result = None
    st.session_state.sweep_result = None
    st.session_state.sim_error = None


def ensure_session_state_defaults() -> None:
    """Populate Streamlit session state with expected default entries."""

    st.session_state.setdefault(option_key("trials"), 10_000)
    for name, value in DEFAULT_OPTIONS.items():
        if name in ("seed", "workers"):
            continue
        st.session_state.setdefault(option_key(name), value)
    st.session_state.setdefault("seed_input", 42)
    st.session_state.setdefault("use_max_ticks", True)
    st.session_state.setdefault("sim_result", None)
    st.session_state.setdefault("sweep_result", None)
    st.session_state.setdefault("sim_error", None)
    st.session_state.setdefault("selected_preset", PRESET_CUSTOM_LABEL)
    st.session_state.setdefault("last_applied_preset", PRESET_CUSTOM_LABEL)


def update_options_from_preset(selected_preset: str) -> bool:
    """Copy the selected preset into the option widgets, returning change status."""

    if selected_preset == st.session_state.last_applied_preset:
        return False
    if selected_preset != PRESET_CUSTOM_LABEL:
        for name, value in PRESETS[selected_preset].items():
            if name == "seed":
                if value is not None:
                    st.session_state.seed_input = value
                continue
            if name == "workers":
                continue
            if name == "max_ticks":
                st.session_state.use_max_ticks = bool(value)
                if value:
                    st.session_state[option_key(name)] = value
                continue
            st.session_state[option_key(name)] = value
    st.session_state.last_applied_preset = selected_preset
    return True


def render_level_inputs() -> None:
    """Render one number input per skill level."""

    columns = st.columns(4)
    for index, name in enumerate(LEVEL_NAMES):
        with columns[index % 4]:
            st.number_input(
                LEVEL_LABELS[name],
                min_value=1,
                max_value=99,
                step=1,
                key=option_key(name),
                on_change=reset_results,
            )


def render_setup_inputs() -> None:
    """Render weapon and prayer selectors for both loadouts plus gear tiers."""

    col1, col2 = st.columns(2)
    for column, slot in ((col1, "setup1"), (col2, "setup2")):
        with column:
            st.caption("1st setup" if slot == "setup1" else "2nd setup")
            st.selectbox(
                "Weapon",
                options=WEAPONS,
                key=option_key(slot),
                format_func=lambda name: WEAPON_LABELS.get(name, name),
                on_change=reset_results,
            )
            st.selectbox(
                "Prayer",
                options=PRAYERS,
                key=option_key(f"{slot}_prayer"),
                format_func=lambda name: PRAYER_LABELS.get(name, name),
                on_change=reset_results,
            )

    tier_col, armour_col = st.columns(2)
    tier_col.selectbox(
        "Weapon tier",
        options=list(WEAPON_TIERS),
        key=option_key("weapon_tier"),
        on_change=reset_results,
    )
    armour_col.selectbox(
        "Armour tier",
        options=list(ARMOUR_TIERS),
        key=option_key("armour"),
        on_change=reset_results,
    )


def render_fight_configuration() -> tuple[bool, bool]:
    """Render healing and Monte Carlo controls; return (simulate, sweep) requests."""

    with st.container(border=True):
        st.markdown('<div class="card-title">Fight settings</div>', unsafe_allow_html=True)
        food_col, eat_col = st.columns(2)
        food_col.number_input(
            "Fish",
            min_value=0,
            max_value=28,
            step=1,
            key=option_key("fish"),
            on_change=reset_results,
        )
        eat_col.number_input(
            "Eat below hp",
            min_value=0,
            max_value=99,
            step=1,
            key=option_key("eat_at_hp"),
            on_change=reset_results,
            disabled=bool(st.session_state[option_key("tick_eat")]),
        )
        st.checkbox(
            "Tick eat when hp is within the Hunllef max hit",
            key=option_key("tick_eat"),
            on_change=reset_results,
        )

        lost_col, redemption_col = st.columns(2)
        lost_col.number_input(
            "Lost ticks",
            min_value=0,
            step=1,
            key=option_key("lost_ticks"),
            on_change=reset_results,
        )
        redemption_col.number_input(
            "Redemption heals",
            min_value=0,
            step=1,
            key=option_key("redemption"),
            on_change=reset_results,
        )

        budget_col, max_col = st.columns(2)
        budget_col.checkbox("Limit fight length", key="use_max_ticks", on_change=reset_results)
        max_col.number_input(
            "Max ticks",
            min_value=1,
            step=100,
            key=option_key("max_ticks"),
            disabled=not st.session_state.use_max_ticks,
            on_change=reset_results,
        )

        st.markdown("**Monte Carlo**")
        trials_col, seed_col = st.columns(2)
        trials_col.number_input(
            "Trials",
            min_value=1,
            max_value=1_000_000,
            step=1000,
            key=option_key("trials"),
        )
        seed_col.number_input("Random seed", min_value=0, step=1, key="seed_input")

        run_col, sweep_col = st.columns(2)
        simulate = run_col.button("Simulate", type="primary")
        sweep = sweep_col.button("Fish sweep", type="secondary")
        return simulate, sweep


def collect_options() -> dict[str, Any]:
    """Return the option mapping for the current widget state."""

    options = {
        name: st.session_state[option_key(name)]
        for name in DEFAULT_OPTIONS
        if name not in ("seed", "workers")
    }
    options["seed"] = int(st.session_state.seed_input)
    options["workers"] = 1
    if not st.session_state.use_max_ticks:
        options["max_ticks"] = None
    return options


def run_simulation(options: dict[str, Any]) -> None:
    reset_results()
    try:
        with st.spinner("Simulating fights…"):
            st.session_state.sim_result = run_fight_simulation(options)
    except ConfigurationError as exc:
        st.session_state.sim_error = str(exc)


def run_sweep(options: dict[str, Any]) -> None:
    reset_results()
    try:
        with st.spinner("Simulating every fish count…"):
            st.session_state.sweep_result = run_fish_sweep(options)
    except ConfigurationError as exc:
        st.session_state.sim_error = str(exc)


def render_histogram(frame: pd.DataFrame, title: str, color: str) -> None:
    chart = alt.Chart(frame).mark_bar(
        color=color,
        opacity=0.9,
        cornerRadiusTopLeft=2,
        cornerRadiusTopRight=2,
    ).encode(
        x=alt.X("bin_start:Q", title=title),
        x2="bin_end:Q",
        y=alt.Y("probability:Q", title="Probability", axis=alt.Axis(format=".0%")),
        tooltip=[
            alt.Tooltip("bin_start:Q", title="From", format=".0f"),
            alt.Tooltip("bin_end:Q", title="To", format=".0f"),
            alt.Tooltip("probability:Q", title="Probability", format=".2%"),
        ],
    ).properties(height=220)
    chart = chart.configure_view(strokeOpacity=0).configure_axis(gridColor="#e2e8f0")
    st.altair_chart(chart, use_container_width=True)


def render_quantiles(summary: SimulationSummary) -> None:
    times = quantile_table(summary.times)
    times["time"] = [ticks_to_clock(int(value)) for value in times["value"]]
    fish = quantile_table(summary.fish_eaten)

    time_col, fish_col = st.columns(2)
    with time_col:
        st.caption(f"Time - {len(summary.times)} samples")
        st.dataframe(times[["quantile", "time"]], hide_index=True, use_container_width=True)
    with fish_col:
        st.caption(f"Fish eaten - {len(summary.fish_eaten)} samples (includes failures)")
        st.dataframe(fish, hide_index=True, use_container_width=True)


def render_summary(result: FightSimulationResult) -> None:
    """Render success metrics, setup stats and distributions."""

    summary = result.summary
    with st.container(border=True):
        st.markdown("**Results**")
        cols = st.columns(3)
        cols[0].metric("Success rate", f"{summary.success_rate * 100:.2f}%")
        cols[1].metric("Avg fish eaten", f"{summary.mean_fish_eaten:.1f}")
        if summary.times:
            cols[2].metric("Avg time", ticks_to_clock(round(summary.mean_time)))
        else:
            cols[2].metric("Avg time", "n/a")
        st.caption(f"{summary.trials} trials in {summary.compute_seconds:.2f} s")

        setups = pd.DataFrame(
            [
                {
                    "setup": WEAPON_LABELS.get(setup.weapon, setup.weapon),
                    "max hit": setup.max_hit,
                    "accuracy roll": setup.acc_roll,
                    "ranged def roll": setup.rdr,
                    "magic def roll": setup.mdr,
                }
                for setup in (result.fight.setup1, result.fight.setup2)
            ]
        )
        st.dataframe(setups, hide_index=True, use_container_width=True)

        if summary.times:
            render_histogram(histogram_frame(summary.times), "Time (ticks)", "#6366f1")
        else:
            st.caption("No successful trials, skipped the time distribution.")
        render_histogram(histogram_frame(summary.fish_eaten, bins=10), "Fish eaten", "#0ea5e9")
        render_quantiles(summary)


def render_sweep(points: list) -> None:
    with st.container(border=True):
        st.markdown("**Fish sweep**")
        frame = sweep_frame(points)
        chart = alt.Chart(frame).mark_line(point=True, color="#6366f1").encode(
            x=alt.X("fish:Q", title="Fish"),
            y=alt.Y("success_rate:Q", title="Success rate", axis=alt.Axis(format=".0%")),
            tooltip=[
                alt.Tooltip("fish:Q", title="Fish"),
                alt.Tooltip("success_rate:Q", title="Success rate", format=".2%"),
            ],
        ).properties(height=240)
        st.altair_chart(chart, use_container_width=True)


def apply_page_styling() -> None:
    """Inject CSS tweaks that style the Streamlit app."""

    st.set_page_config(page_title="Hunllef Simulator", layout="centered")
    st.markdown(
        """
        <style>
        div[data-testid="stVerticalBlockBorderWrapper"] {
            border: 1px solid #e3e6eb;
            border-radius: 12px;
            padding: 1.25rem;
            background-color: #ffffff;
            box-shadow: 0 4px 10px rgba(15, 23, 42, 0.06);
            margin-bottom: 1.25rem;
        }
        .card-title {
            font-size: 1.1rem;
            font-weight: 600;
            margin-bottom: 0.8rem;
        }
        div[data-testid="stMetricValue"] {
            font-size: 1.8rem;
            font-weight: 600;
            color: #0f172a;
        }
        div[data-testid="stMetricLabel"] {
            font-size: 0.95rem;
            color: #475569;
        }
        </style>
        """,
        unsafe_allow_html=True,
    )


def main() -> None:
    """Entry point used by Streamlit."""

    apply_page_styling()
    ensure_session_state_defaults()
    st.title("Corrupted Hunllef Simulator")

    with st.container(border=True):
        st.markdown('<div class="card-title">Character</div>', unsafe_allow_html=True)
        preset_options = [PRESET_CUSTOM_LABEL] + sorted(PRESETS.keys())
        selected_preset = st.selectbox("Preset", options=preset_options, key="selected_preset")
        if update_options_from_preset(selected_preset):
            reset_results()
        render_level_inputs()
        st.divider()
        render_setup_inputs()

    simulate, sweep = render_fight_configuration()
    if simulate:
        run_simulation(collect_options())
    elif sweep:
        run_sweep(collect_options())

    if st.session_state.sim_error:
        st.error(f"Invalid configuration: {st.session_state.sim_error}")
    elif isinstance(st.session_state.sim_result, FightSimulationResult):
        render_summary(st.session_state.sim_result)
    elif st.session_state.sweep_result:
        render_sweep(st.session_state.sweep_result)


if __name__ == "__main__":
    main()
