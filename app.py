"""
Main Streamlit application.
"""

import streamlit as st

from config import CONFIDENCE_LEVEL, DIFFICULTIES, UI_MAX_TRIAL_COUNT, UI_TRIAL_COUNT
from analytics import compare_difficulties

from ui import (
    print_rules,
    render_estimate_errors,
    render_results_table,
    render_win_rate_chart,
)


def run_app() -> None:
    """Run the main Streamlit application."""
    st.set_page_config(page_title="Orchard Race Win Rates", layout="wide")
    st.title("Orchard Race Win Rates")

    if "estimates" not in st.session_state:
        st.session_state["estimates"] = None

    with st.expander("Game rules & difficulty presets", expanded=False):
        print_rules()

    # Controls
    col_trials, col_seed, col_conf = st.columns([1, 1, 1])

    with col_trials:
        trials = st.number_input(
            "Games per difficulty",
            min_value=1,
            max_value=UI_MAX_TRIAL_COUNT,
            value=UI_TRIAL_COUNT,
            step=10_000,
        )
    with col_seed:
        seed_text = st.text_input("Seed (blank for random)", value="")
    with col_conf:
        confidence = st.slider("Confidence level", 0.80, 0.99, CONFIDENCE_LEVEL, 0.01)

    seed = None
    if seed_text.strip():
        if not seed_text.strip().isdigit():
            st.error("Seed must be a non-negative integer.")
            return
        seed = int(seed_text)

    if st.button("🎲 Run simulation"):
        total = int(trials) * len(DIFFICULTIES)
        bar = st.progress(0.0, text="Simulating...")
        done = {"games": 0}

        def on_progress(label: str, games: int) -> None:
            done["games"] += games
            bar.progress(done["games"] / total, text=f"Simulating '{label}'...")

        st.session_state["estimates"] = compare_difficulties(int(trials), seed=seed, progress=on_progress)
        bar.empty()

    estimates = st.session_state["estimates"]
    if estimates is None:
        st.info("Choose a number of games and run the simulation.")
        return

    table_col, chart_col = st.columns([1.4, 1.6])

    with table_col:
        df = render_results_table(estimates, confidence)
        render_estimate_errors(df)

    with chart_col:
        st.subheader("Win rate by difficulty")
        render_win_rate_chart(df)

    n = next(iter(estimates.values())).trials
    st.caption(f"Win rates estimated via Monte Carlo with {n:,} games per difficulty.")


if __name__ == "__main__":
    run_app()
