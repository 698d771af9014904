"""
UI components and visualization helpers.
"""

from typing import Dict

import pandas as pd
import plotly.express as px
import streamlit as st

from config import COLOR_MAP, DIFFICULTIES, INITIAL_PILE_SIZE, PILE_NAMES
from models import WinRateEstimate
from analytics import summarize_estimates


def print_rules() -> None:
    """Display the simulated rules and the difficulty presets."""
    st.markdown("### Rules as simulated")
    st.write(f"Orchards: {', '.join(PILE_NAMES)}, {INITIAL_PILE_SIZE} apples each")
    st.write("Each turn one six-sided die is rolled:")
    st.write("- Colour face: pick one apple from that orchard (nothing happens if it is empty)")
    st.write("- Basket: pick one apple from the fullest orchard")
    st.write("- Bird: the bird moves one step closer to the orchard")

    st.write("Difficulty presets (bird steps to the orchard):")
    for label, start_pos in DIFFICULTIES.items():
        st.write(f"- {label}: {start_pos}")

    st.info(
        "The game is won when every orchard is empty and lost when the bird arrives.\n"
        "- If both happen on the same roll the game counts as lost.\n"
        "- Always emptying the fullest orchard on a basket is an assumed strategy, not a printed rule."
    )


def render_results_table(estimates: Dict[str, WinRateEstimate], confidence: float) -> pd.DataFrame:
    """Render the per-difficulty results table and return it."""
    st.markdown("#### Estimated win rates")
    df = summarize_estimates(estimates, confidence)
    st.dataframe(df, use_container_width=True, hide_index=True)
    return df


def render_win_rate_chart(df: pd.DataFrame) -> None:
    """Bar chart of win rate per difficulty with confidence interval error bars."""
    if df.empty:
        st.info("No estimates to plot.")
        return

    df = df.assign(
        err_plus=df["CI high (%)"] - df["Win rate (%)"],
        err_minus=df["Win rate (%)"] - df["CI low (%)"],
    )
    fig = px.bar(
        df,
        x="Difficulty",
        y="Win rate (%)",
        color="Difficulty",
        color_discrete_map=COLOR_MAP,
        error_y="err_plus",
        error_y_minus="err_minus",
        hover_data=["Start pos", "Won", "Lost"],
    )
    if "Exact (%)" in df.columns:
        fig.add_scatter(
            x=df["Difficulty"],
            y=df["Exact (%)"],
            mode="markers",
            marker=dict(size=14, symbol="x", color="black"),
            name="Exact",
        )
    fig.update_layout(
        yaxis=dict(range=[0, 100], title="Win rate (%)"),
        height=400,
        margin=dict(l=10, r=10, t=30, b=10),
        legend_title_text="Difficulty",
    )
    st.plotly_chart(fig, use_container_width=True)


def render_estimate_errors(df: pd.DataFrame) -> None:
    """Render how far each estimate lies from the exact win rate."""
    if "Exact (%)" not in df.columns:
        return
    st.markdown("#### Estimate vs exact")
    data_err = []
    for _, row in df.iterrows():
        data_err.append(
            {
                "Difficulty": row["Difficulty"],
                "Estimate (%)": row["Win rate (%)"],
                "Exact (%)": row["Exact (%)"],
                "Error (pp)": row["Win rate (%)"] - row["Exact (%)"],
                "Exact inside CI": row["CI low (%)"] <= row["Exact (%)"] <= row["CI high (%)"],
            }
        )
    st.dataframe(pd.DataFrame(data_err), use_container_width=True, hide_index=True)
