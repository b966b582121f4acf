"""
Keyword-frequency bar chart (Plotly).
"""

from __future__ import annotations

import plotly.graph_objects as go

from config import CHART_LABEL_LIMIT, CHART_TOP_N
from modules.analytics import KeywordFrequency

_BAR_COLOUR = "#3b82f6"


def chart_label(keyword: str, limit: int = CHART_LABEL_LIMIT) -> str:
    """Shorten long keywords for the axis: first ``limit - 2`` chars + '...'."""
    if len(keyword) > limit:
        return keyword[: limit - 2] + "..."
    return keyword


def keyword_chart(stats: list[KeywordFrequency], top_n: int = CHART_TOP_N) -> go.Figure | None:
    """
    Horizontal bar chart of the *top_n* most frequent keywords.

    Returns ``None`` when there is nothing to plot.
    """
    data = stats[:top_n]
    if not data:
        return None

    # Plotly draws the first category at the bottom; reverse so rank 1 is on top.
    data = list(reversed(data))
    fig = go.Figure(
        [
            go.Bar(
                x=[d.count for d in data],
                y=[chart_label(d.keyword) for d in data],
                orientation="h",
                text=[d.count for d in data],
                textposition="outside",
                marker_color=_BAR_COLOUR,
                hovertext=[f"{d.keyword}: {d.count} occurrences" for d in data],
                hoverinfo="text",
            )
        ]
    )
    max_count = max(d.count for d in data)
    fig.update_xaxes(range=[0, max_count * 1.15], title_text="Occurrences")
    fig.update_layout(
        title_text="Keyword Frequency",
        height=44 * len(data) + 90,
        margin=dict(l=20, r=20, t=50, b=20),
    )
    return fig
