from __future__ import annotations

from typing import Optional

import plotly.graph_objects as go

from catalog_browser.core.formatting import format_number
from catalog_browser.core.histogram import HistogramEngine


def message_figure(title: str, details: Optional[str] = None) -> go.Figure:
    fig = go.Figure()
    text = title if details is None else f"{title}<br><br>{details}"
    fig.add_annotation(
        text=text,
        showarrow=False,
        xref="paper",
        yref="paper",
        x=0.5,
        y=0.5,
    )
    fig.update_xaxes(visible=False)
    fig.update_yaxes(visible=False)
    fig.update_layout(margin=dict(l=40, r=40, t=40, b=40))
    return fig


def histogram_figure(engine: HistogramEngine) -> go.Figure:
    """
    Stepped area chart of the engine's points. Box-selecting a horizontal
    range is the drag-to-filter gesture.
    """
    if engine.target is None or not engine.points:
        return message_figure("No histogram data.")

    width = engine.bin_width or 0
    xs = [p.x for p in engine.points]
    ys = [p.y for p in engine.points]
    hover = [
        f"[{format_number(x)},{format_number(x + width)}): {y}<br>(drag to filter)"
        for x, y in zip(xs, ys)
    ]

    fig = go.Figure(
        go.Scatter(
            x=xs,
            y=ys,
            name=engine.target.name,
            mode="lines",
            line_shape="hv",
            fill="tozeroy",
            line=dict(color="rgba(120, 120, 120, 0.9)"),
            fillcolor="rgba(190, 190, 190, 0.4)",
            hovertext=hover,
            hoverinfo="text",
        )
    )
    fig.update_layout(
        height=350,
        margin=dict(l=50, r=20, t=20, b=50),
        dragmode="select",
        selectdirection="h",
        showlegend=False,
        xaxis_title=engine.axis_label,
        yaxis_title="count",
        xaxis_type="log" if engine.log_axes["x"] else "linear",
        yaxis_type="log" if engine.log_axes["y"] else "linear",
    )
    if not engine.log_axes["y"]:
        fig.update_yaxes(rangemode="tozero")
    return fig
