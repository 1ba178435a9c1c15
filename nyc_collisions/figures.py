"""Reusable Plotly figure builders for the NYC collisions dashboard.

Each builder takes one of the small frames produced by
:mod:`nyc_collisions.charts` (``name``/``value`` columns, or
``name``/``injured``/``killed`` for casualties) or the points frame from
:func:`nyc_collisions.maps.map_points`, and returns a Plotly ``Figure``. The
builders do no aggregation of their own.

Example usage:
    from nyc_collisions.charts import chart_data
    from nyc_collisions.figures import borough_bar
    fig = borough_bar(chart_data(records).by_borough)

Notes:
- The UI layer renders the result with ``st.plotly_chart(fig)``.
- An empty input frame gives an empty ``go.Figure()``.
"""

from typing import Dict, Tuple

import numpy as np
import pandas as pd
import plotly.express as px
import plotly.graph_objects as go

from nyc_collisions.charts import ChartData
from nyc_collisions.maps import SEVERITY, SEVERITY_COLORS, map_bounds
from nyc_collisions.records import (
    BOROUGH,
    COLLISION_ID,
    CRASH_DATE,
    FACTOR,
    LATITUDE,
    LONGITUDE,
    PERSONS_INJURED,
    PERSONS_KILLED,
)

# Dark Plotly template and borough colors for the app's dark UI
DARK_TEMPLATE = dict(
    layout=dict(
        paper_bgcolor="#071122",
        plot_bgcolor="#0f1b2a",
        font=dict(color="#e6eef8", family="Inter, Arial, sans-serif"),
        title=dict(font=dict(color="#e6eef8")),
        xaxis=dict(color="#e6eef8", gridcolor="#072433"),
        yaxis=dict(color="#e6eef8", gridcolor="#072433"),
        legend=dict(font=dict(color="#e6eef8")),
        colorway=["#7c8cff", "#0ea5a4", "#06b6d4", "#4ade80", "#60a5fa", "#94d2bd"],
    )
)

BOROUGH_COLORS = {
    'MANHATTAN': '#7c8cff',
    'BROOKLYN': '#06b6d4',
    'QUEENS': '#4ade80',
    'BRONX': '#60a5fa',
    'STATEN ISLAND': '#94d2bd',
}

DAY_COLORS = ["#7c8cff", "#0ea5a4", "#06b6d4", "#4ade80", "#60a5fa"]

NYC_CENTER = dict(lat=40.7128, lon=-74.006)
DEFAULT_ZOOM = 10.0
MAX_ZOOM = 15.0


def borough_bar(df: pd.DataFrame) -> go.Figure:
    """Horizontal bar of distinct crashes per borough."""
    if df.empty:
        return go.Figure()
    fig = px.bar(df, x='value', y='name', orientation='h', color='name', color_discrete_map=BOROUGH_COLORS,
                 labels={'value': 'Crashes', 'name': 'Borough'})
    fig.update_layout(template=DARK_TEMPLATE, margin=dict(t=20, b=20), showlegend=False)
    return fig


def crashes_over_time(df: pd.DataFrame) -> go.Figure:
    if df.empty:
        return go.Figure()
    fig = px.line(df, x='name', y='value', markers=True, labels={'value': 'Crashes', 'name': 'Year'})
    fig.update_traces(line=dict(width=3))
    fig.update_layout(template=DARK_TEMPLATE, margin=dict(t=20, b=20))
    return fig


def hour_area(df: pd.DataFrame) -> go.Figure:
    if df.empty:
        return go.Figure()
    fig = px.area(df, x='name', y='value', labels={'value': 'Crashes', 'name': 'Hour'})
    fig.update_layout(template=DARK_TEMPLATE, margin=dict(t=20, b=20))
    return fig


def day_of_week_bar(df: pd.DataFrame) -> go.Figure:
    if df.empty:
        return go.Figure()
    colors = [DAY_COLORS[i % len(DAY_COLORS)] for i in range(len(df))]
    fig = go.Figure(go.Bar(x=df['name'], y=df['value'], marker_color=colors))
    fig.update_layout(template=DARK_TEMPLATE, margin=dict(t=20, b=20), xaxis_title='Day', yaxis_title='Crashes')
    return fig


def _top_bar(df: pd.DataFrame, label: str, scale: str) -> go.Figure:
    if df.empty:
        return go.Figure()
    df = df.rename(columns={'value': 'Count', 'name': label})
    fig = px.bar(df, x='Count', y=label, orientation='h', color='Count', color_continuous_scale=scale)
    # largest on top
    fig.update_layout(template=DARK_TEMPLATE, margin=dict(t=20, b=20), yaxis=dict(autorange='reversed'))
    return fig


def factor_bar(df: pd.DataFrame) -> go.Figure:
    """Bar chart of the top contributing factors."""
    return _top_bar(df, 'Factor', 'purples')


def vehicle_bar(df: pd.DataFrame) -> go.Figure:
    """Bar chart of the top vehicle types."""
    return _top_bar(df, 'Vehicle', 'teal')


def casualties_bar(df: pd.DataFrame) -> go.Figure:
    """Grouped bars of injured and killed per borough."""
    if df.empty:
        return go.Figure()
    fig = go.Figure([
        go.Bar(x=df['name'], y=df['injured'], name='Injured', marker_color='#06b6d4'),
        go.Bar(x=df['name'], y=df['killed'], name='Killed', marker_color='#ef4444'),
    ])
    fig.update_layout(template=DARK_TEMPLATE, barmode='group', margin=dict(t=20, b=20))
    return fig


def fit_view(bounds) -> Tuple[dict, float]:
    """Center and zoom that frame ``bounds`` from :func:`map_bounds`."""
    if bounds is None:
        return NYC_CENTER, DEFAULT_ZOOM
    (south, west), (north, east) = bounds
    center = dict(lat=(south + north) / 2, lon=(west + east) / 2)
    span = max(north - south, east - west)
    if span <= 0:
        return center, MAX_ZOOM
    # one zoom level of padding around the points
    zoom = float(np.log2(360 / span)) - 1
    return center, min(MAX_ZOOM, max(1.0, zoom))


def collision_map(points: pd.DataFrame) -> go.Figure:
    """Scatter map of individual collisions coloured by severity, framed on the points."""
    if points.empty:
        return go.Figure()
    points = points.assign(**{FACTOR: points[FACTOR].replace('', 'Unknown cause')})
    center, zoom = fit_view(map_bounds(points))
    fig = px.scatter_map(points, lat=LATITUDE, lon=LONGITUDE, color=SEVERITY,
                         color_discrete_map=SEVERITY_COLORS,
                         hover_data={COLLISION_ID: True, BOROUGH: True, CRASH_DATE: '|%Y-%m-%d',
                                     FACTOR: True, PERSONS_INJURED: True, PERSONS_KILLED: True},
                         center=center, zoom=zoom, height=500, map_style='open-street-map')
    fig.update_layout(map_style='open-street-map', template=DARK_TEMPLATE, margin=dict(t=0, b=0))
    return fig


def chart_figures(charts: ChartData) -> Dict[str, go.Figure]:
    """All seven chart figures keyed by their card title."""
    return {
        'Crashes by Borough': borough_bar(charts.by_borough),
        'Crashes Over Time': crashes_over_time(charts.by_year),
        'Crashes by Hour of Day': hour_area(charts.by_hour),
        'Crashes by Day of Week': day_of_week_bar(charts.by_day_of_week),
        'Top Contributing Factors': factor_bar(charts.top_factors),
        'Top Vehicle Types': vehicle_bar(charts.top_vehicle_types),
        'Casualties by Borough': casualties_bar(charts.casualties_by_borough),
    }
