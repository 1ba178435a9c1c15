# nyc_collisions/dashboard.py
import logging
import os
import sys

import streamlit as st

# Ensure the repository root is on sys.path so `import nyc_collisions.*` works
# when Streamlit runs this file as a script.
repo_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
if repo_root not in sys.path:
    sys.path.insert(0, repo_root)

from nyc_collisions.charts import chart_data
from nyc_collisions.config import LOG_LEVEL, resolve_data_source
from nyc_collisions.figures import chart_figures, collision_map
from nyc_collisions.filters import apply_filters, build_criteria
from nyc_collisions.loader import load_records
from nyc_collisions.maps import map_points
from nyc_collisions.metrics import summary_metrics
from nyc_collisions.options import filter_options
from nyc_collisions.records import ALL

logging.basicConfig(level=LOG_LEVEL)
logger = logging.getLogger(__name__)

st.set_page_config(page_title="NYC Motor Vehicle Collisions", layout="wide", initial_sidebar_state="expanded")

st.markdown(
    """
    <style>
    :root, .stApp { background: #071122; color: #e6eef8; }
    h1, h2, h3 { color: #e6eef8 !important; }
    .stMetricValue, .stMetricLabel { color: #e6eef8 !important; }
    .stSidebar { background-color: #07121a !important; min-width: 260px !important; }
    .stMetric { padding: 8px 10px; }
    </style>
    """,
    unsafe_allow_html=True,
)


@st.cache_data(show_spinner="Loading collision data...")
def load_session(source):
    # notifications are collected here and shown once per session below
    notes = []
    records = load_records(source, notify=notes.append)
    return records, notes


@st.cache_data
def cached_options(records):
    return filter_options(records)


@st.cache_data
def cached_view(records, criteria):
    filtered = apply_filters(records, criteria)
    return filtered, summary_metrics(filtered), chart_data(filtered), map_points(filtered)


records, notes = load_session(resolve_data_source())
if not st.session_state.get('load_notified'):
    for note in notes:
        st.toast(f"**{note.title}**: {note.description}", icon='⚠️' if note.variant == 'destructive' else '✅')
    st.session_state['load_notified'] = True

options = cached_options(records)

st.title("NYC Motor Vehicle Collisions")
st.caption("Traffic incidents across New York City")

# Sidebar filters
with st.sidebar:
    st.header("Filters")
    search = st.text_input("Search (e.g. 'Brooklyn 2019')", "")
    borough = st.selectbox("Borough", [ALL] + list(options.boroughs))
    year = st.selectbox("Year", [ALL] + list(options.years))
    vehicle = st.selectbox("Vehicle Type", [ALL] + list(options.vehicle_types))
    factor = st.selectbox("Contributing Factor", [ALL] + list(options.factors))

criteria = build_criteria(borough, year, vehicle, factor, search, year_options=options.years)
if search:
    st.sidebar.caption(f"Showing borough: {criteria.effective_borough} · year: {criteria.effective_year}")

filtered, metrics, charts, points = cached_view(records, criteria)
logger.debug("Rendering %d of %d records", len(filtered), len(records))

col1, col2, col3, col4 = st.columns(4)
col1.metric("Total Crashes", f"{metrics.total_crashes:,}")
col2.metric("Total Injuries", f"{metrics.total_injuries:,}")
col3.metric("Total Fatalities", f"{metrics.total_fatalities:,}")
col4.metric("Avg Crashes/Day", f"{metrics.avg_per_day:.1f}")

figures = list(chart_figures(charts).items())
for left, right in zip(figures[0:6:2], figures[1:6:2]):
    c1, c2 = st.columns(2)
    for col, (title, fig) in ((c1, left), (c2, right)):
        col.subheader(title)
        col.plotly_chart(fig, width='stretch')

title, fig = figures[6]
st.subheader(title)
st.plotly_chart(fig, width='stretch')

st.subheader("Collision Map")
if points.empty:
    st.info('No location points available for the selected filters.')
else:
    st.plotly_chart(collision_map(points), width='stretch')

st.markdown('---')
st.download_button('Download filtered records (CSV)', filtered.to_csv(index=False).encode('utf-8'),
                   file_name='filtered_collisions.csv')
st.caption("Data Source: NYC Open Data")
