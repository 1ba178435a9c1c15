import os

import pytest
import streamlit as st
from streamlit.testing.v1 import AppTest

from nyc_collisions.config import DATA_ENV_VAR

APP = os.path.join(os.path.dirname(__file__), '..', 'nyc_collisions', 'dashboard.py')


def metric_values(at):
    return {m.label: m.value for m in at.metric}


@pytest.fixture
def app(monkeypatch, tmp_path, raw_frame):
    path = tmp_path / 'collisions.csv'
    raw_frame.to_csv(path, index=False)
    monkeypatch.setenv(DATA_ENV_VAR, str(path))
    st.cache_data.clear()
    at = AppTest.from_file(os.path.abspath(APP), default_timeout=60)
    yield at.run()
    st.cache_data.clear()


def test_dashboard_renders_all_records(app):
    assert not app.exception
    assert metric_values(app) == {
        'Total Crashes': '5',
        'Total Injuries': '6',
        'Total Fatalities': '1',
        'Avg Crashes/Day': '0.0',
    }


def test_dashboard_search_narrows_metrics(app):
    app.text_input[0].input('brooklyn 2019').run()
    assert not app.exception
    assert metric_values(app) == {
        'Total Crashes': '1',
        'Total Injuries': '3',
        'Total Fatalities': '0',
        'Avg Crashes/Day': '1.0',
    }
    assert 'BROOKLYN' in app.sidebar.caption[0].value


def test_dashboard_missing_source_shows_zeroes(monkeypatch, tmp_path):
    monkeypatch.setenv(DATA_ENV_VAR, str(tmp_path / 'missing.csv'))
    st.cache_data.clear()
    at = AppTest.from_file(os.path.abspath(APP), default_timeout=60).run()
    assert not at.exception
    assert metric_values(at)['Total Crashes'] == '0'
    assert any('Error Loading Data' in t.value for t in at.toast)
