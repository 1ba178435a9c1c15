import pandas as pd
import pytest

from nyc_collisions.loader import LoadError, Notification, load_records, read_collisions
from nyc_collisions.records import COLLISION_ID, RECORD_COLUMNS, YEAR


def test_read_csv(tmp_path, raw_frame):
    path = tmp_path / 'collisions.csv'
    raw_frame.to_csv(path, index=False)
    records = read_collisions(str(path))
    assert list(records.columns) == RECORD_COLUMNS
    assert records[COLLISION_ID].tolist() == ['1', '1', '2', '3', '4', '5']
    assert records[YEAR].dropna().tolist() == [2019, 2019, 2019, 2020, 2020]


def test_read_parquet(tmp_path, raw_frame):
    path = tmp_path / 'collisions.parquet'
    raw = raw_frame.copy()
    raw['COLLISION_ID'] = raw['COLLISION_ID'].astype(int)
    raw.to_parquet(path, index=False)
    records = read_collisions(str(path))
    assert len(records) == 6
    assert records[COLLISION_ID].nunique() == 5


def test_missing_source_raises(tmp_path):
    with pytest.raises(LoadError):
        read_collisions(str(tmp_path / 'nope.csv'))
    with pytest.raises(LoadError):
        read_collisions(None)


def test_table_without_ids_raises(tmp_path):
    path = tmp_path / 'other.csv'
    pd.DataFrame({'BOROUGH': ['QUEENS']}).to_csv(path, index=False)
    with pytest.raises(LoadError):
        read_collisions(str(path))


def test_load_records_notifies_success(tmp_path, raw_frame):
    path = tmp_path / 'collisions.csv'
    raw_frame.to_csv(path, index=False)
    notes = []
    records = load_records(str(path), notify=notes.append)
    assert len(records) == 6
    assert notes == [Notification('Data Loaded Successfully', '6 collision records loaded')]


def test_load_records_failure_returns_empty(tmp_path):
    notes = []
    records = load_records(str(tmp_path / 'missing.parquet'), notify=notes.append)
    assert records.empty
    assert list(records.columns) == RECORD_COLUMNS
    assert len(notes) == 1
    assert notes[0].variant == 'destructive'
    assert notes[0].title == 'Error Loading Data'
