import pandas as pd
import pytest

from nyc_collisions.records import (
    BOROUGH,
    COLLISION_ID,
    CRASH_DATE,
    DAY_OF_WEEK,
    FACTOR,
    HOUR,
    LATITUDE,
    MONTH,
    PERSONS_INJURED,
    PERSONS_KILLED,
    RECORD_COLUMNS,
    VEHICLE_TYPE,
    YEAR,
    empty_records,
    normalize_column_name,
    normalize_records,
)


@pytest.mark.parametrize('raw, expected', [
    ('CRASH DATE', 'CRASH_DATE'),
    ('crash_date', 'CRASH_DATE'),
    ('Vehicle Type Code 1', 'VEHICLE_TYPE_CODE_1'),
    (' NUMBER OF PERSONS INJURED ', 'NUMBER_OF_PERSONS_INJURED'),
])
def test_normalize_column_name(raw, expected):
    assert normalize_column_name(raw) == expected


def test_schema_and_row_count(records):
    assert list(records.columns) == RECORD_COLUMNS
    assert len(records) == 6


def test_labels_are_cleaned(records):
    assert records[BOROUGH].tolist() == ['BROOKLYN', 'BROOKLYN', 'QUEENS', 'BROOKLYN', '', 'MANHATTAN']
    assert records[VEHICLE_TYPE].tolist() == ['SEDAN', 'TAXI', 'TAXI', 'SEDAN', '', 'BUS']
    assert records.loc[3, FACTOR] == 'DRIVER INATTENTION/DISTRACTION'
    assert records.loc[1, FACTOR] == 'UNSPECIFIED'


def test_derived_date_fields(records):
    first = records.iloc[0]
    assert first[CRASH_DATE] == pd.Timestamp('2019-01-07')
    assert first[YEAR] == 2019
    assert first[MONTH] == 1
    assert first[DAY_OF_WEEK] == 0  # Monday
    assert first[HOUR] == 8
    assert records.loc[3, DAY_OF_WEEK] == 6  # Sunday
    assert records.loc[5, HOUR] == 0


def test_unparsable_fields_keep_the_row(records):
    bad = records.iloc[4]
    assert bad[COLLISION_ID] == '4'
    assert pd.isna(bad[CRASH_DATE])
    assert pd.isna(bad[YEAR])
    assert pd.isna(bad[HOUR])
    assert bad[PERSONS_INJURED] == 0
    assert bad[PERSONS_KILLED] == 0
    assert pd.isna(bad[LATITUDE])


def test_rows_without_id_are_dropped(raw_frame):
    raw = raw_frame.copy()
    raw.loc[2, 'COLLISION_ID'] = None
    raw.loc[3, 'COLLISION_ID'] = '  '
    out = normalize_records(raw)
    assert out[COLLISION_ID].tolist() == ['1', '1', '4', '5']
    assert out.index.tolist() == [0, 1, 2, 3]


def test_missing_id_column_raises():
    with pytest.raises(KeyError):
        normalize_records(pd.DataFrame({'BOROUGH': ['QUEENS']}))


def test_input_is_not_modified(raw_frame):
    before = raw_frame.copy()
    normalize_records(raw_frame)
    pd.testing.assert_frame_equal(raw_frame, before)


def test_crash_datetime_column_and_numeric_ids():
    raw = pd.DataFrame({
        'collision_id': [4455765.0, float('nan')],
        'crash_datetime': ['2021-09-11 14:30:00', '2021-09-12 02:00:00'],
        'number_of_persons_injured': [2, 1],
    })
    out = normalize_records(raw)
    assert out[COLLISION_ID].tolist() == ['4455765']
    assert out.loc[0, HOUR] == 14
    assert out.loc[0, CRASH_DATE] == pd.Timestamp('2021-09-11')
    assert out.loc[0, YEAR] == 2021
    assert out.loc[0, BOROUGH] == ''


def test_precomputed_fields_fill_unparsable_dates():
    raw = pd.DataFrame({
        'COLLISION_ID': ['1'],
        'CRASH_DATE': ['??'],
        'YEAR': ['2018'],
        'HOUR': ['25'],
    })
    out = normalize_records(raw)
    assert out.loc[0, YEAR] == 2018
    assert pd.isna(out.loc[0, HOUR])


def test_empty_records_schema():
    empty = empty_records()
    assert empty.empty
    assert list(empty.columns) == RECORD_COLUMNS
    assert str(empty[YEAR].dtype) == 'Int64'
