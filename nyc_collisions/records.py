"""Collision record schema and normalization.

A record set is a pandas DataFrame with one row per vehicle involved in a
collision (the NYC Open Data "Motor Vehicle Collisions - Crashes" shape), so a
single ``COLLISION_ID`` may appear on several rows. Crash counts are always
distinct over that id; injury and fatality totals are plain sums over rows.

``normalize_records`` turns whatever the loader read (CSV strings, Parquet
types, API lower-case names) into the fixed schema below. Field-level parse
problems never reject a row: the bad field becomes ``NaT``/``<NA>``/``NaN``
(or 0 for casualty counts) and computations that need it skip it.
"""

import logging
import re

import pandas as pd

logger = logging.getLogger(__name__)

COLLISION_ID = 'COLLISION_ID'
BOROUGH = 'BOROUGH'
CRASH_DATE = 'CRASH_DATE'
CRASH_TIME = 'CRASH_TIME'
CRASH_DATETIME = 'CRASH_DATETIME'
YEAR = 'YEAR'
MONTH = 'MONTH'
DAY_OF_WEEK = 'DAY_OF_WEEK'
HOUR = 'HOUR'
PERSONS_INJURED = 'NUMBER_OF_PERSONS_INJURED'
PERSONS_KILLED = 'NUMBER_OF_PERSONS_KILLED'
VEHICLE_TYPE = 'VEHICLE_TYPE_CODE_1'
FACTOR = 'CONTRIBUTING_FACTOR_VEHICLE_1'
LATITUDE = 'LATITUDE'
LONGITUDE = 'LONGITUDE'

RECORD_DTYPES = {
    COLLISION_ID: 'string',
    BOROUGH: 'object',
    CRASH_DATE: 'datetime64[ns]',
    YEAR: 'Int64',
    MONTH: 'Int64',
    DAY_OF_WEEK: 'Int64',
    HOUR: 'Int64',
    PERSONS_INJURED: 'int64',
    PERSONS_KILLED: 'int64',
    VEHICLE_TYPE: 'object',
    FACTOR: 'object',
    LATITUDE: 'float64',
    LONGITUDE: 'float64',
}
RECORD_COLUMNS = list(RECORD_DTYPES)

# Chart order; search priority lives in nyc_collisions.query
VALID_BOROUGHS = ('BROOKLYN', 'QUEENS', 'MANHATTAN', 'BRONX', 'STATEN ISLAND')

UNSPECIFIED = 'UNSPECIFIED'
# str(float('nan')) after label cleaning
NAN_MARKER = 'NAN'

ALL = 'All'

# (derived column, lower bound, upper bound)
_DERIVED_FIELDS = [
    (YEAR, None, None),
    (MONTH, 1, 12),
    (DAY_OF_WEEK, 0, 6),
    (HOUR, 0, 23),
]


def normalize_column_name(name) -> str:
    """'CRASH DATE' / 'crash_date' / 'Crash-Date' -> 'CRASH_DATE'."""
    return re.sub(r'[^0-9A-Z]+', '_', str(name).strip().upper()).strip('_')


def empty_records() -> pd.DataFrame:
    """A zero-row frame with the record schema."""
    return pd.DataFrame({c: pd.Series(dtype=t) for c, t in RECORD_DTYPES.items()})


def clean_label(s: pd.Series) -> pd.Series:
    """Upper-case, trim and collapse whitespace; missing values become ''."""
    s = s.astype('string').fillna('')
    s = s.str.strip().str.replace(r'\s+', ' ', regex=True).str.upper()
    return s.astype(object)


def _int_field(s: pd.Series, lo=None, hi=None) -> pd.Series:
    x = pd.to_numeric(s, errors='coerce').astype('float64')
    if lo is not None:
        x = x.where((x >= lo) & (x <= hi))
    x = x.where(x == x.round())
    return x.astype('Int64')


def _count_field(s: pd.Series) -> pd.Series:
    return pd.to_numeric(s, errors='coerce').fillna(0).clip(lower=0).astype('int64')


def _clean_ids(s: pd.Series) -> pd.Series:
    if pd.api.types.is_float_dtype(s):
        s = s.round().astype('Int64')
    s = s.astype('string').str.strip()
    return s.replace('', pd.NA)


def _parse_datetimes(s: pd.Series) -> pd.Series:
    if pd.api.types.is_datetime64_any_dtype(s):
        return s
    return pd.to_datetime(s.astype('string'), errors='coerce', format='mixed')


def _parse_hours(s: pd.Series) -> pd.Series:
    # '9:35', '09:35:00', '14'
    return s.astype('string').str.extract(r'^\s*(\d{1,2})', expand=False)


def normalize_records(raw: pd.DataFrame) -> pd.DataFrame:
    """Return a new frame in the record schema built from a raw table.

    ``raw`` is not modified. It must carry a collision id column; every other
    column is optional and filled with its missing value when absent.
    """
    df = raw.rename(columns=normalize_column_name)
    df = df.loc[:, ~df.columns.duplicated()]
    if COLLISION_ID not in df.columns:
        raise KeyError(f"missing required column {COLLISION_ID!r}")

    out = pd.DataFrame(index=df.index)
    out[COLLISION_ID] = _clean_ids(df[COLLISION_ID])

    for col in (BOROUGH, VEHICLE_TYPE, FACTOR):
        out[col] = clean_label(df[col]) if col in df.columns else ''

    stamps = _parse_datetimes(df[CRASH_DATETIME]) if CRASH_DATETIME in df.columns else None
    if CRASH_DATE in df.columns:
        dates = _parse_datetimes(df[CRASH_DATE])
        if stamps is not None:
            dates = dates.fillna(stamps)
    elif stamps is not None:
        dates = stamps
    else:
        dates = pd.Series(pd.NaT, index=df.index, dtype='datetime64[ns]')
    if getattr(dates.dt, 'tz', None) is not None:
        dates = dates.dt.tz_localize(None)
    out[CRASH_DATE] = dates.dt.normalize().astype('datetime64[ns]')

    derived = {
        YEAR: dates.dt.year,
        MONTH: dates.dt.month,
        DAY_OF_WEEK: dates.dt.dayofweek,
    }
    if CRASH_TIME in df.columns:
        derived[HOUR] = _parse_hours(df[CRASH_TIME])
    elif stamps is not None:
        derived[HOUR] = stamps.dt.hour
    else:
        derived[HOUR] = pd.Series(float('nan'), index=df.index)

    for col, lo, hi in _DERIVED_FIELDS:
        values = _int_field(derived[col], lo, hi)
        # already-derived feeds carry these columns; use them where the date did not parse
        if col in df.columns:
            values = values.fillna(_int_field(df[col], lo, hi))
        out[col] = values

    for col in (PERSONS_INJURED, PERSONS_KILLED):
        out[col] = _count_field(df[col]) if col in df.columns else 0

    for col in (LATITUDE, LONGITUDE):
        out[col] = pd.to_numeric(df[col], errors='coerce').astype('float64') if col in df.columns else float('nan')

    missing_ids = int(out[COLLISION_ID].isna().sum())
    if missing_ids:
        logger.warning("Dropping %d rows without a collision id", missing_ids)
        out = out[out[COLLISION_ID].notna()]

    unparsed = int(out[CRASH_DATE].isna().sum())
    if unparsed:
        logger.info("%d rows have an unparsable crash date", unparsed)

    return out.astype(RECORD_DTYPES)[RECORD_COLUMNS].reset_index(drop=True)
