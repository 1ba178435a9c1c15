"""Chart-ready aggregations over a filtered record set.

Every builder returns a small DataFrame with a ``name`` column (the category
label shown on the axis) and a ``value`` column, except
``casualties_by_borough`` which has ``injured`` and ``killed``. Crash counts go
through :func:`nyc_collisions.metrics.collisions_by`, so they deduplicate
collision ids exactly like the "Total Crashes" card.
"""

from dataclasses import dataclass

import pandas as pd

from nyc_collisions.config import TOP_N
from nyc_collisions.metrics import collisions_by
from nyc_collisions.records import (
    BOROUGH,
    DAY_OF_WEEK,
    FACTOR,
    HOUR,
    PERSONS_INJURED,
    PERSONS_KILLED,
    UNSPECIFIED,
    VALID_BOROUGHS,
    VEHICLE_TYPE,
    YEAR,
)

DAY_NAMES = ['Mon', 'Tue', 'Wed', 'Thu', 'Fri', 'Sat', 'Sun']
HOUR_LABELS = [f'{h}:00' for h in range(24)]


def _named(counts: pd.Series, names) -> pd.DataFrame:
    return pd.DataFrame({'name': list(names), 'value': counts.to_numpy(dtype='int64')})


def crashes_by_borough(records: pd.DataFrame) -> pd.DataFrame:
    counts = collisions_by(records, BOROUGH, index=list(VALID_BOROUGHS))
    return _named(counts, VALID_BOROUGHS)


def crashes_by_year(records: pd.DataFrame) -> pd.DataFrame:
    counts = collisions_by(records, YEAR).sort_index()
    return _named(counts, [str(int(y)) for y in counts.index])


def crashes_by_hour(records: pd.DataFrame) -> pd.DataFrame:
    counts = collisions_by(records, HOUR, index=list(range(24)))
    return _named(counts, HOUR_LABELS)


def crashes_by_day_of_week(records: pd.DataFrame) -> pd.DataFrame:
    counts = collisions_by(records, DAY_OF_WEEK, index=list(range(7)))
    return _named(counts, DAY_NAMES)


def top_values(records: pd.DataFrame, column: str, top_n: int = TOP_N) -> pd.DataFrame:
    """Most frequent values of ``column`` by raw row count.

    Empty and ``UNSPECIFIED`` values are left out. Equal counts keep the order
    in which the values first appear in ``records``.
    """
    values = records[column]
    values = values[(values != '') & (values != UNSPECIFIED)]
    counts = values.groupby(values, sort=False).size()
    counts = counts.sort_values(ascending=False, kind='stable').head(top_n)
    return _named(counts, counts.index)


def top_factors(records: pd.DataFrame, top_n: int = TOP_N) -> pd.DataFrame:
    return top_values(records, FACTOR, top_n)


def top_vehicle_types(records: pd.DataFrame, top_n: int = TOP_N) -> pd.DataFrame:
    return top_values(records, VEHICLE_TYPE, top_n)


def casualties_by_borough(records: pd.DataFrame) -> pd.DataFrame:
    sums = (
        records.groupby(BOROUGH)[[PERSONS_INJURED, PERSONS_KILLED]]
        .sum()
        .reindex(list(VALID_BOROUGHS), fill_value=0)
    )
    return pd.DataFrame({
        'name': list(VALID_BOROUGHS),
        'injured': sums[PERSONS_INJURED].to_numpy(dtype='int64'),
        'killed': sums[PERSONS_KILLED].to_numpy(dtype='int64'),
    })


@dataclass(frozen=True)
class ChartData:
    by_borough: pd.DataFrame
    by_year: pd.DataFrame
    by_hour: pd.DataFrame
    by_day_of_week: pd.DataFrame
    top_factors: pd.DataFrame
    top_vehicle_types: pd.DataFrame
    casualties_by_borough: pd.DataFrame


def chart_data(records: pd.DataFrame) -> ChartData:
    return ChartData(
        by_borough=crashes_by_borough(records),
        by_year=crashes_by_year(records),
        by_hour=crashes_by_hour(records),
        by_day_of_week=crashes_by_day_of_week(records),
        top_factors=top_factors(records),
        top_vehicle_types=top_vehicle_types(records),
        casualties_by_borough=casualties_by_borough(records),
    )
