"""Headline numbers for the metric cards."""

from dataclasses import asdict, dataclass

import pandas as pd

from nyc_collisions.records import COLLISION_ID, CRASH_DATE, PERSONS_INJURED, PERSONS_KILLED


def distinct_collisions(records: pd.DataFrame) -> int:
    """Number of crashes in ``records``: distinct collision ids, not rows."""
    return int(records[COLLISION_ID].nunique())


def collisions_by(records: pd.DataFrame, column: str, index=None) -> pd.Series:
    """Distinct collision ids per value of ``column``.

    With ``index`` the result is reindexed to exactly those keys, zero-filled.
    """
    counts = records.groupby(column, sort=True)[COLLISION_ID].nunique()
    if index is not None:
        counts = counts.reindex(index, fill_value=0)
    return counts.astype('int64')


def date_span_days(records: pd.DataFrame) -> int:
    dates = records[CRASH_DATE].dropna()
    if dates.empty:
        return 0
    return int((dates.max() - dates.min()).days)


@dataclass(frozen=True)
class CrashMetrics:
    total_crashes: int = 0
    total_injuries: int = 0
    total_fatalities: int = 0
    avg_per_day: float = 0.0

    def as_dict(self):
        return asdict(self)


def summary_metrics(records: pd.DataFrame) -> CrashMetrics:
    """Compute the four headline metrics for a (filtered) record set.

    Injuries and fatalities are summed over every row, so a collision reported
    on three vehicle rows contributes its casualties three times while still
    counting as one crash. ``avg_per_day`` divides by the date span in whole
    days, never by less than one.
    """
    if records.empty:
        return CrashMetrics()
    total = distinct_collisions(records)
    return CrashMetrics(
        total_crashes=total,
        total_injuries=int(records[PERSONS_INJURED].sum()),
        total_fatalities=int(records[PERSONS_KILLED].sum()),
        avg_per_day=total / max(1, date_span_days(records)),
    )
