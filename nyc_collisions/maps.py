# nyc_collisions/maps.py
from typing import Optional, Tuple

import numpy as np
import pandas as pd

from nyc_collisions.config import MAP_POINT_LIMIT
from nyc_collisions.records import LATITUDE, LONGITUDE, PERSONS_INJURED, PERSONS_KILLED

SEVERITY = 'SEVERITY'
COLOR = 'COLOR'

SEVERITY_COLORS = {
    'fatal': '#ef4444',
    'multiple_injuries': '#f97316',
    'injury': '#eab308',
    'property_damage': '#3b82f6',
}


def severity(records: pd.DataFrame) -> pd.Series:
    injured = records[PERSONS_INJURED]
    killed = records[PERSONS_KILLED]
    labels = np.select(
        [killed > 0, injured > 2, injured > 0],
        ['fatal', 'multiple_injuries', 'injury'],
        default='property_damage',
    )
    return pd.Series(labels, index=records.index, dtype=object)


def map_points(records: pd.DataFrame, limit: int = MAP_POINT_LIMIT) -> pd.DataFrame:
    """First ``limit`` rows with usable coordinates, tagged by severity.

    Coordinates of exactly 0 are the feed's placeholder for "no location" and
    are dropped together with missing ones.
    """
    lat = records[LATITUDE]
    lon = records[LONGITUDE]
    ok = np.isfinite(lat) & np.isfinite(lon) & (lat != 0) & (lon != 0)
    points = records[ok].head(limit).copy()
    points[SEVERITY] = severity(points)
    points[COLOR] = points[SEVERITY].map(SEVERITY_COLORS)
    return points


def map_bounds(points: pd.DataFrame) -> Optional[Tuple[Tuple[float, float], Tuple[float, float]]]:
    """((south, west), (north, east)) of ``points``, or None when there are none."""
    if points.empty:
        return None
    return (
        (float(points[LATITUDE].min()), float(points[LONGITUDE].min())),
        (float(points[LATITUDE].max()), float(points[LONGITUDE].max())),
    )
