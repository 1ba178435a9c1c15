# nyc_collisions/options.py
from dataclasses import dataclass
from typing import Tuple

import pandas as pd

from nyc_collisions.config import OPTION_LIMIT
from nyc_collisions.records import (
    BOROUGH,
    FACTOR,
    NAN_MARKER,
    UNSPECIFIED,
    VALID_BOROUGHS,
    VEHICLE_TYPE,
    YEAR,
)


@dataclass(frozen=True)
class FilterOptions:
    """Selectable values for the four filter controls, each sorted ascending."""
    boroughs: Tuple[str, ...] = ()
    years: Tuple[int, ...] = ()
    vehicle_types: Tuple[str, ...] = ()
    factors: Tuple[str, ...] = ()


def _label_options(s: pd.Series, limit: int = OPTION_LIMIT) -> Tuple[str, ...]:
    values = {v for v in s.unique() if v and v not in (UNSPECIFIED, NAN_MARKER)}
    return tuple(sorted(values)[:limit])


def filter_options(records: pd.DataFrame, limit: int = OPTION_LIMIT) -> FilterOptions:
    """Derive the filter choices offered for ``records``.

    Vehicle types and factors are cut to the first ``limit`` values after
    sorting, so the lists stay short for the sidebar.
    """
    boroughs = tuple(sorted(set(records[BOROUGH].unique()) & set(VALID_BOROUGHS)))
    years = tuple(sorted(int(y) for y in records[YEAR].dropna().unique()))
    return FilterOptions(
        boroughs=boroughs,
        years=years,
        vehicle_types=_label_options(records[VEHICLE_TYPE], limit),
        factors=_label_options(records[FACTOR], limit),
    )
