# nyc_collisions/filters.py
import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

import pandas as pd

from nyc_collisions.query import Selection, resolve_search
from nyc_collisions.records import ALL, BOROUGH, FACTOR, VEHICLE_TYPE, YEAR

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FilterCriteria:
    """Explicit sidebar selections plus the search-resolved borough and year.

    ``effective_borough``/``effective_year`` stay ``None`` until the criteria
    are built with :func:`build_criteria`; until then the explicit selections
    are used as they are.
    """
    borough: Selection = ALL
    year: Selection = ALL
    vehicle_type: str = ALL
    factor: str = ALL
    search: str = ''
    effective_borough: Optional[Selection] = None
    effective_year: Optional[Selection] = None

    def predicates(self) -> List[Tuple[str, Selection]]:
        borough = self.borough if self.effective_borough is None else self.effective_borough
        year = self.year if self.effective_year is None else self.effective_year
        return [
            (BOROUGH, borough),
            (YEAR, _year_value(year)),
            (VEHICLE_TYPE, self.vehicle_type),
            (FACTOR, self.factor),
        ]


def _year_value(year: Selection) -> Selection:
    # sidebar widgets may hand years back as strings
    if year == ALL or isinstance(year, int):
        return year
    try:
        return int(str(year).strip())
    except ValueError:
        return year


def build_criteria(borough: Selection = ALL, year: Selection = ALL, vehicle_type: str = ALL,
                   factor: str = ALL, search: str = '', year_options: Iterable[int] = ()) -> FilterCriteria:
    """Resolve ``search`` against the explicit selections and freeze the result."""
    effective_borough, effective_year = resolve_search(search, borough, year, year_options)
    return FilterCriteria(
        borough=borough,
        year=year,
        vehicle_type=vehicle_type,
        factor=factor,
        search=search or '',
        effective_borough=effective_borough,
        effective_year=effective_year,
    )


def apply_filters(records: pd.DataFrame, criteria: FilterCriteria) -> pd.DataFrame:
    """Rows of ``records`` matching every non-``All`` predicate, in original order."""
    mask = pd.Series(True, index=records.index)
    for column, value in criteria.predicates():
        if value == ALL:
            continue
        mask &= records[column].eq(value).fillna(False).astype(bool)
    filtered = records[mask]
    logger.debug("Filtered %d -> %d rows with %s", len(records), len(filtered), criteria)
    return filtered
