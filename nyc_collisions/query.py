"""Free-text search resolution.

The search box lets a user type things like "brooklyn crashes in 2019". A
borough name or a known year found in the text overrides the matching sidebar
selection; everything else in the text is ignored.
"""

from typing import Iterable, Optional, Tuple, Union

from nyc_collisions.records import ALL

Selection = Union[str, int]

# Priority order: first keyword found wins
BOROUGH_KEYWORDS = [
    ('brooklyn', 'BROOKLYN'),
    ('manhattan', 'MANHATTAN'),
    ('bronx', 'BRONX'),
    ('queens', 'QUEENS'),
    ('staten', 'STATEN ISLAND'),
]


def borough_from_text(text: str) -> Optional[str]:
    lower = text.lower()
    return next((borough for keyword, borough in BOROUGH_KEYWORDS if keyword in lower), None)


def year_from_text(text: str, year_options: Iterable[int]) -> Optional[int]:
    return next((y for y in sorted(year_options) if str(y) in text), None)


def resolve_search(search: Optional[str], borough: Selection = ALL, year: Selection = ALL,
                   year_options: Iterable[int] = ()) -> Tuple[Selection, Selection]:
    """Return the effective (borough, year) pair.

    Only years listed in ``year_options`` are recognised. Borough and year are
    detected independently, and each falls back to its explicit selection.
    """
    if not search:
        return borough, year
    found_borough = borough_from_text(search)
    found_year = year_from_text(search, year_options)
    return (
        found_borough if found_borough is not None else borough,
        found_year if found_year is not None else year,
    )
