# nyc_collisions/config.py
import os

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))

# Checked in order when no explicit source is given
DATA_CANDIDATES = [
    'collisions.parquet',
    'collisions.csv',
    os.path.join('data', 'collisions.parquet'),
    os.path.join('data', 'collisions.csv'),
]
DATA_ENV_VAR = 'NYC_COLLISIONS_DATA'

OPTION_LIMIT = 20
TOP_N = 10
MAP_POINT_LIMIT = 1000

LOG_LEVEL = os.environ.get('NYC_COLLISIONS_LOG_LEVEL', 'INFO').upper()


def resolve_data_source(base_dir=None):
    """Return the dataset path/URL to load, or None when nothing is available.

    An explicit ``NYC_COLLISIONS_DATA`` value always wins, even if it does not
    exist yet (the loader reports that as a load failure).
    """
    override = os.environ.get(DATA_ENV_VAR)
    if override:
        return override
    for base in (base_dir or os.getcwd(), ROOT):
        for c in DATA_CANDIDATES:
            p = os.path.join(base, c)
            if os.path.exists(p):
                return p
    return None
