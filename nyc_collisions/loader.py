"""Load a collision dataset into the record schema.

Local CSV (plain or compressed) and Parquet files are scanned with an
in-memory DuckDB connection and handed to pandas; CSV files are read with every
column as text so that field parsing happens in one place,
:func:`nyc_collisions.records.normalize_records`. Remote CSV URLs go through
``pandas.read_csv``.

``load_records`` is what the dashboard calls: it never raises, reports the
outcome to a notification sink and falls back to an empty record set.
"""

import logging
import os
from dataclasses import dataclass
from typing import Callable, Optional

import duckdb
import pandas as pd

from nyc_collisions.records import empty_records, normalize_records

logger = logging.getLogger(__name__)


class LoadError(Exception):
    """The data source is missing, unreadable or not a collision table."""


@dataclass(frozen=True)
class Notification:
    title: str
    description: str
    variant: str = 'default'  # or 'destructive'


Notifier = Callable[[Notification], None]


def log_notification(note: Notification) -> None:
    level = logging.ERROR if note.variant == 'destructive' else logging.INFO
    logger.log(level, "%s: %s", note.title, note.description)


def _open_con(con):
    if con is not None:
        return con, False
    return duckdb.connect(database=':memory:'), True


def _sql_path(path: str) -> str:
    return path.replace('\\', '/').replace("'", "''")


def _is_url(source: str) -> bool:
    return source.lower().startswith(('http://', 'https://'))


def _is_parquet(source: str) -> bool:
    return source.lower().endswith(('.parquet', '.pq'))


def read_raw(source: str, con: duckdb.DuckDBPyConnection = None) -> pd.DataFrame:
    """Read ``source`` as-is (no normalization)."""
    if _is_url(source):
        return pd.read_csv(source, dtype=str, low_memory=False)
    if not os.path.exists(source):
        raise FileNotFoundError(source)
    if _is_parquet(source):
        table_ref = f"parquet_scan('{_sql_path(source)}')"
    else:
        table_ref = f"read_csv_auto('{_sql_path(source)}', header=true, all_varchar=true)"
    con, close = _open_con(con)
    try:
        return con.execute(f"SELECT * FROM {table_ref}").df()
    finally:
        if close:
            con.close()


def read_collisions(source: Optional[str], con: duckdb.DuckDBPyConnection = None) -> pd.DataFrame:
    """Read and normalize a collision dataset.

    Raises :class:`LoadError` when ``source`` is empty, missing, unreadable or
    lacks a collision id column.
    """
    if not source:
        raise LoadError("no collision data source configured")
    logger.info("Loading collision data from %s", source)
    try:
        raw = read_raw(str(source), con=con)
    except FileNotFoundError as e:
        raise LoadError(f"data source not found: {e}") from e
    except (duckdb.Error, OSError, ValueError) as e:
        raise LoadError(f"could not read {source}: {e}") from e
    try:
        records = normalize_records(raw)
    except KeyError as e:
        raise LoadError(f"{source} is not a collision table: {e}") from e
    logger.info("Loaded %d collision records (%d raw rows)", len(records), len(raw))
    return records


def load_records(source: Optional[str], notify: Notifier = log_notification,
                 con: duckdb.DuckDBPyConnection = None) -> pd.DataFrame:
    """Load ``source`` for a dashboard session.

    On failure the error is logged, ``notify`` gets a destructive notification
    and an empty record set is returned, so every downstream view renders
    zeros instead of failing.
    """
    try:
        records = read_collisions(source, con=con)
    except LoadError as e:
        logger.error("Collision data load failed: %s", e)
        notify(Notification("Error Loading Data", "Failed to load collision data", variant='destructive'))
        return empty_records()
    notify(Notification("Data Loaded Successfully", f"{len(records):,} collision records loaded"))
    return records
