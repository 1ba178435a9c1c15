#!/usr/bin/env python3
"""
Build the dashboard's Parquet dataset from a raw NYC Open Data export.

DuckDB scans the raw "Motor Vehicle Collisions - Crashes" CSV (the full export
is several GB), keeps only the columns the dashboard reads, casts the numeric
ones and hands the result to pyarrow, which writes a snappy-compressed Parquet
file. The dashboard and ``nyc_collisions.loader`` read that file directly.

Usage:
  python scripts/build_parquet.py \
       --input Motor_Vehicle_Collisions_-_Crashes.csv \
       --output collisions.parquet

Requires: duckdb, pyarrow
"""
import argparse
import os
import textwrap
import time

import duckdb
import pyarrow.parquet as pq

# output column -> (raw column, DuckDB type or None to keep text)
COLUMNS = {
    'COLLISION_ID': ('COLLISION_ID', 'BIGINT'),
    'BOROUGH': ('BOROUGH', None),
    'CRASH_DATE': ('CRASH DATE', None),
    'CRASH_TIME': ('CRASH TIME', None),
    'NUMBER_OF_PERSONS_INJURED': ('NUMBER OF PERSONS INJURED', 'BIGINT'),
    'NUMBER_OF_PERSONS_KILLED': ('NUMBER OF PERSONS KILLED', 'BIGINT'),
    'VEHICLE_TYPE_CODE_1': ('VEHICLE TYPE CODE 1', None),
    'CONTRIBUTING_FACTOR_VEHICLE_1': ('CONTRIBUTING FACTOR VEHICLE 1', None),
    'LATITUDE': ('LATITUDE', 'DOUBLE'),
    'LONGITUDE': ('LONGITUDE', 'DOUBLE'),
}


def _quote_ident(name: str) -> str:
    return '"' + name.replace('"', '""') + '"'


def build_select(table_ref: str, available) -> str:
    available = {c.upper(): c for c in available}
    exprs = []
    for out_col, (raw_col, cast) in COLUMNS.items():
        src = available.get(raw_col.upper()) or available.get(out_col)
        if src is None:
            print(f'  column {raw_col!r} not found, writing NULLs')
            exprs.append(f"NULL AS {out_col}")
        elif cast:
            exprs.append(f"TRY_CAST({_quote_ident(src)} AS {cast}) AS {out_col}")
        else:
            exprs.append(f"NULLIF(TRIM(CAST({_quote_ident(src)} AS VARCHAR)), '') AS {out_col}")
    return textwrap.dedent(f"""
        SELECT {', '.join(exprs)}
        FROM {table_ref}
    """)


def run(input_path: str, output_path: str, compression: str = 'snappy'):
    if not os.path.exists(input_path):
        raise FileNotFoundError(f"Source CSV not found: {input_path}")

    start = time.time()
    con = duckdb.connect(database=':memory:')
    try:
        src = input_path.replace('\\', '/').replace("'", "''")
        table_ref = f"read_csv_auto('{src}', header=true, all_varchar=true)"
        available = con.execute(f"SELECT * FROM {table_ref} LIMIT 0").df().columns
        print('Projecting columns...')
        table = con.execute(build_select(table_ref, available)).fetch_arrow_table()
    finally:
        con.close()

    print(f'Writing {table.num_rows:,} rows to {output_path}...')
    pq.write_table(table, output_path, compression=compression)
    print(f'Done in {time.time() - start:.1f}s ({os.path.getsize(output_path) / 1024**2:.2f} MB)')


def main():
    p = argparse.ArgumentParser()
    p.add_argument("--input", required=True, help="Path to the raw NYC Open Data CSV export")
    p.add_argument("--output", default="collisions.parquet", help="Parquet file to write")
    p.add_argument("--compression", default="snappy", help="Compression codec (snappy, zstd, gzip)")
    args = p.parse_args()
    run(args.input, args.output, compression=args.compression)


if __name__ == "__main__":
    main()
