import os
import sys
import time
import traceback

import plotly.graph_objects as go

repo_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
if repo_root not in sys.path:
    sys.path.insert(0, repo_root)

from nyc_collisions import figures
from nyc_collisions.charts import chart_data
from nyc_collisions.config import resolve_data_source
from nyc_collisions.filters import apply_filters, build_criteria
from nyc_collisions.loader import read_collisions
from nyc_collisions.maps import map_points
from nyc_collisions.metrics import summary_metrics
from nyc_collisions.options import filter_options

src = sys.argv[1] if len(sys.argv) > 1 else resolve_data_source()
search = sys.argv[2] if len(sys.argv) > 2 else ''
print('Using source:', src)

start = time.time()
records = read_collisions(src)
print(f'Loaded {len(records):,} records in {time.time() - start:.2f}s')

options = filter_options(records)
print('Options:', len(options.boroughs), 'boroughs,', len(options.years), 'years,',
      len(options.vehicle_types), 'vehicle types,', len(options.factors), 'factors')

criteria = build_criteria(search=search, year_options=options.years)
filtered = apply_filters(records, criteria)
print(f'Filtered ({criteria.effective_borough}, {criteria.effective_year}): {len(filtered):,} rows')
print('Metrics:', summary_metrics(filtered).as_dict())

charts = chart_data(filtered)
builds = [
    ('borough_bar', figures.borough_bar, charts.by_borough),
    ('crashes_over_time', figures.crashes_over_time, charts.by_year),
    ('hour_area', figures.hour_area, charts.by_hour),
    ('day_of_week_bar', figures.day_of_week_bar, charts.by_day_of_week),
    ('factor_bar', figures.factor_bar, charts.top_factors),
    ('vehicle_bar', figures.vehicle_bar, charts.top_vehicle_types),
    ('casualties_bar', figures.casualties_bar, charts.casualties_by_borough),
    ('collision_map', figures.collision_map, map_points(filtered)),
]

results = []

for name, build, data in builds:
    print('\n---')
    print('Running:', name)
    start = time.time()
    try:
        fig = build(data)
        elapsed = time.time() - start
        print(f'  OK: returned {type(fig).__name__} with {len(fig.data)} traces in {elapsed:.2f}s')
        if not isinstance(fig, go.Figure):
            print('  Warning: returned object is not plotly.graph_objects.Figure')
        results.append((name, True))
    except Exception:
        print(f'  FAILED in {time.time() - start:.2f}s')
        traceback.print_exc()
        results.append((name, False))

print('\n=== Summary ===')
for name, ok in results:
    print(f'{name}:', 'OK' if ok else 'FAILED')

if not all(ok for _, ok in results):
    print('\nSome figures failed.')
    raise SystemExit(2)
print('\nAll figures built')
