import os
import sys

repo_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
if repo_root not in sys.path:
    sys.path.insert(0, repo_root)

from nyc_collisions.config import resolve_data_source
from nyc_collisions.loader import LoadError, read_collisions
from nyc_collisions.metrics import summary_metrics
from nyc_collisions.records import COLLISION_ID

src = sys.argv[1] if len(sys.argv) > 1 else resolve_data_source()
print('CWD:', os.getcwd())
print('Source:', src)
try:
    records = read_collisions(src)
except LoadError as e:
    print('ERROR', e)
    raise SystemExit(1)

m = summary_metrics(records)
print('rows:', len(records))
print('distinct collisions:', m.total_crashes)
print('rows per collision:', round(len(records) / m.total_crashes, 2) if m.total_crashes else 0)
dupes = records[COLLISION_ID].duplicated(keep=False).sum()
print('rows sharing a collision id:', int(dupes))
print('injuries (row sum):', m.total_injuries)
print('fatalities (row sum):', m.total_fatalities)
print('avg crashes/day:', round(m.avg_per_day, 1))
