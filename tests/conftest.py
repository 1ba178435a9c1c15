import pandas as pd
import pytest

from nyc_collisions.records import normalize_records

# Raw NYC Open Data shape: one row per vehicle, text fields as exported.
# Collision 1 has two vehicle rows; collision 4 has nothing parsable but its id.
RAW_ROWS = [
    {'COLLISION_ID': '1', 'BOROUGH': 'BROOKLYN', 'CRASH DATE': '01/07/2019', 'CRASH TIME': '8:30',
     'NUMBER OF PERSONS INJURED': '1', 'NUMBER OF PERSONS KILLED': '0', 'VEHICLE TYPE CODE 1': 'Sedan',
     'CONTRIBUTING FACTOR VEHICLE 1': 'Driver Inattention/Distraction', 'LATITUDE': '40.65', 'LONGITUDE': '-73.95'},
    {'COLLISION_ID': '1', 'BOROUGH': 'BROOKLYN', 'CRASH DATE': '01/07/2019', 'CRASH TIME': '8:30',
     'NUMBER OF PERSONS INJURED': '2', 'NUMBER OF PERSONS KILLED': '0', 'VEHICLE TYPE CODE 1': 'Taxi',
     'CONTRIBUTING FACTOR VEHICLE 1': 'Unspecified', 'LATITUDE': '40.65', 'LONGITUDE': '-73.95'},
    {'COLLISION_ID': '2', 'BOROUGH': 'QUEENS', 'CRASH DATE': '01/08/2019', 'CRASH TIME': '17:05',
     'NUMBER OF PERSONS INJURED': '0', 'NUMBER OF PERSONS KILLED': '1', 'VEHICLE TYPE CODE 1': 'Taxi',
     'CONTRIBUTING FACTOR VEHICLE 1': 'Unsafe Speed', 'LATITUDE': '40.72', 'LONGITUDE': '-73.80'},
    {'COLLISION_ID': '3', 'BOROUGH': 'brooklyn ', 'CRASH DATE': '03/01/2020', 'CRASH TIME': '23:59',
     'NUMBER OF PERSONS INJURED': '3', 'NUMBER OF PERSONS KILLED': '0', 'VEHICLE TYPE CODE 1': 'Sedan',
     'CONTRIBUTING FACTOR VEHICLE 1': 'Driver  Inattention/Distraction', 'LATITUDE': '0', 'LONGITUDE': '0'},
    {'COLLISION_ID': '4', 'BOROUGH': None, 'CRASH DATE': 'not a date', 'CRASH TIME': 'xx',
     'NUMBER OF PERSONS INJURED': 'abc', 'NUMBER OF PERSONS KILLED': None, 'VEHICLE TYPE CODE 1': None,
     'CONTRIBUTING FACTOR VEHICLE 1': None, 'LATITUDE': None, 'LONGITUDE': None},
    {'COLLISION_ID': '5', 'BOROUGH': 'MANHATTAN', 'CRASH DATE': '03/10/2020', 'CRASH TIME': '0:15',
     'NUMBER OF PERSONS INJURED': '0', 'NUMBER OF PERSONS KILLED': '0', 'VEHICLE TYPE CODE 1': 'Bus',
     'CONTRIBUTING FACTOR VEHICLE 1': 'Unsafe Speed', 'LATITUDE': '40.75', 'LONGITUDE': '-73.99'},
]


@pytest.fixture
def raw_frame():
    return pd.DataFrame(RAW_ROWS)


@pytest.fixture
def records(raw_frame):
    return normalize_records(raw_frame)
