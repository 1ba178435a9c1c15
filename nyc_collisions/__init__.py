"""Aggregation pipeline and dashboard for NYC motor vehicle collision records."""

__version__ = '0.1.0'
