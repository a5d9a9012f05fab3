"""Aggregation module for survey statistics.

- Filters responses by date or weekday
- Computes totals, averages, distributions and time buckets
- Rolls statistics up per category and renders CSV exports
- Forbidden: writes to the database
"""
