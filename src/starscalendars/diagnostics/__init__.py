"""Diagnostics package.

- phase_cycle: phase age and bucket across one synodic month (plot needs the diagnostics extra)
- calendar_table: calendar table entries around a date
"""

__all__ = ["phase_cycle", "calendar_table"]
