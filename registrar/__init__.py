"""
Registrar: recurring class schedules, calendar conflict detection and weighted
grade aggregation for course sections.
"""

__version__ = "1.0.0"
__author__ = "Registrar Development Team"
__description__ = "Recurring schedules, conflict-free calendars and grade ledgers for course sections"
