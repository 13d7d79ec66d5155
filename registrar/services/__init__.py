"""
Services module orchestrating bookings and enrollments across calendars.
"""

from .concurrency_manager import ConcurrencyManager
from .enrollment_service import EnrollmentService
from .scheduler_service import SchedulerService

__all__ = [
    "ConcurrencyManager",
    "EnrollmentService",
    "SchedulerService",
]
