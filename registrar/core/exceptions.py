"""
Custom exceptions for the registrar core.
"""

from typing import Optional, Any, Dict


class RegistrarError(Exception):
    """Base exception for all registrar errors."""

    def __init__(self, message: str, error_code: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}


class InvalidArgumentError(RegistrarError):
    """Raised when a required value is missing or out of range."""

    def __init__(self, message: str, error_code: Optional[str] = "invalid_argument",
                 details: Optional[Dict[str, Any]] = None):
        super().__init__(message, error_code, details)


class InvalidRangeError(RegistrarError):
    """Raised when a date range is inverted or falls outside its enclosing period."""

    def __init__(self, message: str, error_code: Optional[str] = "invalid_range",
                 details: Optional[Dict[str, Any]] = None):
        super().__init__(message, error_code, details)


class ScheduleConflictError(RegistrarError):
    """Raised when a window collides with one already held by a registry."""

    def __init__(self, existing: Any, candidate: Any, weekday: Any = None,
                 owner: Any = None):
        message = f"Schedule {candidate} conflicts with {existing}"
        if owner is not None:
            message = f"{message} in the calendar of {owner}"
        super().__init__(message, "schedule_conflict", {
            'existing': existing,
            'candidate': candidate,
            'weekday': weekday,
            'owner': owner,
        })
        self.existing = existing
        self.candidate = candidate
        self.weekday = weekday
        self.owner = owner


class WeightageExceededError(RegistrarError):
    """Raised when an assessment grade would push the ledger over its 100% budget."""

    def __init__(self, current_total: float, attempted: float, limit: float = 100.0):
        self.current_total = current_total
        self.attempted = attempted
        self.excess = current_total + attempted - limit
        message = (
            f"Adding the assessment grade would exceed the total weightage limit ({limit:g}). "
            f"Current total: {current_total:.2f}, New weightage: {attempted:.2f}, "
            f"Excess weightage: {self.excess:.2f}"
        )
        super().__init__(message, "weightage_exceeded", {
            'current_total': current_total,
            'attempted': attempted,
            'excess': self.excess,
        })


class NotFoundError(RegistrarError):
    """Raised when a requested item is not present in the target collection."""

    def __init__(self, message: str, error_code: Optional[str] = "not_found",
                 details: Optional[Dict[str, Any]] = None):
        super().__init__(message, error_code, details)
