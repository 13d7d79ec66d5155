"""
Composition root wiring settings, logging and services together.
"""

import logging
from typing import Any, Dict, Optional

from .config import Settings, get_settings
from .logging_config import setup_logging
from .services import ConcurrencyManager, EnrollmentService, SchedulerService

logger = logging.getLogger(__name__)


class RegistrarPlatform:
    """Main platform class that owns the shared services."""

    def __init__(self, settings: Optional[Settings] = None, configure_logging: bool = True):
        self._settings = settings or get_settings()
        if configure_logging:
            setup_logging(self._settings)
        self._initialize_platform()

    def _initialize_platform(self):
        """Initialize the platform with all services."""
        logger.info("Initializing registrar platform...")

        self._concurrency_manager = ConcurrencyManager()
        self._scheduler_service = SchedulerService(
            self._concurrency_manager,
            default_passing_grade=self._settings.default_passing_grade,
        )
        self._enrollment_service = EnrollmentService(self._concurrency_manager)

        logger.info("Registrar platform initialized (default passing grade %.1f)",
                    self._settings.default_passing_grade)

    @property
    def settings(self) -> Settings:
        return self._settings

    @property
    def concurrency_manager(self) -> ConcurrencyManager:
        return self._concurrency_manager

    @property
    def scheduler(self) -> SchedulerService:
        return self._scheduler_service

    @property
    def enrollments(self) -> EnrollmentService:
        return self._enrollment_service

    def get_statistics(self) -> Dict[str, Any]:
        return {
            'scheduling': self._scheduler_service.get_statistics(),
            'enrollment': self._enrollment_service.get_statistics(),
        }
