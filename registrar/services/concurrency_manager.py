"""
Locking across several schedule registries.
"""

import logging
import threading
from contextlib import ExitStack, contextmanager
from typing import Iterable, Iterator, List, Optional, Sequence

from ..core.exceptions import InvalidArgumentError, ScheduleConflictError
from ..core.registry import ScheduleRegistry
from ..core.schedule import ScheduleWindow, conflicting_weekday

logger = logging.getLogger(__name__)


def _distinct(registries: Iterable[ScheduleRegistry]) -> List[ScheduleRegistry]:
    seen = {}
    for registry in registries:
        if registry is None:
            raise InvalidArgumentError("registry cannot be None")
        seen.setdefault(id(registry), registry)
    return sorted(seen.values(), key=lambda registry: registry.sequence)


class ConcurrencyManager:
    """Takes registry locks in one global order so multi-calendar bookings never deadlock.

    Only the registries involved are locked; unrelated bookings proceed.
    """

    def __init__(self):
        self._stats_lock = threading.Lock()
        self._bookings = 0
        self._rejections = 0

    @contextmanager
    def hold(self, *registries: ScheduleRegistry) -> Iterator[List[ScheduleRegistry]]:
        """Context manager holding the locks of every given registry."""
        ordered = _distinct(registries)
        with ExitStack() as stack:
            for registry in ordered:
                stack.enter_context(registry.lock)
            yield ordered

    def book_all(self, registries: Sequence[ScheduleRegistry], window: ScheduleWindow,
                 ignore: Optional[ScheduleWindow] = None) -> None:
        """Add ``window`` to every registry, or to none of them."""
        with self.hold(*registries) as ordered:
            for registry in ordered:
                self._check(registry, window, ignore)
            for registry in ordered:
                if window not in registry:
                    registry.add(window)
        self._count(booked=True)
        logger.info("Window booked on %d calendars", len(ordered))

    def release_all(self, registries: Sequence[ScheduleRegistry], window: ScheduleWindow) -> int:
        """Remove ``window`` from every registry; returns how many held it."""
        with self.hold(*registries) as ordered:
            return sum(1 for registry in ordered if registry.remove(window))

    def transfer(self, source: ScheduleRegistry, target: ScheduleRegistry, window: ScheduleWindow) -> None:
        """Move a window between calendars; the source keeps it if the target refuses."""
        with self.hold(source, target):
            if source is target:
                return
            self._check(target, window, None)
            target.add(window)
            source.remove(window)
        self._count(booked=True)

    def check_all(self, registries: Sequence[ScheduleRegistry], window: ScheduleWindow,
                  ignore: Optional[ScheduleWindow] = None) -> None:
        """Raise on the first registry that would reject ``window``; changes nothing."""
        with self.hold(*registries) as ordered:
            for registry in ordered:
                self._check(registry, window, ignore)

    def _check(self, registry: ScheduleRegistry, window: ScheduleWindow,
               ignore: Optional[ScheduleWindow]) -> None:
        for existing in registry.windows:
            if existing is ignore or existing is window:
                continue
            weekday = conflicting_weekday(existing, window)
            if weekday is not None:
                self._count(booked=False)
                logger.warning("Booking rejected by %s calendar of %s on %s",
                               registry.owner_kind.value, registry.describe_owner(), weekday.name)
                raise ScheduleConflictError(existing, window, weekday, registry.describe_owner())

    def _count(self, booked: bool) -> None:
        with self._stats_lock:
            if booked:
                self._bookings += 1
            else:
                self._rejections += 1

    def get_statistics(self) -> dict:
        with self._stats_lock:
            return {'bookings': self._bookings, 'rejections': self._rejections}
