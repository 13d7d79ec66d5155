"""
Owner-scoped calendars that keep their schedule windows conflict-free.
"""

import itertools
import logging
import threading
from typing import Any, Iterator, List, Optional, Tuple

from .enums import OwnerKind
from .exceptions import InvalidArgumentError, ScheduleConflictError
from .schedule import ScheduleWindow, conflicting_weekday, conflicts

logger = logging.getLogger(__name__)

_sequence = itertools.count(1)


class ScheduleRegistry:
    """Calendar of a single room, teacher or student.

    Windows are shared with the sections and enrollments that created them;
    the registry only holds references. ``add`` is all-or-nothing and the
    scan and append happen under the registry's own lock.
    """

    def __init__(self, owner_kind: OwnerKind, owner: Any = None):
        if not isinstance(owner_kind, OwnerKind):
            raise InvalidArgumentError(f"owner kind must be an OwnerKind, got {owner_kind!r}")
        self._owner_kind = owner_kind
        self._owner = owner
        self._windows: List[ScheduleWindow] = []
        self._lock = threading.RLock()
        self._sequence = next(_sequence)

    @property
    def owner_kind(self) -> OwnerKind:
        return self._owner_kind

    @property
    def owner(self) -> Any:
        return self._owner

    @property
    def lock(self) -> threading.RLock:
        """Lock guarding this registry only."""
        return self._lock

    @property
    def sequence(self) -> int:
        """Stable ordering key used when several registries are locked together."""
        return self._sequence

    @property
    def windows(self) -> Tuple[ScheduleWindow, ...]:
        with self._lock:
            return tuple(self._windows)

    def add(self, window: ScheduleWindow) -> None:
        """Add a window, failing if it collides with any held window."""
        if window is None:
            raise InvalidArgumentError("schedule window cannot be None")
        with self._lock:
            for existing in self._windows:
                weekday = conflicting_weekday(existing, window)
                if weekday is not None:
                    logger.warning("%s schedule of %s: %r conflicts with %r on %s",
                                   self._owner_kind.value, self.describe_owner(),
                                   window, existing, weekday.name)
                    raise ScheduleConflictError(existing, window, weekday, self.describe_owner())
            self._windows.append(window)
        logger.info("Schedule window added to %s calendar of %s",
                    self._owner_kind.value, self.describe_owner())

    def remove(self, window: ScheduleWindow) -> bool:
        """Remove a window by identity; returns whether it was held."""
        with self._lock:
            for index, held in enumerate(self._windows):
                if held is window:
                    del self._windows[index]
                    logger.info("Schedule window removed from %s calendar of %s",
                                self._owner_kind.value, self.describe_owner())
                    return True
        logger.debug("Schedule window not held by %s calendar of %s",
                     self._owner_kind.value, self.describe_owner())
        return False

    def find_conflicts(self, window: ScheduleWindow,
                       ignore: Optional[ScheduleWindow] = None) -> List[ScheduleWindow]:
        """Get every held window that collides with ``window``."""
        with self._lock:
            return [held for held in self._windows
                    if held is not ignore and held is not window and conflicts(held, window)]

    def conflicting_pairs(self) -> List[Tuple[ScheduleWindow, ScheduleWindow]]:
        """Audit held windows for collisions introduced by later edits."""
        with self._lock:
            held = list(self._windows)
        pairs = []
        for i, first in enumerate(held):
            for second in held[i + 1:]:
                if conflicts(first, second):
                    pairs.append((first, second))
        return pairs

    def describe_owner(self) -> str:
        if self._owner is None:
            return "<unassigned>"
        name = getattr(self._owner, 'name', None)
        return str(name) if name is not None else str(self._owner)

    def __len__(self) -> int:
        with self._lock:
            return len(self._windows)

    def __iter__(self) -> Iterator[ScheduleWindow]:
        return iter(self.windows)

    def __contains__(self, window) -> bool:
        with self._lock:
            return any(held is window for held in self._windows)

    def __repr__(self) -> str:
        return f"ScheduleRegistry({self._owner_kind.value}, owner={self.describe_owner()}, windows={len(self)})"
