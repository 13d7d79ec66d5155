from .abstract_entity import AbstractEntity
from .enums import OwnerKind
from .registry import ScheduleRegistry


class Room(AbstractEntity):
    def __init__(self, name, capacity=0, building=None, entity_id=None):
        super().__init__(entity_id)
        self.name = name
        self.capacity = capacity
        self.building = building
        self.schedule = ScheduleRegistry(OwnerKind.ROOM, self)

    def book(self, window):
        self.schedule.add(window)

    def release(self, window):
        return self.schedule.remove(window)

    def __repr__(self):
        return f"Room({self.name})"
