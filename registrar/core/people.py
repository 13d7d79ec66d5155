from .abstract_entity import AbstractEntity
from .enums import OwnerKind
from .registry import ScheduleRegistry


class Person(AbstractEntity):
    owner_kind = None

    def __init__(self, name, email=None, entity_id=None):
        super().__init__(entity_id)
        self.name = name
        self.email = email
        self.schedule = ScheduleRegistry(self.owner_kind, self)

    def __repr__(self):
        return f"{self.__class__.__name__}({self.name})"


class Teacher(Person):
    owner_kind = OwnerKind.TEACHER


class Student(Person):
    owner_kind = OwnerKind.STUDENT
