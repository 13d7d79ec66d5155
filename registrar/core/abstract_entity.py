from datetime import datetime, timezone


class AbstractEntity:
    """
    Base class for domain objects with:
    - an opaque id handed in by the persistence layer (None until stored)
    - created/updated timestamps
    - a version counter bumped on every mutation
    """
    def __init__(self, entity_id=None):
        self.id = entity_id
        self.created_at = datetime.now(timezone.utc)
        self.updated_at = self.created_at
        self.version = 1

    def touch(self):
        self.updated_at = datetime.now(timezone.utc)
        self.version += 1
