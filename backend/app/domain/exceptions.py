"""Domain-specific exceptions — framework-independent."""


class EntityNotFoundError(Exception):
    """Raised when a requested entity does not exist."""

    def __init__(self, entity_type: str, entity_id: int | str):
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(f"{entity_type} with id '{entity_id}' not found")


class DuplicateEntityError(Exception):
    """Raised when attempting to create a duplicate entity."""

    def __init__(self, entity_type: str, field: str, value: str):
        self.entity_type = entity_type
        self.field = field
        self.value = value
        super().__init__(f"{entity_type} with {field}='{value}' already exists")


class ObjectNotFoundError(Exception):
    """Raised when a stored object cannot be resolved to a readable file."""

    def __init__(self, object_path: str):
        self.object_path = object_path
        super().__init__(f"Object '{object_path}' not found")


class InvalidObjectIdError(ValueError):
    """Raised when an upload target id is not one this service could have issued."""

    def __init__(self, object_id: str):
        self.object_id = object_id
        super().__init__(f"'{object_id}' is not a valid object id")
