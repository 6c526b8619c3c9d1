"""Domain errors raised by the repositories."""


class LendingError(Exception):
    """Base class for all domain errors."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(LendingError):
    """Malformed or out-of-range input."""


class NotFoundError(LendingError):
    """A referenced entity does not exist."""

    def __init__(self, entity: str, entity_id):
        super().__init__(f"{entity} with id {entity_id} not found")
        self.entity = entity
        self.entity_id = entity_id


class StorageError(LendingError):
    """The underlying store failed. The original exception is kept as __cause__."""


class ConsistencyError(LendingError):
    """A write would break an inventory or workflow invariant."""
