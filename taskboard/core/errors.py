class DomainError(Exception):
    """Base class for errors raised by the service layer."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(DomainError):
    """A referenced task or tag does not exist."""

    @classmethod
    def for_entity(cls, entity: str, entity_id: str) -> "NotFoundError":
        return cls(f"{entity} {entity_id} not found")


class ValidationError(DomainError):
    """A field value is malformed."""


class ConflictError(DomainError):
    """The change would break a uniqueness rule, e.g. a duplicate tag name."""
