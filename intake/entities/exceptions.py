class EntityServiceError(Exception):
    """Base exception for entity persistence failures."""


class EntityValidationError(EntityServiceError):
    """Raised when an entity breaks a field-level shape rule."""
