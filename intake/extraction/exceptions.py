class ExtractionError(Exception):
    """Raised when a file cannot be turned into candidate entities."""


class ExtractionNetworkError(ExtractionError):
    """Raised when the model service call fails due to network/infrastructure issues."""


class ReconciliationError(ExtractionError):
    """Raised when a model reply cannot be recovered into a list of entities."""
