class IntakeRequestError(Exception):
    """Base exception for a rejected intake request."""

    code: str = "INVALID_REQUEST"


class EmptyBatchError(IntakeRequestError):
    """Raised when a request carries no files to process."""

    code = "NO_FILES"


class InvalidInputFileError(IntakeRequestError):
    """Raised when one uploaded file entry is malformed or too large."""

    code = "INVALID_FILE"
