"""Application-layer exceptions. Do not reuse domain exceptions."""


class ApplicationError(Exception):
    """Base for all application-layer errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class StorageUnavailableError(ApplicationError):
    """Raised when the record store cannot be reached. Nothing is assumed about what was written."""
