"""Custom exception classes for the application."""


class AppError(Exception):
    """Base application error class."""

    kind = "error"

    def __init__(self, message, status_code=400):
        """Initialize the error."""
        super().__init__(message)
        self.status_code = status_code
        self.message = message


class ValidationError(AppError):
    """Raised when user input fails validation."""

    kind = "validation"

    def __init__(self, message="Validation failed."):
        """Initialize the error."""
        super().__init__(message, 400)


class IdentityError(AppError):
    """Raised when the caller's identity cannot be established."""

    kind = "identity"

    def __init__(self, message="Could not verify your identity."):
        """Initialize the error."""
        super().__init__(message, 401)


class NotFoundError(AppError):
    """Raised when a resource is not found."""

    kind = "not_found"

    def __init__(self, message="Resource not found."):
        """Initialize the error."""
        super().__init__(message, 404)


class DuplicateResourceError(AppError):
    """Raised when trying to create a resource that already exists."""

    kind = "duplicate"

    def __init__(self, message="Resource already exists."):
        """Initialize the error."""
        super().__init__(message, 409)


class StoreError(AppError):
    """Raised when the document store cannot be reached or rejects a call."""

    kind = "store"

    def __init__(self, message="The game server could not be reached. Try again."):
        """Initialize the error."""
        super().__init__(message, 503)
