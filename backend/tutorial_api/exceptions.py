"""Error types raised by the persistence layer."""


class PersistenceError(Exception):
    """Raised when the underlying store fails to read or write.

    Wraps the original SQLAlchemy error, available as `__cause__`.
    """
    error_code = "PERSISTENCE_ERROR"

    def __init__(self, message: str, operation: str = None):
        super().__init__(message)
        self.message = message
        self.operation = operation


def create_error_response(exc: PersistenceError) -> dict:
    """Build the JSON body returned for a persistence failure."""
    return {
        "status": "error",
        "error_code": exc.error_code,
        "message": exc.message,
        "operation": exc.operation,
    }
