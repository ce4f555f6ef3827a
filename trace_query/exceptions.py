from fastapi import HTTPException


class TraceQueryError(HTTPException):
    """Base exception for trace query construction.

    This exception and its subclasses can be configured to expose their
    messages to the client safely.
    """

    def __init__(self, message: str, user_facing: bool = False, status_code: int = 500):
        """Initialize the trace query error.

        Args:
            message: The error message.
            user_facing: Whether the message is safe to show to the user.
            status_code: The HTTP status code to return.
        """
        super().__init__(status_code=status_code, detail=message)
        self.message = message
        self.user_facing = user_facing
        self.status_code = status_code

    def __str__(self) -> str:
        return self.message


class InvalidArgumentError(TraceQueryError):
    """Raised when a query criterion fails validation.

    The message is stable and safe to surface to an API caller.
    """

    def __init__(self, message: str, field: str | None = None):
        """Initialize an invalid argument error.

        Args:
            message: The exact validation message.
            field: Name of the criterion that was rejected, if known.
        """
        super().__init__(message, user_facing=True, status_code=400)
        self.field = field
