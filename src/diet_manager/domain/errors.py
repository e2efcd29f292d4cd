"""Errors raised by services and mapped to HTTP responses by the API."""


class DietManagerError(Exception):
    """Base class for expected, user-facing failures."""

    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class NotFoundError(DietManagerError):
    """A referenced record does not exist."""

    status_code = 404


class AccessDeniedError(DietManagerError):
    """The caller does not own the record and is not an admin."""

    status_code = 403

    def __init__(self, message: str = "Access denied") -> None:
        super().__init__(message)


class ConflictError(DietManagerError):
    """A uniqueness constraint would be violated."""

    status_code = 409


class BadRequestError(DietManagerError):
    """The request is missing or has malformed input."""

    status_code = 400


class IncompleteProfileError(BadRequestError):
    """The profile lacks the fields needed for an estimate."""

    def __init__(
        self,
        message: str = "Please complete your profile (age, height, weight) first",
    ) -> None:
        super().__init__(message)


class InvalidDateError(BadRequestError):
    """A date string could not be parsed as YYYY-MM-DD."""

    def __init__(self, message: str = "Invalid date format. Use YYYY-MM-DD") -> None:
        super().__init__(message)
