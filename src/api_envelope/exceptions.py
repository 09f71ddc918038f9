"""Domain exceptions.

Services raise DomainError subclasses to signal business-rule violations;
exception handlers in main.py turn them into error envelopes:
{"error_message": "..."}.

``InvalidStatusCode`` is not a DomainError. It marks a programming error in
the code building an envelope, so no handler maps it to a client error; it
propagates and ends up as the generic 500.
"""


class InvalidStatusCode(ValueError):
    """Raised when an envelope is built with a code outside 200-300 and 400-600."""

    def __init__(self, status_code: object) -> None:
        self.status_code = status_code
        self.message = (
            f"Status code {status_code!r} is outside the allowed ranges 200-300 and 400-600"
        )
        super().__init__(self.message)


class DomainError(Exception):
    """Base class for all domain exceptions."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class NotFoundError(DomainError):
    """Raised when a requested entity does not exist."""

    def __init__(self, entity: str, identifier: object, message: str | None = None) -> None:
        self.entity = entity
        self.identifier = identifier
        super().__init__(message or f"{entity} with id {identifier} not found")


class ConflictError(DomainError):
    """Raised when an operation conflicts with existing state (e.g. duplicate)."""
