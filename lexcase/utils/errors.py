"""Error definitions for LexCase.

Every error carries the HTTP status it maps to and a message that is safe
to show to the client. The application's exception handlers render them
into the standard response envelope.
"""


class LexCaseError(Exception):
    """Base exception for LexCase."""

    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class Unauthenticated(LexCaseError):
    """Bearer token missing, malformed, expired or pointing at no user."""

    status_code = 401
    default_message = "Not authorized, no valid token"


class InvalidCredentials(LexCaseError):
    """Email/password or federated credential did not verify."""

    status_code = 401
    default_message = "Invalid email or password"


class Unauthorized(LexCaseError):
    """Authenticated user is not allowed to perform the operation."""

    status_code = 403
    default_message = "Not authorized"


class ValidationError(LexCaseError):
    """Request input is missing or malformed."""

    status_code = 400
    default_message = "Invalid request"


class Conflict(LexCaseError):
    """A unique field already holds the submitted value."""

    status_code = 400
    default_message = "Resource already exists"


class NotFound(LexCaseError):
    """Resource does not exist or is not owned by the requester."""

    status_code = 404
    default_message = "Resource not found"


class InternalError(LexCaseError):
    """Store or transport failure; details stay in the server log."""

    status_code = 500
