"""
Typed exceptions raised by the link registry and its storage backends.

Each error carries a client-safe message; the HTTP layer maps the class to a
status code and renders `{"error": message}`.

| exception       | HTTP |
|-----------------|------|
| ValidationError | 400  |
| ConflictError   | 409  |
| NotFoundError   | 404  |
| StoreError      | 500  |
"""


class LinkError(Exception):
    """Base class for registry errors."""

    status_code = 500
    message = "Internal server error."

    def __init__(self, message: str = ""):
        super().__init__(message or self.message)
        self.message = message or self.message


class ValidationError(LinkError):
    """Bad input shape or format (missing target URL, malformed short code)."""

    status_code = 400
    message = "Invalid request."


class ConflictError(LinkError):
    """The short code is already taken."""

    status_code = 409
    message = "Short code already exists."


class NotFoundError(LinkError):
    """No link has the requested short code."""

    status_code = 404
    message = "Link not found."


class StoreError(LinkError):
    """
    Datastore failure.

    The message shown to clients is always the generic one; the driver
    exception is kept on `__cause__` for server-side logging.
    """

    status_code = 500
    message = "Internal server error."
