"""
Exceptions raised while loading templates and generating drafts.

Every error returns the session to an idle state; none of them are fatal.
The message of each exception is what the panel shows to the user.
"""

from typing import Optional


class OutreachError(Exception):
    """Base exception for outreach panel failures."""

    pass


class CatalogFetchError(OutreachError):
    """
    Raised when the template catalog cannot be loaded.

    Covers transport failures, non-2xx responses, unparseable bodies and an
    empty catalog. Recoverable by a manual retry.
    """

    pass


class MissingFieldError(OutreachError):
    """
    Raised when a required input is empty before a request is built.

    Attributes:
        field_name: Record field (or ``record`` / ``template`` selection) that is missing
    """

    def __init__(self, field_name: str, message: Optional[str] = None):
        self.field_name = field_name
        super().__init__(message or f"The '{field_name}' field is empty for this record.")


class GenerationTransportError(OutreachError):
    """Raised when the generation endpoint cannot be reached."""

    pass


class ServerError(OutreachError):
    """
    Raised when the generation endpoint answers with a non-2xx status.

    Attributes:
        status_code: HTTP status returned by the service
        body: Raw response body text
    """

    def __init__(self, status_code: int, body: str):
        self.status_code = status_code
        self.body = body
        super().__init__(
            f"API Error (Status {status_code}): {body or 'The server returned an error.'}"
        )


class MalformedResponseError(OutreachError):
    """Raised when a 2xx response does not carry a usable email draft."""

    pass
