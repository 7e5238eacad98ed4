"""Portal error taxonomy.

ProviderError carries a message that is shown to the user verbatim.
Anything else reaching an action boundary is reported as an unexpected error.
"""


class PortalError(Exception):
    """Base class for expected, user-recoverable failures."""


class ProviderError(PortalError):
    """The identity provider or record store rejected the request."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class FormValidationError(PortalError):
    """A form failed client-side validation; no request was sent."""

    def __init__(self, title: str, message: str):
        super().__init__(f"{title}: {message}")
        self.title = title
        self.message = message


class BusyError(PortalError):
    """A single-flight action is already running for this client."""
