"""
Custom exceptions for the TACACS+ authorization client.

One small hierarchy covers usage errors, configuration problems and
failures reported by the transport adapter.
"""


class TacacsError(Exception):
    """Base TACACS+ client exception."""

    pass


class ConfigurationError(TacacsError):
    """Configuration specific error"""

    pass


class ValidationError(TacacsError):
    """Input validation error (reported to the user as a usage error)"""

    pass


class TransportError(TacacsError):
    """A collaborator operation (open, create, send, ...) failed.

    ``operation`` names the failing step, ``message`` carries the
    diagnostic text; ``str()`` renders both as ``operation: message``.
    """

    def __init__(self, operation: str, message: str):
        self.operation = operation
        self.message = message
        super().__init__(f"{operation}: {message}")


class ProtocolError(TransportError, ValueError):
    """A server answered with a reply that could not be parsed.

    Reported like any other failed operation, but never retried against
    the next server.
    """
