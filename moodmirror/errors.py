"""Error types for MoodMirror."""


class MoodMirrorError(Exception):
    """Base class for all MoodMirror errors."""


class NotFound(MoodMirrorError):
    """The requested journal entry does not exist.

    This is an expected condition (an empty calendar day), not a failure.
    """

    def __init__(self, message: str = "Entry not found", *, key: object = None):
        super().__init__(message)
        self.key = key


class ValidationError(MoodMirrorError):
    """A required field is missing or a value is out of range."""


class ConnectivityError(MoodMirrorError):
    """A remote service could not be reached or answered with a server error."""


class AuthenticationError(MoodMirrorError):
    """Credentials are missing, invalid or expired."""


class StorageCorruption(MoodMirrorError):
    """A durable local value is present but cannot be decoded."""
