"""
Domain errors raised by the invite services
"""

from typing import Iterable


class DateNightError(Exception):
    """Base class for errors surfaced to users as a flash message"""

    message = "Something went wrong."

    def __init__(self, message: str = None):
        super().__init__(message or self.message)
        if message:
            self.message = message


class NotFound(DateNightError):
    def __init__(self, resource: str = "Resource"):
        self.resource = resource
        super().__init__(f"{resource} not found")


class AlreadyUsed(DateNightError):
    message = "This invite was already used."


class InvalidSelection(DateNightError):
    """One or more submitted choices are not on the current menu"""

    def __init__(self, fields: Iterable[str]):
        self.fields = list(fields)
        super().__init__(f"Invalid choice for: {', '.join(self.fields)}")


class EventMissing(DateNightError):
    message = "This invite is missing its date night."


class NotificationFailed(DateNightError):
    """Email dispatch failed; never fatal to the caller"""

    def __init__(self, channel: str, cause: Exception):
        self.channel = channel
        self.cause = cause
        super().__init__(f"{channel} email failed: {cause}")


class ValidationFailed(DateNightError):
    pass


class TokenAllocationFailed(DateNightError):
    message = "Could not allocate a unique invite token."


class AdminLoginRequired(Exception):
    pass
