"""Error types for OAuth and mailbox operations"""

from typing import Optional


class InboxBriefError(Exception):
    """Base class for all errors raised by this project"""


class ConfigurationError(InboxBriefError):
    """Required OAuth client settings are missing

    Fatal: retrying will not help until the environment is fixed.
    """


class AuthenticationRequired(InboxBriefError):
    """The caller has no usable credentials and must log in again"""

    def __init__(self, session_id: str, message: str):
        super().__init__(message)
        self.session_id = session_id


class SessionNotFound(AuthenticationRequired):
    """No token record exists for the session id"""

    def __init__(self, session_id: str):
        super().__init__(session_id, "Session not found")


class RefreshUnavailable(AuthenticationRequired):
    """The access token expired and there is no refresh token to renew it"""

    def __init__(self, session_id: str):
        super().__init__(session_id, "Access token expired and no refresh_token available")


class ProviderError(InboxBriefError):
    """Token or mailbox endpoint answered with a non-2xx status

    Attributes:
        status_code: HTTP status, or None when no response was received
        body: Response text (or transport error description)
        operation: Short name of the failed call, used in messages
    """

    def __init__(self, status_code: Optional[int], body: str, operation: str = "request"):
        self.status_code = status_code
        self.body = body
        self.operation = operation
        if status_code is None:
            message = f"{operation} failed: {body}"
        else:
            message = f"{operation} failed ({status_code}): {body}"
        super().__init__(message)


class MalformedResponse(InboxBriefError):
    """Response body could not be parsed into the expected shape"""

    def __init__(self, operation: str, detail: str):
        super().__init__(f"{operation} returned a malformed response: {detail}")
        self.operation = operation
        self.detail = detail


class PerItemFetchError(InboxBriefError):
    """A single message fetch failed inside a batch

    Returned in place of the message rather than raised, so siblings in the
    batch still come back.
    """

    def __init__(self, message_id: str, cause: Exception):
        super().__init__(str(cause))
        self.message_id = message_id
        self.cause = cause

    def to_dict(self) -> dict:
        return {"id": self.message_id, "error": str(self.cause)}
