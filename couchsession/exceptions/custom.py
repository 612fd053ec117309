"""
Custom Exception Classes
Session store exceptions with HTTP status codes
"""
from typing import Any, Dict, Optional


class SessionStoreException(Exception):
    """Base exception for all session store exceptions"""
    status_code = 500
    message = "Session store error"

    def __init__(
        self,
        message: Optional[str] = None,
        status_code: Optional[int] = None,
        error: Optional[str] = None,
        reason: Optional[str] = None
    ):
        self.message = message or self.__class__.message
        self.status_code = status_code or self.__class__.status_code
        self.error = error
        self.reason = reason
        super().__init__(self.message)


class StoreConnectionError(SessionStoreException, ConnectionError):
    """
    Connection exception

    Raised when the document store cannot be reached

    Example:
        raise StoreConnectionError("Could not open CouchDB connection to 127.0.0.1:5984")
    """
    status_code = 503
    message = "Could not connect to the document store"


class StoreTimeoutError(StoreConnectionError, TimeoutError):
    """Raised when a request to the document store times out"""
    status_code = 504
    message = "Document store request timed out"


class StoreError(SessionStoreException):
    """
    Store error exception

    Raised for an error payload reported by the document store
    ({"error": ..., "reason": ...})
    """
    status_code = 500
    message = "Document store reported an error"


class NotFoundException(StoreError):
    """Raised when a requested document doesn't exist"""
    status_code = 404
    message = "Document not found"


class DatabaseMissingException(NotFoundException):
    """Raised when the session database doesn't exist and could not be created"""
    message = "Session database does not exist"


class ConflictException(StoreError):
    """
    Conflict exception

    Raised when a write is rejected because of a revision mismatch

    Example:
        raise ConflictException("Document update conflict.")
    """
    status_code = 409
    message = "Document update conflict"


class WriteConflictException(ConflictException):
    """Raised when a session write keeps conflicting after every allowed attempt"""
    message = "Session write gave up after repeated conflicts"

    def __init__(self, session_id: str, attempts: int):
        super().__init__(
            f"Session {session_id} still conflicting after {attempts} attempts",
            error='conflict'
        )
        self.session_id = session_id
        self.attempts = attempts


def exception_for_payload(
    body: Dict[str, Any],
    status_code: Optional[int] = None
) -> StoreError:
    """
    Build the exception matching a store error payload

    Args:
        body: Decoded error body ({"error": ..., "reason": ...})
        status_code: HTTP status code of the response

    Returns:
        StoreError subclass instance
    """
    error = body.get('error')
    reason = body.get('reason')
    message = f"{error}: {reason}" if reason else str(error)

    if error == 'conflict':
        exception_class = ConflictException
    elif error == 'not_found':
        exception_class = NotFoundException
    else:
        exception_class = StoreError

    return exception_class(message, status_code=status_code, error=error, reason=reason)
