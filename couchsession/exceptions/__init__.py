"""
Exceptions Package
"""
from couchsession.exceptions.custom import (
    SessionStoreException,
    StoreConnectionError,
    StoreTimeoutError,
    StoreError,
    NotFoundException,
    DatabaseMissingException,
    ConflictException,
    WriteConflictException,
    exception_for_payload,
)

__all__ = [
    'SessionStoreException',
    'StoreConnectionError',
    'StoreTimeoutError',
    'StoreError',
    'NotFoundException',
    'DatabaseMissingException',
    'ConflictException',
    'WriteConflictException',
    'exception_for_payload',
]
