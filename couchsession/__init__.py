"""
couchsession
CouchDB session storage with revision-checked writes and tombstone purging
"""
from couchsession.support import ConnectionConfig
from couchsession.session import (
    CouchDBSessionStore,
    SessionManager,
    SessionStore,
    set_save_handler,
)

__version__ = '1.0.0'

__all__ = [
    'ConnectionConfig',
    'CouchDBSessionStore',
    'SessionManager',
    'SessionStore',
    'set_save_handler',
]
