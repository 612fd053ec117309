"""
Session Management Package
CouchDB-backed session storage
"""
from couchsession.session.store import SessionStore
from couchsession.session.handler import (
    set_save_handler,
    get_save_handler,
    has_save_handler,
    session_write_close,
)
from couchsession.session.garbage_collector import GcResult, SessionGarbageCollector
from couchsession.session.stores import CouchDBSessionStore, ArraySessionStore
from couchsession.session.session_manager import SessionManager

__all__ = [
    'SessionStore',
    'SessionManager',
    'CouchDBSessionStore',
    'ArraySessionStore',
    'SessionGarbageCollector',
    'GcResult',
    'set_save_handler',
    'get_save_handler',
    'has_save_handler',
    'session_write_close',
]
