"""
Session Stores
"""
from couchsession.session.stores.couchdb_store import CouchDBSessionStore
from couchsession.session.stores.array_store import ArraySessionStore

__all__ = [
    'CouchDBSessionStore',
    'ArraySessionStore',
]
