"""
Save Handler Registry
Holds the active session backend and writes open sessions back at shutdown
"""
import atexit
import threading
import weakref
from typing import TYPE_CHECKING, Optional

from couchsession.logging import getLogger
from couchsession.session.store import SessionStore

if TYPE_CHECKING:
    from couchsession.session.session_manager import SessionManager

logger = getLogger(__name__)

_lock = threading.Lock()
_handler: Optional[SessionStore] = None
_open_sessions: 'weakref.WeakSet[SessionManager]' = weakref.WeakSet()
_shutdown_registered = False


def set_save_handler(store: SessionStore) -> SessionStore:
    """
    Register the active session backend

    The first registration also installs session_write_close() as an
    interpreter shutdown hook.

    Args:
        store: Session store to use for every session

    Returns:
        The registered store
    """
    global _handler, _shutdown_registered

    with _lock:
        _handler = store
        if not _shutdown_registered:
            atexit.register(session_write_close)
            _shutdown_registered = True

    logger.debug(f"Session save handler set to {store.__class__.__name__}")
    return store


def get_save_handler() -> SessionStore:
    """
    Get the active session backend

    Raises:
        RuntimeError: No save handler has been registered
    """
    if _handler is None:
        raise RuntimeError("No session save handler registered, call set_save_handler() first")
    return _handler


def has_save_handler() -> bool:
    return _handler is not None


def track(session: 'SessionManager'):
    """Remember an open session so shutdown can save it"""
    _open_sessions.add(session)


def untrack(session: 'SessionManager'):
    _open_sessions.discard(session)


def session_write_close() -> int:
    """
    Save and close every open session

    Returns:
        Number of sessions closed
    """
    sessions = list(_open_sessions)
    for session in sessions:
        try:
            session.close()
        except Exception as e:
            # Keep flushing the others during shutdown
            logger.error(f"Could not save session {session.get_id()}: {e}", exc_info=True)
    return len(sessions)


def reset():
    """Forget the registered handler and open sessions (for tests)"""
    global _handler
    with _lock:
        _handler = None
        _open_sessions.clear()
