"""
Session Manager
Host-side session facade over the active session store
"""
from typing import Any, Dict, List, Optional, Union

from couchsession.session import handler
from couchsession.session.store import SessionStore
from couchsession.support import Crypto


class SessionManager:
    """
    Session manager for one request

    Provides dictionary-like interface with additional methods:
    - get(), put(), has(), all(), pull(), forget(), flush()
    - regenerate(), invalidate()
    - save(), close()

    Usage:
        session = SessionManager(session_id)
        session.start()
        session['cart'] = [42]
        session.close()
    """

    def __init__(self, session_id: Optional[str] = None, store: Optional[SessionStore] = None):
        """
        Initialize session manager

        Args:
            session_id: Session identifier (a new one is generated when omitted)
            store: Session storage driver (defaults to the registered save handler)
        """
        self.store = store or handler.get_save_handler()
        self.session_id = session_id or self._generate_id()
        self._data: Dict[str, Any] = {}
        self._loaded = False
        self._dirty = False
        self._destroy_old_id: Optional[str] = None

    @staticmethod
    def _generate_id() -> str:
        from couchsession.defaults import DEFAULT_SESSION_ID_LENGTH
        return Crypto.generate_token(DEFAULT_SESSION_ID_LENGTH)

    def start(self) -> 'SessionManager':
        """Open the store and load session data"""
        if self._loaded:
            return self

        self.store.open()
        data = self.store.read(self.session_id)
        self._data = data if isinstance(data, dict) else {}
        self._loaded = True
        handler.track(self)
        return self

    # === Data Retrieval ===

    def get(self, key: str, default: Any = None) -> Any:
        """Get session value"""
        return self._data.get(key, default)

    def all(self) -> Dict[str, Any]:
        """Get all session data"""
        return dict(self._data)

    def has(self, key: str) -> bool:
        """Check if key exists in session"""
        return key in self._data

    # === Data Storage ===

    def put(self, key: str, value: Any) -> None:
        """Store value in session"""
        self._data[key] = value
        self._dirty = True

    # === Data Removal ===

    def forget(self, keys: Union[str, List[str]]) -> None:
        """
        Remove key(s) from session

        Args:
            keys: Single key or list of keys to remove
        """
        if isinstance(keys, str):
            keys = [keys]

        for key in keys:
            self._data.pop(key, None)

        self._dirty = True

    def pull(self, key: str, default: Any = None) -> Any:
        """Get and remove value from session"""
        value = self.get(key, default)
        self.forget(key)
        return value

    def flush(self) -> None:
        """Clear all session data"""
        self._data.clear()
        self._dirty = True

    # === Session Management ===

    def regenerate(self, destroy_old: bool = False) -> str:
        """
        Regenerate session ID

        Args:
            destroy_old: Whether to destroy the old session on save

        Returns:
            New session ID
        """
        old_id = self.session_id
        self.session_id = self._generate_id()

        if destroy_old:
            self._destroy_old_id = old_id

        self._dirty = True
        return self.session_id

    def invalidate(self) -> str:
        """Flush session and regenerate ID"""
        self.flush()
        return self.regenerate(destroy_old=True)

    def get_id(self) -> str:
        """Get current session ID"""
        return self.session_id

    @property
    def is_dirty(self) -> bool:
        return self._dirty

    # === Persistence ===

    def save(self) -> bool:
        """
        Save session data to storage

        Returns:
            True if successful
        """
        if not self._dirty:
            return True

        success = self.store.write(self.session_id, self._data)

        if self._destroy_old_id:
            self.store.destroy(self._destroy_old_id)
            self._destroy_old_id = None

        if success:
            self._dirty = False
        return success

    def close(self) -> bool:
        """Save pending changes and close the store"""
        success = self.save()
        self.store.close()
        handler.untrack(self)
        return success

    # === Dictionary Interface ===

    def __getitem__(self, key: str) -> Any:
        return self.get(key)

    def __setitem__(self, key: str, value: Any) -> None:
        self.put(key, value)

    def __delitem__(self, key: str) -> None:
        self.forget(key)

    def __contains__(self, key: str) -> bool:
        return self.has(key)

    def __repr__(self) -> str:
        return f"<SessionManager id={self.session_id[:8]}... data={len(self._data)} keys>"
