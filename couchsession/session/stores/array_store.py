"""
Array Session Store
Stores sessions in memory (for testing only)
"""
import time
from typing import Any, Callable, Dict, Optional
from couchsession.session.store import SessionStore


class ArraySessionStore(SessionStore):
    """
    In-memory session storage

    WARNING: Not suitable for production use.
    Sessions are lost when the application restarts.
    """

    def __init__(self, lifetime: Optional[int] = None, clock: Callable[[], float] = time.time):
        """Initialize array session store"""
        if lifetime is None:
            from couchsession.defaults import DEFAULT_SESSION_LIFETIME
            lifetime = DEFAULT_SESSION_LIFETIME
        self.lifetime = lifetime
        self.clock = clock
        self._sessions: Dict[str, Dict[str, Any]] = {}

    def read(self, session_id: str) -> Dict[str, Any]:
        """Read session from memory"""
        entry = self._sessions.get(session_id)
        if entry is None:
            return {}
        return dict(entry['data'])

    def write(self, session_id: str, data: Dict[str, Any]) -> bool:
        """Write session to memory"""
        if not session_id:
            return False
        self._sessions[session_id] = {
            'data': dict(data),
            'expiry': int(self.clock()) + self.lifetime,
        }
        return True

    def destroy(self, session_id: str) -> bool:
        """Delete session from memory"""
        return self._sessions.pop(session_id, None) is not None

    def gc(self, max_lifetime: Optional[int] = None) -> int:
        """Remove expired sessions"""
        now = int(self.clock())
        expired = [sid for sid, entry in self._sessions.items() if entry['expiry'] < now]
        for session_id in expired:
            del self._sessions[session_id]
        return len(expired)

    def exists(self, session_id: str) -> bool:
        """Check if session exists in memory"""
        return session_id in self._sessions
