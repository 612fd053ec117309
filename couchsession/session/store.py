"""
Session Store Interface
Base class for all session storage drivers
"""
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional


class SessionStore(ABC):
    """Base session store interface (open/close/read/write/destroy/gc)"""

    def open(self, save_path: Optional[str] = None, name: Optional[str] = None) -> bool:
        """
        Prepare the store for a request

        Args:
            save_path: Host save path (unused by network stores)
            name: Session name

        Returns:
            True if the store is usable
        """
        return True

    def close(self) -> bool:
        """Release per-request resources"""
        return True

    @abstractmethod
    def read(self, session_id: str) -> Dict[str, Any]:
        """
        Read session data from storage

        Args:
            session_id: Session identifier

        Returns:
            Session data dictionary (empty when there is no session)
        """
        pass

    @abstractmethod
    def write(self, session_id: str, data: Dict[str, Any]) -> bool:
        """
        Write session data to storage

        Args:
            session_id: Session identifier
            data: Session data to store

        Returns:
            True if successful
        """
        pass

    @abstractmethod
    def destroy(self, session_id: str) -> bool:
        """
        Delete session from storage

        Args:
            session_id: Session identifier

        Returns:
            True if a session was deleted
        """
        pass

    @abstractmethod
    def gc(self, max_lifetime: Optional[int] = None) -> int:
        """
        Garbage collection - remove expired sessions

        Args:
            max_lifetime: Maximum session lifetime in seconds

        Returns:
            Number of sessions deleted
        """
        pass

    @abstractmethod
    def exists(self, session_id: str) -> bool:
        """
        Check if session exists

        Args:
            session_id: Session identifier

        Returns:
            True if session exists
        """
        pass
