"""
CouchDB Session Store
Stores each session as a CouchDB document whose _id is the session id.
Concurrent writers are reconciled through CouchDB's revision checks.
"""
import json
import time
from typing import Any, Callable, Dict, Optional

from couchsession.exceptions import StoreError, WriteConflictException
from couchsession.http.design import show_path
from couchsession.http.gateway import CouchResponse, DocumentStoreGateway, document_path
from couchsession.logging import getLogger
from couchsession.session.garbage_collector import GcResult, SessionGarbageCollector
from couchsession.session.store import SessionStore
from couchsession.support import ConnectionConfig

logger = getLogger(__name__)


class CouchDBSessionStore(SessionStore):
    """
    CouchDB-backed session storage

    Document layout:
        {
            "_id": "<session id>",
            "_rev": "<revision>",
            "session_expiry": <unix timestamp>,
            "session_data": "<JSON encoded session payload>"
        }

    Usage:
        store = CouchDBSessionStore(ConnectionConfig.from_config())
        store.set_save_handler()
    """

    def __init__(
        self,
        config: Optional[ConnectionConfig] = None,
        gateway: Optional[DocumentStoreGateway] = None,
        clock: Callable[[], float] = time.time
    ):
        """
        Initialize CouchDB session store

        Args:
            config: Connection configuration (read from the host config when omitted)
            gateway: Gateway to use (built from config when omitted)
            clock: Returns the current Unix time
        """
        if config is None:
            config = gateway.config if gateway is not None else ConnectionConfig.from_config()
        self.config = config
        self.gateway = gateway or DocumentStoreGateway(config)
        self.clock = clock
        self.collector = SessionGarbageCollector(self.gateway, self.destroy, clock=clock)

    def set_save_handler(self) -> 'CouchDBSessionStore':
        """
        Make this store the active session backend and flush open
        sessions at interpreter shutdown

        Returns:
            self
        """
        from couchsession.session.handler import set_save_handler
        set_save_handler(self)
        return self

    def _now(self) -> int:
        return int(self.clock())

    def _fetch(self, session_id: str) -> CouchResponse:
        return self.gateway.request(document_path(session_id))

    def read(self, session_id: str) -> Dict[str, Any]:
        """
        Read the session payload

        A missing document means a new session. Store errors and unreadable
        payloads are logged and also treated as an empty session.
        """
        if not session_id:
            return {}

        response = self._fetch(session_id)

        if response.is_not_found:
            return {}

        if response.is_error:
            logger.warning(f"Could not read session {session_id}: {response.error} ({response.reason})")
            return {}

        raw = response.get('session_data')
        if raw is None:
            return {}

        try:
            return json.loads(raw)
        except (TypeError, ValueError):
            logger.warning(f"Session {session_id} holds undecodable data, starting empty")
            return {}

    def write(self, session_id: str, data: Dict[str, Any]) -> bool:
        """
        Write the session payload

        Reads the current document, applies the payload and a fresh expiry
        and PUTs it back. On a revision conflict the latest document is read
        again and the PUT retried, up to max_write_attempts times.

        Returns:
            True when the document was stored
        """
        if not session_id:
            return False

        response = self._fetch(session_id)

        if response.is_not_found:
            # New session
            document = {'_id': session_id}
        elif response.is_error:
            logger.warning(f"Could not load session {session_id} for writing: {response.error}")
            return False
        else:
            document = response.body

        try:
            encoded = json.dumps(data)
        except (TypeError, ValueError) as e:
            logger.warning(f"Could not encode session {session_id}: {e}")
            return False

        try:
            self._put_with_retry(session_id, document, encoded)
        except WriteConflictException as e:
            logger.warning(str(e))
            return False
        except StoreError as e:
            logger.warning(f"Could not write session {session_id}: {e}")
            return False

        return True

    def _put_with_retry(self, session_id: str, document: Dict[str, Any], encoded: str):
        path = document_path(session_id)

        for attempt in range(1, self.config.max_write_attempts + 1):
            document['session_expiry'] = self._now() + self.config.max_lifetime
            document['session_data'] = encoded

            response = self.gateway.request(path, 'PUT', document)
            if not response.is_conflict:
                response.raise_for_error()
                return

            logger.debug(f"Write conflict on session {session_id} (attempt {attempt})")
            if attempt == self.config.max_write_attempts:
                break

            # Another writer got there first, start over from its revision
            document = self._fetch(session_id).raise_for_error().body

        raise WriteConflictException(session_id, self.config.max_write_attempts)

    def destroy(self, session_id: str, revision: Optional[str] = None) -> bool:
        """
        Delete the session document

        Args:
            session_id: Session identifier
            revision: Revision to delete; looked up when omitted

        Returns:
            True if the document was deleted, False when it was already gone
        """
        if not session_id:
            return False

        if not revision:
            response = self._fetch(session_id)
            if response.is_error:
                return False
            revision = response.get('_rev')

        response = self.gateway.request(
            f"{document_path(session_id)}?rev={revision}",
            'DELETE'
        )

        if response.is_error:
            if not response.is_not_found:
                logger.warning(f"Could not destroy session {session_id}: {response.error} ({response.reason})")
            return False

        return True

    def gc(self, max_lifetime: Optional[int] = None) -> int:
        """
        Remove expired sessions and purge deleted ones

        Expiry is stored per document, so max_lifetime is not used.

        Returns:
            Number of expired sessions removed
        """
        return self.collect_garbage().expired_count

    def collect_garbage(self) -> GcResult:
        """Run garbage collection and return the detailed result"""
        return self.collector.collect()

    def exists(self, session_id: str) -> bool:
        """Check if the session document exists"""
        if not session_id:
            return False
        return not self._fetch(session_id).is_error

    def is_valid(self, session_id: str) -> bool:
        """
        Ask the is_session_valid show function whether the session is current

        Returns:
            True when CouchDB answers 'true'
        """
        if not session_id:
            return False

        response = self.gateway.request(show_path(document_path(session_id)))
        if response.status_code >= 400:
            return False
        return response.raw_body.strip() == 'true'
