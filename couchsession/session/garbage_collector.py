"""
Session Garbage Collector
Deletes expired session documents found through the expiry view, then
purges the tombstones CouchDB keeps for every deleted document.
"""
import time
from typing import Callable, Dict, List, Optional

from couchsession.exceptions import SessionStoreException
from couchsession.http.design import view_path
from couchsession.http.gateway import DocumentStoreGateway
from couchsession.logging import getLogger

logger = getLogger(__name__)


class GcResult:
    """Outcome of one garbage collection run"""

    def __init__(self):
        self.expired: List[str] = []
        self.purged: Dict[str, List[str]] = {}

    @property
    def expired_count(self) -> int:
        return len(self.expired)

    @property
    def purged_count(self) -> int:
        return len(self.purged)

    def __repr__(self) -> str:
        return f"<GcResult expired={self.expired_count} purged={self.purged_count}>"


class SessionGarbageCollector:
    """
    Two phase garbage collector

    1. Query the gc view for sessions that expired at least a second ago
       and destroy each one at the revision the view reported.
    2. Read the change feed, collect every revision of deleted documents
       and purge them in one bulk request.

    Running it twice is harmless: the second run finds nothing to do.
    """

    def __init__(
        self,
        gateway: DocumentStoreGateway,
        destroy: Callable[[str, Optional[str]], bool],
        clock: Callable[[], float] = time.time
    ):
        """
        Initialize garbage collector

        Args:
            gateway: Gateway to the session database
            destroy: Callable deleting one document at a revision
            clock: Returns the current Unix time
        """
        self.gateway = gateway
        self.destroy = destroy
        self.clock = clock

    def collect(self) -> GcResult:
        """
        Run both phases

        A failing phase is logged and does not prevent the other one.

        Returns:
            GcResult
        """
        result = GcResult()

        try:
            self._remove_expired(result)
        except SessionStoreException as e:
            logger.error(f"Session gc: removing expired sessions failed: {e}", exc_info=True)

        try:
            self._purge_deleted(result)
        except SessionStoreException as e:
            logger.error(f"Session gc: purging deleted sessions failed: {e}", exc_info=True)

        logger.info(
            f"Session gc: {result.expired_count} expired sessions removed, "
            f"{result.purged_count} tombstones purged"
        )
        return result

    def _remove_expired(self, result: GcResult):
        # Sessions that expired at least a second ago
        endkey = int(self.clock()) - 1
        response = self.gateway.request(view_path(endkey)).raise_for_error()

        for row in response.get('rows') or []:
            # The index may lag behind the documents, check again
            if row.get('key') is None or row['key'] >= int(self.clock()):
                continue

            try:
                if self.destroy(row['id'], row.get('value')):
                    result.expired.append(row['id'])
            except SessionStoreException as e:
                logger.warning(f"Session gc: could not destroy {row['id']}: {e}")

    def _purge_deleted(self, result: GcResult):
        response = self.gateway.request('/_changes?style=all_docs').raise_for_error()

        to_purge = self.collect_tombstones(response.get('results') or [])
        if not to_purge:
            return

        self.gateway.request('/_purge', 'POST', to_purge).raise_for_error()
        result.purged.update(to_purge)

    @staticmethod
    def collect_tombstones(changes: List[dict]) -> Dict[str, List[str]]:
        """
        Group the revisions of deleted documents by id

        Args:
            changes: 'results' entries of a _changes response

        Returns:
            {document id: [revisions]} without duplicate revisions
        """
        to_purge: Dict[str, List[str]] = {}

        for change in changes:
            if not change.get('deleted'):
                continue

            revisions = to_purge.setdefault(change['id'], [])
            for entry in change.get('changes', []):
                rev = entry.get('rev')
                if rev and rev not in revisions:
                    revisions.append(rev)

        return {doc_id: revs for doc_id, revs in to_purge.items() if revs}
