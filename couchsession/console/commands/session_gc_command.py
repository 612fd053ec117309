"""
Session GC Command
Removes expired sessions and purges deleted session documents
"""
from typing import Callable, Optional

from couchsession.console.command import EXIT_OK, Command
from couchsession.session.garbage_collector import GcResult


class SessionGcCommand(Command):
    """Run session garbage collection"""

    name = "session:gc"
    description = "Delete expired sessions and purge their tombstones"
    signature = "session:gc [--verbose]"

    def __init__(self, store_factory: Optional[Callable] = None):
        super().__init__()
        self.store_factory = store_factory

    def _collect(self) -> GcResult:
        from couchsession.session.stores import CouchDBSessionStore

        store = self.store_factory() if self.store_factory else CouchDBSessionStore()
        return store.collect_garbage()

    async def handle(self, verbose: bool = False, **options) -> int:
        result = await self.call_store(self._collect, "Session garbage collection failed")

        self.success(
            f"Removed {result.expired_count} expired sessions, "
            f"purged {result.purged_count} deleted documents"
        )

        if verbose and result.purged:
            self.table(
                ['Session', 'Revisions'],
                [[doc_id, ', '.join(revs)] for doc_id, revs in sorted(result.purged.items())]
            )

        return EXIT_OK
