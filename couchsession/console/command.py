"""
Session Command
Shared plumbing for the commands that talk to the session database
"""
import asyncio
from abc import ABC, abstractmethod
from typing import Any, Callable, List, Sequence, TypeVar

from couchsession.exceptions import SessionStoreException

T = TypeVar('T')

EXIT_OK = 0
EXIT_FAILURE = 1


class CommandFailed(Exception):
    """Raised by a command to stop with a non-zero exit code"""

    def __init__(self, message: str, exit_code: int = EXIT_FAILURE):
        super().__init__(message)
        self.exit_code = exit_code


class Command(ABC):
    """
    A console command working against the session store

    Subclasses set name, description and signature and implement handle().
    Store calls block, so they go through call_store() which runs them in
    a worker thread and turns store errors into CommandFailed.
    """

    name: str = ""
    description: str = ""
    signature: str = ""

    def __init__(self):
        if not self.signature:
            self.signature = self.name

    @abstractmethod
    async def handle(self, **options: Any) -> int:
        """
        Run the command

        Returns:
            Exit code, EXIT_OK on success
        """

    async def call_store(self, action: Callable[[], T], failure: str) -> T:
        """
        Run a blocking store call off the event loop

        Args:
            action: The store call
            failure: Prefix of the error line printed when the call fails

        Raises:
            CommandFailed: The store reported an error or was unreachable
        """
        try:
            return await asyncio.to_thread(action)
        except SessionStoreException as e:
            self.error(f"{failure}: {e}")
            raise CommandFailed(str(e)) from e

    def success(self, message: str):
        print(f"✅ {message}")

    def error(self, message: str):
        print(f"❌ {message}")

    def table(self, headers: Sequence[str], rows: List[Sequence[Any]]):
        """Print rows as left-aligned columns"""
        widths = [len(h) for h in headers]
        for row in rows:
            for i, cell in enumerate(row):
                widths[i] = max(widths[i], len(str(cell)))

        header_line = " | ".join(h.ljust(widths[i]) for i, h in enumerate(headers))
        print(header_line)
        print("-" * len(header_line))
        for row in rows:
            print(" | ".join(str(cell).ljust(widths[i]) for i, cell in enumerate(row)))
