"""
Session Install Command
Creates the session database and its design document ahead of first use
"""
from typing import Callable, Optional

from couchsession.console.command import EXIT_OK, Command


class SessionInstallCommand(Command):
    """Bootstrap the session database"""

    name = "session:install"
    description = "Create the session database, gc view and validity show function"
    signature = "session:install"

    def __init__(self, gateway_factory: Optional[Callable] = None):
        super().__init__()
        self.gateway_factory = gateway_factory

    def _install(self) -> str:
        from couchsession.http import DocumentStoreGateway
        from couchsession.support import ConnectionConfig

        gateway = (
            self.gateway_factory() if self.gateway_factory
            else DocumentStoreGateway(ConnectionConfig.from_config())
        )
        gateway.initialize()
        return gateway.config.database_name

    async def handle(self, **options) -> int:
        database_name = await self.call_store(self._install, "Could not install session database")
        self.success(f"Session database {database_name} is ready")
        return EXIT_OK
