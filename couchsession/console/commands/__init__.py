"""
Console Commands
"""
from couchsession.console.commands.session_gc_command import SessionGcCommand
from couchsession.console.commands.session_install_command import SessionInstallCommand

__all__ = [
    'SessionGcCommand',
    'SessionInstallCommand',
]
