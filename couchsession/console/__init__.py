"""
Console Package
"""
from couchsession.console.command import Command, CommandFailed
from couchsession.console.kernel import Console

__all__ = [
    'Command',
    'CommandFailed',
    'Console',
]
