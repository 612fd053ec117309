"""
Entry point: python -m couchsession <command>
"""
import asyncio
import sys

from couchsession.console import Console
from couchsession.logging import LoggerConfig


def main() -> int:
    LoggerConfig.setup_logger('couchsession', format_type='text')
    return asyncio.run(Console().run(sys.argv))


if __name__ == '__main__':
    sys.exit(main())
