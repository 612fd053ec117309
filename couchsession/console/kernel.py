"""
Console Kernel
Dispatches `python -m couchsession <command>` to the registered commands
"""
import traceback
from typing import Dict, Iterable, List, Optional, Tuple

from couchsession.console.command import Command, CommandFailed
from couchsession.console.commands import SessionGcCommand, SessionInstallCommand


class Console:

    def __init__(self, commands: Optional[Iterable[Command]] = None):
        self.commands: Dict[str, Command] = {}
        for command in commands if commands is not None else self.default_commands():
            self.register(command)

    @staticmethod
    def default_commands() -> List[Command]:
        return [SessionInstallCommand(), SessionGcCommand()]

    def register(self, command: Command):
        """Register a command under its name"""
        self.commands[command.name] = command

    def show_help(self):
        """Show available commands"""
        print("couchsession - CouchDB session storage")
        print()

        if not self.commands:
            print("No commands available.")
            return

        categories: Dict[str, List[Command]] = {}
        for name, cmd in self.commands.items():
            category = name.split(':')[0] if ':' in name else 'general'
            categories.setdefault(category, []).append(cmd)

        for category in sorted(categories.keys()):
            print(f"{category.upper()}:")
            for cmd in sorted(categories[category], key=lambda c: c.name):
                print(f"  {cmd.signature:<35} {cmd.description}")
            print()

        print("Run 'python -m couchsession help <command>' for detailed information")

    async def run(self, argv: List[str]) -> int:
        """Run the console application"""
        if len(argv) < 2:
            self.show_help()
            return 0

        command_name = argv[1]

        if command_name in ['help', '--help', '-h']:
            if len(argv) > 2:
                cmd_name = argv[2]
                if cmd_name in self.commands:
                    cmd = self.commands[cmd_name]
                    print(f"\nCommand: {cmd.name}")
                    print(f"Description: {cmd.description}")
                    print(f"Signature: {cmd.signature}")
                    return 0
                print(f"Unknown command: {cmd_name}\n")
                self.show_help()
                return 1
            self.show_help()
            return 0

        if command_name not in self.commands:
            print(f"❌ Unknown command: {command_name}\n")
            self.show_help()
            return 1

        command = self.commands[command_name]
        args, kwargs = self._parse_args(argv[2:])

        try:
            exit_code = await command.handle(*args, **kwargs)
            return exit_code if exit_code is not None else 0
        except CommandFailed as e:
            return e.exit_code
        except KeyboardInterrupt:
            print("\n\n⚠ Command interrupted by user")
            return 130
        except Exception as e:
            print(f"\n❌ Error executing command: {e}\n")
            traceback.print_exc()
            return 1

    def _parse_args(self, argv: List[str]) -> Tuple[list, dict]:
        """
        Parse command line arguments
        Returns tuple of (positional_args, keyword_args)
        """
        args = []
        kwargs = {}

        for arg in argv:
            if arg.startswith('--'):
                # Long option (--verbose, --name=value)
                if '=' in arg:
                    key, value = arg[2:].split('=', 1)
                    key = key.replace('-', '_')
                    try:
                        kwargs[key] = int(value)
                    except ValueError:
                        if value.lower() in ('true', 'false'):
                            kwargs[key] = value.lower() == 'true'
                        else:
                            kwargs[key] = value
                else:
                    # Boolean flag
                    kwargs[arg[2:].replace('-', '_')] = True
            elif arg.startswith('-'):
                # Short option
                kwargs[arg[1:]] = True
            else:
                args.append(arg)

        return args, kwargs
