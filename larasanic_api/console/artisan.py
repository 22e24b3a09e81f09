import asyncio
import importlib.util
import inspect
import sys

from larasanic_api.console.command import Command
from larasanic_api.logging import LoggerConfig, getLogger
from larasanic_api.support import Storage, EnvHelper

logger = getLogger(__name__)


class Artisan:

    def __init__(self, discover: bool = True):
        self.commands = {}
        self.command_files = {}  # Map command names to file paths
        if discover:
            self._discover_commands()

    @staticmethod
    def command_paths():
        """Directories scanned for commands"""
        return [
            Storage.framework('console', 'commands'),  # Package commands
            Storage.app('console'),  # Application commands
        ]

    def register(self, command: Command, source: str = None):
        """Register a command instance under its name"""
        self.commands[command.name] = command
        if source:
            self.command_files[command.name] = source
        return command

    def _discover_commands(self):
        """Auto-discover Command subclasses in the command paths"""
        for command_path in self.command_paths():
            if not command_path.exists():
                continue

            for py_file in sorted(command_path.glob('*.py')):
                if py_file.name.startswith('__'):
                    continue

                try:
                    module = self._load_module(py_file)
                except Exception as e:
                    logger.warning(f"Skipping command file {py_file}: {e}")
                    continue

                for _, obj in inspect.getmembers(module, inspect.isclass):
                    if (issubclass(obj, Command) and
                            obj is not Command and
                            not inspect.isabstract(obj) and
                            obj.name):
                        self.register(obj(), str(py_file))

    @staticmethod
    def _load_module(py_file):
        spec = importlib.util.spec_from_file_location(py_file.stem, py_file)
        if not spec or not spec.loader:
            raise ImportError(f"can't load {py_file}")

        module = importlib.util.module_from_spec(spec)
        spec.loader.exec_module(module)
        return module

    def show_help(self):
        """Show available commands"""
        print("╔═══════════════════════════════════════════════════════════╗")
        print("║  Artisan - API scaffolding                                ║")
        print("╚═══════════════════════════════════════════════════════════╝")
        print()

        if not self.commands:
            print("No commands available.")
            return

        # Group commands by category ("api:generate-policy" -> "api")
        categories = {}
        for name, cmd in self.commands.items():
            category = name.split(':')[0] if ':' in name else 'general'
            categories.setdefault(category, []).append((name, cmd))

        for category in sorted(categories.keys()):
            print(f"{category.upper()}:")
            for name, cmd in sorted(categories[category], key=lambda item: item[0]):
                print(f"  {cmd.signature:<50} {cmd.description}")
            print()

        print("Run 'artisan help <command>' for detailed information")

    async def run(self, argv):
        """Run the CLI application"""
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

        except KeyboardInterrupt:
            print("\n\n⚠ Command interrupted by user")
            return 130
        except Exception as e:
            print(f"\n❌ Error executing command: {e}\n")
            logger.debug(f"Command {command_name} failed", exc_info=True)
            return 1

    def _parse_args(self, argv):
        """
        Parse command line arguments
        Returns tuple of (positional_args, keyword_args)
        """
        args = []
        kwargs = {}

        for arg in argv:
            if arg.startswith('--'):
                # Long option (--force, --path=value)
                if '=' in arg:
                    key, value = arg[2:].split('=', 1)
                    try:
                        kwargs[key] = int(value)
                    except ValueError:
                        if value.lower() in ('true', 'false'):
                            kwargs[key] = value.lower() == 'true'
                        else:
                            kwargs[key] = value
                else:
                    kwargs[arg[2:]] = True
            elif arg.startswith('-'):
                kwargs[arg[1:]] = True
            else:
                args.append(arg)

        return args, kwargs


def main(argv=None) -> int:
    """Run Artisan from the application base directory, logging per app config"""
    EnvHelper.load()

    # config/ and app/ are imported from the application, not the package
    base_path = str(Storage.base())
    if base_path not in sys.path:
        sys.path.insert(0, base_path)

    LoggerConfig.setup_from_config()

    return asyncio.run(Artisan().run(sys.argv if argv is None else argv))


def cli():
    sys.exit(main())
