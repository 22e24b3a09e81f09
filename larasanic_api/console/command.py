"""
Console Command
Base class for commands run through Artisan
"""
from abc import ABC, abstractmethod
from typing import Optional


class Command(ABC):
    """
    A named console command

    Subclasses set `name` ("api:generate-policy"), a one-line
    `description` and optionally a `signature` shown in help
    ("api:generate-policy {model} {--path=}"); `handle` receives the
    positional arguments and --options parsed by Artisan and returns
    the exit code (None counts as 0).
    """

    name: str = ""
    description: str = ""
    signature: Optional[str] = None

    # Message prefixes by output style
    PREFIXES = {
        'info': 'ℹ ',
        'success': '✅ ',
        'error': '❌ ',
        'warning': '⚠ ',
        'line': '',
    }

    def __init__(self):
        if not self.signature:
            self.signature = self.name

    @abstractmethod
    async def handle(self, *args, **kwargs) -> Optional[int]:
        """Run the command; return the exit code"""

    def usage(self) -> str:
        return f"Usage: {self.signature}"

    def write(self, message: str = "", style: str = 'line'):
        print(f"{self.PREFIXES.get(style, '')}{message}")

    def info(self, message: str):
        self.write(message, 'info')

    def success(self, message: str):
        self.write(message, 'success')

    def error(self, message: str):
        self.write(message, 'error')

    def warning(self, message: str):
        self.write(message, 'warning')

    def line(self, message: str = ""):
        self.write(message)
