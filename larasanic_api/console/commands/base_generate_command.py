"""
Base Generate Command
Shared flow for commands that write a file for a model from a stub
"""
from abc import abstractmethod
from pathlib import Path
from typing import Optional

from larasanic_api.console.command import Command
from larasanic_api.generators import StubGenerator
from larasanic_api.support import Config, Storage


class BaseGenerateCommand(Command):
    """
    Resolve the model and output directory, then render the stub

    Generator failures (existing file, bad model name, missing stub)
    are not caught here; Artisan reports them and exits non-zero.
    """

    # Stub name, also used as the generated file suffix ("policy" -> user_policy.py)
    stub: str = ""

    def __init__(self, generator: Optional[StubGenerator] = None):
        super().__init__()
        self.generator = generator
        self.model_name = None
        self.override_path = None

    async def handle(self, model: str = None, *args, path=None, force: bool = False, **kwargs):
        self.model_name = model
        self.override_path = str(path) if path not in (None, True) else None

        if not self.model_name:
            self.error(f"Not enough arguments (missing: \"model\"). {self.usage()}")
            return 1

        target = self.generate(force=bool(force))
        self.success(f"{self.stub.capitalize()} created: {target}")
        return 0

    def generate(self, force: bool = False) -> Path:
        generator = self.generator or StubGenerator()
        context = generator.model_context(self.get_model_name(), **self.get_context())
        target = self.get_output_directory() / f"{context['model_snake']}_{self.stub}.py"

        return generator.generate(self.stub, target, context, force=force)

    def get_model_name(self) -> str:
        return self.model_name

    def get_override_path(self) -> Optional[str]:
        return self.override_path

    def get_output_directory(self) -> Path:
        """--path if given, else the configured directory"""
        return Storage.resolve(self.get_override_path() or Config.get(self.get_config_path(), self.get_default_path()))

    def get_context(self) -> dict:
        """Extra template variables"""
        return {}

    @abstractmethod
    def get_config_path(self) -> str:
        """Config key holding the output directory"""

    @abstractmethod
    def get_default_path(self) -> str:
        """Output directory when the config key is unset"""
