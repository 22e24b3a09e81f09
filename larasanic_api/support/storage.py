"""
Storage - Centralized path management (Laravel-style)
Provides consistent path resolution for generators and logs
"""

import os
from pathlib import Path
from typing import Union


class Storage:
    """
    Centralized path management helper (Laravel-style)

    Application layout the generators write into:
    /
    ├── app/
    │   ├── console/        # Application commands (auto-discovered)
    │   ├── models/         # Tortoise models
    │   ├── policies/       # Generated policies
    │   └── repositories/   # Generated repositories
    ├── config/             # Configuration modules
    ├── stubs/              # Optional stub overrides
    └── storage/
        └── logs/           # Log files
    """

    _base_path: Path = None
    _framework_path: Path = None

    @classmethod
    def initialize(cls, base_path: Union[str, Path] = None):
        """
        Initialize paths

        Args:
            base_path: Application base directory (defaults to current working directory)
        """
        if base_path is None:
            base_path = os.getcwd()

        cls._base_path = Path(base_path).resolve()

        # Installed package directory, holds bundled stubs and commands
        cls._framework_path = Path(__file__).parent.parent.resolve()

    @classmethod
    def framework(cls, *paths: str) -> Path:
        """
        Get package installation path

        Example:
            Storage.framework('stubs', 'policy.stub')
        """
        if cls._framework_path is None:
            cls.initialize()

        if paths:
            return cls._framework_path.joinpath(*paths)
        return cls._framework_path

    @classmethod
    def base(cls, *paths: str) -> Path:
        """
        Get application base path

        Example:
            Storage.base('app', 'models')  # /project/app/models
        """
        if cls._base_path is None:
            cls.initialize()

        if paths:
            clean_paths = [p.lstrip('/') for p in paths]
            return cls._base_path.joinpath(*clean_paths)
        return cls._base_path

    @classmethod
    def app(cls, *paths: str) -> Path:
        """Get app path (app/)"""
        return cls.base('app', *paths)

    @classmethod
    def stubs(cls, *paths: str) -> Path:
        """Get application stub override path (stubs/)"""
        return cls.base('stubs', *paths)

    @classmethod
    def storage(cls, *paths: str) -> Path:
        """Get storage path (storage/)"""
        return cls.base('storage', *paths)

    @classmethod
    def logs(cls, *paths: str) -> Path:
        """Get logs path (storage/logs/)"""
        return cls.storage('logs', *paths)

    @classmethod
    def resolve(cls, path: Union[str, Path]) -> Path:
        """
        Resolve a configured path against the base path unless already absolute

        Example:
            Storage.resolve('app/policies')   # /project/app/policies
            Storage.resolve('/tmp/policies')  # /tmp/policies
        """
        path_obj = Path(path)
        if path_obj.is_absolute():
            return path_obj
        return cls.base(str(path_obj))

    @classmethod
    def ensure_directory(cls, path: Union[str, Path]) -> Path:
        """Create directory (and parents) if missing"""
        path_obj = Path(path)
        path_obj.mkdir(parents=True, exist_ok=True)
        return path_obj

    @classmethod
    def exists(cls, path: Union[str, Path]) -> bool:
        return Path(path).exists()
