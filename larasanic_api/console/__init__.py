"""
Console Package
Artisan-style CLI and the API generator commands
"""
from larasanic_api.console.artisan import Artisan
from larasanic_api.console.command import Command

__all__ = [
    'Artisan',
    'Command',
]
