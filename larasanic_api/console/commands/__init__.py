"""
Built-in commands (auto-discovered by Artisan)
"""
from larasanic_api.console.commands.generate_policy_command import GeneratePolicyCommand
from larasanic_api.console.commands.generate_repository_command import GenerateRepositoryCommand

__all__ = [
    'GeneratePolicyCommand',
    'GenerateRepositoryCommand',
]
