"""
Generate Policy Command
Creates an authorization policy for a model
"""
from larasanic_api.console.commands.base_generate_command import BaseGenerateCommand


class GeneratePolicyCommand(BaseGenerateCommand):
    """Create a policy for a model"""

    name = "api:generate-policy"
    description = "Create a policy for a model"
    signature = "api:generate-policy {model} {--path=} {--force}"

    stub = "policy"

    def get_config_path(self) -> str:
        return 'api.path.policy'

    def get_default_path(self) -> str:
        from larasanic_api.defaults import DEFAULT_POLICY_PATH
        return DEFAULT_POLICY_PATH
