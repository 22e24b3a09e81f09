"""
Generate Repository Command
Creates an API repository bound to a model
"""
from larasanic_api.console.commands.base_generate_command import BaseGenerateCommand
from larasanic_api.support import Config


class GenerateRepositoryCommand(BaseGenerateCommand):
    """Creates a repository for a model"""

    name = "api:generate-repository"
    description = "Creates a repository for a model"
    signature = "api:generate-repository {model} {--path=} {--force}"

    stub = "repository"

    def get_config_path(self) -> str:
        return 'api.path.repository'

    def get_default_path(self) -> str:
        from larasanic_api.defaults import DEFAULT_REPOSITORY_PATH
        return DEFAULT_REPOSITORY_PATH

    def get_context(self) -> dict:
        from larasanic_api.defaults import DEFAULT_MODEL_NAMESPACE
        return {
            'model_namespace': Config.get('api.namespace.model', DEFAULT_MODEL_NAMESPACE),
        }
