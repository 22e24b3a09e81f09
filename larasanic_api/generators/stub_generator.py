"""
Stub Generator
Renders Jinja2 stub templates into application source files
"""
import keyword
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from jinja2 import Environment, FileSystemLoader, StrictUndefined, TemplateNotFound

from larasanic_api.exceptions import (
    FileAlreadyExistsException,
    InvalidModelNameException,
    StubNotFoundException,
)
from larasanic_api.logging import getLogger
from larasanic_api.support import Storage, Str

logger = getLogger(__name__)

# Snake names that clash with the generated methods' own parameters
RESERVED_NAMES = frozenset({'self'})


class StubGenerator:
    """
    Writes files from stubs

    Stubs are looked up in the application's stubs/ directory first,
    then in the stubs bundled with the package, so an application can
    override any of them.

    Example:
        generator = StubGenerator()
        path = generator.generate(
            'policy',
            Path('app/policies/user_policy.py'),
            generator.model_context('User')
        )
    """

    def __init__(self, stub_paths: Optional[List[Union[str, Path]]] = None):
        from larasanic_api.defaults import DEFAULT_STUB_DIRECTORY, DEFAULT_STUB_EXTENSION

        if stub_paths is None:
            stub_paths = [
                Storage.stubs(),
                Storage.framework(DEFAULT_STUB_DIRECTORY),
            ]

        self.stub_paths = [str(path) for path in stub_paths]
        self.extension = DEFAULT_STUB_EXTENSION
        self.env = Environment(
            loader=FileSystemLoader(self.stub_paths),
            undefined=StrictUndefined,
            keep_trailing_newline=True,
            trim_blocks=True,
            lstrip_blocks=True,
        )

    def render(self, stub: str, context: Dict[str, Any]) -> str:
        """
        Render a stub by name (without extension)

        Raises:
            StubNotFoundException: If no stub directory has it
        """
        try:
            template = self.env.get_template(f"{stub}{self.extension}")
        except TemplateNotFound:
            raise StubNotFoundException(
                f"Stub '{stub}{self.extension}' not found in: {', '.join(self.stub_paths)}"
            ) from None

        return template.render(**context)

    def generate(self, stub: str, target: Path, context: Dict[str, Any], force: bool = False) -> Path:
        """
        Render a stub and write it to target

        Args:
            stub: Stub name
            target: File to write
            context: Template variables
            force: Overwrite an existing file

        Raises:
            FileAlreadyExistsException: If target exists and force is False
        """
        target = Path(target)
        if target.exists() and not force:
            raise FileAlreadyExistsException(f"{target} already exists")

        content = self.render(stub, context)

        Storage.ensure_directory(target.parent)
        target.write_text(content, encoding='utf-8')

        logger.info(f"Generated {stub}: {target}", extra={'stub': stub, 'target': str(target)})
        return target

    @staticmethod
    def model_context(model: str, **extra: Any) -> Dict[str, Any]:
        """
        Template variables derived from a model name

        The class name, and the snake name used for the module and the
        record parameter, must both be usable as Python names.

        Example:
            StubGenerator.model_context('blog_post')
            # {'model': 'blog_post', 'model_class': 'BlogPost', 'model_snake': 'blog_post', ...}

        Raises:
            InvalidModelNameException: If the name can't form a Python class or module name
        """
        name = (model or '').strip()
        model_class = Str.studly(name)
        model_snake = Str.snake(model_class) if model_class else ''

        if not (model_class.isidentifier() and model_snake.isidentifier()) or \
                any(keyword.iskeyword(word) for word in (model_class, model_snake)) or \
                model_snake in RESERVED_NAMES:
            raise InvalidModelNameException(f"'{model}' is not a valid model name")

        return {
            'model': name,
            'model_class': model_class,
            'model_snake': model_snake,
            **extra,
        }
