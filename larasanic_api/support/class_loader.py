"""
Class Loader
Dynamic class loading from dotted paths
"""
from typing import Type


class ClassLoader:
    """
    Utility for loading classes from string paths

    Example:
        cls = ClassLoader.load('app.models.user.User')
    """

    @staticmethod
    def load(class_path: str) -> Type:
        """
        Load a class from a dotted path string

        Args:
            class_path: Full dotted path to class (e.g., 'app.models.user.User')

        Returns:
            The class object (not instantiated)

        Raises:
            ImportError: If module cannot be imported
            AttributeError: If class doesn't exist in module
            ValueError: If the path has no module part
        """
        if '.' not in class_path:
            raise ValueError(f"'{class_path}' is not a dotted class path")

        module_path, class_name = class_path.rsplit('.', 1)
        module = __import__(module_path, fromlist=[class_name])

        return getattr(module, class_name)
