"""
Custom Exception Classes
Package-specific exceptions with HTTP status codes
"""
from typing import Optional, Dict, Any


class FrameworkException(Exception):
    """Base exception for all package exceptions"""
    status_code = 500
    message = "An error occurred"

    def __init__(self, message: Optional[str] = None, status_code: Optional[int] = None):
        self.message = message or self.__class__.message
        self.status_code = status_code or self.__class__.status_code
        super().__init__(self.message)


class ValidationException(FrameworkException):
    """
    Validation error exception

    Raised when repository parameters can't be parsed

    Example:
        raise ValidationException("Invalid page", errors={'page': 'must be an integer'})
    """
    status_code = 422
    message = "Validation failed"

    def __init__(
        self,
        message: Optional[str] = None,
        errors: Optional[Dict[str, Any]] = None,
        status_code: Optional[int] = None
    ):
        super().__init__(message, status_code)
        self.errors = errors or {}


class NotFoundException(FrameworkException):
    """
    Resource not found exception

    Example:
        raise NotFoundException("User not found")
    """
    status_code = 404
    message = "Resource not found"


class ModelNotFoundException(NotFoundException):
    """Raised when a lookup by primary key matches nothing"""
    message = "Model not found"


class ConfigurationException(FrameworkException):
    """
    Configuration exception

    Raised when a repository's model reference doesn't resolve
    to a Tortoise model class
    """
    status_code = 500
    message = "Invalid configuration"


class GeneratorException(FrameworkException):
    """Base exception for file generation failures"""
    status_code = 500
    message = "File generation failed"


class FileAlreadyExistsException(GeneratorException):
    """
    Raised when the generated file's target already exists

    Example:
        raise FileAlreadyExistsException("Policy already exists: app/policies/user_policy.py")
    """
    status_code = 409
    message = "File already exists"


class StubNotFoundException(GeneratorException):
    """Raised when a stub template can't be found"""
    message = "Stub not found"


class InvalidModelNameException(GeneratorException):
    """Raised when a model name can't be turned into a class name"""
    status_code = 422
    message = "Invalid model name"
