"""
Exceptions Package
Package exceptions and HTTP error rendering
"""
from larasanic_api.exceptions.custom import (
    FrameworkException,
    ValidationException,
    NotFoundException,
    ModelNotFoundException,
    ConfigurationException,
    GeneratorException,
    FileAlreadyExistsException,
    StubNotFoundException,
    InvalidModelNameException,
)
from larasanic_api.exceptions.error_handler import ErrorHandler

__all__ = [
    # Error handling
    'ErrorHandler',

    # Custom exceptions
    'FrameworkException',
    'ValidationException',
    'NotFoundException',
    'ModelNotFoundException',
    'ConfigurationException',
    'GeneratorException',
    'FileAlreadyExistsException',
    'StubNotFoundException',
    'InvalidModelNameException',
]
