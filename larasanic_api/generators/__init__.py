"""
Generators Package
"""
from larasanic_api.generators.stub_generator import StubGenerator

__all__ = [
    'StubGenerator',
]
