"""
Package Support Classes
"""

from larasanic_api.support.storage import Storage
from larasanic_api.support.env_helper import EnvHelper
from larasanic_api.support.config import Config
from larasanic_api.support.class_loader import ClassLoader
from larasanic_api.support.str import Str

__all__ = [
    'Storage',
    'EnvHelper',
    'Config',
    'ClassLoader',
    'Str',
]
