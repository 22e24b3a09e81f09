"""
Repositories Package
Generic API repository over Tortoise models
"""
from larasanic_api.repositories.base_api_repository import BaseApiRepository
from larasanic_api.repositories.filters import FILTER_PIPELINE, QueryState, apply_filters
from larasanic_api.repositories.parameters import RepositoryParameters
from larasanic_api.repositories.relationships import HandlesRelationships
from larasanic_api.repositories.repository_interface import RepositoryInterface

__all__ = [
    'BaseApiRepository',
    'RepositoryInterface',
    'RepositoryParameters',
    'HandlesRelationships',
    'QueryState',
    'FILTER_PIPELINE',
    'apply_filters',
]
