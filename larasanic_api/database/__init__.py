"""
Database Package
Base model and pagination helpers for Tortoise ORM
"""
from larasanic_api.database.model import Model
from larasanic_api.database.pagination import PaginatedResult, paginate_queryset

__all__ = [
    'Model',
    'PaginatedResult',
    'paginate_queryset',
]
