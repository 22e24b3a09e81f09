"""
Relationship introspection for Tortoise models
"""
from typing import List, Type

from tortoise.models import Model


class HandlesRelationships:
    """Mixin listing the relations a model can eager-load"""

    @staticmethod
    def get_relationships(model: Type[Model]) -> List[str]:
        """
        Relation names usable with 'include'

        Covers foreign keys, one-to-one, many-to-many and their reverse sides.

        Example:
            HandlesRelationships.get_relationships(Book)  # ['author', 'tags']
        """
        return sorted(model._meta.fetch_fields)
