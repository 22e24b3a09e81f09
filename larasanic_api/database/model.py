"""
Base Model
Laravel-style base model that repositories are bound to
"""
from datetime import datetime
from typing import Any, Dict, List, Optional

from tortoise.models import Model as TortoiseModel


class Model(TortoiseModel):
    """
    Tortoise model with Laravel-style serialization

    Application models may inherit from this class instead of
    Tortoise's Model directly; repositories accept either. Records of
    this class render through to_dict() in PaginatedResult.to_dict().

    Example:
        class User(Model):
            hidden = ['password_hash']
    """

    # Fields to hide in serialization
    hidden: List[str] = []

    class Meta:
        abstract = True

    def to_dict(self, exclude: Optional[List[str]] = None, include_hidden: bool = False) -> Dict[str, Any]:
        """
        Stored fields as a dictionary, minus 'hidden' ones

        Example:
            data = user.to_dict()
            data = user.to_dict(exclude=['email'])
        """
        exclude = set(exclude or [])
        if not include_hidden:
            exclude.update(getattr(self.__class__, 'hidden', []))

        data = {}
        for field in self._meta.fields_db_projection:
            if field in exclude:
                continue
            value = getattr(self, field, None)
            data[field] = value.isoformat() if isinstance(value, datetime) else value

        return data

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} {self._meta.pk_attr}={self.pk}>"
