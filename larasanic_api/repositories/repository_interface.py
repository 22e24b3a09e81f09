"""
Repository Interface
Contract every API repository implements
"""
from abc import ABC, abstractmethod
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union


class RepositoryInterface(ABC):

    @abstractmethod
    async def paginate(
        self,
        per_page: Optional[int] = None,
        page: int = 1,
        columns: Optional[List[str]] = None,
        parameters: Optional[Mapping[str, Any]] = None
    ):
        """
        Filtered, sorted, eager-loaded page of records

        Returns:
            PaginatedResult
        """

    @abstractmethod
    async def find_by_id(self, key: Any, columns: Optional[List[str]] = None):
        """Record by primary key; raises ModelNotFoundException"""

    @abstractmethod
    async def create(self, data: Dict[str, Any]):
        """Insert a record"""

    @abstractmethod
    async def update(self, data: Dict[str, Any], key: Any):
        """Update a record by primary key; raises ModelNotFoundException"""

    @abstractmethod
    async def destroy(self, key: Union[Any, Iterable[Any]]) -> int:
        """Delete by primary key(s); returns rows removed"""
