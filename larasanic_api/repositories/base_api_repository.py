"""
Base API Repository
Translates request-style parameters into filtered, sorted, paginated
and eager-loaded Tortoise queries
"""
import inspect
from typing import Any, Dict, Generic, Iterable, List, Mapping, Optional, Sequence, Type, TypeVar, Union

from tortoise.exceptions import ValidationError
from tortoise.models import Model as TortoiseModel
from tortoise.queryset import QuerySet

from larasanic_api.database.pagination import PaginatedResult, paginate_queryset
from larasanic_api.exceptions import ConfigurationException, ModelNotFoundException
from larasanic_api.logging import getLogger
from larasanic_api.repositories.filters import QueryState, apply_filters, eager_load_relationships
from larasanic_api.repositories.parameters import RepositoryParameters
from larasanic_api.repositories.relationships import HandlesRelationships
from larasanic_api.repositories.repository_interface import RepositoryInterface
from larasanic_api.support import ClassLoader, Config

logger = getLogger(__name__)

ModelType = TypeVar('ModelType', bound=TortoiseModel)

_UNCOERCIBLE = object()


class BaseApiRepository(RepositoryInterface, HandlesRelationships, Generic[ModelType]):
    """
    Generic repository bound to one Tortoise model

    Subclasses set `model` to the model class or its dotted import path;
    it is resolved when the repository is constructed.

    Example:
        class BookRepository(BaseApiRepository[Book]):
            model = Book

        repository = BookRepository()
        page = await repository.paginate(10, 1, parameters={
            'ids': '1,2,3',
            'order_by_desc': 'published_at',
            'include': 'author',
        })

    Query state is single use: paginate() and find_by_id() start from the
    query given to set_query() (or a fresh one) and discard it afterwards.
    """

    model: Union[Type[ModelType], str, None] = None

    def __init__(self):
        self.model: Type[ModelType] = self.make_model()
        self.user = None
        self.page: int = 1
        self.per_page: int = self.default_per_page()
        self.parameters: RepositoryParameters = RepositoryParameters()
        self.query: Optional[QuerySet] = None

    # ====================
    # Operations
    # ====================

    async def paginate(
        self,
        per_page: Optional[int] = None,
        page: int = 1,
        columns: Optional[List[str]] = None,
        parameters: Optional[Mapping[str, Any]] = None
    ) -> PaginatedResult[ModelType]:
        """
        Filtered page of records

        Args:
            per_page: Page size (default: api.per_page config)
            page: Page number
            columns: Fields to select (default: all)
            parameters: Parameter map, see RepositoryParameters

        Returns:
            PaginatedResult; with 'all' present, every match as a single page
        """
        try:
            self.parameters = RepositoryParameters.from_mapping(parameters)
            self.per_page = per_page if per_page is not None else self.default_per_page()
            self.page = page

            if self.query is None:
                self.query = self.new_query()

            state = self.set_filters()
            queryset = self._select_columns(state.queryset, columns, state.relations)

            if self.parameters.all:
                return PaginatedResult.single_page(await queryset)

            return await paginate_queryset(queryset, self.page, self.per_page)
        finally:
            self.query = None

    async def find_by_id(self, key: Any, columns: Optional[List[str]] = None) -> ModelType:
        """
        Record by primary key, eager-loading the current 'include' parameter

        Raises:
            ModelNotFoundException: If no record has that key
        """
        queryset = self.query if self.query is not None else self.new_query()
        self.query = None

        state = QueryState(queryset, self.page, self.per_page, self.model)
        eager_load_relationships(state, self.parameters)

        pk = self._coerce_key(key)
        instance = None
        if pk is not _UNCOERCIBLE:
            instance = await self._select_columns(state.queryset, columns, state.relations).get_or_none(pk=pk)

        if instance is None:
            raise self._not_found(key)

        return instance

    async def create(self, data: Dict[str, Any]) -> ModelType:
        """
        Insert a record; None values are stored as empty strings

        Example:
            await repository.create({'name': None, 'age': 5})  # name == ''
        """
        data = {key: self.null_to_empty_string(value) for key, value in data.items()}
        logger.debug(f"Creating {self.model.__name__}: {data!r}")

        return await self.model.create(**data)

    async def update(self, data: Dict[str, Any], key: Any) -> ModelType:
        """
        Apply data to the record with this primary key and save it

        Raises:
            ModelNotFoundException: If no record has that key
        """
        pk = self._coerce_key(key)
        instance = None
        if pk is not _UNCOERCIBLE:
            instance = await self.model.get_or_none(pk=pk)

        if instance is None:
            raise self._not_found(key)

        logger.debug(f"Updating {self.model.__name__} {key}: {data!r}")
        await instance.update_from_dict(data).save()

        return instance

    async def destroy(self, key: Union[Any, Iterable[Any]]) -> int:
        """
        Delete by primary key or list of keys

        Returns:
            Number of rows removed (0 when nothing matched)
        """
        keys = list(key) if isinstance(key, (list, tuple, set)) else [key]
        keys = [pk for pk in map(self._coerce_key, keys) if pk is not _UNCOERCIBLE]

        if not keys:
            return 0

        deleted = await self.model.filter(pk__in=keys).delete()
        logger.debug(f"Deleted {deleted} {self.model.__name__} record(s)")

        return deleted

    # ====================
    # Model resolution
    # ====================

    def get_model_name(self) -> Union[Type[ModelType], str, None]:
        """Model reference configured on the class"""
        return type(self).model

    def make_model(self) -> Type[ModelType]:
        """
        Resolve the configured model reference

        Raises:
            ConfigurationException: If it doesn't resolve to a Tortoise model class
        """
        reference = self.get_model_name()
        if reference is None:
            raise ConfigurationException(
                f"{type(self).__name__} must set 'model' to a Tortoise model class or its dotted path"
            )

        model = reference
        if isinstance(reference, str):
            try:
                model = ClassLoader.load(reference)
            except (ImportError, AttributeError, ValueError) as e:
                raise ConfigurationException(f"Class: {reference} could not be loaded ({e})") from e

        if not (inspect.isclass(model) and issubclass(model, TortoiseModel)):
            raise ConfigurationException(
                f"Class: {reference} must be a subclass of tortoise.models.Model"
            )

        return model

    def get_model_relationships(self) -> List[str]:
        return self.get_relationships(self.model)

    # ====================
    # State
    # ====================

    def new_query(self) -> QuerySet:
        """Base query operations start from; override to add a default scope"""
        return self.model.all()

    def set_query(self, queryset: QuerySet) -> 'BaseApiRepository[ModelType]':
        """
        Pre-scope the next paginate()/find_by_id() call

        Example:
            await repository.set_query(Book.filter(published=True)).paginate(10)
        """
        self.query = queryset
        return self

    def set_parameters(self, parameters: Optional[Mapping[str, Any]]) -> 'BaseApiRepository[ModelType]':
        self.parameters = RepositoryParameters.from_mapping(parameters)
        return self

    def set_user(self, user=None) -> 'BaseApiRepository[ModelType]':
        """Remember the acting user; None leaves the current one"""
        if user is None:
            return self

        self.user = user
        return self

    def set_filters(self) -> QueryState:
        """
        Run the filter pipeline over the current query

        Updates page/per_page from the 'page'/'per_page' parameters.
        """
        state = QueryState(self.query, self.page, self.per_page, self.model)
        apply_filters(state, self.parameters)

        self.page = state.page
        self.per_page = state.per_page

        return state

    @staticmethod
    def default_per_page() -> int:
        from larasanic_api.defaults import DEFAULT_PER_PAGE
        return int(Config.get('api.per_page', DEFAULT_PER_PAGE))

    # ====================
    # Debugging
    # ====================

    def to_sql_with_bindings(self) -> str:
        """
        SQL the next paginate() would run, with bound values inlined

        Uses the current parameters and the query from set_query(), if any.
        """
        queryset = self.query if self.query is not None else self.new_query()
        state = apply_filters(
            QueryState(queryset, self.page, self.per_page, self.model),
            self.parameters
        )
        return state.queryset.sql(params_inline=True)

    def dump_query_with_bindings(self):
        """
        Dump the pending SQL and stop (interactive debugging only)

        Raises:
            SystemExit: Always, carrying the SQL text
        """
        sql = self.to_sql_with_bindings()
        logger.debug(f"Query dump: {sql}")
        raise SystemExit(sql)

    # ====================
    # Helpers
    # ====================

    @staticmethod
    def null_to_empty_string(value: Any) -> Any:
        return '' if value is None else value

    def _select_columns(self, queryset: QuerySet, columns: Optional[List[str]], relations: Sequence[str] = ()) -> QuerySet:
        """
        Restrict the fetched fields to columns

        With relations to eager-load, the primary key and the key column of
        each forward relation are selected too; prefetching matches related
        rows on them.
        """
        if not columns or list(columns) == ['*']:
            return queryset

        fields = list(columns)
        if relations:
            meta = self.model._meta
            fields.append(meta.pk_attr)
            for relation in relations:
                field = meta.fields_map.get(relation.split('__')[0])
                source_field = getattr(field, 'source_field', None)
                if source_field:
                    fields.append(source_field)

        return queryset.only(*dict.fromkeys(fields))

    def _coerce_key(self, key: Any) -> Any:
        try:
            return self.model._meta.pk.to_python_value(key)
        except (TypeError, ValueError, ValidationError):
            return _UNCOERCIBLE

    def _not_found(self, key: Any) -> ModelNotFoundException:
        return ModelNotFoundException(f"{self.model.__name__} with primary key {key} not found")
