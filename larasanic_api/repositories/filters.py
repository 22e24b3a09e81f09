"""
Repository Filter Pipeline
Named filter steps applied in a fixed order to a shared QueryState
"""
from typing import Any, Callable, Iterable, List, Optional, Sequence, Tuple

from tortoise.exceptions import ValidationError

from larasanic_api.exceptions import ValidationException
from larasanic_api.logging import getLogger
from larasanic_api.repositories.parameters import RepositoryParameters

logger = getLogger(__name__)


class QueryState:
    """
    Mutable state one repository operation builds its query in

    Attributes:
        queryset: Tortoise QuerySet (or anything with the same builder methods)
        page: Page number used by the final fetch
        per_page: Page size used by the final fetch
        relations: Relations selected for eager loading
        model: Model class, used to coerce primary key values (optional)
    """

    def __init__(self, queryset, page: int = 1, per_page: int = 15, model=None):
        self.queryset = queryset
        self.page = page
        self.per_page = per_page
        self.relations: List[str] = []
        self.model = model

    def coerce_keys(self, keys: Iterable[Any], parameter: str) -> List[Any]:
        """
        Convert raw key strings with the model's primary key field

        Raises:
            ValidationException: If a key doesn't fit the primary key type
        """
        keys = list(keys)
        if self.model is None:
            return keys

        pk_field = self.model._meta.pk
        try:
            return [pk_field.to_python_value(key) for key in keys]
        except (TypeError, ValueError, ValidationError) as e:
            raise ValidationException(
                "Invalid repository parameters",
                errors={parameter: f"'{','.join(map(str, keys))}' are not valid keys: {e}"}
            ) from e

    def check_field(self, path: str, parameter: str):
        """
        Raises:
            ValidationException: Unless path names a column of the model,
                or of a related model ('author__name')
        """
        if self.model is None:
            return

        *relations, field = path.split('__')
        model = self._follow(relations, path, parameter)
        if field not in model._meta.fields_db_projection:
            raise self._invalid(parameter, f"'{path}' is not a field of {self.model.__name__}")

    def check_relation(self, path: str, parameter: str):
        """
        Raises:
            ValidationException: Unless every step of path ('author__books') is a relation
        """
        if self.model is not None:
            self._follow(path.split('__'), path, parameter)

    def _follow(self, relations: List[str], path: str, parameter: str):
        model = self.model
        for name in relations:
            if name not in model._meta.fetch_fields:
                raise self._invalid(parameter, f"'{path}' is not a relation of {self.model.__name__}")
            model = model._meta.fields_map[name].related_model
        return model

    @staticmethod
    def _invalid(parameter: str, message: str) -> ValidationException:
        return ValidationException("Invalid repository parameters", errors={parameter: message})


def set_ids(state: QueryState, parameters: RepositoryParameters):
    """Restrict to the listed primary keys"""
    if parameters.ids is None:
        return

    state.queryset = state.queryset.filter(pk__in=state.coerce_keys(parameters.ids, 'ids'))


def exclude_ids(state: QueryState, parameters: RepositoryParameters):
    """Drop the listed primary keys"""
    if parameters.exclude_ids is None:
        return

    state.queryset = state.queryset.exclude(pk__in=state.coerce_keys(parameters.exclude_ids, 'exclude_ids'))


def order_by_asc(state: QueryState, parameters: RepositoryParameters):
    """Replace any ordering with an ascending sort"""
    if parameters.order_by_asc is None:
        return

    state.check_field(parameters.order_by_asc, 'order_by_asc')
    _replace_ordering(state, parameters.order_by_asc)


def order_by_desc(state: QueryState, parameters: RepositoryParameters):
    """Replace any ordering (order_by_asc's included) with a descending sort"""
    if parameters.order_by_desc is None:
        return

    state.check_field(parameters.order_by_desc, 'order_by_desc')
    _replace_ordering(state, f"-{parameters.order_by_desc}")


def eager_load_relationships(state: QueryState, parameters: RepositoryParameters):
    """
    Eager-load the requested relations

    Nothing is loaded unless 'include' asks for it.
    """
    for relation in parameters.include:
        state.check_relation(relation, 'include')

    state.relations = list(parameters.include)
    if state.relations:
        state.queryset = state.queryset.prefetch_related(*state.relations)


def set_pagination(state: QueryState, parameters: RepositoryParameters):
    """Let 'page'/'per_page' override the requested page; the query is untouched"""
    if parameters.page is not None:
        state.page = parameters.page

    if parameters.per_page is not None:
        state.per_page = parameters.per_page


def _replace_ordering(state: QueryState, ordering: str):
    # Clear first so exactly one sort directive survives
    state.queryset = state.queryset.order_by()
    state.queryset = state.queryset.order_by(ordering)


FilterStep = Callable[[QueryState, RepositoryParameters], None]

# Order matters: order_by_desc must run after order_by_asc
FILTER_PIPELINE: Tuple[Tuple[str, FilterStep], ...] = (
    ('ids', set_ids),
    ('exclude_ids', exclude_ids),
    ('order_by_asc', order_by_asc),
    ('order_by_desc', order_by_desc),
    ('include', eager_load_relationships),
    ('pagination', set_pagination),
)


def apply_filters(
    state: QueryState,
    parameters: RepositoryParameters,
    steps: Optional[Sequence[Tuple[str, FilterStep]]] = None
) -> QueryState:
    """
    Run the filter steps over the state in order

    Args:
        state: State to mutate
        parameters: Parsed parameters
        steps: Override the pipeline (default: FILTER_PIPELINE)

    Returns:
        The same state, for chaining
    """
    for name, step in (FILTER_PIPELINE if steps is None else steps):
        step(state, parameters)
        logger.debug(f"Applied filter step '{name}'", extra={'filter_step': name})

    return state
