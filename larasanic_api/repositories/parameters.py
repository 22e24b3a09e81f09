"""
Repository Parameters
Request-style filter/sort/pagination directives parsed once at the boundary
"""
import re
from typing import Any, Mapping, Optional, Tuple

from larasanic_api.exceptions import ValidationException


# Field names and Tortoise lookups: "name", "author__name"
FIELD_PATTERN = re.compile(r'^[A-Za-z_][A-Za-z0-9_]*(__[A-Za-z0-9_]+)*$')


class RepositoryParameters:
    """
    Typed view over a parameter map

    Recognized keys:
        ids            comma separated primary keys to restrict to
        exclude_ids    comma separated primary keys to exclude
        order_by_asc   field to sort ascending
        order_by_desc  field to sort descending (wins over order_by_asc)
        include        comma separated relations to eager-load ("author.profile" nests)
        page           page number
        per_page       page size
        all            present (any value) to return every match as one page

    A key whose value is None counts as absent, except 'all' which only
    checks that the key is there. Unknown keys are ignored.

    Example:
        params = RepositoryParameters.from_mapping({'ids': '1,2,3', 'include': 'author,author'})
        params.ids      # ('1', '2', '3')
        params.include  # ('author',)
    """

    KEYS = ('ids', 'exclude_ids', 'order_by_asc', 'order_by_desc', 'include', 'page', 'per_page', 'all')

    def __init__(
        self,
        ids: Optional[Tuple[str, ...]] = None,
        exclude_ids: Optional[Tuple[str, ...]] = None,
        order_by_asc: Optional[str] = None,
        order_by_desc: Optional[str] = None,
        include: Tuple[str, ...] = (),
        page: Optional[int] = None,
        per_page: Optional[int] = None,
        all: bool = False
    ):
        self.ids = ids
        self.exclude_ids = exclude_ids
        self.order_by_asc = order_by_asc
        self.order_by_desc = order_by_desc
        self.include = include
        self.page = page
        self.per_page = per_page
        self.all = all

    @classmethod
    def from_mapping(cls, parameters: Optional[Mapping[str, Any]] = None) -> 'RepositoryParameters':
        """
        Parse and validate a parameter map

        Raises:
            ValidationException: If a value can't be parsed; errors are keyed by parameter
        """
        if parameters is None:
            return cls()
        if isinstance(parameters, cls):
            return parameters

        errors = {}

        def parse(key, parser):
            value = parameters.get(key)
            if value is None:
                return None
            try:
                return parser(value)
            except ValueError as e:
                errors[key] = str(e)
                return None

        instance = cls(
            ids=parse('ids', _parse_list),
            exclude_ids=parse('exclude_ids', _parse_list),
            order_by_asc=parse('order_by_asc', _parse_field),
            order_by_desc=parse('order_by_desc', _parse_field),
            include=parse('include', _parse_relations) or (),
            page=parse('page', _parse_int),
            per_page=parse('per_page', _parse_int),
            all='all' in parameters,
        )

        if errors:
            raise ValidationException("Invalid repository parameters", errors=errors)

        return instance

    def to_dict(self) -> dict:
        return {key: getattr(self, key) for key in self.KEYS}

    def __eq__(self, other) -> bool:
        if not isinstance(other, RepositoryParameters):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __repr__(self) -> str:
        present = ', '.join(f'{k}={v!r}' for k, v in self.to_dict().items() if v not in (None, (), False))
        return f'RepositoryParameters({present})'


def _parse_list(value: Any) -> Tuple[str, ...]:
    """'1, 2,,3' -> ('1', '2', '3'); lists and tuples pass through item by item"""
    if isinstance(value, (list, tuple, set)):
        items = [str(item) for item in value]
    else:
        items = str(value).split(',')
    return tuple(item.strip() for item in items if str(item).strip())


def _parse_field(value: Any) -> str:
    field = str(value).strip()
    if not FIELD_PATTERN.match(field):
        raise ValueError(f"'{value}' is not a valid field name")
    return field


def _parse_relations(value: Any) -> Tuple[str, ...]:
    # dict.fromkeys dedups and keeps first-seen order
    relations = [_parse_field(item.replace('.', '__')) for item in _parse_list(value)]
    return tuple(dict.fromkeys(relations))


def _parse_int(value: Any) -> int:
    if isinstance(value, bool):
        raise ValueError(f"'{value}' is not an integer")
    try:
        return int(str(value).strip())
    except ValueError:
        raise ValueError(f"'{value}' is not an integer") from None
