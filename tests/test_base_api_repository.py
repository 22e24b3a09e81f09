"""BaseApiRepository tests against an in-memory database.

Covers filtering, ordering, eager loading, pagination and the 'all'
switch, CRUD operations, model resolution and SQL dumping.
"""

import pytest

from larasanic_api.exceptions import (
    ConfigurationException,
    ModelNotFoundException,
    NotFoundException,
    ValidationException,
)
from larasanic_api.repositories import BaseApiRepository
from larasanic_api.support import Config
from tests.models import Author, Book, Tag


class AuthorRepository(BaseApiRepository[Author]):
    model = Author


class BookRepository(BaseApiRepository[Book]):
    model = "tests.models.Book"


def ids(result) -> list:
    return [item.id for item in result]


class TestPaginate:
    """Filtered, sorted pages."""

    async def test_defaults(self, authors):
        """No parameters: the first page of everything."""
        result = await AuthorRepository().paginate(2, 1)
        assert len(result) == 2
        assert result.total_items == 5
        assert result.total_pages == 3
        assert result.has_next is True

    async def test_default_per_page_from_config(self, authors):
        Config.set("api.per_page", 4)
        repository = AuthorRepository()
        result = await repository.paginate()
        assert result.per_page == 4
        assert len(result) == 4

    async def test_page_parameters_override_arguments(self, authors):
        result = await AuthorRepository().paginate(15, 1, parameters={
            "page": "2",
            "per_page": "2",
            "order_by_asc": "id",
        })
        assert result.page == 2
        assert result.per_page == 2
        assert ids(result) == [3, 4]

    async def test_ids_and_exclude_ids(self, authors):
        result = await AuthorRepository().paginate(parameters={"ids": "1,2,3", "exclude_ids": "2"})
        assert sorted(ids(result)) == [1, 3]
        assert result.total_items == 2

    async def test_order_by_asc(self, authors):
        result = await AuthorRepository().paginate(parameters={"order_by_asc": "age"})
        assert [author.age for author in result] == [29, 36, 50, 70, 72]

    async def test_order_by_desc_wins(self, authors):
        result = await AuthorRepository().paginate(parameters={
            "order_by_asc": "name",
            "order_by_desc": "age",
        })
        assert [author.age for author in result] == [72, 70, 50, 36, 29]

    async def test_no_ordering_does_not_fail(self, authors):
        result = await AuthorRepository().paginate(10)
        assert sorted(ids(result)) == [1, 2, 3, 4, 5]

    async def test_page_past_the_end_is_empty(self, authors):
        result = await AuthorRepository().paginate(2, 9)
        assert result.items == []
        assert result.total_items == 5

    async def test_columns(self, authors):
        result = await AuthorRepository().paginate(parameters={"ids": "1"}, columns=["id", "name"])
        assert result.items[0].name == "Ada"

    async def test_invalid_parameters(self, authors):
        with pytest.raises(ValidationException) as exc_info:
            await AuthorRepository().paginate(parameters={"page": "two"})
        assert "page" in exc_info.value.errors

    async def test_invalid_ids(self, authors):
        with pytest.raises(ValidationException) as exc_info:
            await AuthorRepository().paginate(parameters={"ids": "abc"})
        assert "ids" in exc_info.value.errors


class TestAll:
    """'all' returns every match as one page."""

    async def test_all_ignores_page_size(self, authors):
        result = await AuthorRepository().paginate(1, 3, parameters={"all": "1", "page": "3", "per_page": "1"})
        assert len(result) == 5
        assert result.total_items == 5
        assert result.per_page == 5
        assert result.page == 1
        assert result.has_next is False

    async def test_all_respects_filters(self, authors):
        result = await AuthorRepository().paginate(parameters={"all": "", "ids": "1,2", "order_by_desc": "id"})
        assert ids(result) == [2, 1]


class TestEagerLoading:
    """include."""

    async def test_include_loads_relation(self, books):
        result = await BookRepository().paginate(parameters={"include": "author,author", "order_by_asc": "id"})
        assert [book.author.name for book in result] == ["Ada", "Ada", "Brian"]

    async def test_include_deduplicated(self, books):
        repository = BookRepository()
        await repository.paginate(parameters={"include": "author,author"})
        assert repository.parameters.include == ("author",)

    async def test_nested_include(self, books):
        result = await BookRepository().paginate(parameters={"include": "author.books", "ids": "1"})
        assert len(result.items[0].author.books) == 2

    async def test_find_by_id_eager_loads(self, books):
        author = await AuthorRepository().set_parameters({"include": "books"}).find_by_id(1)
        assert len(author.books) == 2

    async def test_columns_with_forward_include(self, books):
        """The relation's key column is fetched even when not asked for."""
        result = await BookRepository().paginate(
            parameters={"include": "author", "order_by_asc": "id"},
            columns=["id", "title"],
        )
        assert [book.author.name for book in result] == ["Ada", "Ada", "Brian"]
        assert result.items[0].title == "Notes on the Analytical Engine"

    async def test_columns_with_reverse_include(self, books):
        result = await AuthorRepository().paginate(parameters={"include": "books", "ids": "1"}, columns=["name"])
        assert len(result.items[0].books) == 2

    async def test_find_by_id_columns_with_include(self, books):
        book = await BookRepository().set_parameters({"include": "author"}).find_by_id(1, columns=["title"])
        assert book.title == "Notes on the Analytical Engine"
        assert book.author.name == "Ada"

    async def test_unknown_relation(self, books):
        with pytest.raises(ValidationException) as exc_info:
            await BookRepository().paginate(parameters={"include": "publisher"})
        assert exc_info.value.status_code == 422
        assert "include" in exc_info.value.errors

    async def test_unknown_sort_field(self, authors):
        with pytest.raises(ValidationException) as exc_info:
            await AuthorRepository().paginate(parameters={"order_by_desc": "shoe_size"})
        assert "order_by_desc" in exc_info.value.errors


class TestQueryState:
    """Query state is single use."""

    async def test_set_query_scopes_one_call(self, authors):
        repository = AuthorRepository()
        scoped = await repository.set_query(Author.filter(age__gt=40)).paginate(10)
        assert scoped.total_items == 3

        unscoped = await repository.paginate(10)
        assert unscoped.total_items == 5

    async def test_filters_do_not_stack(self, authors):
        repository = AuthorRepository()
        await repository.paginate(parameters={"ids": "1"})
        result = await repository.paginate()
        assert result.total_items == 5

    async def test_query_cleared_after_failure(self, authors):
        repository = AuthorRepository().set_query(Author.filter(age__gt=40))
        with pytest.raises(ValidationException):
            await repository.paginate(parameters={"ids": "x"})
        assert repository.query is None
        assert (await repository.paginate()).total_items == 5


class TestFindById:
    """find_by_id."""

    async def test_found(self, authors):
        author = await AuthorRepository().find_by_id(2)
        assert author.name == "Brian"

    async def test_string_key(self, authors):
        author = await AuthorRepository().find_by_id("3")
        assert author.name == "Carol"

    async def test_missing(self, authors):
        with pytest.raises(ModelNotFoundException) as exc_info:
            await AuthorRepository().find_by_id(99)
        assert isinstance(exc_info.value, NotFoundException)
        assert exc_info.value.status_code == 404
        assert "99" in exc_info.value.message

    async def test_uncoercible_key_not_found(self, authors):
        with pytest.raises(ModelNotFoundException):
            await AuthorRepository().find_by_id("abc")


class TestWrites:
    """create / update / destroy."""

    async def test_create_turns_none_into_empty_string(self, db):
        author = await AuthorRepository().create({"name": None, "age": 5})
        stored = await Author.get(pk=author.pk)
        assert stored.name == ""
        assert stored.age == 5

    async def test_update(self, authors):
        author = await AuthorRepository().update({"name": "Ada Lovelace"}, 1)
        assert author.name == "Ada Lovelace"
        assert (await Author.get(pk=1)).name == "Ada Lovelace"

    async def test_update_missing(self, authors):
        with pytest.raises(ModelNotFoundException):
            await AuthorRepository().update({"name": "Nobody"}, 99)
        assert await Author.all().count() == 5

    async def test_destroy_one(self, authors):
        assert await AuthorRepository().destroy(1) == 1
        assert await Author.get_or_none(pk=1) is None

    async def test_destroy_many(self, authors):
        assert await AuthorRepository().destroy([1, 2, 99]) == 2
        assert await Author.all().count() == 3

    async def test_destroy_missing(self, authors):
        assert await AuthorRepository().destroy(99) == 0
        assert await AuthorRepository().destroy(["abc"]) == 0


class TestModelResolution:
    """make_model and relationships."""

    async def test_dotted_path(self, db):
        assert BookRepository().model is Book

    def test_missing_model(self):
        class NoModelRepository(BaseApiRepository):
            pass

        with pytest.raises(ConfigurationException):
            NoModelRepository()

    def test_unloadable_path(self):
        class BrokenRepository(BaseApiRepository):
            model = "tests.models.Missing"

        with pytest.raises(ConfigurationException) as exc_info:
            BrokenRepository()
        assert "tests.models.Missing" in exc_info.value.message

    def test_not_a_model(self):
        class WrongRepository(BaseApiRepository):
            model = "tests.models.NotAModel"

        with pytest.raises(ConfigurationException):
            WrongRepository()

    async def test_relationships(self, db):
        assert BookRepository().get_model_relationships() == ["author", "tags"]
        assert AuthorRepository().get_model_relationships() == ["books"]

    async def test_plain_tortoise_model(self, db):
        class TagRepository(BaseApiRepository[Tag]):
            model = Tag

        tag = await TagRepository().create({"name": "essay"})
        assert (await TagRepository().find_by_id(tag.pk)).name == "essay"


class TestDebugging:
    """SQL dumping and user tracking."""

    async def test_to_sql_with_bindings(self, authors):
        repository = AuthorRepository().set_parameters({"ids": "1,2", "order_by_desc": "age"})
        sql = repository.to_sql_with_bindings()
        assert "authors" in sql
        assert "DESC" in sql.upper()
        assert "?" not in sql

    async def test_dump_exits_with_sql(self, authors):
        repository = AuthorRepository().set_parameters({"ids": "1"})
        with pytest.raises(SystemExit) as exc_info:
            repository.dump_query_with_bindings()
        assert exc_info.value.code == repository.to_sql_with_bindings()

    async def test_set_user(self, db):
        repository = AuthorRepository()
        user = object()
        assert repository.set_user(user).user is user
        assert repository.set_user(None).user is user

    async def test_to_dict_hides_hidden_fields(self, authors):
        result = await AuthorRepository().paginate(1, parameters={"ids": "1"})
        data = result.to_dict()
        assert data["items"] == [{"id": 1, "name": "Ada", "age": 36}]
        assert data["pagination"]["total_items"] == 1
