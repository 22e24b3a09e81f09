"""Test infrastructure: in-memory Tortoise database, seeded records, config and path isolation.

Each test that asks for `db` gets a fresh sqlite :memory: database with the
schema generated from tests.models, closed again on teardown.
"""

import pytest
import pytest_asyncio
from tortoise import Tortoise, connections

from larasanic_api.support import Config, Storage
from tests.models import Author, Book, Tag

AUTHORS = [
    ("Ada", 36),
    ("Brian", 50),
    ("Carol", 29),
    ("Dennis", 70),
    ("Edsger", 72),
]


# ---------------------------------------------------------------------------
# Database
# ---------------------------------------------------------------------------
@pytest_asyncio.fixture
async def db():
    """Fresh in-memory database per test."""
    await Tortoise.init(db_url="sqlite://:memory:", modules={"models": ["tests.models"]})
    await Tortoise.generate_schemas()
    yield
    await connections.close_all()


@pytest_asyncio.fixture
async def authors(db) -> list:
    """Five authors with distinct names and ages, primary keys 1..5."""
    return [await Author.create(name=name, age=age) for name, age in AUTHORS]


@pytest_asyncio.fixture
async def books(authors) -> list:
    """Two books by the first author, one by the second."""
    classics = await Tag.create(name="classic")
    created = [
        await Book.create(title="Notes on the Analytical Engine", author=authors[0]),
        await Book.create(title="Sketch of the Engine", author=authors[0]),
        await Book.create(title="The C Programming Language", author=authors[1]),
    ]
    await created[2].tags.add(classics)
    return created


# ---------------------------------------------------------------------------
# Config / paths
# ---------------------------------------------------------------------------
@pytest.fixture(autouse=True)
def reset_config():
    """Runtime config overrides never leak between tests."""
    yield
    Config.clear_runtime_overrides()


@pytest.fixture
def app_base(tmp_path):
    """Point Storage at a throwaway application directory."""
    Storage.initialize(tmp_path)
    yield tmp_path
    Storage.initialize()
