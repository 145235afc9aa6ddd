import pytest

from ministore.example import MODELS
from ministore.schema import Schema


@pytest.fixture
def schema():
    return Schema(models=MODELS)


@pytest.fixture
def post(schema):
    return schema.posts.create(title="Lorem")


@pytest.fixture
def comments(schema):
    return [schema.comments.create(text=f"comment {i}") for i in range(1, 4)]
