import random

import pytest

from aussprache.dataset import build_dataset
from aussprache.tiles import make_tiles


class FakeResponse:
    def __init__(self, status_code=200, content=b"", reason=""):
        self.status_code = status_code
        self.content = content
        self.reason = reason

    @property
    def ok(self):
        return self.status_code < 400


@pytest.fixture
def fruit_table():
    # Spalte 0: apple, pear; Spalte 1: cat
    return [["Fruit", "Animal"], ["apple", "cat"], ["pear"]]


@pytest.fixture
def fruit_dataset(fruit_table):
    return build_dataset(fruit_table, "fruit")


@pytest.fixture
def fruit_tiles(fruit_dataset):
    return make_tiles(fruit_dataset, random.Random("fixed"))


def by_text(tiles):
    return {t.text: t for t in tiles}
