import os

import pytest

from library_inventory.library import Library
from library_inventory.ui_helpers import OUTPUT_MODE_ENV

CURRENT_YEAR = 2024


@pytest.fixture
def current_year():
    return CURRENT_YEAR


@pytest.fixture
def lib(current_year):
    # Fresh library per test with a pinned "current year"
    return Library(current_year=lambda: current_year)


@pytest.fixture
def data_file(tmp_path):
    return tmp_path / "library.txt"


@pytest.fixture(autouse=True)
def plain_output(monkeypatch):
    monkeypatch.delenv(OUTPUT_MODE_ENV, raising=False)
    yield
    os.environ.pop(OUTPUT_MODE_ENV, None)
