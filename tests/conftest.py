import tempfile

import pytest

from .utils import write_pattern_file


@pytest.fixture
def temp_dir():
    with tempfile.TemporaryDirectory() as path:
        yield path


@pytest.fixture
def pattern_file(temp_dir):
    def factory(size, name="data.bin"):
        return write_pattern_file(temp_dir, size, name)

    return factory
