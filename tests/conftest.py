import pytest

from tests.helpers import make_edges, make_nodes


@pytest.fixture
def chain():
    return make_nodes("a", "b", "c"), make_edges(("a", "b"), ("b", "c"))


@pytest.fixture
def triangle():
    return make_nodes("n1", "n2", "n3"), make_edges(("n1", "n2"), ("n2", "n3"), ("n3", "n1"))
