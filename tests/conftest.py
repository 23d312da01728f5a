import pytest

from scalargrad.autograd_graph import AutogradGraph


@pytest.fixture
def graph():
    """Fresh graph, installed as the default one for the test."""
    with AutogradGraph(check_for_cycles=True, auto_cleanup=True) as g:
        yield g
