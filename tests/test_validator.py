import pytest

from dagcore.config.loader import ValidationSettings
from dagcore.graph.model import Edge, InvalidGraphInput, Node
from dagcore.validation.validator import validate
from tests.helpers import make_edges, make_nodes


def test_empty_graph_is_valid():
    result = validate([], [])

    assert result.is_valid
    assert result.errors == []
    assert result.warnings == []
    assert result.status == "empty"


def test_single_node_is_not_warned():
    result = validate(make_nodes("n1"), [])
    assert result.is_valid
    assert result.warnings == []


def test_two_unconnected_nodes_both_warned():
    nodes = [Node(id="n1", label="Load"), Node(id="n2", label="Save")]

    result = validate(nodes, [])

    assert result.is_valid
    assert result.errors == []
    assert result.warnings == [
        "Node n1 (Load) is not connected to the pipeline",
        "Node n2 (Save) is not connected to the pipeline",
    ]
    assert result.status == "valid"


@pytest.mark.parametrize("count", [2, 3, 6])
def test_edgeless_graphs_warn_per_node(count):
    nodes = make_nodes(*[f"n{i}" for i in range(count)])
    result = validate(nodes, [])
    assert result.is_valid
    assert len(result.warnings) == count


def test_chain_is_valid(chain):
    nodes, edges = chain
    result = validate(nodes, edges)
    assert result.to_dict() == {"isValid": True, "errors": [], "warnings": []}


def test_triangle_cycle(triangle):
    nodes, edges = triangle

    result = validate(nodes, edges)

    assert not result.is_valid
    assert result.errors == ["Cycle detected involving node n1"]
    assert result.warnings == []
    assert result.status == "invalid"


def test_disjoint_cycles_are_all_reported():
    nodes = make_nodes("a", "b", "c", "d", "e")
    edges = make_edges(("a", "b"), ("b", "a"), ("c", "d"), ("d", "c"), ("e", "a"))

    result = validate(nodes, edges)

    assert result.errors == [
        "Cycle detected involving node a",
        "Cycle detected involving node c",
    ]


def test_cycle_reached_from_acyclic_prefix():
    nodes = make_nodes("s", "x", "y")
    edges = make_edges(("s", "x"), ("x", "y"), ("y", "x"))

    result = validate(nodes, edges)

    assert result.errors == ["Cycle detected involving node x"]


def test_long_chain_does_not_hit_recursion_limit():
    ids = [f"n{i}" for i in range(5000)]
    edges = make_edges(*zip(ids, ids[1:]), (ids[-1], ids[0]))

    result = validate(make_nodes(*ids), edges)

    assert result.errors == ["Cycle detected involving node n0"]


def test_dangling_edge_reported_and_excluded_from_cycles():
    nodes = make_nodes("a", "b")
    edges = [
        Edge(id="e1", source="a", target="b"),
        Edge(id="e2", source="b", target="ghost"),
        Edge(id="e3", source="ghost", target="a"),
    ]

    result = validate(nodes, edges)

    assert result.errors == [
        "Edge e2 references unknown node ghost",
        "Edge e3 references unknown node ghost",
    ]


def test_self_loop_reported_once_and_not_as_cycle():
    nodes = make_nodes("a", "b")
    edges = [Edge(id="e1", source="a", target="b"), Edge(id="e2", source="b", target="b")]

    result = validate(nodes, edges)

    assert result.errors == ["Node b cannot connect to itself"]
    assert result.warnings == []


def test_duplicate_connection_reported_once_per_pair():
    nodes = make_nodes("a", "b")
    base = [Edge(id="e1", source="a", target="b")]
    once = base + [Edge(id="e2", source="a", target="b")]
    twice = once + [Edge(id="e3", source="a", target="b")]

    assert validate(nodes, base).errors == []
    assert validate(nodes, once).errors == ["Duplicate connection from a to b"]
    assert validate(nodes, twice).errors == ["Duplicate connection from a to b"]


def test_error_priority_order():
    nodes = make_nodes("a", "b", "c")
    edges = [
        Edge(id="e1", source="a", target="b"),
        Edge(id="e2", source="b", target="a"),
        Edge(id="e3", source="a", target="b"),
        Edge(id="e4", source="c", target="c"),
        Edge(id="e5", source="c", target="zz"),
    ]

    result = validate(nodes, edges)

    assert result.errors == [
        "Edge e5 references unknown node zz",
        "Node c cannot connect to itself",
        "Duplicate connection from a to b",
        "Cycle detected involving node a",
    ]


def test_validate_is_idempotent(triangle):
    nodes, edges = triangle
    assert validate(nodes, edges) == validate(nodes, edges)


def test_validate_does_not_mutate_input(chain):
    nodes, edges = chain
    before = (list(nodes), list(edges))
    validate(nodes, edges)
    assert (nodes, edges) == before


def test_isolated_threshold_is_configurable():
    settings = ValidationSettings(isolated_warning_min_nodes=3)
    assert validate(make_nodes("a", "b"), [], settings=settings).warnings == []
    assert len(validate(make_nodes("a", "b", "c"), [], settings=settings).warnings) == 3


def test_duplicate_node_ids_raise():
    with pytest.raises(InvalidGraphInput):
        validate(make_nodes("a", "a"), [])
