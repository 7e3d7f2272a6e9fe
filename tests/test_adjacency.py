import pytest

from dagcore.graph.adjacency import build_adjacency
from dagcore.graph.model import (
    Edge,
    InvalidGraphInput,
    Node,
    Position,
    edge_id_for,
    edges_from_dicts,
    unique_edge_id,
)
from tests.helpers import make_edges, make_nodes


def test_outgoing_and_indegree_follow_insertion_order():
    nodes = make_nodes("a", "b", "c")
    edges = make_edges(("a", "c"), ("a", "b"), ("b", "c"))

    adj = build_adjacency(nodes, edges)

    assert adj.order == ["a", "b", "c"]
    assert adj.outgoing == {"a": ["c", "b"], "b": ["c"], "c": []}
    assert adj.incoming["c"] == ["a", "b"]
    assert adj.indegree == {"a": 0, "b": 1, "c": 2}


def test_dangling_references_are_recorded_not_dropped():
    nodes = make_nodes("a")
    edges = [
        Edge(id="e1", source="a", target="ghost"),
        Edge(id="e2", source="x", target="y"),
        Edge(id="e3", source="z", target="z"),
    ]

    adj = build_adjacency(nodes, edges)

    assert adj.dangling == [("e1", "ghost"), ("e2", "x"), ("e2", "y"), ("e3", "z")]
    assert adj.outgoing == {"a": []}
    assert adj.self_loops == []
    assert adj.degree["a"] == 0


def test_self_loops_and_duplicates_stay_out_of_outgoing():
    nodes = make_nodes("a", "b")
    edges = [
        Edge(id="e1", source="a", target="b"),
        Edge(id="e2", source="a", target="b"),
        Edge(id="e3", source="a", target="b"),
        Edge(id="e4", source="b", target="b"),
    ]

    adj = build_adjacency(nodes, edges)

    assert adj.outgoing["a"] == ["b"]
    assert adj.indegree["b"] == 1
    assert adj.duplicates == [("a", "b")]
    assert [e.id for e in adj.self_loops] == ["e4"]
    assert adj.degree == {"a": 3, "b": 4}


def test_duplicate_node_id_is_a_contract_violation():
    with pytest.raises(InvalidGraphInput, match="node id: 'a'"):
        build_adjacency(make_nodes("a", "a"), [])


def test_duplicate_edge_id_is_a_contract_violation():
    edges = [Edge(id="e", source="a", target="b"), Edge(id="e", source="b", target="a")]
    with pytest.raises(InvalidGraphInput, match="edge id: 'e'"):
        build_adjacency(make_nodes("a", "b"), edges)


def test_edge_id_for_is_deterministic():
    assert edge_id_for("node_1", "node_2") == "enode_1-node_2"


def test_node_from_editor_shape():
    node = Node.from_dict({
        "id": "node_1",
        "type": "custom",
        "position": {"x": 12.5, "y": 40},
        "data": {"label": "Extract"},
    })

    assert node == Node(id="node_1", label="Extract", position=Position(12.5, 40.0), kind="custom")


def test_node_label_defaults_to_id():
    assert Node(id="n1").label == "n1"


def test_edge_from_dict_derives_missing_id():
    edge = Edge.from_dict({"source": "a", "target": "b"})
    assert edge.id == "ea-b"
    assert edge.kind == "default"


def test_node_keeps_explicit_empty_label():
    assert Node(id="n1", label="").label == ""
    assert Node.from_dict({"id": "n1", "label": ""}).label == ""
    assert Node.from_dict({"id": "n1"}).label == "n1"


def test_edges_without_ids_get_distinct_ids():
    edges = edges_from_dicts([
        {"source": "a", "target": "b"},
        {"source": "a", "target": "b"},
        {"id": "ea-b-1", "source": "b", "target": "c"},
        {"source": "a", "target": "b"},
    ])

    assert [e.id for e in edges] == ["ea-b", "ea-b-2", "ea-b-1", "ea-b-3"]
    adj = build_adjacency(make_nodes("a", "b", "c"), edges)
    assert adj.duplicates == [("a", "b")]


def test_unique_edge_id_skips_taken_ids():
    assert unique_edge_id("a", "b", set()) == "ea-b"
    assert unique_edge_id("a", "b", {"ea-b", "ea-b-0"}) == "ea-b-1"
