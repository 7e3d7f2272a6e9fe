from dagcore.graph.model import Edge, Node, edge_id_for


def make_nodes(*ids):
    return [Node(id=nid, label=nid.upper()) for nid in ids]


def make_edges(*pairs):
    return [Edge(id=edge_id_for(s, t), source=s, target=t) for s, t in pairs]
