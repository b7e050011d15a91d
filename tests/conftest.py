import networkx as nx
import pytest

from LouvainPL.graph.weighted_graph import WeightedGraph


def _graph_from_edges(edges):
    g = WeightedGraph()
    for u, v, w in edges:
        g.add_edge(u, v, w)
    return g


@pytest.fixture
def two_triangles():
    return _graph_from_edges(
        [(1, 2, 1.0), (2, 3, 1.0), (1, 3, 1.0), (4, 5, 1.0), (5, 6, 1.0), (4, 6, 1.0)]
    )


@pytest.fixture
def path_graph():
    return _graph_from_edges([(1, 2, 1.0), (2, 3, 1.0), (3, 4, 1.0), (4, 5, 1.0)])


@pytest.fixture
def karate_nx():
    return nx.karate_club_graph()


@pytest.fixture
def karate(karate_nx):
    return WeightedGraph.from_networkx(karate_nx)
