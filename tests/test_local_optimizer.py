import random

from LouvainPL.community_detection.local_optimizer import (
    _CommunityState,
    _one_pass,
    one_level,
)
from LouvainPL.community_detection.modularity import modularity
from LouvainPL.graph.weighted_graph import WeightedGraph


def _groups(partition):
    groups = {}
    for node, com in partition.items():
        groups.setdefault(com, set()).add(node)
    return sorted(groups.values(), key=min)


def test_two_triangles_in_one_level(two_triangles):
    partition = one_level(two_triangles, random.Random(0))
    assert _groups(partition) == [{1, 2, 3}, {4, 5, 6}]


def test_community_ids_are_node_ids(karate):
    partition = one_level(karate, random.Random(2))
    assert set(partition) == set(karate.nodes)
    assert set(partition.values()) <= set(karate.nodes)


def test_isolated_nodes_stay_alone():
    g = WeightedGraph()
    g.add_node(1)
    g.add_node(2)
    assert one_level(g, random.Random(0)) == {1: 1, 2: 2}


def test_isolated_node_next_to_edges():
    g = WeightedGraph()
    g.add_edge(1, 2, 1.0)
    g.add_node(3)
    partition = one_level(g, random.Random(0))
    assert partition[1] == partition[2]
    assert partition[3] != partition[1]


def test_same_seed_same_partition(karate):
    first = one_level(karate, random.Random(42))
    second = one_level(karate, random.Random(42))
    assert first == second


def test_graph_is_not_modified(karate):
    edges_before = list(karate.edges())
    size_before = karate.size
    one_level(karate, random.Random(5))
    assert list(karate.edges()) == edges_before
    assert karate.size == size_before


def test_never_worse_than_singletons(karate, path_graph):
    for g in (karate, path_graph):
        for seed in range(5):
            partition = one_level(g, random.Random(seed))
            singletons = {node: node for node in g.nodes}
            assert modularity(partition, g) >= modularity(singletons, g) - 1e-12


def test_pass_bound_still_yields_full_partition(karate):
    partition = one_level(karate, random.Random(1), max_passes=1)
    assert set(partition) == set(karate.nodes)


def test_large_epsilon_stops_after_first_pass(karate):
    # first pass always runs to completion, so merges still happen
    partition = one_level(karate, random.Random(1), epsilon=10.0)
    assert len(set(partition.values())) < karate.number_of_nodes()


def test_equal_gains_go_to_lowest_community_id():
    g = WeightedGraph()
    g.add_node(1)  # visited first
    g.add_edge(1, 2, 1.0)
    g.add_edge(1, 0, 1.0)
    state = _CommunityState(g)

    _one_pass(g, state)

    # joining {0} or {2} gains the same
    assert state.node2com[1] == 0


def test_equal_gains_keep_current_community():
    g = WeightedGraph()
    g.add_node(1)  # visited first
    g.add_edge(1, 0, 1.0)
    g.add_edge(1, 2, 1.0)
    state = _CommunityState(g)
    state.remove(1, 1, 0.0)
    state.insert(1, 2, 1.0)

    _one_pass(g, state)

    # staying with 2 gains as much as joining {0}, so node 1 stays
    assert state.node2com[1] == 2
    assert state.node2com[2] == 2
