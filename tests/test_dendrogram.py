import copy
import random

import pytest

from LouvainPL.community_detection.aggregator import aggregate
from LouvainPL.community_detection.dendrogram import (
    check_random_state,
    generate_dendrogram,
    partition_at_level,
)
from LouvainPL.community_detection.louvain import best_partition
from LouvainPL.community_detection.modularity import modularity
from LouvainPL.graph.weighted_graph import WeightedGraph


def test_empty_graph_has_one_empty_level():
    assert generate_dendrogram(WeightedGraph(), random_state=0) == [{}]


def test_edgeless_graph_has_one_trivial_level():
    g = WeightedGraph()
    for node in (3, 1, 2):
        g.add_node(node)
    dendrogram = generate_dendrogram(g, random_state=0)
    assert len(dendrogram) == 1
    assert set(dendrogram[0]) == {1, 2, 3}
    assert len(set(dendrogram[0].values())) == 3


def test_level_domains_chain(karate):
    dendrogram = generate_dendrogram(karate, random_state=7)
    assert set(dendrogram[0]) == set(karate.nodes)
    for finer, coarser in zip(dendrogram, dendrogram[1:]):
        assert set(coarser) == set(finer.values())
        # levels only merge
        assert len(set(coarser.values())) < len(set(finer.values()))


def test_community_ids_are_dense(karate):
    for partition in generate_dendrogram(karate, random_state=3):
        ids = set(partition.values())
        assert ids == set(range(len(ids)))


def test_each_level_beats_singletons(karate):
    dendrogram = generate_dendrogram(karate, random_state=4)
    level_graph = karate
    for partition in dendrogram:
        singletons = {node: node for node in level_graph.nodes}
        assert modularity(partition, level_graph) >= (
            modularity(singletons, level_graph) - 1e-12
        )
        level_graph = level_graph.quotient(partition)


def test_top_level_matches_best_partition(karate):
    dendrogram = generate_dendrogram(karate, random_state=9)
    top = partition_at_level(dendrogram, len(dendrogram) - 1)
    assert top == best_partition(karate, random_state=9)


def test_partition_at_level_zero_is_first_level(karate):
    dendrogram = generate_dendrogram(karate, random_state=1)
    assert partition_at_level(dendrogram, 0) == dendrogram[0]


def test_partition_at_level_is_pure(karate):
    dendrogram = generate_dendrogram(karate, random_state=1)
    snapshot = copy.deepcopy(dendrogram)
    partition_at_level(dendrogram, len(dendrogram) - 1)
    assert dendrogram == snapshot


def test_partition_at_level_rejects_bad_level(two_triangles):
    dendrogram = generate_dendrogram(two_triangles, random_state=0)
    with pytest.raises(ValueError):
        partition_at_level(dendrogram, len(dendrogram))
    with pytest.raises(ValueError):
        partition_at_level(dendrogram, -1)


def test_check_random_state():
    a = check_random_state(5)
    b = check_random_state(5)
    assert [a.random() for _ in range(3)] == [b.random() for _ in range(3)]

    rng = random.Random(1)
    assert check_random_state(rng) is rng
    assert check_random_state(None) is not check_random_state(None)


def test_aggregate_returns_quotient_and_partition(two_triangles):
    partition = {1: 0, 2: 0, 3: 0, 4: 1, 5: 1, 6: 1}
    quotient, same = aggregate(two_triangles, partition)
    assert same is partition
    assert set(quotient.nodes) == {0, 1}
    assert quotient.size == two_triangles.size
