import logging
import random

from networkx.utils import create_py_random_state

from LouvainPL.community_detection.aggregator import aggregate
from LouvainPL.community_detection.local_optimizer import one_level
from LouvainPL.config import EPSILON, MAX_PASSES

logger = logging.getLogger(__name__)


def check_random_state(random_state):
    """
    Turn ``random_state`` into a ``random.Random``-like generator.

    ``None`` gives a fresh, privately seeded generator rather than the global
    one, so concurrent callers never share random state.
    """
    if random_state is None:
        return random.Random()
    return create_py_random_state(random_state)


def _renumber(partition):
    """Relabel communities to 0..k-1 in order of first appearance."""
    mapping = {}
    ret = {}
    for node, com in partition.items():
        if com not in mapping:
            mapping[com] = len(mapping)
        ret[node] = mapping[com]
    return ret


def generate_dendrogram(
    graph, random_state=None, epsilon=EPSILON, max_passes=MAX_PASSES
):
    """
    Build the Louvain dendrogram of ``graph``.

    Level 0 partitions the nodes of ``graph``; level ``k+1`` partitions the
    communities of level ``k``. Community ids of every level are 0..k-1.

    Parameters
    ----------
    graph : WeightedGraph
        Input graph. It is not modified.
    random_state : int, random.Random or None
        Seed or generator for the node scan order.
    epsilon : float
        Minimum modularity increase for a local-moving pass to continue.
    max_passes : int
        Upper bound on local-moving passes per level.

    Returns
    -------
    list of dict
        One partition per level, finest first. A graph where nothing merges
        gives a single level with every node alone.
    """
    rng = check_random_state(random_state)
    current_graph = graph
    dendrogram = []

    while True:
        partition = _renumber(
            one_level(current_graph, rng, epsilon=epsilon, max_passes=max_passes)
        )
        n_communities = len(set(partition.values()))
        logger.info(
            "level %d: %d nodes -> %d communities",
            len(dendrogram),
            current_graph.number_of_nodes(),
            n_communities,
        )
        if n_communities == current_graph.number_of_nodes():
            break

        dendrogram.append(partition)
        quotient, _ = aggregate(current_graph, partition)
        if quotient.number_of_nodes() >= current_graph.number_of_nodes():
            break
        current_graph = quotient

    if not dendrogram:
        dendrogram.append({node: i for i, node in enumerate(graph.nodes)})
    return dendrogram


def partition_at_level(dendrogram, level):
    """
    Compose the partitions of levels ``0..level`` into one partition.

    Parameters
    ----------
    dendrogram : list of dict
        As returned by ``generate_dendrogram``.
    level : int
        Level to stop at, from 0 to ``len(dendrogram) - 1``.

    Returns
    -------
    dict
        Mapping from the nodes of the original graph to their community at
        ``level``. The dendrogram is left untouched.
    """
    if not 0 <= level < len(dendrogram):
        raise ValueError(
            f"level must be in [0, {len(dendrogram) - 1}], got {level}"
        )
    partition = dict(dendrogram[0])
    for index in range(1, level + 1):
        next_level = dendrogram[index]
        for node, community in partition.items():
            partition[node] = next_level[community]
    return partition
