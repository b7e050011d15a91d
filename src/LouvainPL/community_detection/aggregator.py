import logging

logger = logging.getLogger(__name__)


def aggregate(graph, partition):
    """
    Phase 2 of the Louvain method: collapse communities into single nodes.

    Parameters
    ----------
    graph : WeightedGraph
        Graph of the current level.
    partition : dict
        Node-to-community mapping over every node of ``graph``.

    Returns
    -------
    (WeightedGraph, dict)
        The quotient graph, whose nodes are the community ids, and the
        partition it was built from.
    """
    quotient = graph.quotient(partition)
    logger.debug(
        "aggregated %d nodes into %d communities",
        graph.number_of_nodes(),
        quotient.number_of_nodes(),
    )
    return quotient, partition
