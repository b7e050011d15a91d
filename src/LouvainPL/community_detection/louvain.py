import logging

import networkx as nx

from LouvainPL.community_detection.dendrogram import (
    generate_dendrogram,
    partition_at_level,
)
from LouvainPL.config import EPSILON, MAX_PASSES
from LouvainPL.graph.weighted_graph import WeightedGraph

logger = logging.getLogger(__name__)


def best_partition(graph, random_state=None, epsilon=EPSILON, max_passes=MAX_PASSES):
    """
    Partition ``graph`` into communities with the Louvain method.

    Parameters
    ----------
    graph : WeightedGraph
        Undirected weighted input graph.
    random_state : int, random.Random or None
        Seed or generator for the node scan order. The same seed on the same
        graph always gives the same partition.
    epsilon : float
        Minimum modularity increase for a local-moving pass to continue.
    max_passes : int
        Upper bound on local-moving passes per level.

    Returns
    -------
    dict
        Node-to-community mapping taken from the top of the dendrogram.
        Community ids are 0..k-1.
    """
    dendrogram = generate_dendrogram(
        graph, random_state=random_state, epsilon=epsilon, max_passes=max_passes
    )
    return partition_at_level(dendrogram, len(dendrogram) - 1)


def run_louvain(G, random_state=None, weight="weight"):
    """
    Runs the Louvain community detection algorithm on a networkx graph.

    Parameters:
        G (networkx.Graph): Input graph. Edges without ``weight`` count as 1.
        random_state (int): Seed for the node scan order.
        weight (str): Edge attribute holding the weights.

    Returns:
        dict: Node-to-community mapping, keyed by the labels of ``G``.
    """
    logger.info(
        "Louvain: starting run on graph with %d nodes and %d edges",
        G.number_of_nodes(),
        G.number_of_edges(),
    )
    # integer labels keep edge ordering well defined for any node type
    H = nx.convert_node_labels_to_integers(G, label_attribute="label")
    partition = best_partition(
        WeightedGraph.from_networkx(H, weight=weight), random_state=random_state
    )
    communities = {H.nodes[node]["label"]: com for node, com in partition.items()}
    logger.info("Louvain: found %d communities", len(set(communities.values())))
    return communities


# Example usage
if __name__ == "__main__":
    G = nx.karate_club_graph()
    communities = run_louvain(G, random_state=42)
    print("Louvain Communities:", communities)
