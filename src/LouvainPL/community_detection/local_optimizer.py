"""
Phase 1 of the Louvain method: greedy local moving of nodes between communities.
"""

import logging

from LouvainPL.config import EPSILON, MAX_PASSES

logger = logging.getLogger(__name__)


class _CommunityState:
    """
    Per-community bookkeeping for one run of ``one_level``.

    Every node starts in a community named after itself.
    ``degrees[c]`` is the total weighted degree of the members of ``c`` and
    ``internals[c]`` the weight of the edges inside ``c`` (self-loops once).
    """

    def __init__(self, graph):
        self.node2com = {}
        self.degrees = {}
        self.internals = {}
        self.gdegrees = {}
        self.loops = {}
        for node in graph.nodes:
            degree = graph.degree(node)
            loop = graph.edge_weight(node, node, 0.0)
            self.node2com[node] = node
            self.degrees[node] = degree
            self.gdegrees[node] = degree
            self.loops[node] = loop
            self.internals[node] = loop

    def remove(self, node, com, weight):
        """Take ``node`` out of ``com``; ``weight`` is its link weight to ``com``."""
        self.degrees[com] -= self.gdegrees[node]
        self.internals[com] -= weight + self.loops[node]
        self.node2com[node] = None

    def insert(self, node, com, weight):
        """Put ``node`` into ``com``; ``weight`` is its link weight to ``com``."""
        self.node2com[node] = com
        self.degrees[com] += self.gdegrees[node]
        self.internals[com] += weight + self.loops[node]


def _neighbor_communities(graph, node, state):
    """Weight from ``node`` to each community among its neighbours, self-loop excluded."""
    weights = {}
    for _, neighbor, weight in graph.incident_edges(node):
        if neighbor != node:
            com = state.node2com[neighbor]
            weights[com] = weights.get(com, 0.0) + weight
    return weights


def _one_pass(graph, state):
    """
    Visit every node once and move it to its best community.

    The gain of placing node ``n`` in community ``c`` is
    ``k_n_c - k_n * tot_c / 2m``, where ``tot_c`` excludes ``n``. The constant
    common to all candidates is left out. Ties go to the current community,
    then to the lowest community id.

    Returns
    -------
    (int, float)
        Number of nodes that changed community and the summed gain of those
        moves, in the same unnormalized units.
    """
    two_m = 2.0 * graph.size
    moves = 0
    improvement = 0.0
    for node in graph.nodes:
        com_node = state.node2com[node]
        degree = state.gdegrees[node]
        neigh_weights = _neighbor_communities(graph, node, state)

        state.remove(node, com_node, neigh_weights.get(com_node, 0.0))

        stay_gain = neigh_weights.get(com_node, 0.0) - degree * state.degrees[com_node] / two_m
        best_com = com_node
        best_gain = stay_gain
        for com in sorted(neigh_weights):
            if com == com_node:
                continue
            gain = neigh_weights[com] - degree * state.degrees[com] / two_m
            if gain > best_gain:
                best_gain = gain
                best_com = com

        state.insert(node, best_com, neigh_weights.get(best_com, 0.0))
        if best_com != com_node:
            moves += 1
            improvement += best_gain - stay_gain
    return moves, improvement


def one_level(graph, rng, epsilon=EPSILON, max_passes=MAX_PASSES):
    """
    Compute one level of the Louvain dendrogram.

    Parameters
    ----------
    graph : WeightedGraph
        Graph to partition. It is not modified.
    rng : random.Random
        Source of the random scan order.
    epsilon : float
        A pass whose modularity increase is below this ends the run.
    max_passes : int
        Upper bound on the number of passes.

    Returns
    -------
    dict
        Node-to-community mapping over ``graph.nodes``. Community ids are
        node ids of ``graph`` (the node the community started from), so they
        are not contiguous.
    """
    if graph.size == 0:
        return {node: node for node in graph.nodes}

    work, remapping = graph.randomized_nodes_with_mapping(rng)
    inverse = {new: old for old, new in remapping.items()}
    state = _CommunityState(work)

    for pass_number in range(1, max_passes + 1):
        moves, improvement = _one_pass(work, state)
        # unnormalized gain / m is the modularity increase
        modularity_gain = improvement / work.size
        logger.debug(
            "pass %d: %d moves, modularity +%.3g", pass_number, moves, modularity_gain
        )
        if moves == 0 or modularity_gain < epsilon:
            break
    else:
        logger.debug("local optimizer stopped after max_passes=%d", max_passes)

    return {
        node: inverse[state.node2com[remapping[node]]] for node in graph.nodes
    }
