from typing import Dict, Iterator, NamedTuple, Optional, Tuple

import networkx as nx


class NodeNotFoundError(KeyError):
    """Raised when a query names a node that was never added to the graph."""


class MalformedPartitionError(KeyError):
    """Raised when a partition does not assign exactly the nodes of a graph."""


class Edge(NamedTuple):
    from_node: int
    to_node: int
    weight: float

    @property
    def self_loop(self) -> bool:
        return self.from_node == self.to_node


class WeightedGraph:
    """
    Undirected weighted graph stored as a dict of incidence dicts.

    ``_adj[a][b]`` is the accumulated weight between ``a`` and ``b`` and is kept
    equal to ``_adj[b][a]`` on every mutation. A node's incidence dict contains
    the node itself only when a self-loop was added.

    ``size`` is the sum of edge weights, counting a self-loop once. ``degree``
    counts a self-loop twice, once per end, so for graphs built with
    ``add_edge`` alone ``2 * size == sum of all degrees``.
    """

    def __init__(self, other: Optional["WeightedGraph"] = None):
        self._adj: Dict[int, Dict[int, float]] = {}
        self._num_edges = 0
        self._size = 0.0
        if other is not None:
            for node, incidence in other._adj.items():
                self._adj[node] = dict(incidence)
            self._num_edges = other._num_edges
            self._size = other._size

    def copy(self) -> "WeightedGraph":
        return WeightedGraph(self)

    def __len__(self) -> int:
        return len(self._adj)

    def __contains__(self, node) -> bool:
        return node in self._adj

    def __repr__(self) -> str:
        return (
            f"WeightedGraph(nodes={self.number_of_nodes()}, "
            f"edges={self._num_edges}, size={self._size})"
        )

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------
    def add_node(self, node: int) -> None:
        """Add ``node`` with an empty incidence dict. Adding it twice is a no-op."""
        self._incidence(node)

    def add_edge(self, node1: int, node2: int, weight: float = 1.0) -> None:
        """
        Add ``weight`` to the weight between ``node1`` and ``node2``.

        Absent pairs start at 0. Every call counts as one more edge and adds
        ``weight`` to ``size``, whether or not the pair already existed.
        """
        self._add_directed_edge(node1, node2, weight)
        if node1 != node2:
            self._add_directed_edge(node2, node1, weight)
        self._num_edges += 1
        self._size += weight

    def set_edge(self, node1: int, node2: int, weight: float) -> None:
        """
        Overwrite the weight between ``node1`` and ``node2``.

        The edge count and ``size`` are still incremented by one and by
        ``weight``; the previous weight is not subtracted. Mixing ``set_edge``
        and ``add_edge`` on the same pair therefore leaves ``size`` and
        ``number_of_edges`` out of step with the stored weights.
        """
        self._incidence(node1)[node2] = weight
        if node1 != node2:
            self._incidence(node2)[node1] = weight
        self._num_edges += 1
        self._size += weight

    def _add_directed_edge(self, node1, node2, weight):
        incidence = self._incidence(node1)
        incidence[node2] = incidence.get(node2, 0.0) + weight

    def _incidence(self, node) -> Dict[int, float]:
        incidence = self._adj.get(node)
        if incidence is None:
            incidence = self._adj[node] = {}
        return incidence

    def _existing_incidence(self, node) -> Dict[int, float]:
        try:
            return self._adj[node]
        except KeyError:
            raise NodeNotFoundError(f"No such node {node!r}") from None

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    @property
    def number_of_edges(self) -> int:
        return self._num_edges

    @property
    def size(self) -> float:
        return self._size

    def number_of_nodes(self) -> int:
        return len(self._adj)

    def has_node(self, node) -> bool:
        return node in self._adj

    @property
    def nodes(self):
        """Live, restartable view of the node ids."""
        return self._adj.keys()

    def degree(self, node: int) -> float:
        incidence = self._existing_incidence(node)
        # a self-loop has two ends
        return sum(incidence.values()) + incidence.get(node, 0.0)

    def edges(self) -> Iterator[Edge]:
        """Yield every undirected edge once, as ``(a, b, w)`` with ``a <= b``."""
        for node1, incidence in self._adj.items():
            for node2, weight in incidence.items():
                if node1 <= node2:
                    yield Edge(node1, node2, weight)

    def incident_edges(self, node: int) -> Iterator[Edge]:
        """
        Edges touching ``node``, each as ``(node, neighbour, w)``.

        The node is looked up when this is called, not when the result is
        first iterated, so an unknown node fails right away.
        """
        incidence = self._existing_incidence(node)
        return (Edge(node, neighbor, weight) for neighbor, weight in incidence.items())

    def edge_weight(self, node1: int, node2: int, default: float = 0.0) -> float:
        """Weight between the two nodes, or ``default`` if they are not linked."""
        return self._existing_incidence(node1).get(node2, default)

    # ------------------------------------------------------------------
    # Derived graphs
    # ------------------------------------------------------------------
    def quotient(self, partition: Dict[int, int]) -> "WeightedGraph":
        """
        Collapse each community of ``partition`` into a single node.

        Parameters
        ----------
        partition : dict
            Node-to-community mapping covering every node of this graph.

        Returns
        -------
        WeightedGraph
            One node per community. The weight between two communities is the
            sum of the weights of the edges running between their members;
            edges inside a community become a self-loop.
        """
        missing = [node for node in self._adj if node not in partition]
        if missing:
            raise MalformedPartitionError(
                f"Partition has no community for node {missing[0]!r} "
                f"({len(missing)} node(s) unassigned)"
            )
        unknown = [node for node in partition if node not in self._adj]
        if unknown:
            raise MalformedPartitionError(
                f"Partition assigns node {unknown[0]!r}, which is not in the graph"
            )

        ret = WeightedGraph()
        for community in partition.values():
            ret.add_node(community)
        for node1, node2, weight in self.edges():
            ret.add_edge(partition[node1], partition[node2], weight)
        return ret

    def randomized_nodes_with_mapping(
        self, rng
    ) -> Tuple["WeightedGraph", Dict[int, int]]:
        """
        Relabel the nodes to ``0..n-1`` in random order.

        Both the node permutation and the edge insertion order are drawn with
        a Fisher-Yates shuffle from ``rng`` (a ``random.Random``).

        Returns
        -------
        (WeightedGraph, dict)
            The relabelled graph and the old-id -> new-id mapping.
        """
        nodes = list(self._adj)
        for i in range(len(nodes) - 1, 0, -1):
            j = rng.randrange(i + 1)
            nodes[i], nodes[j] = nodes[j], nodes[i]
        remapping = {node: i for i, node in enumerate(nodes)}

        edges = list(self.edges())
        for i in range(len(edges) - 1, 0, -1):
            j = rng.randrange(i + 1)
            edges[i], edges[j] = edges[j], edges[i]

        g = WeightedGraph()
        for node in nodes:
            g.add_node(remapping[node])
        for node1, node2, weight in edges:
            g.add_edge(remapping[node1], remapping[node2], weight)
        return g, remapping

    def randomized_nodes(self, rng) -> "WeightedGraph":
        """Structurally equivalent graph with randomly permuted node ids."""
        g, _ = self.randomized_nodes_with_mapping(rng)
        return g

    # ------------------------------------------------------------------
    # networkx interop
    # ------------------------------------------------------------------
    @classmethod
    def from_networkx(cls, G: nx.Graph, weight: str = "weight") -> "WeightedGraph":
        """
        Build a graph from a networkx graph.

        Edges without a ``weight`` attribute count as 1. Node labels are kept
        as they are, so they must be comparable with each other.
        """
        if G.is_directed():
            raise nx.NetworkXNotImplemented("not implemented for directed type")
        g = cls()
        for node in G.nodes():
            g.add_node(node)
        for u, v, data in G.edges(data=True):
            g.add_edge(u, v, data.get(weight, 1.0))
        return g

    def to_networkx(self, weight: str = "weight") -> nx.Graph:
        G = nx.Graph()
        G.add_nodes_from(self._adj)
        G.add_weighted_edges_from(self.edges(), weight=weight)
        return G
