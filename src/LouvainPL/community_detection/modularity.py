from LouvainPL.graph.weighted_graph import MalformedPartitionError


def modularity(partition, graph):
    """
    Newman modularity of ``partition`` on ``graph``.

    Parameters
    ----------
    partition : dict
        Node-to-community mapping covering every node of ``graph``.
    graph : WeightedGraph
        Graph with a positive total edge weight.

    Returns
    -------
    float
        ``sum over c of in_c / m - (tot_c / 2m) ** 2``, where ``in_c`` is the
        weight inside community ``c`` and ``tot_c`` its total degree.
    """
    links = graph.size
    if links == 0:
        raise ValueError("A graph without link has an undefined modularity")

    internals = {}
    degrees = {}
    for node in graph.nodes:
        try:
            com = partition[node]
        except KeyError:
            raise MalformedPartitionError(
                f"Partition has no community for node {node!r}"
            ) from None
        degrees[com] = degrees.get(com, 0.0) + graph.degree(node)
        for _, neighbor, weight in graph.incident_edges(node):
            if partition.get(neighbor) != com:
                continue
            # inner edges are seen from both ends, self-loops only once
            if neighbor == node:
                internals[com] = internals.get(com, 0.0) + weight
            else:
                internals[com] = internals.get(com, 0.0) + weight / 2.0

    result = 0.0
    for com, degree in degrees.items():
        result += internals.get(com, 0.0) / links - (degree / (2.0 * links)) ** 2
    return result
