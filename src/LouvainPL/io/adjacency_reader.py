import csv
import logging

from LouvainPL.graph.weighted_graph import WeightedGraph

logger = logging.getLogger(__name__)


def read_adjacency_csv(file_path, graph=None):
    """
    Reads an adjacency list from a CSV file into a WeightedGraph.

    Each non-blank row is ``node,neighbour,neighbour,...``; every neighbour adds
    one unit-weight edge to ``node``. A pair listed from both sides therefore
    ends up with weight 2. A row with no neighbours adds an isolated node.

    Parameters
    ----------
    file_path : str or Path
        CSV file to read.
    graph : WeightedGraph, optional
        Graph to add to. A new one is created if omitted.

    Returns
    -------
    (WeightedGraph, int)
        The graph and the number of edges read.
    """
    if graph is None:
        graph = WeightedGraph()
    edge_counter = 0

    with open(file_path, "r", encoding="utf-8", newline="") as f:
        reader = csv.reader(f)
        for line_number, row in enumerate(reader, start=1):
            fields = [field.strip() for field in row]
            # trailing separators are allowed, empty fields elsewhere are not
            while fields and not fields[-1]:
                fields.pop()
            if not fields:
                continue  # blank line
            try:
                ids = [int(field) for field in fields]
            except ValueError:
                raise ValueError(
                    f"{file_path}:{line_number}: node ids must be integers, got {row!r}"
                ) from None

            agent, friends = ids[0], ids[1:]
            graph.add_node(agent)
            for friend in friends:
                graph.add_edge(agent, friend, 1.0)
                edge_counter += 1

    logger.info("%d edges added from %s", edge_counter, file_path)
    return graph, edge_counter
