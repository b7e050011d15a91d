import logging
import os

logger = logging.getLogger(__name__)


def export_partition_to_txt(partition, filepath):
    """Write one ``node, community`` line per node."""
    os.makedirs(os.path.dirname(os.path.abspath(filepath)), exist_ok=True)
    with open(filepath, "w") as file:
        for node, community in partition.items():
            file.write(f"{node}, {community}\n")
    logger.info("Partition exported to %s", filepath)
    return filepath


def save_communities(partition, filepath):
    """
    Write the members of each community, one community per line.

    Args:
    - partition (dict): Dictionary with nodes as keys and community IDs as values.
    - filepath (str): Output text file.
    """
    nodes_by_community = {}
    for node, community in partition.items():
        nodes_by_community.setdefault(community, []).append(node)

    os.makedirs(os.path.dirname(os.path.abspath(filepath)), exist_ok=True)
    with open(filepath, "w") as file:
        for community, nodes in sorted(nodes_by_community.items()):
            members = ", ".join(str(node) for node in sorted(nodes))
            file.write(
                f"Community {community}, Total Nodes: {len(nodes)}, Nodes: {members}\n"
            )
    logger.info("Nodes per community report saved to %s", filepath)
    return filepath
