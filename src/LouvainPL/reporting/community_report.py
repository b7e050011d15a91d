import logging
import os

import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt  # noqa: E402

logger = logging.getLogger(__name__)


def get_community_sizes(partition):
    """
    Count the nodes of each community.

    Args:
    - partition (dict): Dictionary with nodes as keys and community ID as values.

    Returns:
    - dict: Community ID -> number of nodes.
    """
    community_sizes = {}
    for community in partition.values():
        community_sizes[community] = community_sizes.get(community, 0) + 1
    return community_sizes


def community_size_report(partition):
    """Lines of the console report: a total, then one line per community, largest first."""
    community_sizes = get_community_sizes(partition)
    sorted_communities = sorted(
        community_sizes, key=lambda c: (-community_sizes[c], c)
    )
    lines = [f"{len(community_sizes)} communities found"]
    for counter, community in enumerate(sorted_communities):
        lines.append(
            f"community {counter}: {community_sizes[community]} people"
        )
    return lines


def plot_community_sizes(partition, directory, filename):
    """
    Plots the distribution of community sizes and saves the plot to a file.

    Args:
    - partition (dict): Dictionary with nodes as keys and community ID as values.
    - directory (str): Output directory.
    - filename (str): Prefix of the saved PNG.

    Returns:
    - str: Path of the saved plot.
    """
    community_sizes = get_community_sizes(partition)

    # Sort communities based on their sizes (from largest to smallest)
    sorted_communities = sorted(community_sizes, key=community_sizes.get, reverse=True)
    sorted_sizes = [community_sizes[community] for community in sorted_communities]

    os.makedirs(directory, exist_ok=True)
    fig, ax = plt.subplots(figsize=(10, 6))
    ax.bar([str(c) for c in sorted_communities], sorted_sizes)
    ax.set_xlabel("Community ID")
    ax.set_ylabel("Number of Nodes")
    ax.set_title("Distribution of Community Sizes")

    filepath = os.path.join(directory, f"{filename}_CommSizes.png")
    fig.savefig(filepath)
    plt.close(fig)
    logger.info("Plot saved to %s", filepath)
    return filepath
