#!/usr/bin/env python3
"""
Command line entry point: detect Louvain communities in an adjacency-list CSV.

Usage:
    louvain-pl testnetwork.csv --seed 10 --output-dir results --plot
"""

import argparse
import logging
import os
import sys
import time
from pathlib import Path

from LouvainPL import config
from LouvainPL.community_detection.louvain import best_partition
from LouvainPL.community_detection.modularity import modularity
from LouvainPL.io.adjacency_reader import read_adjacency_csv
from LouvainPL.io.partition_writer import export_partition_to_txt, save_communities
from LouvainPL.reporting.community_report import (
    community_size_report,
    plot_community_sizes,
)

logger = logging.getLogger(__name__)


def parse_arguments(argv=None):
    parser = argparse.ArgumentParser(
        description="Louvain community detection on an adjacency-list CSV"
    )
    parser.add_argument(
        "input", type=Path, help="CSV file, one line per node: node,neighbour,..."
    )
    parser.add_argument(
        "--config", type=Path, help="YAML run configuration (see config/louvain.yml)"
    )
    parser.add_argument(
        "--seed", type=int, help="Seed for the random node order (overrides config)"
    )
    parser.add_argument(
        "--output-dir", type=Path, help="Directory for partition files and plots"
    )
    parser.add_argument(
        "--plot",
        action="store_true",
        default=None,
        help="Save a bar plot of the community sizes",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity",
    )
    return parser.parse_args(argv)


def setup_logging(level):
    logging.getLogger().handlers = []
    logging.basicConfig(
        level=getattr(logging, level),
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def resolve_settings(args):
    """Merge the YAML configuration with command line overrides."""
    settings = config.load_run_config(args.config)
    if args.seed is not None:
        settings["seed"] = args.seed
    if args.output_dir is not None:
        settings["output_dir"] = str(args.output_dir)
    if args.plot is not None:
        settings["plot"] = args.plot
    if args.log_level is not None:
        settings["log_level"] = args.log_level
    return settings


def run(args):
    settings = resolve_settings(args)
    setup_logging(settings["log_level"])

    graph, edge_counter = read_adjacency_csv(args.input)
    print(f"{edge_counter} edges added")

    start_time = time.perf_counter()
    partition = best_partition(
        graph,
        random_state=settings["seed"],
        epsilon=float(settings["epsilon"]),
        max_passes=int(settings["max_passes"]),
    )
    elapsed = time.perf_counter() - start_time
    print(f"BestPartition: {elapsed:.3f}s")

    for line in community_size_report(partition):
        print(line)
    if graph.size > 0:
        logger.info("Modularity: %.4f", modularity(partition, graph))

    sample_name = args.input.stem
    output_dir = settings["output_dir"]
    export_partition_to_txt(
        partition, os.path.join(output_dir, f"{sample_name}_partition.txt")
    )
    save_communities(
        partition, os.path.join(output_dir, f"{sample_name}_communities.txt")
    )
    if settings["plot"]:
        plot_community_sizes(partition, os.path.join(output_dir, "plots"), sample_name)
    return partition


def main(argv=None):
    args = parse_arguments(argv)
    try:
        run(args)
    except (FileNotFoundError, ValueError) as e:
        logging.error("Louvain run failed: %s", e)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
