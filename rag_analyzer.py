#!/usr/bin/env python3
"""
Resource Allocation Graph Analyzer
Main entry point for the analysis engine.

Loads a resource-allocation graph (or the classic two-process deadlock
example), then runs deadlock detection, the Banker's safety evaluation and
the matrix projections on it.
"""

import argparse
import sys
from typing import Optional, List

from models.graph import ResourceGraph
from utils.graph_loader import (
    GraphLoadError,
    check_size_limits,
    get_graph_description,
    load_graph,
    save_graph,
)
from utils.logger import AnalyzerLogger
from algorithms.avoidance import evaluate_safety
from algorithms.detection import detect_deadlock
from algorithms.projections import allocation_matrix, availability, request_matrix
from analysis.analyzer import format_tables
from analysis.metrics import GraphMetrics


EXIT_OK = 0
EXIT_LOAD_ERROR = 1
EXIT_DEADLOCK_OR_UNSAFE = 2

DEFAULT_MAX_NODES = 500
DEFAULT_MAX_EDGES = 2000


def run_analysis(
    graph_path: Optional[str],
    detect: bool = True,
    safety: bool = True,
    tables: bool = True,
    max_nodes: int = DEFAULT_MAX_NODES,
    max_edges: int = DEFAULT_MAX_EDGES,
    save_path: Optional[str] = None,
    verbose: bool = False,
    log_file: Optional[str] = None
) -> int:
    """
    Run the selected analyses on one graph.

    Step Ordering:
    1. Load the graph (or build the classic deadlock example)
    2. Enforce the node/edge ceiling
    3. Deadlock detection, then the Banker's safety evaluation
    4. Matrix and availability tables

    Args:
        graph_path: Path to graph JSON file, None for the built-in example
        detect: Run deadlock detection
        safety: Run the Banker's safety evaluation
        tables: Print the Allocation/Request/Available tables
        max_nodes: Node ceiling (0 disables)
        max_edges: Edge ceiling (0 disables)
        save_path: Optional path to write the analysed graph as JSON
        verbose: Enable verbose logging
        log_file: Optional log file path

    Returns:
        Process exit code
    """
    with AnalyzerLogger(verbose=verbose, log_file=log_file) as logger:
        try:
            if graph_path:
                graph = load_graph(graph_path, logger=logger)
                source = graph_path
            else:
                graph = ResourceGraph.classic_deadlock(logger=logger)
                source = "built-in classic deadlock example"
            check_size_limits(graph, max_nodes, max_edges)
        except GraphLoadError as e:
            logger.log(f"Failed to load graph: {e}", "error")
            return EXIT_LOAD_ERROR

        logger.log(f"\n{'='*60}")
        logger.log("RESOURCE ALLOCATION GRAPH ANALYSIS")
        logger.log(f"Graph: {source}")
        description = get_graph_description(graph_path) if graph_path else ""
        if description:
            logger.log(f"Description: {description}")
        logger.log(f"{'='*60}\n")

        metrics = GraphMetrics.from_graph(graph)
        logger.log(metrics.display(), "debug")
        for resource_id in metrics.over_allocated:
            logger.log(f"{resource_id} has more allocation edges than instances", "warning")

        problem = False

        if detect:
            logger.log("Starting deadlock detection...")
            report = detect_deadlock(graph)
            logger.log_deadlock(report)
            if report.edge_ids:
                logger.log(f"  Cycle edges: {', '.join(sorted(report.edge_ids))}")
            problem = problem or report.deadlocked

        if safety:
            logger.log("Running Banker's Algorithm...")
            safety_report = evaluate_safety(graph)
            logger.log_safety(safety_report)
            problem = problem or not safety_report.safe

        if tables:
            logger.log(format_tables(
                allocation_matrix(graph),
                request_matrix(graph),
                availability(graph)
            ))

        if save_path:
            save_graph(graph, save_path, description)
            logger.log(f"Graph saved to {save_path}", "success")

        return EXIT_DEADLOCK_OR_UNSAFE if problem else EXIT_OK


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the analyzer."""
    parser = argparse.ArgumentParser(
        description='Resource Allocation Graph Analyzer (deadlock detection and Banker\'s algorithm)'
    )
    parser.add_argument(
        '--graph',
        type=str,
        default=None,
        help='Path to graph JSON file (default: built-in classic deadlock example)'
    )
    parser.add_argument(
        '--detect',
        action='store_true',
        help='Run deadlock detection'
    )
    parser.add_argument(
        '--safety',
        action='store_true',
        help="Run the Banker's safety evaluation"
    )
    parser.add_argument(
        '--tables',
        action='store_true',
        help='Print the Allocation, Request and Available tables'
    )
    parser.add_argument(
        '--max-nodes',
        type=int,
        default=DEFAULT_MAX_NODES,
        help=f'Reject graphs with more nodes (default: {DEFAULT_MAX_NODES}, 0 disables)'
    )
    parser.add_argument(
        '--max-edges',
        type=int,
        default=DEFAULT_MAX_EDGES,
        help=f'Reject graphs with more edges (default: {DEFAULT_MAX_EDGES}, 0 disables)'
    )
    parser.add_argument(
        '--save',
        type=str,
        default=None,
        help='Write the analysed graph to this JSON file'
    )
    parser.add_argument(
        '--verbose',
        action='store_true',
        help='Enable verbose logging'
    )
    parser.add_argument(
        '--log-file',
        type=str,
        default=None,
        help='Also write the log to this file'
    )

    args = parser.parse_args(argv)

    if args.max_nodes < 0 or args.max_edges < 0:
        parser.error('--max-nodes and --max-edges must be >= 0')

    # No analysis selected means run all of them
    run_all = not (args.detect or args.safety or args.tables)

    return run_analysis(
        args.graph,
        detect=args.detect or run_all,
        safety=args.safety or run_all,
        tables=args.tables or run_all,
        max_nodes=args.max_nodes,
        max_edges=args.max_edges,
        save_path=args.save,
        verbose=args.verbose,
        log_file=args.log_file
    )


if __name__ == '__main__':
    sys.exit(main())
