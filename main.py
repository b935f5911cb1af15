#main.py

import cProfile
import pstats
import numpy as np
import constants as C
from boundary import Boundary
from epoch_manager import EpochManager
from graphing_manager import GraphingManager
from point_manager import PointManager
import logger

class QueryMismatchError(RuntimeError):
    """Raised when a tree query disagrees with a linear scan."""

def initialize_benchmark():
    logger.log(f"Generating {C.BENCHMARK_POINT_COUNT} points with seed {C.RANDOM_SEED}...")
    rng = np.random.default_rng(C.RANDOM_SEED)
    coords = rng.uniform((0.0, 0.0), (C.WORLD_WIDTH, C.WORLD_HEIGHT), size=(C.BENCHMARK_POINT_COUNT, 2))
    points = PointManager.from_array(coords, payloads=list(range(C.BENCHMARK_POINT_COUNT)))
    logger.log(f"World extent: {C.WORLD_WIDTH} x {C.WORLD_HEIGHT}. Capacity: {C.QUADTREE_CAPACITY}, max depth: {C.QUADTREE_MAX_DEPTH}.")
    return points, rng

def verify_query(found, expected_indices, description):
    """Compares a tree query against a linear scan of the same point set."""
    got = sorted(ref.index for ref in found)
    if got != expected_indices.tolist():
        raise QueryMismatchError(f"{description}: tree returned {len(got)} points, linear scan {len(expected_indices)}")

def run_benchmark():
    points, rng = initialize_benchmark()
    epoch_manager = EpochManager(Boundary.from_size(C.WORLD_WIDTH, C.WORLD_HEIGHT), track_visited=True)
    logger.set_epoch_manager(epoch_manager)
    graphing_manager = GraphingManager()

    logger.log("Starting benchmark loop...")
    for _ in range(C.BENCHMARK_EPOCHS):
        tree = epoch_manager.rebuild(points)

        # --- Queries for this epoch ---
        centres = rng.uniform((0.0, 0.0), (C.WORLD_WIDTH, C.WORLD_HEIGHT), size=(C.BENCHMARK_QUERIES_PER_EPOCH, 2))
        for cx, cy in centres:
            cx, cy = float(cx), float(cy)
            found = epoch_manager.timed_query_radius(tree, cx, cy, C.LOOKUP_RADIUS)
            if C.BENCHMARK_VERIFY_QUERIES:
                verify_query(found, points.indices_in_radius(cx, cy, C.LOOKUP_RADIUS), f"radius query at ({cx:.1f}, {cy:.1f})")

            area = Boundary.from_center(cx, cy, C.LOOKUP_HALF_EXTENT, C.LOOKUP_HALF_EXTENT)
            found = epoch_manager.timed_query_rect(tree, area)
            if C.BENCHMARK_VERIFY_QUERIES:
                verify_query(found, points.indices_in_rect(area), f"rect query {area!r}")

        graphing_manager.record_epoch(epoch_manager)
        if epoch_manager.epoch % C.UI_LOG_INTERVAL_EPOCHS == 0:
            logger.log(epoch_manager.get_display_string())

    logger.log("Benchmark loop ended.")
    summary = graphing_manager.summary()
    logger.log(f"  Mean build time: {summary['build_ms']:.3f} ms")
    logger.log(f"  Mean query time: {summary['query_ms']:.3f} ms per epoch")
    logger.log(f"  Mean nodes: {summary['node_count']:.1f}, mean height: {summary['tree_height']:.1f}")
    graphing_manager.generate_and_save_graphs(C.GRAPH_OUTPUT_DIR)

def main():
    logger.log("--- Benchmark Start ---")
    run_benchmark()
    logger.log("--- Benchmark Exit ---")

if __name__ == '__main__':
    profiler = cProfile.Profile()
    try:
        profiler.runcall(main)
    finally:
        print("\n\n--- PROFILER REPORT ---")
        stats = pstats.Stats(profiler)
        # Sort the stats by the cumulative time spent in each function
        stats.sort_stats(pstats.SortKey.CUMULATIVE)
        stats.print_stats(C.PROFILER_PRINT_LINE_COUNT)
