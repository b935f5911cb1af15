#epoch_manager.py

import time
import constants as C
from quadtree import QuadTree

class EpochManager:
    """
    Drives the build-then-query cycle. Every epoch throws the previous tree
    away and inserts the current point set into a new one; queries are only
    possible on a tree returned by rebuild().
    """
    def __init__(self, boundary, capacity=C.QUADTREE_CAPACITY, max_depth=C.QUADTREE_MAX_DEPTH,
                 track_visited=C.QUADTREE_TRACK_VISITED):
        self.boundary = boundary
        self.capacity = capacity
        self.max_depth = max_depth
        self.track_visited = track_visited
        self.epoch = 0
        self.point_count = 0
        self.node_count = 0
        self.tree_height = 0
        self.last_build_seconds = 0.0
        self.last_query_seconds = 0.0
        self.last_hit_count = 0
        self.last_visited_count = 0

    def rebuild(self, points):
        """Starts a new epoch and returns a tree holding `points`."""
        self.epoch += 1
        started = time.perf_counter()
        tree = QuadTree(self.boundary, self.capacity, self.max_depth, self.track_visited)
        for p in points:
            tree.insert(p)
        self.last_build_seconds = time.perf_counter() - started

        self.point_count = len(tree)
        self.node_count = tree.node_count()
        self.tree_height = tree.height()
        # Query stats belong to the previous tree.
        self.last_query_seconds = 0.0
        self.last_hit_count = 0
        self.last_visited_count = 0
        return tree

    def timed_query_rect(self, tree, area):
        started = time.perf_counter()
        found = tree.query_rect(area)
        self._record_query(tree, found, time.perf_counter() - started)
        return found

    def timed_query_radius(self, tree, cx, cy, radius):
        started = time.perf_counter()
        found = tree.query_radius(cx, cy, radius)
        self._record_query(tree, found, time.perf_counter() - started)
        return found

    def _record_query(self, tree, found, elapsed):
        """Accumulates per-epoch query totals."""
        self.last_query_seconds += elapsed
        self.last_hit_count += len(found)
        if self.track_visited:
            self.last_visited_count += tree.visited_count()

    def get_display_string(self):
        build_ms = self.last_build_seconds * C.MILLISECONDS_PER_SECOND
        query_ms = self.last_query_seconds * C.MILLISECONDS_PER_SECOND

        epoch_str = f"Epoch: {self.epoch}"
        tree_str = f"Points: {self.point_count} | Nodes: {self.node_count} | Height: {self.tree_height}"
        timing_str = f"Build: {build_ms:.2f} ms | Query: {query_ms:.2f} ms ({self.last_hit_count} hits)"
        return f"{epoch_str} | {tree_str} | {timing_str}"
