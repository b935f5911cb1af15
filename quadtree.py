#quadtree.py

from collections import namedtuple

import constants as C
import logger as log
from boundary import Boundary

# What a renderer needs to draw one node.
NodeGeometry = namedtuple("NodeGeometry", ["boundary", "depth", "divided", "visited"])


class OutOfBoundsError(ValueError):
    """Raised when a point is inserted outside the tree's root boundary."""
    def __init__(self, point, boundary):
        super().__init__(f"point ({point.x}, {point.y}) lies outside {boundary!r}")
        self.point = point
        self.boundary = boundary


class QuadTree:
    """
    A point quadtree. Each node stores up to `capacity` point references in
    insertion order. The insert that finds a node full splits it into four
    quadrants; points already stored stay where they are and only later
    points descend. Nodes at `max_depth` never split and keep every point
    that reaches them, so coincident points cannot recurse forever.

    Points are any objects with `x` and `y` attributes. The tree only keeps
    references: their coordinates must not change while the tree is in use.
    """
    def __init__(self, boundary, capacity=C.QUADTREE_CAPACITY, max_depth=C.QUADTREE_MAX_DEPTH,
                 track_visited=C.QUADTREE_TRACK_VISITED, depth=0):
        if capacity < 1:
            raise ValueError(f"capacity must be at least 1, got {capacity}")
        if max_depth < 0:
            raise ValueError(f"max_depth must be non-negative, got {max_depth}")
        self.boundary = boundary
        self.capacity = capacity
        self.max_depth = max_depth
        self.track_visited = track_visited
        self.depth = depth
        self.points = []
        self.divided = False
        self.visited = False
        # Nodes the last query from this node marked, in the order visited.
        self._last_visited = []

        # Children, created together by subdivide().
        self.northwest = None
        self.northeast = None
        self.southwest = None
        self.southeast = None

    @classmethod
    def from_size(cls, width, height, **options):
        """A root tree covering [0, width] x [0, height]."""
        return cls(Boundary.from_size(width, height), **options)

    @property
    def children(self):
        """The four children in search order, or an empty list for a leaf."""
        if not self.divided:
            return []
        return [self.northwest, self.northeast, self.southwest, self.southeast]

    def subdivide(self):
        """Divides the node into four new sub-quadrants meeting at its centre."""
        nw, ne, sw, se = self.boundary.quadrants()
        self.northwest = self._make_child(nw)
        self.northeast = self._make_child(ne)
        self.southwest = self._make_child(sw)
        self.southeast = self._make_child(se)
        self.divided = True

    def _make_child(self, boundary):
        return QuadTree(boundary, self.capacity, self.max_depth, self.track_visited, self.depth + 1)

    # --- Insertion ---

    def insert(self, point):
        """Inserts a point; raises OutOfBoundsError if it lies outside this tree."""
        if not self.boundary.contains(point):
            raise OutOfBoundsError(point, self.boundary)
        self._insert(point)

    def _insert(self, point):
        if len(self.points) < self.capacity:
            self.points.append(point)
            return

        if self.depth >= self.max_depth:
            if len(self.points) == self.capacity:
                log.log(f"DEBUG: Node {self.boundary!r} at max depth {self.max_depth} is full. Keeping excess points here.")
            self.points.append(point)
            return

        if not self.divided:
            self.subdivide()

        # First matching quadrant wins for points on a dividing line.
        for child in self.children:
            if child.boundary.contains(point):
                child._insert(point)
                return
        raise OutOfBoundsError(point, self.boundary)

    # --- Queries ---

    def query_rect(self, area, found=None):
        """Returns the points inside `area`, a Boundary."""
        if found is None:
            found = []
        visited = self._start_visit()
        self._query_rect(area, found, visited)
        return found

    def _query_rect(self, area, found, visited):
        if not self.boundary.intersects(area):
            return
        if visited is not None:
            self.visited = True
            visited.append(self)

        for p in self.points:
            if area.contains(p):
                found.append(p)

        if self.divided:
            self.northwest._query_rect(area, found, visited)
            self.northeast._query_rect(area, found, visited)
            self.southwest._query_rect(area, found, visited)
            self.southeast._query_rect(area, found, visited)

    def query_radius(self, cx, cy, radius, found=None):
        """Returns the points within `radius` of (cx, cy), edge included."""
        if radius < 0:
            raise ValueError(f"radius must be non-negative, got {radius}")
        if found is None:
            found = []
        visited = self._start_visit()
        self._query_radius(cx, cy, radius, radius * radius, found, visited)
        return found

    def _query_radius(self, cx, cy, radius, radius_sq, found, visited):
        if not self.boundary.overlaps_circle(cx, cy, radius):
            return
        if visited is not None:
            self.visited = True
            visited.append(self)

        for p in self.points:
            dx = p.x - cx
            dy = p.y - cy
            if dx * dx + dy * dy <= radius_sq:
                found.append(p)

        if self.divided:
            self.northwest._query_radius(cx, cy, radius, radius_sq, found, visited)
            self.northeast._query_radius(cx, cy, radius, radius_sq, found, visited)
            self.southwest._query_radius(cx, cy, radius, radius_sq, found, visited)
            self.southeast._query_radius(cx, cy, radius, radius_sq, found, visited)

    def _start_visit(self):
        """
        Unmarks the nodes the previous query marked and returns a fresh list
        for this query to record into, or None when tracking is off.
        """
        if not self.track_visited:
            return None
        self.clear_visited()
        return self._last_visited

    # --- Geometry for renderers ---

    def nodes(self):
        """Yields every node, parents before their children."""
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            # Reversed so children come out in search order.
            stack.extend(reversed(node.children))

    def clear_visited(self):
        for node in self._last_visited:
            node.visited = False
        self._last_visited = []

    def geometry(self):
        """Returns a NodeGeometry for every node in pre-order."""
        return [NodeGeometry(n.boundary, n.depth, n.divided, n.visited) for n in self.nodes()]

    def division_lines(self):
        """
        Returns the dividing cross of every subdivided node as
        ((x1, y1), (x2, y2)) segments: one horizontal, one vertical per node.
        """
        lines = []
        for node in self.nodes():
            if not node.divided:
                continue
            b = node.boundary
            centre_x, centre_y = b.center()
            lines.append(((b.left, centre_y), (b.right, centre_y)))
            lines.append(((centre_x, b.top), (centre_x, b.bottom)))
        return lines

    def visited_boundaries(self):
        """Boundaries of the nodes the last query descended into."""
        return [n.boundary for n in self._last_visited]

    def visited_count(self):
        return len(self._last_visited)

    # --- Introspection ---

    def node_count(self):
        return sum(1 for _ in self.nodes())

    def height(self):
        """Depth of the deepest node below this one, counting this node as 0."""
        return max(n.depth for n in self.nodes()) - self.depth

    def __len__(self):
        return sum(len(n.points) for n in self.nodes())

    def __iter__(self):
        for node in self.nodes():
            yield from node.points

    def __repr__(self):
        state = "internal" if self.divided else "leaf"
        return f"QuadTree({self.boundary!r}, depth={self.depth}, points={len(self.points)}, {state})"
