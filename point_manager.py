# point_manager.py
import numpy as np
import constants as C
import logger as log
from quadtree import QuadTree


class PointRef:
    """
    A lightweight handle to one point owned by a PointManager.
    Coordinates are read from the manager's arrays on every access, so the
    handle stays valid when the arrays grow.
    """
    __slots__ = ("manager", "index")

    def __init__(self, manager, index):
        self.manager = manager
        self.index = index

    @property
    def x(self):
        return float(self.manager.positions[self.index, 0])

    @property
    def y(self):
        return float(self.manager.positions[self.index, 1])

    @property
    def payload(self):
        return self.manager.payloads[self.index]

    def __eq__(self, other):
        if not isinstance(other, PointRef):
            return NotImplemented
        return self.manager is other.manager and self.index == other.index

    def __hash__(self):
        return hash((id(self.manager), self.index))

    def __repr__(self):
        return f"PointRef(index={self.index}, x={self.x}, y={self.y})"


class PointManager:
    """
    Owns the point set a quadtree is built from: positions live in a NumPy
    array, payloads (colours, ids, anything) in a parallel list. Trees only
    ever hold PointRef handles into this storage.

    Positions may be moved between epochs, never while a tree built from
    them is still being queried.
    """
    def __init__(self, initial_capacity=C.POINT_MANAGER_INITIAL_CAPACITY):
        if initial_capacity < 1:
            raise ValueError(f"initial_capacity must be at least 1, got {initial_capacity}")
        self.capacity = initial_capacity
        self.count = 0
        self._positions = np.zeros((initial_capacity, 2), dtype=np.float64)
        self.payloads = []
        self.refs = []

    @classmethod
    def from_array(cls, coords, payloads=None):
        """Builds a manager from an (N, 2) array-like of x, y coordinates."""
        coords = np.asarray(coords, dtype=np.float64)
        if coords.ndim != 2 or coords.shape[1] != 2:
            raise ValueError(f"expected an (N, 2) coordinate array, got shape {coords.shape}")
        if payloads is not None and len(payloads) != len(coords):
            raise ValueError(f"got {len(payloads)} payloads for {len(coords)} points")

        manager = cls(max(len(coords), 1))
        manager._positions[:len(coords)] = coords
        manager.count = len(coords)
        manager.payloads = list(payloads) if payloads is not None else [None] * len(coords)
        manager.refs = [PointRef(manager, i) for i in range(len(coords))]
        return manager

    @property
    def positions(self):
        """The live (count, 2) slice of the position array."""
        return self._positions[:self.count]

    def add_point(self, x, y, payload=None):
        """Adds a new point and returns the handle the tree will store."""
        if self.count == self.capacity:
            self._grow_capacity()

        self._positions[self.count] = (x, y)
        self.payloads.append(payload)
        ref = PointRef(self, self.count)
        self.refs.append(ref)
        self.count += 1
        return ref

    def _grow_capacity(self):
        """Grows the position array by the configured factor."""
        new_capacity = self.capacity * C.POINT_MANAGER_GROWTH_FACTOR
        log.log(f"DEBUG: PointManager growing from {self.capacity} to {new_capacity}")
        self._positions = np.resize(self._positions, (new_capacity, 2))
        self.capacity = new_capacity

    def set_position(self, index, x, y):
        if not 0 <= index < self.count:
            raise IndexError(f"point index {index} out of range 0..{self.count - 1}")
        self._positions[index] = (x, y)

    def build_quadtree(self, boundary, **tree_options):
        """Inserts every point, in index order, into a fresh QuadTree."""
        tree = QuadTree(boundary, **tree_options)
        for ref in self.refs:
            tree.insert(ref)
        return tree

    # --- Linear scans, used to cross-check tree queries ---

    def indices_in_rect(self, area):
        """Indices of every point inside `area`, found without the tree."""
        xs = self.positions[:, 0]
        ys = self.positions[:, 1]
        mask = (xs >= area.left) & (xs <= area.right) & (ys >= area.top) & (ys <= area.bottom)
        return np.flatnonzero(mask)

    def indices_in_radius(self, cx, cy, radius):
        """Indices of every point within `radius` of (cx, cy), found without the tree."""
        dx = self.positions[:, 0] - cx
        dy = self.positions[:, 1] - cy
        return np.flatnonzero(dx * dx + dy * dy <= radius * radius)

    def __len__(self):
        return self.count

    def __getitem__(self, index):
        return self.refs[index]

    def __iter__(self):
        return iter(self.refs)
