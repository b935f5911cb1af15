#boundary.py

import constants as C

class MalformedBoundaryError(ValueError):
    """Raised when a boundary's edges are inverted or not numbers."""


class Boundary:
    """
    An axis-aligned rectangle in screen orientation (y grows downwards).
    Used both as the extent of a quadtree node and as a query area.
    All tests treat the rectangle as closed: points on an edge are inside.
    """
    __slots__ = ("left", "top", "right", "bottom")

    def __init__(self, left, top, right, bottom):
        # 'not <=' also rejects NaN edges, which compare false both ways.
        if not left <= right:
            raise MalformedBoundaryError(f"left edge {left} is not <= right edge {right}")
        if not top <= bottom:
            raise MalformedBoundaryError(f"top edge {top} is not <= bottom edge {bottom}")
        self.left = left
        self.top = top
        self.right = right
        self.bottom = bottom

    @classmethod
    def from_size(cls, width, height):
        """A boundary spanning [0, width] x [0, height]."""
        return cls(0.0, 0.0, width, height)

    @classmethod
    def from_center(cls, x, y, half_width, half_height):
        """A boundary centred on (x, y), e.g. the search area around a point."""
        return cls(x - half_width, y - half_height, x + half_width, y + half_height)

    @property
    def width(self):
        return self.right - self.left

    @property
    def height(self):
        return self.bottom - self.top

    def center(self):
        # Halve before adding so edges near the float limit cannot overflow.
        return self.left / 2 + self.right / 2, self.top / 2 + self.bottom / 2

    def contains(self, point):
        """Checks if a point is inside this rectangle."""
        return (self.left <= point.x <= self.right and
                self.top <= point.y <= self.bottom)

    def intersects(self, other):
        """Checks if another rectangle overlaps or touches this one."""
        return (self.left <= other.right and self.right >= other.left and
                self.top <= other.bottom and self.bottom >= other.top)

    def overlaps_circle(self, cx, cy, radius):
        """Checks if the closed disk at (cx, cy) reaches this rectangle."""
        # Nearest point of the rectangle to the circle centre.
        nearest_x = min(max(cx, self.left), self.right)
        nearest_y = min(max(cy, self.top), self.bottom)
        dx = nearest_x - cx
        dy = nearest_y - cy
        return dx * dx + dy * dy <= radius * radius

    def quadrant(self, index):
        """
        Returns one quarter of this boundary. Quadrants are numbered in the
        order children are searched: 0 top-left, 1 top-right, 2 bottom-left,
        3 bottom-right. Neighbouring quadrants share their dividing edge.
        """
        centre_x, centre_y = self.center()
        if index == 0:
            return Boundary(self.left, self.top, centre_x, centre_y)
        if index == 1:
            return Boundary(centre_x, self.top, self.right, centre_y)
        if index == 2:
            return Boundary(self.left, centre_y, centre_x, self.bottom)
        if index == 3:
            return Boundary(centre_x, centre_y, self.right, self.bottom)
        raise IndexError(f"quadrant index {index} out of range 0..{C.QUADTREE_QUADRANT_COUNT - 1}")

    def quadrants(self):
        return [self.quadrant(i) for i in range(C.QUADTREE_QUADRANT_COUNT)]

    def as_tuple(self):
        return (self.left, self.top, self.right, self.bottom)

    def __eq__(self, other):
        if not isinstance(other, Boundary):
            return NotImplemented
        return self.as_tuple() == other.as_tuple()

    def __hash__(self):
        return hash(self.as_tuple())

    def __repr__(self):
        return f"Boundary(left={self.left}, top={self.top}, right={self.right}, bottom={self.bottom})"
