'''
Triangulation data structure: points, edges and triangles as value types
'''
from collections import namedtuple
from math import hypot

from bwtri.delaunay.preds import orient2d, incircle, circumcircle_denominator

# relative tolerance below which the circumcircle denominator counts as zero
EPS_COLLINEAR = 1e-12


class InvalidInput(ValueError):
    """Point input that cannot be triangulated"""


class DegenerateGeometry(ValueError):
    """Collinear or coinciding vertices, no circumcircle exists"""


# ------------------------------------------------------------------------------
# Helpers
#

def box(points):
    """Obtain a tight fitting axis-aligned box around point set"""
    xmin = min(points, key=lambda x: x[0])[0]
    ymin = min(points, key=lambda x: x[1])[1]
    xmax = max(points, key=lambda x: x[0])[0]
    ymax = max(points, key=lambda x: x[1])[1]
    return (xmin, ymin), (xmax, ymax)


def _circumcircle(a, b, c):
    """Center and radius of circle through a, b and c,
    None when the three points are (nearly) collinear
    """
    d = circumcircle_denominator(a, b, c)
    # relative to a, so that far away input keeps its precision
    bx, by = b[0] - a[0], b[1] - a[1]
    cx, cy = c[0] - a[0], c[1] - a[1]
    bl = bx * bx + by * by
    cl = cx * cx + cy * cy
    longest = max(bl, cl, pow(cx - bx, 2) + pow(cy - by, 2))
    if abs(d) <= EPS_COLLINEAR * longest:
        return None
    ux = (cy * bl - by * cl) / d
    uy = (bx * cl - cx * bl) / d
    return Point(a[0] + ux, a[1] + uy), hypot(ux, uy)


def circumcircle(a, b, c):
    """Returns (center, radius) of the circle through the points a, b and c

    Raises DegenerateGeometry if the points are collinear or coincide.
    """
    result = _circumcircle(a, b, c)
    if result is None:
        raise DegenerateGeometry(
            "No circumcircle for collinear points {} {} {}".format(a, b, c))
    return result


class Point(namedtuple('Point', 'x y')):
    """A point in the plane.

    Immutable, compares (and hashes) on its exact coordinate values.
    """
    __slots__ = ()

    def __new__(cls, x, y):
        return super(Point, cls).__new__(cls, float(x), float(y))

    def __str__(self):
        return "{0} {1}".format(self.x, self.y)

    def distance(self, other):
        """Cartesian distance to other point """
        return hypot(other[0] - self.x, other[1] - self.y)


class _Frozen(object):
    __slots__ = ()

    def _init(self, **attrs):
        for name, value in attrs.items():
            object.__setattr__(self, name, value)

    def __setattr__(self, name, value):
        raise AttributeError(
            "{} is immutable, can not set '{}'".format(
                type(self).__name__, name))

    def __delattr__(self, name):
        raise AttributeError(
            "{} is immutable, can not delete '{}'".format(
                type(self).__name__, name))


class Edge(_Frozen):
    """An edge between two points, together with the index of both points
    in the input.

    Edges are unordered: matches() is true for (a, b) and (b, a).
    """
    __slots__ = ('p1', 'p2', 'i1', 'i2')

    def __init__(self, p1, p2, i1, i2):
        self._init(p1=Point(*p1), p2=Point(*p2), i1=i1, i2=i2)

    def __repr__(self):
        return "Edge({0!r}, {1!r}, {2}, {3})".format(
            self.p1, self.p2, self.i1, self.i2)

    @property
    def key(self):
        """Hashable key, equal for edges that match()"""
        return frozenset((self.p1, self.p2))

    def matches(self, other):
        """Geometric equality, in either direction.

        The indices are *not* compared, so two edges between coinciding
        points with a different index do match.
        """
        if self.p1 == other.p1 and self.p2 == other.p2:
            return True
        return self.p2 == other.p1 and self.p1 == other.p2

    def same_indices(self, other):
        """Equality on the input indices, in either direction"""
        return (self.i1, self.i2) in ((other.i1, other.i2),
                                      (other.i2, other.i1))


class Triangle(_Frozen):
    """Triangle with its circumscribed circle.

    The circumcenter and radius are computed when the triangle is made.
    For (nearly) collinear vertices the triangle is degenerate: center and
    radius are None and no point is ever considered inside its circle.
    """

    __slots__ = ('p1', 'p2', 'p3', 'i1', 'i2', 'i3',
                 'center', 'radius', 'edges')

    def __init__(self, p1, p2, p3, i1, i2, i3):
        p1, p2, p3 = Point(*p1), Point(*p2), Point(*p3)
        self._init(p1=p1, p2=p2, p3=p3, i1=i1, i2=i2, i3=i3,
                   edges=(Edge(p1, p2, i1, i2),
                          Edge(p2, p3, i2, i3),
                          Edge(p3, p1, i3, i1)))
        circle = _circumcircle(p1, p2, p3)
        if circle is None:
            self._init(center=None, radius=None)
        else:
            self._init(center=circle[0], radius=circle[1])

    def __str__(self):
        """Conversion to WKT string"""
        vertices = [str(v) for v in self.vertices]
        vertices.append(vertices[0])
        return "POLYGON(({0}))".format(", ".join(vertices))

    def __repr__(self):
        return "Triangle({0!r}, {1!r}, {2!r}, {3}, {4}, {5})".format(
            self.p1, self.p2, self.p3, self.i1, self.i2, self.i3)

    @property
    def vertices(self):
        return (self.p1, self.p2, self.p3)

    @property
    def indices(self):
        return (self.i1, self.i2, self.i3)

    @property
    def is_degenerate(self):
        return self.center is None

    @property
    def is_finite(self):
        """True if none of the vertices belongs to a super triangle"""
        return min(self.indices) >= 0

    def point_in_radius(self, p):
        """Is point p strictly inside the circumscribed circle?

        Points exactly on the circle are outside, as is every point for
        a triangle with collinear vertices. Decided with exact predicates,
        not with the (rounded) center and radius.
        """
        orientation = orient2d(self.p1, self.p2, self.p3)
        if orientation == 0:
            return False
        det = incircle(self.p1, self.p2, self.p3, p)
        if orientation > 0:
            return det > 0
        return det < 0

    def contains_point(self, p):
        """Is p (exactly) one of the vertices?"""
        return p == self.p1 or p == self.p2 or p == self.p3

    def contains_point_in_super(self, super_triangle):
        """Does this triangle share a vertex with super_triangle?"""
        return any(self.contains_point(v) for v in super_triangle.vertices)

    def is_rotation_of(self, other):
        """Same vertex sequence, allowing cyclic rotation only.

        (a, b, c) equals (b, c, a) and (c, a, b), but not the reflected
        (a, c, b).
        """
        mine = self.vertices
        theirs = other.vertices
        return any(mine == theirs[k:] + theirs[:k] for k in range(3))

    def same_vertices(self, other):
        """Same set of vertices, irrespective of orientation"""
        return set(self.vertices) == set(other.vertices)

    def same_indices(self, other):
        """Same index sequence, allowing cyclic rotation only"""
        mine = self.indices
        theirs = other.indices
        return any(mine == theirs[k:] + theirs[:k] for k in range(3))


class Triangulation(object):
    """Result of a triangulation run"""

    def __init__(self, points=None, triangles=None, super_triangle=None):
        self.points = points if points is not None else []
        self.triangles = triangles if triangles is not None else []
        self.super_triangle = super_triangle

    def __len__(self):
        return len(self.triangles)

    def __iter__(self):
        return iter(self.triangles)
