'''
Incremental Delaunay triangulation by cavity re-triangulation
(Bowyer-Watson algorithm)
'''

import logging
import time

import numpy as np

from bwtri.delaunay.tds import box, Point, Triangle, Triangulation, \
    InvalidInput

# multiplier for the size of the super triangle, relative to the
# largest side of the bounding box of the input (times 50, 40 or 60)
SUPER_TRIANGLE_SCALE = 1.0

# indices for the vertices of the super triangle
SUPER_INDICES = (-1, -2, -3)

# cap on the aspect ratio used to enlarge the super triangle for thin input
MAX_ELONGATION = 1e6


def as_points(points):
    """Validate input and convert it to a list of Point objects

    Raises InvalidInput when less than 3 points are given, or when
    the input is not a sequence of finite 2D coordinates.
    """
    if points is None:
        raise InvalidInput("Must pass a valid list of points, not None")
    try:
        arr = np.asarray(points, dtype=float)
    except (TypeError, ValueError) as err:
        raise InvalidInput("Points are not 2D coordinates ({})".format(err))
    count = len(arr) if arr.ndim > 0 else 0
    if count < 3:
        raise InvalidInput(
            "Cannot triangulate only {} points. "
            "Requires 3 or more points to triangulate.".format(count))
    if arr.ndim != 2 or arr.shape[1] != 2:
        raise InvalidInput(
            "Points should be 2D coordinates, got shape {}".format(arr.shape))
    if not np.isfinite(arr).all():
        raise InvalidInput("Points should have finite coordinates")
    return [Point(x, y) for x, y in arr.tolist()]


def elongation(points):
    """Ratio between the largest and smallest spread of the points along
    their principal axes, capped at MAX_ELONGATION

    1.0 for round point sets (and for coinciding points).
    """
    arr = np.asarray(points, dtype=float)
    low, high = np.linalg.eigvalsh(np.cov(arr, rowvar=False))
    if high <= 0:
        return 1.
    if low <= high / (MAX_ELONGATION * MAX_ELONGATION):
        return MAX_ELONGATION
    return max(1., float(np.sqrt(high / low)))


class BowyerWatsonInserter(object):
    """Class to insert points into a Delaunay triangulation.

    Points are inserted one at a time, in the order given. All triangles
    whose circumcircle contains the new point are removed and the
    resulting cavity is filled with triangles fanning out from the new
    point. Everything starts from one large super triangle, which is
    stripped off at the end.

    The instance only holds configuration, the triangles of a run are
    local to insert().
    """

    __slots__ = ('scale',)

    def __init__(self, scale=SUPER_TRIANGLE_SCALE):
        if scale < 1.:
            raise ValueError(
                "Scale of super triangle should be >= 1, got {}".format(scale))
        self.scale = scale

    def super_triangle(self, points):
        """Make a triangle that strictly contains all points

        Its vertices lie far outside the bounding box, seen from the
        centroid of the points, and have index -1, -2 and -3.

        Thin point sets have triangles with very large circumcircles along
        their hull, so the triangle grows with the square of the
        elongation of the points. Beyond MAX_ELONGATION (nearly collinear
        input) hull points may still end up connected to the super
        triangle only, and are then missing from the result.
        """
        arr = np.asarray(points, dtype=float)
        (xmin, ymin), (xmax, ymax) = box(points)
        cx, cy = np.mean(arr, axis=0).tolist()
        size = max(xmax - xmin, ymax - ymin)
        if size == 0:
            size = 1.
        size *= self.scale * elongation(arr) ** 2
        i1, i2, i3 = SUPER_INDICES
        return Triangle(Point(cx - 50.0 * size, cy - 40.0 * size),
                        Point(cx + 50.0 * size, cy - 40.0 * size),
                        Point(cx, cy + 60.0 * size),
                        i1, i2, i3)

    def insert(self, points, super_triangle=None):
        """Triangulate the points, returns list with Triangles

        The index of a point in *points* is used as index for the
        triangle vertices.
        """
        points = as_points(points)
        if super_triangle is None:
            super_triangle = self.super_triangle(points)
        good = []
        for index, pt in enumerate(points):
            # the super triangle is bad for the first point, by definition
            seed = [super_triangle] if index == 0 else []
            good, bad = self.validate(good, pt, seed)
            boundary = self.cavity(bad)
            for edge in boundary:
                good.append(
                    Triangle(edge.p1, edge.p2, pt, edge.i1, edge.i2, index))
            logging.debug(" - inserting {0} #{1}: {2} bad, {3} new".format(
                pt, index, len(bad), len(boundary)))
        return self.finish(good, super_triangle)

    @staticmethod
    def validate(triangles, point, seed=()):
        """Split triangles in two lists: those still valid and those that
        have point strictly inside their circumcircle (bad ones)

        Returns (good, bad), where bad starts with the *seed* triangles.
        """
        good = []
        bad = list(seed)
        for triangle in triangles:
            if triangle.point_in_radius(point):
                bad.append(triangle)
            else:
                good.append(triangle)
        return good, bad

    @staticmethod
    def cavity(bad):
        """Boundary of the cavity formed by the bad triangles

        Edges shared by two bad triangles are inside the cavity and get
        dropped, edges that occur once are kept (in order of appearance).
        """
        edges = {}
        excluded = set()
        for triangle in bad:
            for edge in triangle.edges:
                key = edge.key
                if key in edges:
                    del edges[key]
                    excluded.add(key)
                elif key not in excluded:
                    edges[key] = edge
        return list(edges.values())

    @staticmethod
    def finish(triangles, super_triangle):
        """Remove triangles connected to the super triangle"""
        return [t for t in triangles
                if not t.contains_point_in_super(super_triangle)]


def triangulate(pts, scale=SUPER_TRIANGLE_SCALE):
    """Triangulate a set of points

    Returns a Triangulation, of which the triangles refer to the position
    of the points in *pts* via their indices.
    """
    start = time.perf_counter()
    points = as_points(pts)
    logging.debug("triangulating {} points".format(len(points)))
    duplicates = len(points) - len(set(points))
    if duplicates:
        logging.warning(
            "{} duplicate point(s) found in input, "
            "triangulation may be degraded".format(duplicates))

    incremental = BowyerWatsonInserter(scale)
    super_triangle = incremental.super_triangle(points)
    logging.debug("super triangle {}".format(super_triangle))
    triangles = incremental.insert(points, super_triangle)
    end = time.perf_counter()

    logging.debug("Triangulating took: " + str(end - start) + " secs")
    logging.debug("{} triangles".format(len(triangles)))
    logging.debug("{} vertices".format(len(points)))
    return Triangulation(points, triangles, super_triangle)
