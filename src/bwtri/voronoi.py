'''
Dual graph of a Delaunay triangulation

Triangles that share an edge are adjacent; connecting the circumcenters of
adjacent triangles gives the (unbounded parts excluded) Voronoi edges.
No Voronoi cells are built.
'''
import logging
import time

from bwtri.delaunay.tds import Triangulation


def shares_edge(t0, t1):
    """Do triangles t0 and t1 have (geometrically) an edge in common?"""
    for e0 in t0.edges:
        for e1 in t1.edges:
            if e0.matches(e1):
                return True
    return False


def compute_adjacency(triangles):
    """For every triangle, list the positions of the other triangles that
    share an edge with it

    All pairs are tested (quadratic in the number of triangles).
    """
    adjacency = []
    for i, t0 in enumerate(triangles):
        touching = [j for j, t1 in enumerate(triangles)
                    if i != j and shares_edge(t0, t1)]
        adjacency.append(touching)
    return adjacency


class VoronoiTransformer(object):
    """Class to transform a Delaunay triangulation into its dual graph

    After transform() the following is available:

    - adjacency: per triangle the positions of the touching triangles
    - centers: triangle position -> circumcenter (not for degenerate ones)
    - segments: (start, end) pairs of triangle positions, every pair of
      adjacent triangles once (start < end)
    """

    def __init__(self, triangulation):
        if isinstance(triangulation, Triangulation):
            triangulation = triangulation.triangles
        self.triangles = list(triangulation)
        self.adjacency = None
        self.centers = None
        self.segments = None

    def transform(self):
        """Calculate adjacency and circumcenters of all triangles
        and generate a line segment from one triangle to its neighbours
        (this happens only once for every pair).
        """
        start = time.perf_counter()
        self._transform_adjacency()
        self._transform_centers()
        self._transform_segments()
        end = time.perf_counter()
        logging.debug("Dual graph took: " + str(end - start) + " secs")
        logging.debug("{} segments between {} triangles".format(
            len(self.segments), len(self.triangles)))
        return self

    def _transform_adjacency(self):
        self.adjacency = compute_adjacency(self.triangles)

    def _transform_centers(self):
        self.centers = {}
        for i, t in enumerate(self.triangles):
            if t.center is not None:
                self.centers[i] = t.center

    def _transform_segments(self):
        segments = []
        for start, touching in enumerate(self.adjacency):
            for end in touching:
                if start < end and \
                        start in self.centers and end in self.centers:
                    segments.append((start, end))
        self.segments = segments

    def touching_triangles(self, i):
        """Triangles sharing an edge with the triangle at position i"""
        return [self.triangles[j] for j in self.adjacency[i]]

    @property
    def touching(self):
        """List of (triangle, [touching triangles]) pairs"""
        return [(t, self.touching_triangles(i))
                for i, t in enumerate(self.triangles)]


def transform(dt):
    """Returns transformed VoronoiTransformer for triangulation dt"""
    trafo = VoronoiTransformer(dt)
    trafo.transform()
    return trafo
