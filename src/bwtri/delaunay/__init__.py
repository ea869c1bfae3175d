"""bwtri.delaunay - Incremental Delaunay Triangulation of point sets
"""

import logging

from bwtri.delaunay.tds import Point, Edge, Triangle, Triangulation, \
    InvalidInput, DegenerateGeometry, circumcircle
from bwtri.delaunay.insert_bw import triangulate, BowyerWatsonInserter
from bwtri.delaunay.inout import output_vertices, output_triangles, \
    output_centers, output_radii, output_segments
from bwtri.delaunay.check import delaunay_violations, missing_points, \
    is_delaunay


__version__ = '0.1.0.dev0'
__license__ = 'MIT License'
__author__ = 'Martijn Meijers'
__all__ = ("triangulate", "BowyerWatsonInserter",
           "Point", "Edge", "Triangle", "Triangulation", "circumcircle",
           "InvalidInput", "DegenerateGeometry",
           "output_vertices", "output_triangles", "output_centers",
           "output_radii", "output_segments",
           "delaunay_violations", "missing_points", "is_delaunay")


if __name__ == "__main__":
    logging.basicConfig(level=logging.DEBUG)
    from math import cos, sin, pi
    pts = [(cos(0.1 * i) * (1 + 0.01 * i), sin(0.1 * i) * (1 + 0.01 * i))
           for i in range(500)]
    triangulate(pts)
