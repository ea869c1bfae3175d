"""bwtri - Delaunay Triangulation (Bowyer-Watson) and its dual graph
"""

__version__ = '0.1.0.dev0'
__license__ = 'MIT License'
__author__ = 'Martijn Meijers'

from bwtri.delaunay import triangulate, InvalidInput, DegenerateGeometry
from bwtri.voronoi import VoronoiTransformer, compute_adjacency

__all__ = ["triangulate", "VoronoiTransformer", "compute_adjacency",
           "InvalidInput", "DegenerateGeometry"]
