'''
Output of a triangulation as numpy arrays, e.g. to fill vertex and index
buffers of a mesh or to draw the dual graph as line segments
'''
import numpy as np


def output_vertices(points):
    """Vertex buffer: array with shape (n, 2)"""
    return np.array([(p[0], p[1]) for p in points],
                    dtype=np.float64).reshape(-1, 2)


def output_triangles(triangles, flat=False):
    """Index buffer: array with shape (m, 3), one row [i1, i2, i3] per
    triangle (or flattened to shape (3m,) if *flat* is set)
    """
    indices = np.array([t.indices for t in triangles],
                       dtype=np.int64).reshape(-1, 3)
    if flat:
        return indices.ravel()
    return indices


def output_centers(triangles):
    """Circumcenters, array with shape (m, 2)

    Rows of degenerate triangles are NaN.
    """
    centers = np.full((len(triangles), 2), np.nan, dtype=np.float64)
    for i, t in enumerate(triangles):
        if t.center is not None:
            centers[i] = t.center
    return centers


def output_radii(triangles):
    """Circumradii, array with shape (m,), NaN for degenerate triangles"""
    return np.array([np.nan if t.radius is None else t.radius
                     for t in triangles], dtype=np.float64)


def output_segments(transformer):
    """Line segments between circumcenters of adjacent triangles

    Takes a VoronoiTransformer on which transform() was called, returns an
    array with shape (k, 2, 2): k segments, each [[x0, y0], [x1, y1]].
    """
    centers = transformer.centers
    segments = [(centers[start], centers[end])
                for (start, end) in transformer.segments]
    return np.array(segments, dtype=np.float64).reshape(-1, 2, 2)
