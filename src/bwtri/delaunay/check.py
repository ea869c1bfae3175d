'''
Structural checks on a finished triangulation (vectorized with numpy)
'''
import numpy as np

from bwtri.delaunay.preds import orient2d

# relative tolerance (against the permanent) for the in-circle determinant
EPS_INCIRCLE = 1e-9


def delaunay_violations(points, triangles, eps=EPS_INCIRCLE):
    """Find input points lying strictly inside a circumcircle

    Returns list of (triangle position, point index) pairs, empty for
    a valid Delaunay triangulation. The vertices of a triangle itself are
    skipped, as are triangles with collinear vertices. The in-circle
    determinant is evaluated from the vertices, relative to every point;
    a determinant within *eps* times its permanent counts as on the circle.
    """
    pts = np.asarray(points, dtype=np.float64).reshape(-1, 2)
    violations = []
    for pos, t in enumerate(triangles):
        orientation = orient2d(t.p1, t.p2, t.p3)
        if orientation == 0:
            continue
        det, permanent = _incircle(t.p1, t.p2, t.p3, pts)
        if orientation < 0:
            det = -det
        inside = det > eps * permanent
        own = np.array([i for i in t.indices if i >= 0], dtype=np.intp)
        inside[own] = False
        for idx in np.flatnonzero(inside).tolist():
            violations.append((pos, idx))
    return violations


def _incircle(pa, pb, pc, pts):
    """In-circle determinant of triangle pa, pb, pc for all points at once,
    returns the determinants and their permanents
    """
    adx, ady = pa[0] - pts[:, 0], pa[1] - pts[:, 1]
    bdx, bdy = pb[0] - pts[:, 0], pb[1] - pts[:, 1]
    cdx, cdy = pc[0] - pts[:, 0], pc[1] - pts[:, 1]
    alift = adx * adx + ady * ady
    blift = bdx * bdx + bdy * bdy
    clift = cdx * cdx + cdy * cdy
    bdxcdy, cdxbdy = bdx * cdy, cdx * bdy
    cdxady, adxcdy = cdx * ady, adx * cdy
    adxbdy, bdxady = adx * bdy, bdx * ady
    det = alift * (bdxcdy - cdxbdy) + \
        blift * (cdxady - adxcdy) + \
        clift * (adxbdy - bdxady)
    permanent = alift * (np.abs(bdxcdy) + np.abs(cdxbdy)) + \
        blift * (np.abs(cdxady) + np.abs(adxcdy)) + \
        clift * (np.abs(adxbdy) + np.abs(bdxady))
    return det, permanent


def missing_points(points, triangles):
    """Indices of points that are not a vertex of any triangle"""
    count = len(points)
    used = np.zeros(count, dtype=bool)
    if triangles:
        indices = np.array([t.indices for t in triangles], dtype=np.int64)
        indices = indices[(indices >= 0) & (indices < count)]
        used[indices] = True
    return np.flatnonzero(~used).tolist()


def is_delaunay(points, triangles, eps=EPS_INCIRCLE):
    """True if no point lies inside the circumcircle of a triangle"""
    return not delaunay_violations(points, triangles, eps)
