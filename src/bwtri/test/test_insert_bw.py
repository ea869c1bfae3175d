import logging
from fractions import Fraction
from math import sqrt, pi, cos, sin
from random import Random

import numpy as np
import pytest

from bwtri.delaunay import triangulate, BowyerWatsonInserter, Triangle, \
    Point, InvalidInput, delaunay_violations, missing_points, is_delaunay
from bwtri.delaunay.insert_bw import as_points, elongation, \
    SUPER_INDICES, MAX_ELONGATION
from bwtri.delaunay.preds import orient2d


def random_circle_vertices(n=10, cx=0, cy=0, seed=1):
    """Returns a list with n random vertices in a circle"""
    rnd = Random(seed)
    vertices = []
    for _ in range(n):
        r = sqrt(rnd.random())
        t = 2 * pi * rnd.random()
        vertices.append((r * cos(t) + cx, r * sin(t) + cy))
    return vertices


def index_sets(triangles):
    return set(frozenset(t.indices) for t in triangles)


def hull_edge_count(triangles):
    """Number of edges used by exactly one triangle"""
    count = {}
    for t in triangles:
        for e in t.edges:
            count[e.key] = count.get(e.key, 0) + 1
    return sum(1 for c in count.values() if c == 1)


# -- input validation

def test_none_is_invalid():
    with pytest.raises(InvalidInput):
        triangulate(None)


@pytest.mark.parametrize("pts", [
    [],
    [(0, 0)],
    [(0, 0), (1, 1)],
])
def test_too_few_points(pts):
    with pytest.raises(InvalidInput) as excinfo:
        triangulate(pts)
    assert "Requires 3 or more points" in str(excinfo.value)


def test_invalid_input_is_value_error():
    with pytest.raises(ValueError):
        triangulate([(0, 0), (1, 1)])


@pytest.mark.parametrize("pts", [
    [(0, 0, 0), (1, 0, 0), (0, 1, 0)],
    [(0, 0), (1, 0), (0, float('nan'))],
    [(0, 0), (1, 0), (0, float('inf'))],
    [(0, 0), (1, 0), (0,)],
    ["a", "b", "c"],
])
def test_bad_coordinates(pts):
    with pytest.raises(InvalidInput):
        triangulate(pts)


def test_as_points_accepts_numpy():
    arr = np.array([[0, 0], [1, 0], [0, 1]])
    pts = as_points(arr)
    assert pts == [Point(0, 0), Point(1, 0), Point(0, 1)]
    assert all(isinstance(p, Point) for p in pts)


def test_inserter_validates_input():
    with pytest.raises(InvalidInput):
        BowyerWatsonInserter().insert([(0, 0), (1, 0)])


def test_scale_should_enlarge():
    with pytest.raises(ValueError):
        BowyerWatsonInserter(scale=0.5)


# -- super triangle

def test_super_triangle_contains_all_points():
    pts = random_circle_vertices(100, 3, -7)
    large = BowyerWatsonInserter().super_triangle(pts)
    assert large.indices == SUPER_INDICES
    a, b, c = large.vertices
    sign = orient2d(a, b, c)
    for p in pts:
        assert orient2d(a, b, p) * sign > 0
        assert orient2d(b, c, p) * sign > 0
        assert orient2d(c, a, p) * sign > 0


def test_super_triangle_for_coinciding_points():
    large = BowyerWatsonInserter().super_triangle([(2, 2), (2, 2), (2, 2)])
    assert not large.is_degenerate
    assert large.point_in_radius((2, 2))


def test_super_triangle_scale():
    pts = [(0, 0), (1, 0), (0, 1)]
    small = BowyerWatsonInserter().super_triangle(pts)
    large = BowyerWatsonInserter(scale=10).super_triangle(pts)
    assert large.radius > 9 * small.radius


# -- building blocks

def test_validate_splits_good_and_bad():
    t0 = Triangle((0, 0), (4, 0), (0, 4), 0, 1, 2)
    t1 = Triangle((10, 10), (11, 10), (10, 11), 3, 4, 5)
    good, bad = BowyerWatsonInserter.validate([t0, t1], Point(1, 1))
    assert good == [t1]
    assert bad == [t0]


def test_validate_seed_is_bad():
    seed = Triangle((-10, -10), (10, -10), (0, 10), -1, -2, -3)
    good, bad = BowyerWatsonInserter.validate([], Point(0, 0), [seed])
    assert good == []
    assert bad == [seed]


def test_cavity_drops_shared_edge():
    a, b, c, d = (0, 0), (2, 0), (2, 2), (0, 2)
    t0 = Triangle(a, b, c, 0, 1, 2)
    t1 = Triangle(a, c, d, 0, 2, 3)
    boundary = BowyerWatsonInserter.cavity([t0, t1])
    assert len(boundary) == 4
    # order of appearance is kept
    assert [(e.i1, e.i2) for e in boundary] == [(0, 1), (1, 2), (2, 3), (3, 0)]


def test_cavity_single_triangle():
    t0 = Triangle((0, 0), (2, 0), (2, 2), 0, 1, 2)
    boundary = BowyerWatsonInserter.cavity([t0])
    assert [(e.i1, e.i2) for e in boundary] == [(0, 1), (1, 2), (2, 0)]


def test_cavity_of_nothing():
    assert BowyerWatsonInserter.cavity([]) == []


def test_finish_strips_super_triangle():
    large = Triangle((-100, -100), (100, -100), (0, 100), -1, -2, -3)
    inner = Triangle((0, 0), (1, 0), (0, 1), 0, 1, 2)
    outer = Triangle((0, 0), (100, -100), (1, 0), 0, -2, 1)
    assert BowyerWatsonInserter.finish([inner, outer, large], large) == [inner]


# -- properties

def test_no_super_indices_in_output():
    dt = triangulate(random_circle_vertices(60))
    for t in dt.triangles:
        assert min(t.indices) >= 0
        assert t.is_finite
        assert not t.contains_point_in_super(dt.super_triangle)


def test_delaunay_property():
    pts = random_circle_vertices(80, seed=7)
    dt = triangulate(pts)
    assert delaunay_violations(pts, dt.triangles) == []
    for t in dt.triangles:
        for idx, p in enumerate(dt.points):
            if idx not in t.indices:
                assert not t.point_in_radius(p)


def test_completeness():
    pts = random_circle_vertices(80, seed=11)
    dt = triangulate(pts)
    assert missing_points(pts, dt.triangles) == []
    used = set()
    for t in dt.triangles:
        used.update(t.indices)
    assert used == set(range(len(pts)))


def test_euler_count():
    pts = random_circle_vertices(50, seed=3)
    dt = triangulate(pts, scale=10)
    hull = hull_edge_count(dt.triangles)
    assert len(dt.triangles) == 2 * len(pts) - 2 - hull


def test_vertices_match_indices():
    pts = random_circle_vertices(40, seed=5)
    dt = triangulate(pts)
    for t in dt.triangles:
        for vertex, idx in zip(t.vertices, t.indices):
            assert vertex == Point(*pts[idx])
            assert dt.points[idx] == vertex


def test_determinism():
    pts = random_circle_vertices(50, seed=13)
    first = triangulate(pts).triangles
    second = triangulate(pts).triangles
    assert len(first) == len(second)
    for t0 in first:
        assert sum(1 for t1 in second if t0.is_rotation_of(t1)) == 1


def test_inserter_is_reusable():
    incremental = BowyerWatsonInserter()
    pts = random_circle_vertices(30, seed=17)
    first = incremental.insert(pts)
    incremental.insert([(0, 0), (5, 0), (0, 5)])
    second = incremental.insert(pts)
    assert [t.indices for t in first] == [t.indices for t in second]


def test_translated_input():
    pts = random_circle_vertices(40, 100., -250., seed=19)
    dt = triangulate(pts)
    assert is_delaunay(pts, dt.triangles)
    assert missing_points(pts, dt.triangles) == []


def test_collinear_subset():
    pts = [(0, 0), (1, 0), (2, 0), (1, 1)]
    dt = triangulate(pts)
    assert index_sets(dt.triangles) == {
        frozenset((0, 1, 3)), frozenset((1, 2, 3))}
    assert not any(t.is_degenerate for t in dt.triangles)


def test_duplicates_are_logged(caplog):
    pts = [(0, 0), (1, 0), (0, 1), (0, 0)]
    with caplog.at_level(logging.WARNING):
        dt = triangulate(pts)
    assert "1 duplicate point(s)" in caplog.text
    for t in dt.triangles:
        assert min(t.indices) >= 0


def test_progress_is_logged(caplog):
    with caplog.at_level(logging.DEBUG):
        triangulate([(0, 0), (4, 0), (0, 4)])
    assert "triangulating 3 points" in caplog.text
    assert "Triangulating took" in caplog.text


# -- numerically difficult input

def exact_violations(points, triangles):
    """In-circle test in rational arithmetic, independent of the library"""
    found = []
    for pos, t in enumerate(triangles):
        a, b, c = [(Fraction(p[0]), Fraction(p[1])) for p in t.vertices]
        orientation = (a[0] - c[0]) * (b[1] - c[1]) - \
            (a[1] - c[1]) * (b[0] - c[0])
        for idx, p in enumerate(points):
            if idx in t.indices:
                continue
            px, py = Fraction(p[0]), Fraction(p[1])
            rows = []
            for x, y in (a, b, c):
                x, y = x - px, y - py
                rows.append((x, y, x * x + y * y))
            (ax, ay, al), (bx, by, bl), (cx, cy, cl) = rows
            det = al * (bx * cy - cx * by) - bl * (ax * cy - cx * ay) + \
                cl * (ax * by - bx * ay)
            if det * orientation > 0:
                found.append((pos, idx))
    return found


def dyadic_cloud(n, seed):
    """Random points in the unit square, on a 2**-20 grid (so that they
    can be translated far away without rounding)"""
    rnd = Random(seed)
    scale = 2 ** 20
    return [(round(rnd.random() * scale) / scale,
             round(rnd.random() * scale) / scale) for _ in range(n)]


def test_far_from_origin():
    near = dyadic_cloud(50, seed=3)
    far = [(x + 1e6, y + 1e6) for x, y in near]
    dt_near = triangulate(near)
    dt_far = triangulate(far)
    assert len(dt_far.triangles) == len(dt_near.triangles)
    assert index_sets(dt_far.triangles) == index_sets(dt_near.triangles)
    assert exact_violations(far, dt_far.triangles) == []
    assert is_delaunay(far, dt_far.triangles)
    assert missing_points(far, dt_far.triangles) == []


def test_random_cloud_exact():
    pts = random_circle_vertices(40, seed=31)
    dt = triangulate(pts)
    assert exact_violations(pts, dt.triangles) == []


def test_shallow_arc():
    pts = [(x, 1e-4 * x * x) for x in range(-10, 11)]
    dt = triangulate(pts)
    assert missing_points(pts, dt.triangles) == []
    # all points on the convex hull
    assert len(dt.triangles) == len(pts) - 2
    assert exact_violations(pts, dt.triangles) == []


def test_thin_strip():
    rnd = Random(5)
    pts = [(1000. * rnd.random(), 0.01 * rnd.random()) for _ in range(50)]
    dt = triangulate(pts)
    assert missing_points(pts, dt.triangles) == []
    assert exact_violations(pts, dt.triangles) == []


def test_elongation():
    assert elongation([(0, 0), (1, 0), (1, 1), (0, 1)]) == pytest.approx(1.)
    assert elongation([(2, 2), (2, 2), (2, 2)]) == 1.
    assert elongation([(0, 0), (1, 1), (2, 2)]) == MAX_ELONGATION
    assert elongation([(0, 0), (100, 0), (100, 1), (0, 1)]) == \
        pytest.approx(100.)


def test_super_triangle_grows_for_thin_input():
    square = [(0, 0), (10, 0), (10, 10), (0, 10)]
    strip = [(0, 0), (10, 0), (10, 0.1), (0, 0.1)]
    incremental = BowyerWatsonInserter()
    assert incremental.super_triangle(strip).radius > \
        1000 * incremental.super_triangle(square).radius
