'''
Geometric predicates

Both predicates first evaluate their determinant in floating point. When
the result is too close to zero to trust its sign (given the error bound
of that evaluation), the determinant is recomputed exactly with rational
arithmetic on the (exactly representable) input coordinates. The sign of
the returned value is therefore always correct.
'''
from fractions import Fraction

# half an ulp of 1.0, the unit roundoff of double precision
_EPSILON = 2.0 ** -53
_CCW_ERRBOUND = (3.0 + 16.0 * _EPSILON) * _EPSILON
_ICC_ERRBOUND = (10.0 + 96.0 * _EPSILON) * _EPSILON


def orient2d(pa, pb, pc):
    """Direction from pa to pc, via pb, where returned value is as follows:

    left:     + [ = ccw ]
    straight: 0.
    right:    - [ = cw ]

    returns twice signed area under triangle pa, pb, pc
    """
    detleft = (pa[0] - pc[0]) * (pb[1] - pc[1])
    detright = (pa[1] - pc[1]) * (pb[0] - pc[0])
    det = detleft - detright
    if abs(det) > _CCW_ERRBOUND * (abs(detleft) + abs(detright)):
        return det
    return _orient2d_exact(pa, pb, pc)


def _orient2d_exact(pa, pb, pc):
    ax, ay = Fraction(pa[0]), Fraction(pa[1])
    bx, by = Fraction(pb[0]), Fraction(pb[1])
    cx, cy = Fraction(pc[0]), Fraction(pc[1])
    return (ax - cx) * (by - cy) - (ay - cy) * (bx - cx)


def incircle(pa, pb, pc, pd):
    """Tests whether pd is in circle defined by the 3 points pa, pb and pc

    Positive if pd lies inside the circle and pa, pb, pc are in
    counterclockwise order, negative if it lies outside (signs flip for
    clockwise order), zero if the four points are cocircular.
    """
    adx = pa[0] - pd[0]
    bdx = pb[0] - pd[0]
    cdx = pc[0] - pd[0]
    ady = pa[1] - pd[1]
    bdy = pb[1] - pd[1]
    cdy = pc[1] - pd[1]
    bdxcdy = bdx * cdy
    cdxbdy = cdx * bdy
    alift = adx * adx + ady * ady
    cdxady = cdx * ady
    adxcdy = adx * cdy
    blift = bdx * bdx + bdy * bdy
    adxbdy = adx * bdy
    bdxady = bdx * ady
    clift = cdx * cdx + cdy * cdy
    det = alift * (bdxcdy - cdxbdy) + \
        blift * (cdxady - adxcdy) + \
        clift * (adxbdy - bdxady)
    permanent = (abs(bdxcdy) + abs(cdxbdy)) * alift + \
        (abs(cdxady) + abs(adxcdy)) * blift + \
        (abs(adxbdy) + abs(bdxady)) * clift
    if abs(det) > _ICC_ERRBOUND * permanent:
        return det
    return _incircle_exact(pa, pb, pc, pd)


def _incircle_exact(pa, pb, pc, pd):
    dx, dy = Fraction(pd[0]), Fraction(pd[1])
    adx, ady = Fraction(pa[0]) - dx, Fraction(pa[1]) - dy
    bdx, bdy = Fraction(pb[0]) - dx, Fraction(pb[1]) - dy
    cdx, cdy = Fraction(pc[0]) - dx, Fraction(pc[1]) - dy
    alift = adx * adx + ady * ady
    blift = bdx * bdx + bdy * bdy
    clift = cdx * cdx + cdy * cdy
    return alift * (bdx * cdy - cdx * bdy) + \
        blift * (cdx * ady - adx * cdy) + \
        clift * (adx * bdy - bdx * ady)


def circumcircle_denominator(pa, pb, pc):
    """Denominator of the circumcenter formula for triangle pa, pb, pc

    This is 2 * (x1 (y2 - y3) + x2 (y3 - y1) + x3 (y1 - y2)),
    zero for collinear or coinciding points. Evaluated with the
    coordinates taken relative to pa.
    """
    bx, by = pb[0] - pa[0], pb[1] - pa[1]
    cx, cy = pc[0] - pa[0], pc[1] - pa[1]
    return 2.0 * (bx * cy - by * cx)
