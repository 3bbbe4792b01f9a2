"""
Vector helpers for star nets.

2D points and vectors are (x, y) tuples, 3D ones are (x, y, z) tuples.
All functions return new tuples; nothing is modified in place.
"""

import math


TAU = 2 * math.pi

Vec2 = tuple[float, float]
Vec3 = tuple[float, float, float]


# =============================================================================
# 2D
# =============================================================================

def add2(a: Vec2, b: Vec2) -> Vec2:
    return (a[0] + b[0], a[1] + b[1])


def sub2(a: Vec2, b: Vec2) -> Vec2:
    return (a[0] - b[0], a[1] - b[1])


def scale2(v: Vec2, factor: float) -> Vec2:
    return (v[0] * factor, v[1] * factor)


def length2(v: Vec2) -> float:
    return math.sqrt(v[0] * v[0] + v[1] * v[1])


def distance2(a: Vec2, b: Vec2) -> float:
    return length2(sub2(b, a))


def rotate2(v: Vec2, angle: float) -> Vec2:
    """Rotate a vector counter-clockwise by angle (radians)."""
    c = math.cos(angle)
    s = math.sin(angle)
    return (c * v[0] - s * v[1], s * v[0] + c * v[1])


def rotate_around(point: Vec2, pivot: Vec2, angle: float) -> Vec2:
    """Rotate a point counter-clockwise around pivot."""
    return add2(pivot, rotate2(sub2(point, pivot), angle))


def interpolate2(p: Vec2, q: Vec2, t: float) -> Vec2:
    """Point at fraction t on the way from p to q."""
    return (p[0] + (q[0] - p[0]) * t, p[1] + (q[1] - p[1]) * t)


def direction2(start: Vec2, end: Vec2) -> float:
    """Angle from the positive x axis to the vector start -> end, in radians."""
    return math.atan2(end[1] - start[1], end[0] - start[0])


def intersect_lines(p0: Vec2, p1: Vec2, q0: Vec2, q1: Vec2) -> tuple[float, float, float]:
    """
    Intersect the lines p0 p1 and q0 q1.

    Returns (np, nq, d) such that p0 + (np / d) (p1 - p0) and
    q0 + (nq / d) (q1 - q0) are the same point.

    d is 0 when the lines are parallel or one of the segments has zero
    length; the divisions are left to the caller so it can check d first.
    """
    dp = sub2(p1, p0)
    dq = sub2(q1, q0)
    d0 = sub2(q0, p0)
    np_ = d0[0] * dq[1] - dq[0] * d0[1]
    nq = d0[0] * dp[1] - dp[0] * d0[1]
    d = dp[0] * dq[1] - dq[0] * dp[1]
    return (np_, nq, d)


def signed_area(polygon: list[Vec2]) -> float:
    """
    Calculate signed area of polygon using shoelace formula.

    Returns:
        Positive for CCW winding, negative for CW winding.
    """
    n = len(polygon)
    if n < 3:
        return 0.0
    area = 0.0
    for i in range(n):
        j = (i + 1) % n
        area += polygon[i][0] * polygon[j][1]
        area -= polygon[j][0] * polygon[i][1]
    return area / 2.0


# =============================================================================
# 3D
# =============================================================================

def add3(a: Vec3, b: Vec3) -> Vec3:
    return (a[0] + b[0], a[1] + b[1], a[2] + b[2])


def sub3(a: Vec3, b: Vec3) -> Vec3:
    return (a[0] - b[0], a[1] - b[1], a[2] - b[2])


def scale3(v: Vec3, factor: float) -> Vec3:
    return (v[0] * factor, v[1] * factor, v[2] * factor)


def dot3(a: Vec3, b: Vec3) -> float:
    return a[0] * b[0] + a[1] * b[1] + a[2] * b[2]


def cross3(a: Vec3, b: Vec3) -> Vec3:
    return (
        a[1] * b[2] - a[2] * b[1],
        a[2] * b[0] - a[0] * b[2],
        a[0] * b[1] - a[1] * b[0],
    )


def length3(v: Vec3) -> float:
    return math.sqrt(v[0] ** 2 + v[1] ** 2 + v[2] ** 2)


def distance3(a: Vec3, b: Vec3) -> float:
    return length3(sub3(b, a))


def normalize3(v: Vec3) -> Vec3:
    """Unit vector in the direction of v; the zero vector stays zero."""
    length = length3(v)
    if length < 1e-300:
        return (0.0, 0.0, 0.0)
    return (v[0] / length, v[1] / length, v[2] / length)


def interpolate3(p: Vec3, q: Vec3, t: float) -> Vec3:
    return (
        p[0] + (q[0] - p[0]) * t,
        p[1] + (q[1] - p[1]) * t,
        p[2] + (q[2] - p[2]) * t,
    )


def triple_product(a: Vec3, b: Vec3, c: Vec3) -> float:
    """a . (b x c)"""
    return dot3(a, cross3(b, c))


def directed_angle(a: Vec3, b: Vec3, axis: Vec3) -> float:
    """Signed angle from a to b as seen along axis (orthogonal to a and b)."""
    return math.atan2(triple_product(a, b, normalize3(axis)), dot3(a, b))


def rotation_matrix_around_axis(axis: Vec3, angle: float) -> list[list[float]]:
    """Create 3x3 rotation matrix for rotation around axis by angle."""
    length = length3(axis)
    if length < 1e-10:
        return [[1, 0, 0], [0, 1, 0], [0, 0, 1]]

    ax, ay, az = axis[0]/length, axis[1]/length, axis[2]/length
    c = math.cos(angle)
    s = math.sin(angle)
    t = 1 - c

    return [
        [t*ax*ax + c,    t*ax*ay - s*az, t*ax*az + s*ay],
        [t*ax*ay + s*az, t*ay*ay + c,    t*ay*az - s*ax],
        [t*ax*az - s*ay, t*ay*az + s*ax, t*az*az + c]
    ]


def apply_rotation(rot: list[list[float]], vec: Vec3) -> Vec3:
    """Apply 3x3 rotation matrix to vector."""
    return (
        rot[0][0]*vec[0] + rot[0][1]*vec[1] + rot[0][2]*vec[2],
        rot[1][0]*vec[0] + rot[1][1]*vec[1] + rot[1][2]*vec[2],
        rot[2][0]*vec[0] + rot[2][1]*vec[1] + rot[2][2]*vec[2]
    )


def arc_path(center: Vec3, start: Vec3, end: Vec3, steps: int) -> list[Vec3]:
    """
    Points on a circular arc around center from start to end.

    Spherical interpolation of the two radius vectors; start and end are
    expected at (about) the same distance from center. Returns steps + 1
    points. Degenerate arcs (coinciding directions) fall back to a straight
    line.
    """
    vec_from = sub3(start, center)
    vec_to = sub3(end, center)
    cos_omega = dot3(normalize3(vec_from), normalize3(vec_to))
    omega = math.acos(max(-1.0, min(1.0, cos_omega)))
    sin_omega = math.sin(omega)

    points = []
    for i in range(steps + 1):
        t = i / steps
        if sin_omega < 1e-12:
            points.append(interpolate3(start, end, t))
            continue
        w_from = math.sin((1 - t) * omega) / sin_omega
        w_to = math.sin(t * omega) / sin_omega
        points.append(add3(center, add3(scale3(vec_from, w_from), scale3(vec_to, w_to))))
    return points
