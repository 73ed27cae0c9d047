"""
Point helpers for kerf adjustment.

Points and vectors are numpy float64 arrays of shape (3,). Drawings are treated as
planar in the XY plane, the z component is carried along but every plane test is
made against the canonical +Z axis.
"""

import numpy as np

EPSILON = 1e-6

Z_AXIS = np.array([0.0, 0.0, 1.0])
X_AXIS = np.array([1.0, 0.0, 0.0])


def point(*args):
    """
    Coerce a point-like value into a fresh float64 array of shape (3,).

    Accepts `point(x, y)`, `point(x, y, z)` or a single sequence of 2 or 3 values
    (tuple, list, ezdxf Vec3, numpy array).
    """
    if len(args) == 1:
        args = tuple(args[0])
    if len(args) == 2:
        args = (args[0], args[1], 0.0)
    if len(args) != 3:
        raise ValueError(f"Expected 2 or 3 coordinates, got {len(args)}")
    return np.array(args, dtype=float)


def distance(p1, p2):
    return float(np.linalg.norm(p1 - p2))


def is_z_axis(normal):
    return bool(np.array_equal(np.asarray(normal, dtype=float), Z_AXIS))


def set_magnitude(vector, magnitude):
    """
    Scale vector to the given length. A negative magnitude flips the vector.
    Zero length vectors are returned unchanged.
    """
    length = np.linalg.norm(vector)
    if length == 0:
        return np.array(vector, dtype=float)
    return vector * (magnitude / length)


def rotate_about_axis(vector, axis, angle):
    """
    Rotate vector about axis by angle (radians), counter-clockwise when looking
    down the axis towards the origin. Rodrigues' rotation formula.
    """
    k = set_magnitude(np.asarray(axis, dtype=float), 1.0)
    cos_a = np.cos(angle)
    sin_a = np.sin(angle)
    return (
        vector * cos_a
        + np.cross(k, vector) * sin_a
        + k * np.dot(k, vector) * (1.0 - cos_a)
    )


def line_intersection(p1, p2, q1, q2):
    """
    Intersection of the infinite lines through p1-p2 and q1-q2, solved in the XY
    plane. The z of the result is taken from p2.

    Returns None if the lines are parallel.
    """
    d1 = p2 - p1
    d2 = q2 - q1
    det = d1[0] * d2[1] - d1[1] * d2[0]
    if abs(det) < 1e-12:
        return None
    t = ((q1[0] - p1[0]) * d2[1] - (q1[1] - p1[1]) * d2[0]) / det
    return np.array([p1[0] + t * d1[0], p1[1] + t * d1[1], p2[2]])


def format_point(p):
    return f"({p[0]:0.4f}, {p[1]:0.4f})"
