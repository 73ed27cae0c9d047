from math import radians

from .exceptions import ThreeDimensionalEntity, UnsupportedEntity
from .geometry import X_AXIS, is_z_axis, rotate_about_axis, set_magnitude
from .segments import Arc, Circle, Line, Text


def find_endpoints(segment, strict=False):
    """
    Directionless pair of endpoints of a segment.

    Lines give their stored start and end. Planar arcs give the points at their
    start and end angles. Circles and text have no endpoints and give None, a
    circle is already its own closed contour.

    Arcs that do not lie in the XY plane give None, or raise ThreeDimensionalEntity
    when strict is set. Any other kind of segment raises UnsupportedEntity.
    """
    if isinstance(segment, Circle):
        return None
    if isinstance(segment, Line):
        return segment.start, segment.end
    if isinstance(segment, Arc):
        if not is_z_axis(segment.normal):
            if strict:
                raise ThreeDimensionalEntity()
            return None
        # point on the circle where angle = 0
        circle_axis = set_magnitude(X_AXIS, segment.radius)
        start = segment.center + rotate_about_axis(
            circle_axis, segment.normal, radians(segment.start_angle)
        )
        end = segment.center + rotate_about_axis(
            circle_axis, segment.normal, radians(segment.end_angle)
        )
        return start, end
    if isinstance(segment, Text):
        return None
    raise UnsupportedEntity(getattr(segment, "kind", type(segment).__name__))
