"""
Contours are ordered runs of curve segments.

An open contour knows its two free end points (a, b): a is where the first segment
of the run starts and b is where the last one ends. The direction each individual
segment is walked in is implied by the order of the run, not stored. A closed
contour has no free end points.

Contours are joined with `combine()`. Joining never modifies either contour, it
builds a new one from both segment runs.
"""

from .endpoints import find_endpoints
from .geometry import EPSILON, distance, format_point


class Contour:
    def __init__(self, segments, end_points=None):
        self.segments = list(segments)
        self.end_points = end_points

    @classmethod
    def from_segment(cls, segment, strict=False):
        return cls([segment], find_endpoints(segment, strict=strict))

    @property
    def is_open(self):
        return self.end_points is not None

    @property
    def is_closed(self):
        return self.end_points is None

    def __len__(self):
        return len(self.segments)

    def __iter__(self):
        return iter(self.segments)

    def __repr__(self):
        if self.end_points is None:
            ends = "closed"
        else:
            a, b = self.end_points
            ends = f"{format_point(a)}, {format_point(b)}"
        return f"Contour(segments={len(self.segments)}, end_points={ends})"

    def combine(self, other, tolerance=EPSILON):
        """
        Join other onto this contour at a shared end point.

        With our ends (a, b) and their ends (c, d) the pairings are checked in the
        fixed order ac, ad, bc, bd and the first one closer than tolerance is used.
        When the opposite pairing is also coincident the join closes the loop.

        Returns the joined contour, or None if either contour is closed or no ends
        coincide. Neither contour is modified.
        """
        if self.end_points is None or other.end_points is None:
            return None
        a, b = self.end_points
        c, d = other.end_points
        ac = distance(a, c)
        ad = distance(a, d)
        bc = distance(b, c)
        bd = distance(b, d)

        if ac < tolerance:
            # Our start meets their start. Reverse ourselves so our start becomes our end.
            segments = self.segments[::-1] + other.segments
            ends = (b, d) if bd >= tolerance else None
        elif ad < tolerance:
            # Their start .. their end, our start .. our end.
            segments = other.segments + self.segments
            ends = (c, b) if bc >= tolerance else None
        elif bc < tolerance:
            # Our end meets their start.
            segments = self.segments + other.segments
            ends = (a, d) if ad >= tolerance else None
        elif bd < tolerance:
            # Our end meets their end. Reverse them.
            segments = self.segments + other.segments[::-1]
            ends = (a, c) if ac >= tolerance else None
        else:
            return None
        return Contour(segments, ends)
