"""
Contour assembly.

Drawings give us an unordered soup of lines and arcs. Assembly stitches them into
the longest runs it can, ideally closed outlines, so that each outline can be
offset as a whole.

Every open contour is kept in a work-list keyed by a stable id. The oldest entry
is taken as the pivot and the rest of the work-list is scanned, in insertion
order, for the first contour it combines with. A successful join replaces the
pivot and the scan restarts. A closed pivot, or one that nothing joins to any
longer, leaves the work-list for the output. Leftover open runs are emitted as
they are, consumers must tolerate open contours.
"""

from .contour import Contour
from .exceptions import UnsupportedEntity
from .geometry import EPSILON, format_point


def assemble(segments, tolerance=EPSILON, strict=False, channel=None):
    """
    Assemble segments into contours.

    @param segments: iterable of curve segments
    @param tolerance: end point coincidence distance
    @param strict: propagate unsupported and 3D entities rather than carrying them
    @param channel: optional channel receiving diagnostic messages
    @return: list of contours, originally closed ones first
    """
    closed = []
    working = {}
    for index, segment in enumerate(segments):
        try:
            contour = Contour.from_segment(segment, strict=strict)
        except UnsupportedEntity as e:
            if strict:
                raise
            if channel:
                channel(f"Segment {index}: {e.reason}, carried through unchanged.")
            contour = Contour([segment], None)
        if contour.is_open:
            working[index] = contour
        else:
            closed.append(contour)
    if channel:
        channel(
            f"{len(closed)} closed and {len(working)} open contours before stitching."
        )

    assembled = []
    while working:
        pivot_id = next(iter(working))
        pivot = working.pop(pivot_id)
        while True:
            for other_id, other in working.items():
                combined = pivot.combine(other, tolerance=tolerance)
                if combined is not None:
                    break
            else:
                # Nothing joins, the pivot is as complete as it gets.
                if channel:
                    channel(f"Contour {pivot_id}: no further matches, {pivot!r}")
                assembled.append(pivot)
                break
            del working[other_id]
            if channel:
                _describe_join(channel, pivot_id, other_id, combined)
            pivot = combined
            if pivot.is_closed:
                assembled.append(pivot)
                break

    closed.extend(assembled)
    return closed


def _describe_join(channel, pivot_id, other_id, combined):
    if combined.end_points is None:
        channel(
            f"Contour {pivot_id} + {other_id}: closed with {len(combined)} segments"
        )
        return
    a, b = combined.end_points
    channel(
        f"Contour {pivot_id} + {other_id}: {len(combined)} segments, "
        f"open {format_point(a)} .. {format_point(b)}"
    )


def contour_to_segments(contours):
    """Flatten contours back into a single list of segments for serialization."""
    segments = []
    for contour in contours:
        segments.extend(contour.segments)
    return segments
