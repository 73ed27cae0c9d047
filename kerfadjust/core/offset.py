"""
Contour offsetting for kerf compensation.

A segment on its own does not know which side of the outline is inside, so every
segment is offset both ways into an OffsetPair. The first segment commits to its
positive candidate, which fixes the side for the whole contour. Every following
segment is then connected to the running result with whichever candidate joins it.

Offset Direction Convention:
- positive candidate: arcs and circles grow by amount, lines move by amount towards
  cross(end - start, normal), the right hand side of the stored direction.
- negative candidate: the opposite.
- For a counter-clockwise outline whose first segment is stored in travel order,
  a positive amount grows the enclosed area and a negative amount shrinks it.

Smoothly joined outlines (tangent lines and arcs) connect by end point coincidence
alone. Sharp corners between two straight lines never coincide after offsetting,
those lines are extended or trimmed to the intersection of their offset lines.
Corners involving arcs are not handled and fail the offset.
"""

from collections import namedtuple

import numpy as np

from .contour import Contour
from .endpoints import find_endpoints
from .exceptions import (
    CannotConnectContourAfterAdjustment,
    CannotOffsetEmptyContour,
    CannotOffsetEntity,
    CannotOffsetOpenContour,
)
from .geometry import EPSILON, distance, line_intersection, set_magnitude
from .segments import Arc, Circle, Line

OffsetPair = namedtuple("OffsetPair", ("positive", "negative"))

POSITIVE = 0
NEGATIVE = 1


def offset_segment(segment, amount):
    """
    Offset a single segment by amount in both directions.

    @param segment: Line, Arc or Circle
    @param amount: offset distance
    @return: OffsetPair
    """
    if isinstance(segment, (Arc, Circle)):
        return OffsetPair(
            segment.replace(radius=segment.radius + amount),
            segment.replace(radius=segment.radius - amount),
        )
    if isinstance(segment, Line):
        delta = segment.end - segment.start
        # Normal is [0, 0, 1] and delta is [x, y, 0] so the perpendicular is [y, -x, 0]
        perpendicular = set_magnitude(np.cross(delta, segment.normal), amount)
        return OffsetPair(
            segment.replace(
                start=segment.start + perpendicular, end=segment.end + perpendicular
            ),
            segment.replace(
                start=segment.start - perpendicular, end=segment.end - perpendicular
            ),
        )
    raise CannotOffsetEntity(getattr(segment, "kind", type(segment).__name__))


def traversal_directions(contour):
    """
    For each segment of a contour, whether walking the contour in order travels
    that segment from its stored start to its stored end.

    Segments without end points are reported as forward.
    """
    ends = [find_endpoints(s) for s in contour.segments]
    if len(ends) < 2 or any(e is None for e in ends):
        return [True] * len(ends)
    first_start, first_end = ends[0]
    next_start, next_end = ends[1]
    forward = min(distance(first_end, next_start), distance(first_end, next_end)) <= min(
        distance(first_start, next_start), distance(first_start, next_end)
    )
    directions = [forward]
    current = first_end if forward else first_start
    for start, end in ends[1:]:
        forward = distance(current, start) <= distance(current, end)
        directions.append(forward)
        current = end if forward else start
    return directions


def reconcile(
    running, pair, tolerance=EPSILON, preferred=None, closing=False, tail=1
):
    """
    Connect one segment's offset candidates to the running offset contour.

    The positive candidate is tried first, then the negative one. If neither has a
    coincident end point and `preferred` names the candidate on the committed side,
    a line corner is trimmed to join that candidate at the `tail` end of the running
    contour. With `closing` the far end is trimmed too so that the contour closes.

    @param running: open offset contour built so far
    @param pair: OffsetPair of the next segment
    @param tolerance: end point coincidence distance
    @param preferred: POSITIVE or NEGATIVE, enables corner trimming
    @param closing: pair belongs to the last segment of the contour
    @param tail: running end the next segment attaches to, 0 for a and 1 for b
    @return: the joined contour
    @raise CannotConnectContourAfterAdjustment: no candidate could be joined
    """
    combined, _ = _reconcile(running, pair, tolerance, preferred, closing, tail)
    return combined


def _reconcile(running, pair, tolerance, preferred, closing, tail, forward=None):
    """
    reconcile() that also reports which end of the joined contour now holds the
    newly added segment.
    """
    for candidate in pair:
        combined = running.combine(Contour.from_segment(candidate), tolerance=tolerance)
        if combined is not None:
            break
    else:
        if preferred is None:
            raise CannotConnectContourAfterAdjustment()
        combined, candidate = _join_at_corner(
            running, pair[preferred], tolerance, tail, forward
        )
    if closing and combined.is_open and preferred is not None:
        combined = _close_at_corner(combined)
    return combined, 1 if combined.segments[-1] is candidate else 0


def offset_contour(contour, amount, tolerance=EPSILON):
    """
    Offset a closed contour.

    Negative amount will shrink the area of the contour. Positive amount will grow
    the area of the contour. The side is chosen by the first segment, see the module
    notes for the convention.

    @raise CannotOffsetOpenContour: contour has free end points
    @raise CannotOffsetEmptyContour: contour has no segments
    @raise CannotOffsetEntity: a segment kind cannot be offset
    @raise CannotConnectContourAfterAdjustment: offset segments do not join up
    """
    if contour.is_open:
        raise CannotOffsetOpenContour()
    if not contour.segments:
        raise CannotOffsetEmptyContour()

    segments = contour.segments
    result = Contour.from_segment(offset_segment(segments[0], amount).positive)
    if len(segments) == 1:
        return result

    directions = traversal_directions(contour)
    # The walk leaves the first segment through its stored end when travelling forward.
    tail = 1 if directions[0] else 0
    last = len(segments) - 1
    for index in range(1, len(segments)):
        pair = offset_segment(segments[index], amount)
        preferred = POSITIVE if directions[index] == directions[0] else NEGATIVE
        result, tail = _reconcile(
            result,
            pair,
            tolerance,
            preferred,
            index == last,
            tail,
            forward=directions[index],
        )
    if result.is_open:
        raise CannotConnectContourAfterAdjustment()
    return result


def _move_line_end(line, old, new):
    """Replace whichever end of the line lies at old with new."""
    if distance(line.start, old) <= distance(line.end, old):
        return line.replace(start=new)
    return line.replace(end=new)


def _join_at_corner(running, candidate, tolerance, tail, forward=None):
    """
    Trim the running contour's tail line and the candidate line to the
    intersection of their supporting lines and join them there.

    The candidate is joined by the end the walk enters it through: its start when
    `forward`, its end when not, the end nearest the tail when unknown.

    @return: joined contour, trimmed candidate
    """
    candidate_ends = find_endpoints(candidate)
    if running.end_points is None or candidate_ends is None:
        raise CannotConnectContourAfterAdjustment()
    tail_point = running.end_points[tail]
    if forward is None:
        c, d = candidate_ends
        cand_end = 0 if distance(tail_point, c) <= distance(tail_point, d) else 1
    else:
        cand_end = 0 if forward else 1
    index = -1 if tail == 1 else 0
    neighbour = running.segments[index]
    if not isinstance(neighbour, Line) or not isinstance(candidate, Line):
        raise CannotConnectContourAfterAdjustment()
    corner = line_intersection(
        neighbour.start, neighbour.end, candidate.start, candidate.end
    )
    if corner is None:
        raise CannotConnectContourAfterAdjustment()

    segments = list(running.segments)
    segments[index] = _move_line_end(neighbour, tail_point, corner)
    ends = list(running.end_points)
    ends[tail] = corner
    trimmed = Contour(segments, tuple(ends))
    if cand_end == 0:
        candidate = candidate.replace(start=corner)
    else:
        candidate = candidate.replace(end=corner)

    combined = trimmed.combine(Contour.from_segment(candidate), tolerance=tolerance)
    if combined is None:
        raise CannotConnectContourAfterAdjustment()
    return combined, candidate


def _close_at_corner(contour):
    first = contour.segments[0]
    last = contour.segments[-1]
    if len(contour) < 2 or not isinstance(first, Line) or not isinstance(last, Line):
        raise CannotConnectContourAfterAdjustment()
    corner = line_intersection(first.start, first.end, last.start, last.end)
    if corner is None:
        raise CannotConnectContourAfterAdjustment()
    a, b = contour.end_points
    segments = list(contour.segments)
    segments[0] = _move_line_end(first, a, corner)
    segments[-1] = _move_line_end(last, b, corner)
    return Contour(segments, None)
