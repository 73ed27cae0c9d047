"""
Curve segments handed to and returned from the kerf adjustment core.

A segment is an immutable value: its coordinate arrays are read-only and every
change (offsetting, trimming) produces a new segment through `replace()`. The
`attributes` mapping holds the drawing data that is not geometry (layer, color,
linetype) and is carried unchanged onto every derived segment.
"""

from math import radians, tau

import numpy as np

from .geometry import Z_AXIS, point


def _frozen(value):
    p = point(value)
    p.setflags(write=False)
    return p


class Segment:
    kind = "SEGMENT"
    _fields = ()

    def __init__(self, attributes=None):
        self.attributes = dict(attributes) if attributes else {}

    def replace(self, **changes):
        values = {name: getattr(self, name) for name in self._fields}
        values["attributes"] = self.attributes
        values.update(changes)
        return type(self)(**values)

    def __eq__(self, other):
        if type(self) is not type(other):
            return NotImplemented
        if self.attributes != other.attributes:
            return False
        for name in self._fields:
            a = getattr(self, name)
            b = getattr(other, name)
            if isinstance(a, np.ndarray):
                if not np.array_equal(a, b):
                    return False
            elif a != b:
                return False
        return True

    __hash__ = None

    def __repr__(self):
        values = []
        for name in self._fields:
            v = getattr(self, name)
            if isinstance(v, np.ndarray):
                v = tuple(float(c) for c in v)
            values.append(f"{name}={v!r}")
        return f"{type(self).__name__}({', '.join(values)})"


class Line(Segment):
    kind = "LINE"
    _fields = ("start", "end", "normal")

    def __init__(self, start, end, normal=Z_AXIS, attributes=None):
        Segment.__init__(self, attributes)
        self.start = _frozen(start)
        self.end = _frozen(end)
        self.normal = _frozen(normal)

    @property
    def length(self):
        return float(np.linalg.norm(self.end - self.start))


class Arc(Segment):
    """
    Circular arc. Angles are in degrees, measured counter-clockwise from the local
    x-axis of the arc's plane, and the arc runs counter-clockwise from start_angle
    to end_angle.
    """

    kind = "ARC"
    _fields = ("center", "radius", "start_angle", "end_angle", "normal")

    def __init__(
        self, center, radius, start_angle, end_angle, normal=Z_AXIS, attributes=None
    ):
        Segment.__init__(self, attributes)
        self.center = _frozen(center)
        self.radius = float(radius)
        self.start_angle = float(start_angle)
        self.end_angle = float(end_angle)
        self.normal = _frozen(normal)

    @property
    def sweep(self):
        """Swept angle in degrees, in (0, 360]."""
        sweep = (self.end_angle - self.start_angle) % 360.0
        return sweep if sweep != 0 else 360.0

    @property
    def length(self):
        return abs(self.radius) * radians(self.sweep)


class Circle(Segment):
    kind = "CIRCLE"
    _fields = ("center", "radius", "normal")

    def __init__(self, center, radius, normal=Z_AXIS, attributes=None):
        Segment.__init__(self, attributes)
        self.center = _frozen(center)
        self.radius = float(radius)
        self.normal = _frozen(normal)

    @property
    def length(self):
        return abs(self.radius) * tau


class Text(Segment):
    """Text annotation. Carried through untouched, it has no cutting geometry."""

    kind = "TEXT"
    _fields = ("insert", "text", "height")

    def __init__(self, insert, text, height=1.0, attributes=None):
        Segment.__init__(self, attributes)
        self.insert = _frozen(insert)
        self.text = str(text)
        self.height = float(height)


class Unsupported(Segment):
    """Any drawing entity the core has no geometry for, remembered by its type name."""

    _fields = ("dxftype",)

    def __init__(self, dxftype, attributes=None):
        Segment.__init__(self, attributes)
        self.dxftype = str(dxftype)

    @property
    def kind(self):
        return self.dxftype
