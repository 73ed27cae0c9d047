"""
Kerf adjustment of a whole drawing.

Assembles the drawing's segments into contours, offsets each contour and flattens
the result back into segments. A contour that cannot be offset is kept as it was,
the failure is recorded in the report.
"""

from .assembly import assemble, contour_to_segments
from .exceptions import KerfAdjustmentError
from .geometry import EPSILON
from .offset import offset_contour


class KerfReport:
    def __init__(self):
        self.contours = []
        self.closed = 0
        self.open = 0
        self.adjusted = 0
        self.failures = []

    @property
    def segments(self):
        return contour_to_segments(self.contours)

    def __repr__(self):
        return (
            f"KerfReport(contours={len(self.contours)}, closed={self.closed}, "
            f"open={self.open}, adjusted={self.adjusted}, failures={len(self.failures)})"
        )


def adjust_segments(segments, amount, tolerance=EPSILON, strict=False, channel=None):
    """
    Offset every contour found in segments by amount.

    @param segments: drawing segments in any order
    @param amount: offset distance, half the kerf width of the cutting tool
    @param tolerance: end point coincidence distance
    @param strict: abort on unsupported or 3D entities
    @param channel: optional channel for progress and failure messages
    @return: KerfReport
    """
    report = KerfReport()
    contours = assemble(segments, tolerance=tolerance, strict=strict, channel=channel)
    for index, contour in enumerate(contours):
        if contour.is_open:
            report.open += 1
        else:
            report.closed += 1
        try:
            adjusted = offset_contour(contour, amount, tolerance=tolerance)
        except KerfAdjustmentError as e:
            if channel:
                channel(f"Contour {index}: {e.reason} Keeping original.")
            report.failures.append((index, e))
            report.contours.append(contour)
            continue
        report.adjusted += 1
        report.contours.append(adjusted)
    return report
